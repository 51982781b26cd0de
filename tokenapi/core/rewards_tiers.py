from typing import Optional, Sequence, TypeVar

from tokenapi.schemas.rewards import RewardsTier

TierT = TypeVar("TierT", bound=RewardsTier)


def resolve_tier(points: int, tiers: Sequence[TierT]) -> Optional[TierT]:
    """
    포인트로 등급 산출 - 저장하지 않고 매번 계산

    points_required 가 points 이하인 등급 중 가장 높은 등급을 반환하고,
    해당 등급이 없으면 가장 낮은 등급을 반환한다. 등급 테이블이 비어 있으면 None.
    points_required 가 같은 등급이 여럿이면 id 가 작은 쪽이 우선한다.
    """
    if not tiers:
        return None

    ordered = sorted(tiers, key=lambda t: (-t.points_required, t.id))
    for tier in ordered:
        if tier.points_required <= points:
            return tier
    return ordered[-1]


def next_tier(points: int, tiers: Sequence[TierT]) -> Optional[TierT]:
    """다음 목표 등급 - 이미 최고 등급이면 None"""
    above = [t for t in tiers if t.points_required > points]
    if not above:
        return None
    return min(above, key=lambda t: (t.points_required, t.id))
