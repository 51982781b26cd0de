from fastapi import APIRouter, Depends, Query
from typing import Optional
import logging

from tokenapi.config import Settings
from tokenapi.core.auth_middleware import get_current_user
from tokenapi.deps import get_reward_service, get_settings
from tokenapi.schemas.auth import BaseResponse
from tokenapi.schemas.user import User as UserSchema
from tokenapi.services.reward_service import RewardService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/rewards", tags=["rewards"])


@router.get("", response_model=BaseResponse)
async def get_my_rewards(
    current_user: UserSchema = Depends(get_current_user),
    reward_service: RewardService = Depends(get_reward_service),
) -> BaseResponse:
    """내 포인트, 등급, 적립 내역

    등급은 저장하지 않고 현재 포인트로 매번 계산합니다.
    """
    summary = reward_service.get_summary(current_user.id)
    return BaseResponse(
        success=True,
        data={
            "points": summary.rewards_points,
            "tier": summary.tier,
            "next_tier": summary.next_tier,
            "points_to_next_tier": summary.points_to_next_tier,
            "events": summary.events,
        },
    )


@router.get("/leaderboard", response_model=BaseResponse)
async def get_rewards_leaderboard(
    limit: Optional[int] = Query(None, ge=1, description="상위 N명"),
    reward_service: RewardService = Depends(get_reward_service),
    settings: Settings = Depends(get_settings),
) -> BaseResponse:
    """포인트 리더보드 - 동점이면 먼저 가입한 사용자 우선"""
    limit = min(limit or settings.DEFAULT_PAGE_LIMIT, settings.MAX_PAGE_LIMIT)
    leaderboard = reward_service.get_leaderboard(limit)
    return BaseResponse(
        success=True, data={"leaderboard": leaderboard}, meta={"limit": limit}
    )


@router.get("/tiers", response_model=BaseResponse)
async def get_rewards_tiers(
    reward_service: RewardService = Depends(get_reward_service),
) -> BaseResponse:
    return BaseResponse(success=True, data={"tiers": reward_service.get_tiers()})
