from typing import List, Optional

from sqlalchemy.orm import Session

from tokenapi.core.rewards_tiers import resolve_tier
from tokenapi.models.rewards import (
    RewardsEvent as RewardsEventModel,
    RewardsTier as RewardsTierModel,
)
from tokenapi.models.user import User as UserModel
from tokenapi.schemas.rewards import RewardsEvent, RewardsTier
from tokenapi.repositories.base import BaseRepository


class RewardsRepository(BaseRepository[RewardsEventModel, RewardsEvent]):
    """
    리워드 리포지토리 - 포인트 이벤트 원장 및 등급 테이블

    이벤트 생성 시 사용자의 rewards_points 를 같은 트랜잭션에서 증가시켜
    rewards_points == sum(events.points) 를 유지한다.
    """

    def __init__(self, db: Session):
        super().__init__(RewardsEventModel, RewardsEvent, db)

    def create_event(
        self,
        user_id: int,
        event_type: str,
        points: int,
        description: str,
        additional_data: Optional[dict] = None,
        commit: bool = True,
    ) -> RewardsEvent:
        """이벤트 추가 + 포인트 증가 (부호/사용자 존재 검증 없음)"""
        event = RewardsEventModel(
            user_id=user_id,
            event_type=event_type,
            points=points,
            description=description,
            additional_data=additional_data,
        )
        self.db.add(event)
        try:
            self.db.flush()
            user = self.db.get(UserModel, user_id)
            if user is not None:
                user.rewards_points = user.rewards_points + points
            self.db.flush()
            self.db.refresh(event)
            if commit:
                self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return self.schema_class.model_validate(event)

    def get_event(self, event_id: int) -> Optional[RewardsEvent]:
        return self.get_by_id(event_id)

    def get_user_events(self, user_id: int) -> List[RewardsEvent]:
        """최신 이벤트 먼저"""
        rows = (
            self.db.query(RewardsEventModel)
            .filter(RewardsEventModel.user_id == user_id)
            .order_by(RewardsEventModel.created_at.desc(), RewardsEventModel.id.desc())
            .all()
        )
        return self._to_schemas(rows)

    # 등급 테이블

    def get_all_tiers(self) -> List[RewardsTier]:
        rows = (
            self.db.query(RewardsTierModel)
            .order_by(RewardsTierModel.points_required, RewardsTierModel.id)
            .all()
        )
        return [RewardsTier.model_validate(row) for row in rows]

    def create_tier(
        self,
        name: str,
        points_required: int,
        trading_fee_discount: float = 0.0,
        additional_benefits: Optional[List[str]] = None,
        icon: Optional[str] = None,
        commit: bool = True,
    ) -> RewardsTier:
        tier = RewardsTierModel(
            name=name,
            points_required=points_required,
            trading_fee_discount=trading_fee_discount,
            additional_benefits=list(additional_benefits or []),
            icon=icon,
        )
        self._save(tier, commit)
        return RewardsTier.model_validate(tier)

    def get_user_tier(self, user_id: int) -> Optional[RewardsTier]:
        """사용자 포인트로 등급 산출 - 사용자가 없으면 None"""
        user = self.db.get(UserModel, user_id)
        if user is None:
            return None
        return resolve_tier(user.rewards_points, self.get_all_tiers())
