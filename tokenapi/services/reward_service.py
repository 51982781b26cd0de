from typing import List
from sqlalchemy.orm import Session

from tokenapi.config import Settings
from tokenapi.core.rewards_tiers import next_tier, resolve_tier
from tokenapi.repositories.rewards_repository import RewardsRepository
from tokenapi.repositories.user_repository import UserRepository
from tokenapi.core.exceptions import NotFoundError
from tokenapi.schemas.rewards import (
    RewardsEvent,
    RewardsEventCreate,
    RewardsLeaderboardEntry,
    RewardsSummary,
    RewardsTier,
)
import logging

logger = logging.getLogger(__name__)


class RewardService:
    """리워드 관련 비즈니스 로직을 담당하는 서비스"""

    def __init__(self, db: Session, settings: Settings):
        self.db = db
        self.settings = settings
        self.rewards_repo = RewardsRepository(db)
        self.user_repo = UserRepository(db)

    def get_tiers(self) -> List[RewardsTier]:
        return self.rewards_repo.get_all_tiers()

    def get_summary(self, user_id: int) -> RewardsSummary:
        """사용자 포인트, 현재/다음 등급, 적립 내역"""
        user = self.user_repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError(f"User not found: {user_id}")

        tiers = self.rewards_repo.get_all_tiers()
        upcoming = next_tier(user.rewards_points, tiers)
        return RewardsSummary(
            user_id=user.id,
            rewards_points=user.rewards_points,
            tier=resolve_tier(user.rewards_points, tiers),
            next_tier=upcoming,
            points_to_next_tier=(
                upcoming.points_required - user.rewards_points if upcoming else None
            ),
            events=self.rewards_repo.get_user_events(user.id),
        )

    def get_leaderboard(self, limit: int) -> List[RewardsLeaderboardEntry]:
        users = self.user_repo.get_users_by_rewards_points(limit)
        tiers = self.rewards_repo.get_all_tiers()

        entries = []
        for rank, user in enumerate(users, start=1):
            tier = resolve_tier(user.rewards_points, tiers)
            entries.append(
                RewardsLeaderboardEntry(
                    rank=rank,
                    user_id=user.id,
                    username=user.username,
                    rewards_points=user.rewards_points,
                    tier=tier.name if tier else None,
                    icon=tier.icon if tier else None,
                )
            )
        return entries

    def award_points(self, payload: RewardsEventCreate) -> RewardsEvent:
        """관리자 수동 적립/차감"""
        if self.user_repo.get_by_id(payload.user_id) is None:
            raise NotFoundError(f"User not found: {payload.user_id}")

        event = self.rewards_repo.create_event(**payload.model_dump())
        logger.info(
            f"Rewards event {event.id}: user={event.user_id} "
            f"type={event.event_type} points={event.points}"
        )
        return event
