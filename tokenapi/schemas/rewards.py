from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class RewardsEvent(BaseModel):
    id: int
    user_id: int
    event_type: str
    points: int
    description: str
    additional_data: Optional[dict] = None
    created_at: datetime

    class Config:
        from_attributes = True


class RewardsEventCreate(BaseModel):
    """관리자 수동 지급 요청 - 음수 포인트(차감)도 허용"""

    user_id: int
    event_type: str = Field(min_length=1, max_length=50)
    points: int
    description: str
    additional_data: Optional[dict] = None


class RewardsTier(BaseModel):
    id: int
    name: str
    points_required: int
    trading_fee_discount: float = 0.0
    additional_benefits: List[str] = []
    icon: Optional[str] = None

    class Config:
        from_attributes = True


class RewardsSummary(BaseModel):
    user_id: int
    rewards_points: int
    tier: Optional[RewardsTier] = None
    next_tier: Optional[RewardsTier] = None
    points_to_next_tier: Optional[int] = None
    events: List[RewardsEvent] = []


class RewardsLeaderboardEntry(BaseModel):
    rank: int
    user_id: int
    username: str
    rewards_points: int
    tier: Optional[str] = None
    icon: Optional[str] = None
