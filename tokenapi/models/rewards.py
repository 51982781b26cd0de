from datetime import datetime
from typing import List, Optional

from sqlalchemy import JSON, DateTime, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from tokenapi.models.base import BaseModel
from tokenapi.utils.date_utils import utcnow


class RewardsEvent(BaseModel):
    """
    리워드 포인트 원장 - 모든 포인트 적립 내역을 저장

    1. 불변성: 한번 생성된 레코드는 수정되지 않음
    2. 사용자의 rewards_points 는 이 테이블 points 합계와 항상 같음 (증분 유지)
    """

    __tablename__ = "rewards_events"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    # Trade, Referral, Signup 등
    event_type: Mapped[str] = mapped_column(String(50), nullable=False)
    points: Mapped[int] = mapped_column(Integer, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    additional_data: Mapped[Optional[dict]] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)


class RewardsTier(BaseModel):
    """정적 등급 테이블 - 사용자 등급은 저장하지 않고 포인트로 계산"""

    __tablename__ = "rewards_tiers"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    points_required: Mapped[int] = mapped_column(Integer, nullable=False)
    trading_fee_discount: Mapped[float] = mapped_column(
        Float, default=0.0, nullable=False
    )
    additional_benefits: Mapped[List[str]] = mapped_column(
        JSON, default=list, nullable=False
    )
    icon: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
