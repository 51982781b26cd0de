from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from tokenapi.models.base import BaseModel, TimestampMixin


class User(BaseModel, TimestampMixin):
    __tablename__ = "users"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    password: Mapped[str] = mapped_column(Text, nullable=False)  # 평문 저장 (목업)
    full_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    wallet_address: Mapped[Optional[str]] = mapped_column(
        String(255), nullable=True, index=True
    )

    # 2FA 플래그만 존재하고 실제 구현은 없음
    two_factor_enabled: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )
    two_factor_secret: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    profile_picture: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    is_verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    verification_token: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    reset_password_token: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    reset_password_expires: Mapped[Optional[datetime]] = mapped_column(
        DateTime, nullable=True
    )

    # 누적 집계 - 체결/리워드 이벤트가 증가시킴
    total_trading_volume: Mapped[float] = mapped_column(
        Float, default=0.0, nullable=False
    )
    rewards_points: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    referral_code: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    referred_by: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=True
    )

    def __repr__(self):
        return f"<User(id={self.id}, username={self.username}, email={self.email})>"
