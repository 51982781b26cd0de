from pydantic import BaseModel, EmailStr, Field, field_validator
from datetime import datetime
from typing import Optional


class User(BaseModel):
    """저장된 사용자 레코드 전체 - 내부 전용 (비밀번호/토큰 포함)"""

    id: int
    username: str
    email: str
    password: str
    full_name: Optional[str] = None
    wallet_address: Optional[str] = None
    two_factor_enabled: bool = False
    two_factor_secret: Optional[str] = None
    profile_picture: Optional[str] = None
    is_verified: bool = False
    verification_token: Optional[str] = None
    reset_password_token: Optional[str] = None
    reset_password_expires: Optional[datetime] = None
    total_trading_volume: float = 0.0
    rewards_points: int = 0
    referral_code: Optional[str] = None
    referred_by: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class UserPublic(BaseModel):
    """응답용 사용자 정보 - 비밀번호와 토큰류는 절대 포함하지 않음"""

    id: int
    username: str
    email: str
    full_name: Optional[str] = None
    wallet_address: Optional[str] = None
    two_factor_enabled: bool = False
    profile_picture: Optional[str] = None
    is_verified: bool = False
    total_trading_volume: float = 0.0
    rewards_points: int = 0
    referral_code: Optional[str] = None
    referred_by: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class AdminUserUpdate(BaseModel):
    username: Optional[str] = Field(None, min_length=3, max_length=100)
    email: Optional[EmailStr] = None
    full_name: Optional[str] = None
    wallet_address: Optional[str] = None
    profile_picture: Optional[str] = None
    is_verified: Optional[bool] = None
    two_factor_enabled: Optional[bool] = None

    @field_validator("username")
    @classmethod
    def username_must_not_be_empty(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and v.strip() == "":
            raise ValueError("Username cannot be empty")
        return v


class VolumeLeaderboardEntry(BaseModel):
    rank: int
    user_id: int
    username: str
    total_trading_volume: float

