from pydantic import BaseModel, EmailStr, Field, model_validator
from typing import Any, Optional
from enum import Enum


class ErrorCode(str, Enum):
    # Auth related
    UNAUTHORIZED = "AUTH_001"
    FORBIDDEN = "AUTH_002"
    INVALID_CREDENTIALS = "AUTH_004"
    INVALID_RESET_TOKEN = "AUTH_005"
    INVALID_VERIFICATION_TOKEN = "AUTH_006"

    # User related
    USER_ALREADY_EXISTS = "USER_001"
    USER_NOT_FOUND = "USER_002"

    # Trading related
    PAIR_NOT_FOUND = "TRADING_001"
    PAIR_ALREADY_EXISTS = "TRADING_002"
    INVALID_ORDER = "TRADING_003"

    # News / newsletter
    ARTICLE_NOT_FOUND = "NEWS_001"
    ALREADY_SUBSCRIBED = "NEWSLETTER_001"
    SUBSCRIBER_NOT_FOUND = "NEWSLETTER_002"


class Error(BaseModel):
    code: ErrorCode
    message: str
    details: Optional[dict] = None


class BaseResponse(BaseModel):
    success: bool = True
    data: Optional[Any] = None
    error: Optional[Error] = None
    meta: Optional[dict] = None


class RegisterRequest(BaseModel):
    username: str = Field(min_length=3, max_length=100)
    email: EmailStr
    password: str = Field(min_length=8)
    confirm_password: str
    full_name: Optional[str] = None
    wallet_address: Optional[str] = None
    referral_code: Optional[str] = None

    @model_validator(mode="after")
    def passwords_match(self) -> "RegisterRequest":
        if self.password != self.confirm_password:
            raise ValueError("Passwords don't match")
        return self


class LoginRequest(BaseModel):
    username: str
    password: str


class ResetRequest(BaseModel):
    email: EmailStr


class ResetPasswordRequest(BaseModel):
    token: str
    password: str = Field(min_length=8)
    confirm_password: str


class VerifyRequest(BaseModel):
    token: str


class LoginResponse(BaseModel):
    """token 은 사용자 id 문자열 (목업 인증)"""

    token: str
    token_type: str = "bearer"
    user_id: int
