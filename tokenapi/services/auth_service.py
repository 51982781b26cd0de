from typing import Optional
from sqlalchemy.orm import Session

from tokenapi.config import Settings
from tokenapi.core.exceptions import (
    AuthenticationError,
    BusinessLogicError,
    ConflictError,
)
from tokenapi.repositories.user_repository import UserRepository
from tokenapi.schemas.auth import (
    ErrorCode,
    RegisterRequest,
    ResetPasswordRequest,
)
from tokenapi.schemas.user import User as UserSchema
import logging

logger = logging.getLogger(__name__)


class AuthService:
    """
    목업 인증 서비스

    비밀번호는 평문 비교, 토큰은 사용자 id 문자열이다. 보안 기능이 아니라
    사이트 데모를 위한 흐름만 제공한다.
    """

    def __init__(self, db: Session, settings: Settings):
        self.db = db
        self.user_repo = UserRepository(db)
        self.settings = settings

    def register(self, payload: RegisterRequest) -> UserSchema:
        """회원가입 - 사용자명/이메일/지갑 주소 중복은 409"""
        if self.user_repo.get_by_username(payload.username):
            raise ConflictError(
                "Username already exists",
                details={"code": ErrorCode.USER_ALREADY_EXISTS.value},
            )
        if self.user_repo.get_by_email(payload.email):
            raise ConflictError(
                "Email already exists",
                details={"code": ErrorCode.USER_ALREADY_EXISTS.value},
            )
        if payload.wallet_address and self.user_repo.get_by_wallet_address(
            payload.wallet_address
        ):
            raise ConflictError("Wallet address already registered")

        referred_by = None
        if payload.referral_code:
            referrer = self.user_repo.get_by_field(
                "referral_code", payload.referral_code
            )
            if referrer is None:
                raise BusinessLogicError(
                    error_code="USER_003", message="Invalid referral code"
                )
            referred_by = referrer.id

        user = self.user_repo.create_user(
            username=payload.username,
            email=payload.email,
            password=payload.password,
            full_name=payload.full_name,
            wallet_address=payload.wallet_address,
            referred_by=referred_by,
        )
        logger.info(f"User registered: id={user.id} username={user.username}")
        return user

    def login(self, username: str, password: str) -> UserSchema:
        user = self.user_repo.get_by_username(username)
        if user is None or user.password != password:
            logger.warning(f"Failed login attempt for username={username}")
            raise AuthenticationError("Invalid username or password")
        logger.info(f"User logged in: id={user.id}")
        return user

    def request_password_reset(self, email: str) -> Optional[str]:
        """
        재설정 토큰 발급

        가입되지 않은 이메일이면 None. 호출자는 두 경우 모두 같은 응답을
        보내야 한다. 메일 발송 대신 토큰을 로그로 남긴다.
        """
        token = self.user_repo.generate_reset_token(
            email, expires_in_minutes=self.settings.RESET_TOKEN_EXPIRE_MINUTES
        )
        if token is None:
            logger.info(f"Password reset requested for unknown email: {email}")
            return None
        logger.info(f"Password reset token for {email}: {token}")
        return token

    def reset_password(self, payload: ResetPasswordRequest) -> None:
        if payload.password != payload.confirm_password:
            raise BusinessLogicError(
                error_code="VALIDATION_002", message="Passwords don't match"
            )
        if not self.user_repo.reset_password(payload.token, payload.password):
            raise BusinessLogicError(
                error_code=ErrorCode.INVALID_RESET_TOKEN.value,
                message="Invalid or expired token",
            )
        logger.info("Password reset completed")

    def verify_email(self, token: str) -> UserSchema:
        user = self.user_repo.verify_user(token)
        if user is None:
            raise BusinessLogicError(
                error_code=ErrorCode.INVALID_VERIFICATION_TOKEN.value,
                message="Invalid verification token",
            )
        logger.info(f"User verified: id={user.id}")
        return user

    def get_current_user(self, token: str) -> Optional[UserSchema]:
        """토큰(사용자 id) 으로 사용자 조회 - 형식이 틀리거나 없으면 None"""
        try:
            user_id = int(str(token).strip())
        except (TypeError, ValueError):
            return None
        return self.user_repo.get_by_id(user_id)
