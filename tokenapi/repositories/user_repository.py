import secrets
from datetime import datetime
from typing import Optional, List

from sqlalchemy.orm import Session

from tokenapi.models.user import User as UserModel
from tokenapi.schemas.user import User as UserSchema
from tokenapi.repositories.base import BaseRepository
from tokenapi.utils.date_utils import expires_at, is_expired, utcnow


def make_referral_code(username: str, user_id: int) -> str:
    """ALICE1 형식 - 사용자명 앞 5자 대문자 + id"""
    return f"{username[:5].upper()}{user_id}"


class UserRepository(BaseRepository[UserModel, UserSchema]):
    """
    사용자 리포지토리

    사용자명/이메일 유일성은 호출자(AuthService)가 조회로 사전 확인한다.
    저장소 자체는 중복을 막지 않는다.
    """

    def __init__(self, db: Session):
        super().__init__(UserModel, UserSchema, db)

    def get_by_username(self, username: str) -> Optional[UserSchema]:
        return self.get_by_field("username", username)

    def get_by_email(self, email: str) -> Optional[UserSchema]:
        """이메일로 사용자 조회"""
        return self.get_by_field("email", email)

    def get_by_wallet_address(self, wallet_address: str) -> Optional[UserSchema]:
        return self.get_by_field("wallet_address", wallet_address)

    def create_user(
        self,
        username: str,
        email: str,
        password: str,
        commit: bool = True,
        **extra,
    ) -> UserSchema:
        """사용자 생성 - 집계는 0, 추천 코드는 id 할당 후 파생"""
        instance = UserModel(
            username=username,
            email=email,
            password=password,
            total_trading_volume=0.0,
            rewards_points=0,
            verification_token=secrets.token_urlsafe(24),
            **extra,
        )
        self.db.add(instance)
        try:
            self.db.flush()
            instance.referral_code = make_referral_code(username, instance.id)
            self.db.flush()
            self.db.refresh(instance)
            if commit:
                self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return self.schema_class.model_validate(instance)

    def list_users(
        self, limit: Optional[int] = None, offset: Optional[int] = None
    ) -> List[UserSchema]:
        return self.find_all(limit=limit, offset=offset)

    def get_users_by_trade_volume(self, limit: int) -> List[UserSchema]:
        """거래량 내림차순 상위 N명 - 동률이면 id 오름차순"""
        rows = (
            self.db.query(UserModel)
            .order_by(UserModel.total_trading_volume.desc(), UserModel.id.asc())
            .limit(limit)
            .all()
        )
        return self._to_schemas(rows)

    def get_users_by_rewards_points(self, limit: int) -> List[UserSchema]:
        """포인트 내림차순 상위 N명 - 동률이면 id 오름차순"""
        rows = (
            self.db.query(UserModel)
            .order_by(UserModel.rewards_points.desc(), UserModel.id.asc())
            .limit(limit)
            .all()
        )
        return self._to_schemas(rows)

    def verify_user(self, token: str) -> Optional[UserSchema]:
        """검증 토큰이 일치하는 사용자를 인증 처리하고 토큰을 비운다"""
        instance = (
            self.db.query(UserModel)
            .filter(UserModel.verification_token == token)
            .first()
        )
        if instance is None:
            return None
        instance.is_verified = True
        instance.verification_token = None
        self._save(instance, commit=True)
        return self._to_schema(instance)

    def generate_reset_token(
        self, email: str, expires_in_minutes: int = 60, now: Optional[datetime] = None
    ) -> Optional[str]:
        """재설정 토큰 발급 - 토큰과 만료 시각을 사용자 레코드에 저장"""
        instance = (
            self.db.query(UserModel)
            .filter(UserModel.email == email)
            .order_by(UserModel.id)
            .first()
        )
        if instance is None:
            return None

        token = secrets.token_hex(16)
        instance.reset_password_token = token
        instance.reset_password_expires = expires_at(expires_in_minutes, now=now)
        self._save(instance, commit=True)
        return token

    def reset_password(
        self, token: str, new_password: str, now: Optional[datetime] = None
    ) -> bool:
        """토큰이 일치하고 만료되지 않았으면 비밀번호 교체 후 토큰/만료 제거"""
        now = now or utcnow()
        candidates = (
            self.db.query(UserModel)
            .filter(UserModel.reset_password_token == token)
            .order_by(UserModel.id)
            .all()
        )
        for instance in candidates:
            if is_expired(instance.reset_password_expires, now=now):
                continue
            instance.password = new_password
            instance.reset_password_token = None
            instance.reset_password_expires = None
            self._save(instance, commit=True)
            return True
        return False

    def add_trading_volume(
        self, user_id: int, amount: float, commit: bool = True
    ) -> Optional[UserSchema]:
        """누적 거래량 증가 - 없는 사용자면 아무것도 하지 않고 None"""
        instance = self._get_model(user_id)
        if instance is None:
            return None
        instance.total_trading_volume = instance.total_trading_volume + amount
        self._save(instance, commit)
        return self._to_schema(instance)

    def add_rewards_points(
        self, user_id: int, points: int, commit: bool = True
    ) -> Optional[UserSchema]:
        instance = self._get_model(user_id)
        if instance is None:
            return None
        instance.rewards_points = instance.rewards_points + points
        self._save(instance, commit)
        return self._to_schema(instance)
