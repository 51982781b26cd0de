from typing import List, Optional
from sqlalchemy.orm import Session

from tokenapi.repositories.user_repository import UserRepository
from tokenapi.core.exceptions import ConflictError, NotFoundError
from tokenapi.config import Settings
from tokenapi.schemas.user import AdminUserUpdate, User as UserSchema
import logging

logger = logging.getLogger(__name__)


class UserService:
    """사용자 관리 (관리자 화면)"""

    def __init__(self, db: Session, settings: Settings):
        self.db = db
        self.user_repo = UserRepository(db)
        self.settings = settings

    def list_users(
        self, limit: Optional[int] = None, offset: Optional[int] = None
    ) -> List[UserSchema]:
        return self.user_repo.list_users(limit=limit, offset=offset)

    def get_user_by_id(self, user_id: int) -> UserSchema:
        user = self.user_repo.get_by_id(user_id)
        if not user:
            raise NotFoundError(f"User not found: {user_id}")
        return user

    def update_user(self, user_id: int, update_data: AdminUserUpdate) -> UserSchema:
        """부분 업데이트 - 사용자명/이메일/지갑 주소는 다른 사용자와 겹치면 409"""
        self.get_user_by_id(user_id)

        update_fields = update_data.model_dump(exclude_unset=True, exclude_none=True)

        unique_lookups = {
            "username": self.user_repo.get_by_username,
            "email": self.user_repo.get_by_email,
            "wallet_address": self.user_repo.get_by_wallet_address,
        }
        for field, lookup in unique_lookups.items():
            value = update_fields.get(field)
            if value is None:
                continue
            other = lookup(value)
            if other is not None and other.id != user_id:
                raise ConflictError(f"{field} already taken")

        updated_user = self.user_repo.update(user_id, **update_fields)
        if not updated_user:
            raise NotFoundError(f"User not found: {user_id}")

        logger.info(f"User {user_id} updated: fields={sorted(update_fields)}")
        return updated_user
