from typing import List, Optional

from sqlalchemy.orm import Session

from tokenapi.models.news import Subscriber as SubscriberModel
from tokenapi.schemas.news import Subscriber as SubscriberSchema
from tokenapi.repositories.base import BaseRepository
from tokenapi.utils.date_utils import utcnow


class SubscriberRepository(BaseRepository[SubscriberModel, SubscriberSchema]):
    """뉴스레터 구독자 - 삭제 대신 is_active=False"""

    def __init__(self, db: Session):
        super().__init__(SubscriberModel, SubscriberSchema, db)

    def create_subscriber(self, email: str, commit: bool = True) -> SubscriberSchema:
        return self.create(commit=commit, email=email, is_active=True)

    def get_by_email(self, email: str) -> Optional[SubscriberSchema]:
        return self.get_by_field("email", email)

    def get_active_subscribers(self) -> List[SubscriberSchema]:
        return self.find_all(filters={"is_active": True})

    def _get_model_by_email(self, email: str) -> Optional[SubscriberModel]:
        return (
            self.db.query(SubscriberModel)
            .filter(SubscriberModel.email == email)
            .order_by(SubscriberModel.id)
            .first()
        )

    def unsubscribe(self, email: str) -> bool:
        """소프트 삭제 - 구독자가 없으면 False"""
        instance = self._get_model_by_email(email)
        if instance is None:
            return False
        instance.is_active = False
        self._save(instance, commit=True)
        return True

    def reactivate(self, email: str) -> Optional[SubscriberSchema]:
        """비활성 구독자를 같은 id 로 다시 활성화하고 구독 시각 갱신"""
        instance = self._get_model_by_email(email)
        if instance is None:
            return None
        instance.is_active = True
        instance.subscribed_at = utcnow()
        self._save(instance, commit=True)
        return self._to_schema(instance)
