import logging
from typing import List

from sqlalchemy.orm import Session

from tokenapi.config import Settings
from tokenapi.core.exceptions import ConflictError, NotFoundError
from tokenapi.repositories.subscriber_repository import SubscriberRepository
from tokenapi.schemas.auth import ErrorCode
from tokenapi.schemas.news import Subscriber

logger = logging.getLogger(__name__)


class NewsletterService:
    """
    뉴스레터 구독 관리

    같은 이메일로 다시 구독하면:
    - 활성 구독자: 409
    - 구독 해지한 구독자: 기존 레코드(같은 id)를 다시 활성화
    """

    def __init__(self, db: Session, settings: Settings):
        self.db = db
        self.settings = settings
        self.subscriber_repo = SubscriberRepository(db)

    def subscribe(self, email: str) -> Subscriber:
        existing = self.subscriber_repo.get_by_email(email)
        if existing is not None:
            if existing.is_active:
                raise ConflictError(
                    "Email already subscribed",
                    details={"code": ErrorCode.ALREADY_SUBSCRIBED.value},
                )
            subscriber = self.subscriber_repo.reactivate(email)
            logger.info(f"Subscriber reactivated: id={subscriber.id}")
            return subscriber

        subscriber = self.subscriber_repo.create_subscriber(email)
        logger.info(f"New subscriber: id={subscriber.id}")
        return subscriber

    def unsubscribe(self, email: str) -> None:
        if not self.subscriber_repo.unsubscribe(email):
            raise NotFoundError(
                "Email not found",
                details={"code": ErrorCode.SUBSCRIBER_NOT_FOUND.value},
            )
        logger.info(f"Subscriber deactivated: {email}")

    def list_active(self) -> List[Subscriber]:
        return self.subscriber_repo.get_active_subscribers()
