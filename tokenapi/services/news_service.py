import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from tokenapi.config import Settings
from tokenapi.core.exceptions import NotFoundError
from tokenapi.repositories.news_repository import NewsRepository
from tokenapi.schemas.auth import ErrorCode
from tokenapi.schemas.news import NewsArticle, NewsArticleCreate, NewsArticleUpdate
from tokenapi.schemas.user import User as UserSchema

logger = logging.getLogger(__name__)


class NewsService:
    def __init__(self, db: Session, settings: Settings):
        self.db = db
        self.settings = settings
        self.news_repo = NewsRepository(db)

    def _not_found(self, article_id: int) -> NotFoundError:
        return NotFoundError(
            "Article not found",
            details={"code": ErrorCode.ARTICLE_NOT_FOUND.value, "id": article_id},
        )

    def list_published(self, limit: Optional[int] = None) -> List[NewsArticle]:
        return self.news_repo.get_published(limit)

    def list_all(self, limit: Optional[int] = None) -> List[NewsArticle]:
        return self.news_repo.get_all(limit)

    def get_article(
        self, article_id: int, viewer: Optional[UserSchema] = None
    ) -> NewsArticle:
        """비공개 기사는 관리자에게만 보이고, 그 외에는 없는 기사와 같이 404"""
        article = self.news_repo.get_by_id(article_id)
        if article is None:
            raise self._not_found(article_id)
        is_admin = viewer is not None and viewer.id == self.settings.ADMIN_USER_ID
        if not article.is_published and not is_admin:
            raise self._not_found(article_id)
        return article

    def create_article(self, payload: NewsArticleCreate) -> NewsArticle:
        article = self.news_repo.create_article(**payload.model_dump())
        logger.info(
            f"Article created: id={article.id} published={article.is_published}"
        )
        return article

    def update_article(self, article_id: int, payload: NewsArticleUpdate) -> NewsArticle:
        # null 은 "변경 없음"으로 취급
        fields = payload.model_dump(exclude_unset=True, exclude_none=True)
        article = self.news_repo.update(article_id, **fields)
        if article is None:
            raise self._not_found(article_id)
        logger.info(f"Article {article_id} updated: fields={sorted(fields)}")
        return article
