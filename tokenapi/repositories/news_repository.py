from typing import List, Optional

from sqlalchemy.orm import Session

from tokenapi.models.news import NewsArticle as NewsArticleModel
from tokenapi.schemas.news import NewsArticle as NewsArticleSchema
from tokenapi.repositories.base import BaseRepository


class NewsRepository(BaseRepository[NewsArticleModel, NewsArticleSchema]):
    def __init__(self, db: Session):
        super().__init__(NewsArticleModel, NewsArticleSchema, db)

    def create_article(self, commit: bool = True, **fields) -> NewsArticleSchema:
        # publish_date=None 이면 컬럼 기본값(현재 시각) 사용
        if fields.get("publish_date") is None:
            fields.pop("publish_date", None)
        return self.create(commit=commit, **fields)

    def _newest_first(self, query):
        return query.order_by(
            NewsArticleModel.publish_date.desc(), NewsArticleModel.id.desc()
        )

    def get_published(self, limit: Optional[int] = None) -> List[NewsArticleSchema]:
        """공개 기사만, 게시일 최신순"""
        query = self._newest_first(
            self.db.query(NewsArticleModel).filter(
                NewsArticleModel.is_published.is_(True)
            )
        )
        if limit:
            query = query.limit(limit)
        return self._to_schemas(query.all())

    def get_all(self, limit: Optional[int] = None) -> List[NewsArticleSchema]:
        """비공개 포함 전체 (관리자용)"""
        query = self._newest_first(self.db.query(NewsArticleModel))
        if limit:
            query = query.limit(limit)
        return self._to_schemas(query.all())
