from fastapi import APIRouter, Depends, Path, Query, status
from typing import Optional
import logging

from tokenapi.config import Settings
from tokenapi.core.auth_middleware import get_current_user_optional, require_admin
from tokenapi.deps import get_news_service, get_settings
from tokenapi.schemas.auth import BaseResponse
from tokenapi.schemas.news import NewsArticleCreate
from tokenapi.schemas.user import User as UserSchema
from tokenapi.services.news_service import NewsService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/news", tags=["news"])


@router.get("", response_model=BaseResponse)
async def get_published_news(
    limit: Optional[int] = Query(None, ge=1),
    news_service: NewsService = Depends(get_news_service),
    settings: Settings = Depends(get_settings),
) -> BaseResponse:
    """공개 기사 목록 (최신순)"""
    limit = min(limit or settings.DEFAULT_PAGE_LIMIT, settings.MAX_PAGE_LIMIT)
    articles = news_service.list_published(limit)
    return BaseResponse(success=True, data={"articles": articles}, meta={"limit": limit})


@router.get("/{article_id}", response_model=BaseResponse)
async def get_news_article(
    article_id: int = Path(..., ge=1),
    current_user: Optional[UserSchema] = Depends(get_current_user_optional),
    news_service: NewsService = Depends(get_news_service),
) -> BaseResponse:
    """비공개 기사는 관리자에게만 노출"""
    article = news_service.get_article(article_id, viewer=current_user)
    return BaseResponse(success=True, data={"article": article})


@router.post("", response_model=BaseResponse, status_code=status.HTTP_201_CREATED)
async def create_news_article(
    payload: NewsArticleCreate,
    admin: UserSchema = Depends(require_admin),
    news_service: NewsService = Depends(get_news_service),
) -> BaseResponse:
    article = news_service.create_article(payload)
    return BaseResponse(
        success=True,
        data={"message": "Article created successfully", "article": article},
    )
