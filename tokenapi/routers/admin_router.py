from fastapi import APIRouter, Depends, Path, Query, status
from typing import Optional
import logging

from tokenapi.core.auth_middleware import require_admin
from tokenapi.deps import (
    get_news_service,
    get_reward_service,
    get_trading_service,
    get_user_service,
)
from tokenapi.models.trading import OrderStatus
from tokenapi.schemas.auth import BaseResponse
from tokenapi.schemas.news import NewsArticleUpdate
from tokenapi.schemas.rewards import RewardsEventCreate
from tokenapi.schemas.trading import TradingPairCreate, TradingPairUpdate
from tokenapi.schemas.user import AdminUserUpdate, UserPublic
from tokenapi.services.news_service import NewsService
from tokenapi.services.reward_service import RewardService
from tokenapi.services.trading_service import TradingService
from tokenapi.services.user_service import UserService

logger = logging.getLogger(__name__)

# 모든 엔드포인트가 관리자 전용
router = APIRouter(
    prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)]
)


# 사용자


@router.get("/users", response_model=BaseResponse)
async def list_users(
    limit: Optional[int] = Query(None, ge=1),
    offset: Optional[int] = Query(None, ge=0),
    user_service: UserService = Depends(get_user_service),
) -> BaseResponse:
    """전체 사용자 - 비밀번호/토큰 제외"""
    users = user_service.list_users(limit=limit, offset=offset)
    return BaseResponse(
        success=True,
        data={"users": [UserPublic.model_validate(u) for u in users]},
        meta={"count": len(users)},
    )


@router.get("/users/{user_id}", response_model=BaseResponse)
async def get_user(
    user_id: int = Path(..., ge=1),
    user_service: UserService = Depends(get_user_service),
) -> BaseResponse:
    user = user_service.get_user_by_id(user_id)
    return BaseResponse(success=True, data={"user": UserPublic.model_validate(user)})


@router.patch("/users/{user_id}", response_model=BaseResponse)
async def update_user(
    payload: AdminUserUpdate,
    user_id: int = Path(..., ge=1),
    user_service: UserService = Depends(get_user_service),
) -> BaseResponse:
    user = user_service.update_user(user_id, payload)
    return BaseResponse(
        success=True,
        data={
            "message": "User updated successfully",
            "user": UserPublic.model_validate(user),
        },
    )


# 거래쌍 / 주문


@router.get("/trading-pairs", response_model=BaseResponse)
async def list_trading_pairs(
    trading_service: TradingService = Depends(get_trading_service),
) -> BaseResponse:
    """비활성 거래쌍 포함"""
    return BaseResponse(success=True, data={"pairs": trading_service.get_all_pairs()})


@router.post(
    "/trading-pairs", response_model=BaseResponse, status_code=status.HTTP_201_CREATED
)
async def create_trading_pair(
    payload: TradingPairCreate,
    trading_service: TradingService = Depends(get_trading_service),
) -> BaseResponse:
    pair = trading_service.create_pair(payload)
    return BaseResponse(
        success=True,
        data={"message": "Trading pair created successfully", "pair": pair},
    )


@router.patch("/trading-pairs/{pair_id}", response_model=BaseResponse)
async def update_trading_pair(
    payload: TradingPairUpdate,
    pair_id: int = Path(..., ge=1),
    trading_service: TradingService = Depends(get_trading_service),
) -> BaseResponse:
    pair = trading_service.update_pair(pair_id, payload)
    return BaseResponse(
        success=True,
        data={"message": "Trading pair updated successfully", "pair": pair},
    )


@router.get("/orders", response_model=BaseResponse)
async def list_orders(
    pair_id: Optional[int] = Query(None, ge=1),
    order_status: Optional[OrderStatus] = Query(None, alias="status"),
    trading_service: TradingService = Depends(get_trading_service),
) -> BaseResponse:
    orders = trading_service.list_orders(pair_id=pair_id, status=order_status)
    return BaseResponse(success=True, data={"orders": orders})


# 뉴스


@router.get("/news", response_model=BaseResponse)
async def list_all_news(
    news_service: NewsService = Depends(get_news_service),
) -> BaseResponse:
    """비공개 기사 포함"""
    return BaseResponse(success=True, data={"articles": news_service.list_all()})


@router.patch("/news/{article_id}", response_model=BaseResponse)
async def update_news_article(
    payload: NewsArticleUpdate,
    article_id: int = Path(..., ge=1),
    news_service: NewsService = Depends(get_news_service),
) -> BaseResponse:
    article = news_service.update_article(article_id, payload)
    return BaseResponse(
        success=True,
        data={"message": "Article updated successfully", "article": article},
    )


# 리워드


@router.post(
    "/rewards/events", response_model=BaseResponse, status_code=status.HTTP_201_CREATED
)
async def award_rewards_points(
    payload: RewardsEventCreate,
    reward_service: RewardService = Depends(get_reward_service),
) -> BaseResponse:
    """수동 포인트 지급/차감"""
    event = reward_service.award_points(payload)
    return BaseResponse(success=True, data={"event": event})
