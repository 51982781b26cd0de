from fastapi import APIRouter, Depends, Path, Query, status
from typing import Optional
import logging

from tokenapi.config import Settings
from tokenapi.core.auth_middleware import get_current_user
from tokenapi.core.exceptions import BaseAPIException, InternalServerError
from tokenapi.deps import get_market_data_service, get_settings, get_trading_service
from tokenapi.schemas.auth import BaseResponse
from tokenapi.schemas.trading import OrderCreate
from tokenapi.schemas.user import User as UserSchema
from tokenapi.services.market_data_service import MarketDataService
from tokenapi.services.trading_service import TradingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/trading", tags=["trading"])


@router.get("/pairs", response_model=BaseResponse)
async def get_trading_pairs(
    trading_service: TradingService = Depends(get_trading_service),
) -> BaseResponse:
    """활성 거래쌍 목록"""
    pairs = trading_service.get_active_pairs()
    return BaseResponse(success=True, data={"pairs": pairs})


# 심볼에 '/' 가 포함되므로 path 컨버터 사용 (예: T&E/SOL)
@router.get("/market-data/{symbol:path}/{timeframe}", response_model=BaseResponse)
async def get_market_data(
    symbol: str = Path(..., description="거래쌍 심볼"),
    timeframe: str = Path(..., description="1H, 1D, 1W, 1M, ALL"),
    market_data_service: MarketDataService = Depends(get_market_data_service),
) -> BaseResponse:
    """모의 캔들 데이터 - 요청마다 새로 생성"""
    market_data = market_data_service.get_market_data(symbol, timeframe)
    return BaseResponse(
        success=True,
        data={
            "pair": market_data.pair,
            "timeframe": market_data.timeframe,
            "data": market_data.candles,
        },
    )


@router.get("/order-book/{symbol:path}", response_model=BaseResponse)
async def get_order_book(
    symbol: str = Path(..., description="거래쌍 심볼"),
    market_data_service: MarketDataService = Depends(get_market_data_service),
) -> BaseResponse:
    snapshot = market_data_service.get_order_book(symbol)
    return BaseResponse(success=True, data=snapshot)


@router.post("/orders", response_model=BaseResponse, status_code=status.HTTP_201_CREATED)
async def place_order(
    payload: OrderCreate,
    current_user: UserSchema = Depends(get_current_user),
    trading_service: TradingService = Depends(get_trading_service),
) -> BaseResponse:
    """주문 접수 - 시장가 주문은 즉시 셀프 체결"""
    try:
        placed = trading_service.place_order(current_user.id, payload)
    except BaseAPIException:
        raise
    except Exception as e:
        logger.error(f"Order placement error for user {current_user.id}: {str(e)}")
        raise InternalServerError("Order placement failed")

    return BaseResponse(
        success=True,
        data={
            "message": "Order placed successfully",
            "order": placed.order,
            "trade": placed.trade,
            "points_earned": placed.points_earned,
        },
    )


@router.get("/orders", response_model=BaseResponse)
async def get_my_orders(
    current_user: UserSchema = Depends(get_current_user),
    trading_service: TradingService = Depends(get_trading_service),
) -> BaseResponse:
    orders = trading_service.get_user_orders(current_user.id)
    return BaseResponse(success=True, data={"orders": orders})


@router.get("/trades", response_model=BaseResponse)
async def get_my_trades(
    current_user: UserSchema = Depends(get_current_user),
    trading_service: TradingService = Depends(get_trading_service),
) -> BaseResponse:
    trades = trading_service.get_user_trades(current_user.id)
    return BaseResponse(success=True, data={"trades": trades})


@router.get("/leaderboard", response_model=BaseResponse)
async def get_volume_leaderboard(
    limit: Optional[int] = Query(None, ge=1, description="상위 N명"),
    trading_service: TradingService = Depends(get_trading_service),
    settings: Settings = Depends(get_settings),
) -> BaseResponse:
    """거래량 리더보드"""
    limit = min(limit or settings.DEFAULT_PAGE_LIMIT, settings.MAX_PAGE_LIMIT)
    leaderboard = trading_service.get_volume_leaderboard(limit)
    return BaseResponse(
        success=True, data={"leaderboard": leaderboard}, meta={"limit": limit}
    )
