from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from tokenapi.models.trading import OrderSide, OrderStatus, OrderType


class TradingPair(BaseModel):
    id: int
    base_asset: str
    quote_asset: str
    pair_symbol: str
    min_trade_amount: float
    max_trade_amount: Optional[float] = None
    trading_fee: float = 0.001
    is_active: bool = True

    class Config:
        from_attributes = True


class TradingPairCreate(BaseModel):
    base_asset: str = Field(min_length=1, max_length=20)
    quote_asset: str = Field(min_length=1, max_length=20)
    pair_symbol: Optional[str] = Field(None, max_length=50)
    min_trade_amount: float = Field(gt=0)
    max_trade_amount: Optional[float] = Field(None, gt=0)
    trading_fee: float = Field(0.001, ge=0, lt=1)
    is_active: bool = True

    @model_validator(mode="after")
    def fill_symbol_and_check_bounds(self) -> "TradingPairCreate":
        if not self.pair_symbol:
            self.pair_symbol = f"{self.base_asset}/{self.quote_asset}"
        if (
            self.max_trade_amount is not None
            and self.max_trade_amount < self.min_trade_amount
        ):
            raise ValueError("max_trade_amount must be >= min_trade_amount")
        return self


class TradingPairUpdate(BaseModel):
    pair_symbol: Optional[str] = Field(None, min_length=1, max_length=50)
    min_trade_amount: Optional[float] = Field(None, gt=0)
    max_trade_amount: Optional[float] = Field(None, gt=0)
    trading_fee: Optional[float] = Field(None, ge=0, lt=1)
    is_active: Optional[bool] = None


class Order(BaseModel):
    id: int
    user_id: int
    trading_pair_id: int
    type: OrderType
    side: OrderSide
    price: Optional[float] = None
    amount: float
    filled: float = 0.0
    status: OrderStatus
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class OrderCreate(BaseModel):
    trading_pair_id: int
    type: OrderType
    side: OrderSide
    price: Optional[float] = Field(None, gt=0)
    amount: float = Field(gt=0)


class Trade(BaseModel):
    id: int
    buy_order_id: int
    sell_order_id: int
    trading_pair_id: int
    price: float
    amount: float
    total_value: float
    fee: float
    timestamp: datetime

    class Config:
        from_attributes = True


class PlacedOrder(BaseModel):
    """주문 접수 결과 - 시장가 주문이면 셀프 체결된 거래 포함"""

    order: Order
    trade: Optional[Trade] = None
    points_earned: int = 0


class Candle(BaseModel):
    time: datetime
    open: float
    high: float
    low: float
    close: float
    volume: float


class MarketData(BaseModel):
    pair: TradingPair
    timeframe: str
    candles: List[Candle]


class OrderBookLevel(BaseModel):
    price: float
    amount: float
    total: float


class OrderBook(BaseModel):
    bids: List[OrderBookLevel]
    asks: List[OrderBookLevel]


class OrderBookSnapshot(BaseModel):
    pair: TradingPair
    order_book: OrderBook
