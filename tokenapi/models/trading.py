from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import Boolean, DateTime, Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from tokenapi.models.base import BaseModel, TimestampMixin
from tokenapi.utils.date_utils import utcnow


class OrderType(str, Enum):
    MARKET = "Market"
    LIMIT = "Limit"


class OrderSide(str, Enum):
    BUY = "Buy"
    SELL = "Sell"

    @property
    def opposite(self) -> "OrderSide":
        return OrderSide.SELL if self is OrderSide.BUY else OrderSide.BUY


class OrderStatus(str, Enum):
    OPEN = "Open"
    PARTIAL = "Partial"
    FILLED = "Filled"
    CANCELLED = "Cancelled"


class TradingPair(BaseModel):
    """거래쌍 레퍼런스 데이터 - 가격 상태는 저장하지 않음"""

    __tablename__ = "trading_pairs"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    base_asset: Mapped[str] = mapped_column(String(20), nullable=False)  # T&E
    quote_asset: Mapped[str] = mapped_column(String(20), nullable=False)  # SOL, USDC ...
    pair_symbol: Mapped[str] = mapped_column(
        String(50), nullable=False, index=True
    )  # T&E/SOL
    min_trade_amount: Mapped[float] = mapped_column(Float, nullable=False)
    max_trade_amount: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    trading_fee: Mapped[float] = mapped_column(Float, default=0.001, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)


class Order(BaseModel, TimestampMixin):
    __tablename__ = "orders"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # FK 제약은 두지 않음 - 시스템 사용자(셀프 체결 상대)는 users 테이블에 없다
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    trading_pair_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    type: Mapped[str] = mapped_column(String(10), nullable=False)
    side: Mapped[str] = mapped_column(String(10), nullable=False)
    price: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    filled: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, index=True)


class Trade(BaseModel):
    """체결 기록 - 생성 후 변경되지 않음"""

    __tablename__ = "trades"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    buy_order_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    sell_order_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    trading_pair_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    total_value: Mapped[float] = mapped_column(Float, nullable=False)
    fee: Mapped[float] = mapped_column(Float, nullable=False)
    timestamp: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
