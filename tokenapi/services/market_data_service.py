import logging
import random
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from tokenapi.config import Settings
from tokenapi.repositories.trading_pair_repository import TradingPairRepository
from tokenapi.core.exceptions import NotFoundError
from tokenapi.schemas.auth import ErrorCode
from tokenapi.schemas.trading import (
    Candle,
    MarketData,
    OrderBook,
    OrderBookLevel,
    OrderBookSnapshot,
    TradingPair,
)
from tokenapi.utils.date_utils import utcnow

logger = logging.getLogger(__name__)

# timeframe -> (캔들 수, 캔들 간격)
TIMEFRAMES: Dict[str, Tuple[int, timedelta]] = {
    "1H": (60, timedelta(minutes=1)),
    "1D": (24, timedelta(hours=1)),
    "1W": (7, timedelta(days=1)),
    "1M": (30, timedelta(days=1)),
    "ALL": (90, timedelta(days=1)),
}
DEFAULT_TIMEFRAME = "1D"

VOLATILITY = 0.2
TREND = 0.1
ORDER_BOOK_DEPTH = 20
ORDER_BOOK_TICK = 0.000001


class MarketDataService:
    """
    가격 상태를 저장하지 않는 모의 시세 생성기

    요청마다 기준가 주변의 무작위 캔들과 호가를 새로 만든다. rng 를 주입하면
    같은 시드로 같은 결과를 재현할 수 있다.
    """

    def __init__(
        self,
        db: Session,
        settings: Settings,
        rng: Optional[random.Random] = None,
    ):
        self.db = db
        self.settings = settings
        self.pair_repo = TradingPairRepository(db)
        self.rng = rng or random.Random()

    def _get_pair(self, symbol: str) -> TradingPair:
        pair = self.pair_repo.get_by_symbol(symbol)
        if pair is None:
            raise NotFoundError(
                "Trading pair not found",
                details={"code": ErrorCode.PAIR_NOT_FOUND.value, "symbol": symbol},
            )
        return pair

    def generate_candles(
        self, timeframe: str, now: Optional[datetime] = None
    ) -> List[Candle]:
        """알 수 없는 timeframe 은 1D(24 x 1시간) 로 처리"""
        count, interval = TIMEFRAMES.get(timeframe, TIMEFRAMES[DEFAULT_TIMEFRAME])
        now = now or utcnow()
        base_price = self.settings.DEFAULT_TOKEN_PRICE
        rng = self.rng

        candles = []
        for i in range(count):
            random_factor = 1 + (rng.random() - 0.5) * VOLATILITY
            trend_factor = 1 + (i / count) * TREND
            price = base_price * random_factor * trend_factor
            candles.append(
                Candle(
                    time=now - (count - i) * interval,
                    open=price * (1 - rng.random() * 0.02),
                    high=price * (1 + rng.random() * 0.02),
                    low=price * (1 - rng.random() * 0.03),
                    close=price,
                    volume=float(rng.randrange(500_000, 1_500_000)),
                )
            )
        return candles

    def generate_order_book(self) -> OrderBook:
        """기준가 아래 매수 20단계, 위 매도 20단계"""
        base_price = self.settings.DEFAULT_TOKEN_PRICE

        def level(price: float) -> OrderBookLevel:
            amount = float(self.rng.randrange(1_000_000, 6_000_000))
            return OrderBookLevel(price=price, amount=amount, total=price * amount)

        bids = [
            level(base_price - i * ORDER_BOOK_TICK)
            for i in range(1, ORDER_BOOK_DEPTH + 1)
        ]
        asks = [
            level(base_price + i * ORDER_BOOK_TICK)
            for i in range(1, ORDER_BOOK_DEPTH + 1)
        ]
        return OrderBook(bids=bids, asks=asks)

    def get_market_data(self, symbol: str, timeframe: str) -> MarketData:
        pair = self._get_pair(symbol)
        if timeframe not in TIMEFRAMES:
            logger.debug(f"Unknown timeframe {timeframe}, using {DEFAULT_TIMEFRAME}")
        return MarketData(
            pair=pair,
            timeframe=timeframe,
            candles=self.generate_candles(timeframe),
        )

    def get_order_book(self, symbol: str) -> OrderBookSnapshot:
        pair = self._get_pair(symbol)
        return OrderBookSnapshot(pair=pair, order_book=self.generate_order_book())
