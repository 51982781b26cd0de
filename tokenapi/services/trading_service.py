import math
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from tokenapi.config import Settings
from tokenapi.core.exceptions import BusinessLogicError, ConflictError, NotFoundError
from tokenapi.models.trading import OrderSide, OrderStatus, OrderType
from tokenapi.repositories.order_repository import OrderRepository
from tokenapi.repositories.rewards_repository import RewardsRepository
from tokenapi.repositories.trade_repository import TradeRepository
from tokenapi.repositories.trading_pair_repository import TradingPairRepository
from tokenapi.repositories.user_repository import UserRepository
from tokenapi.schemas.auth import ErrorCode
from tokenapi.schemas.trading import (
    Order,
    OrderCreate,
    PlacedOrder,
    Trade,
    TradingPair,
    TradingPairCreate,
    TradingPairUpdate,
)
from tokenapi.schemas.user import VolumeLeaderboardEntry

logger = logging.getLogger(__name__)


class TradingService:
    """
    모의 거래 서비스

    실제 매칭 엔진은 없다. 시장가 주문은 시스템 사용자 소유의 반대 방향 지정가
    주문과 즉시 셀프 체결되며, 주문/상대 주문/체결/리워드 이벤트가 하나의
    트랜잭션으로 기록된다.
    """

    def __init__(self, db: Session, settings: Settings):
        self.db = db
        self.settings = settings
        self.pair_repo = TradingPairRepository(db)
        self.order_repo = OrderRepository(db)
        self.trade_repo = TradeRepository(db)
        self.rewards_repo = RewardsRepository(db)
        self.user_repo = UserRepository(db)

    # 거래쌍

    def get_active_pairs(self) -> List[TradingPair]:
        return self.pair_repo.get_all(active_only=True)

    def get_all_pairs(self) -> List[TradingPair]:
        return self.pair_repo.get_all(active_only=False)

    def get_pair(self, pair_id: int) -> TradingPair:
        pair = self.pair_repo.get_by_id(pair_id)
        if pair is None:
            raise NotFoundError(
                "Trading pair not found",
                details={"code": ErrorCode.PAIR_NOT_FOUND.value, "id": pair_id},
            )
        return pair

    def get_pair_by_symbol(self, symbol: str) -> TradingPair:
        pair = self.pair_repo.get_by_symbol(symbol)
        if pair is None:
            raise NotFoundError(
                "Trading pair not found",
                details={"code": ErrorCode.PAIR_NOT_FOUND.value, "symbol": symbol},
            )
        return pair

    def create_pair(self, payload: TradingPairCreate) -> TradingPair:
        if self.pair_repo.get_by_symbol(payload.pair_symbol):
            raise ConflictError(
                f"Trading pair already exists: {payload.pair_symbol}",
                details={"code": ErrorCode.PAIR_ALREADY_EXISTS.value},
            )
        pair = self.pair_repo.create_pair(**payload.model_dump())
        logger.info(f"Trading pair created: {pair.pair_symbol} (id={pair.id})")
        return pair

    def update_pair(self, pair_id: int, payload: TradingPairUpdate) -> TradingPair:
        current = self.get_pair(pair_id)
        fields = payload.model_dump(exclude_unset=True, exclude_none=True)

        symbol = fields.get("pair_symbol")
        if symbol and symbol != current.pair_symbol:
            other = self.pair_repo.get_by_symbol(symbol)
            if other is not None and other.id != pair_id:
                raise ConflictError(
                    f"Trading pair already exists: {symbol}",
                    details={"code": ErrorCode.PAIR_ALREADY_EXISTS.value},
                )

        min_amount = fields.get("min_trade_amount", current.min_trade_amount)
        max_amount = fields.get("max_trade_amount", current.max_trade_amount)
        if max_amount is not None and max_amount < min_amount:
            raise BusinessLogicError(
                error_code=ErrorCode.INVALID_ORDER.value,
                message="max_trade_amount must be >= min_trade_amount",
            )

        updated = self.pair_repo.update(pair_id, **fields)
        logger.info(f"Trading pair {pair_id} updated: fields={sorted(fields)}")
        return updated

    # 주문

    def _validate_order(self, pair: TradingPair, payload: OrderCreate) -> None:
        if payload.amount < pair.min_trade_amount:
            raise BusinessLogicError(
                error_code=ErrorCode.INVALID_ORDER.value,
                message=f"Order amount below minimum ({pair.min_trade_amount})",
            )
        if pair.max_trade_amount and payload.amount > pair.max_trade_amount:
            raise BusinessLogicError(
                error_code=ErrorCode.INVALID_ORDER.value,
                message=f"Order amount above maximum ({pair.max_trade_amount})",
            )
        if payload.type is OrderType.LIMIT and not payload.price:
            raise BusinessLogicError(
                error_code=ErrorCode.INVALID_ORDER.value,
                message="Price required for limit orders",
            )

    def _trade_fee(self, user_id: int, total_value: float, pair: TradingPair) -> float:
        tier = self.rewards_repo.get_user_tier(user_id)
        discount = tier.trading_fee_discount if tier else 0.0
        return total_value * pair.trading_fee * (1 - discount)

    def place_order(self, user_id: int, payload: OrderCreate) -> PlacedOrder:
        """
        주문 접수

        지정가 주문은 Open 으로 저장만 된다. 시장가 주문은 다음을 한 트랜잭션으로 수행:
        1. 주문 생성 (Filled)
        2. 시스템 사용자의 반대 방향 지정가 주문 생성
        3. 전체 수량 체결 기록 (양쪽 filled, 거래량 반영)
        4. 거래대금 기준 리워드 포인트 적립
        """
        pair = self.get_pair(payload.trading_pair_id)
        self._validate_order(pair, payload)

        if payload.type is OrderType.LIMIT:
            order = self.order_repo.create_order(
                user_id=user_id,
                trading_pair_id=pair.id,
                type=payload.type,
                side=payload.side,
                amount=payload.amount,
                price=payload.price,
            )
            logger.info(
                f"Limit order placed: id={order.id} user={user_id} "
                f"{order.side.value} {order.amount} {pair.pair_symbol} @ {order.price}"
            )
            return PlacedOrder(order=order)

        price = payload.price or self.settings.DEFAULT_TOKEN_PRICE
        total_value = price * payload.amount
        fee = self._trade_fee(user_id, total_value, pair)
        points = math.floor(total_value / self.settings.POINTS_PER_VOLUME_UNIT)

        try:
            order = self.order_repo.create_order(
                user_id=user_id,
                trading_pair_id=pair.id,
                type=OrderType.MARKET,
                side=payload.side,
                amount=payload.amount,
                price=payload.price,
                commit=False,
            )
            counter_order = self.order_repo.create_order(
                user_id=self.settings.SYSTEM_USER_ID,
                trading_pair_id=pair.id,
                type=OrderType.LIMIT,
                side=payload.side.opposite,
                amount=payload.amount,
                price=price,
                commit=False,
            )
            if payload.side is OrderSide.BUY:
                buy_order_id, sell_order_id = order.id, counter_order.id
            else:
                buy_order_id, sell_order_id = counter_order.id, order.id

            trade = self.trade_repo.create_trade(
                buy_order_id=buy_order_id,
                sell_order_id=sell_order_id,
                trading_pair_id=pair.id,
                price=price,
                amount=payload.amount,
                total_value=total_value,
                fee=fee,
                commit=False,
            )
            self.rewards_repo.create_event(
                user_id=user_id,
                event_type="Trade",
                points=points,
                description=(
                    f"Earned points for trading {payload.amount} {pair.base_asset}"
                ),
                additional_data={"trade_id": trade.id, "order_id": order.id},
                commit=False,
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            logger.exception(f"Market order failed for user={user_id}")
            raise

        filled_order = self.order_repo.get_by_id(order.id)
        logger.info(
            f"Market order self-filled: order={order.id} trade={trade.id} "
            f"user={user_id} value={total_value} points={points}"
        )
        return PlacedOrder(order=filled_order, trade=trade, points_earned=points)

    def get_user_orders(self, user_id: int) -> List[Order]:
        return self.order_repo.get_user_orders(user_id)

    def get_user_trades(self, user_id: int) -> List[Trade]:
        return self.trade_repo.get_user_trades(user_id)

    def list_orders(
        self, pair_id: Optional[int] = None, status: Optional[OrderStatus] = None
    ) -> List[Order]:
        """관리자 주문 조회 - 거래쌍/상태 필터"""
        if pair_id:
            return self.order_repo.get_orders_by_trading_pair(pair_id, status)
        return self.order_repo.get_all_orders(status)

    def get_volume_leaderboard(self, limit: int) -> List[VolumeLeaderboardEntry]:
        users = self.user_repo.get_users_by_trade_volume(limit)
        return [
            VolumeLeaderboardEntry(
                rank=rank,
                user_id=user.id,
                username=user.username,
                total_trading_volume=user.total_trading_volume,
            )
            for rank, user in enumerate(users, start=1)
        ]
