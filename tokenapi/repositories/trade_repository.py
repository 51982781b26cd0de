import logging
from typing import List

from sqlalchemy import or_
from sqlalchemy.orm import Session

from tokenapi.models.trading import Order as OrderModel, Trade as TradeModel
from tokenapi.models.user import User as UserModel
from tokenapi.schemas.trading import Trade as TradeSchema
from tokenapi.repositories.base import BaseRepository
from tokenapi.repositories.order_repository import apply_fill_to

logger = logging.getLogger(__name__)


class TradeRepository(BaseRepository[TradeModel, TradeSchema]):
    """체결 원장 - 추가만 가능하고 수정/삭제 없음"""

    def __init__(self, db: Session):
        super().__init__(TradeModel, TradeSchema, db)

    def create_trade(
        self,
        buy_order_id: int,
        sell_order_id: int,
        trading_pair_id: int,
        price: float,
        amount: float,
        total_value: float,
        fee: float,
        commit: bool = True,
    ) -> TradeSchema:
        """
        체결 기록 추가

        하나의 트랜잭션 안에서:
        1. 체결 레코드 추가
        2. 매수/매도 주문 각각 filled += amount, 상태 재계산
        3. 각 주문 소유자의 total_trading_volume += total_value

        존재하지 않는 주문/사용자 참조는 조용히 건너뛴다.
        """
        trade = TradeModel(
            buy_order_id=buy_order_id,
            sell_order_id=sell_order_id,
            trading_pair_id=trading_pair_id,
            price=price,
            amount=amount,
            total_value=total_value,
            fee=fee,
        )
        self.db.add(trade)
        try:
            self.db.flush()

            owner_ids = []
            for order_id in (buy_order_id, sell_order_id):
                order = self.db.get(OrderModel, order_id)
                if order is None:
                    logger.debug(f"Trade {trade.id}: order {order_id} not found, skipped")
                    continue
                apply_fill_to(order, amount)
                owner_ids.append(order.user_id)

            for user_id in owner_ids:
                user = self.db.get(UserModel, user_id)
                if user is None:
                    continue
                user.total_trading_volume = user.total_trading_volume + total_value

            self.db.flush()
            self.db.refresh(trade)
            if commit:
                self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return self.schema_class.model_validate(trade)

    def get_user_trades(self, user_id: int) -> List[TradeSchema]:
        """사용자 주문이 매수/매도 어느 쪽이든 관여한 체결"""
        order_ids = [
            row.id
            for row in self.db.query(OrderModel.id)
            .filter(OrderModel.user_id == user_id)
            .all()
        ]
        if not order_ids:
            return []
        rows = (
            self.db.query(TradeModel)
            .filter(
                or_(
                    TradeModel.buy_order_id.in_(order_ids),
                    TradeModel.sell_order_id.in_(order_ids),
                )
            )
            .order_by(TradeModel.id)
            .all()
        )
        return self._to_schemas(rows)

    def get_trades_by_trading_pair(self, trading_pair_id: int) -> List[TradeSchema]:
        return self.find_all(filters={"trading_pair_id": trading_pair_id})
