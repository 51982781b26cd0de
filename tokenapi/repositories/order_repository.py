from typing import List, Optional

from sqlalchemy.orm import Session

from tokenapi.models.trading import Order as OrderModel, OrderStatus, OrderType
from tokenapi.schemas.trading import Order as OrderSchema
from tokenapi.repositories.base import BaseRepository


def apply_fill_to(order: OrderModel, amount: float) -> None:
    """체결 수량 누적 후 상태 재계산 (Open -> Partial -> Filled)"""
    order.filled = (order.filled or 0.0) + amount
    if order.filled >= order.amount:
        order.status = OrderStatus.FILLED.value
    else:
        order.status = OrderStatus.PARTIAL.value


class OrderRepository(BaseRepository[OrderModel, OrderSchema]):
    def __init__(self, db: Session):
        super().__init__(OrderModel, OrderSchema, db)

    def create_order(
        self,
        user_id: int,
        trading_pair_id: int,
        type: OrderType,
        side: str,
        amount: float,
        price: Optional[float] = None,
        commit: bool = True,
    ) -> OrderSchema:
        """
        주문 생성

        filled 는 0 에서 시작한다. 시장가 주문은 즉시 셀프 체결된다고 가정하여
        Filled 로, 지정가 주문은 Open 으로 생성된다.
        """
        order_type = OrderType(type)
        status = (
            OrderStatus.FILLED if order_type is OrderType.MARKET else OrderStatus.OPEN
        )
        return self.create(
            commit=commit,
            user_id=user_id,
            trading_pair_id=trading_pair_id,
            type=order_type.value,
            side=getattr(side, "value", side),
            price=price,
            amount=amount,
            filled=0.0,
            status=status.value,
        )

    def get_user_orders(self, user_id: int) -> List[OrderSchema]:
        return self.find_all(filters={"user_id": user_id})

    def get_orders_by_trading_pair(
        self, trading_pair_id: int, status: Optional[OrderStatus] = None
    ) -> List[OrderSchema]:
        filters = {"trading_pair_id": trading_pair_id}
        if status is not None:
            filters["status"] = getattr(status, "value", status)
        return self.find_all(filters=filters)

    def get_all_orders(self, status: Optional[OrderStatus] = None) -> List[OrderSchema]:
        filters = None
        if status is not None:
            filters = {"status": getattr(status, "value", status)}
        return self.find_all(filters=filters)

    def apply_fill(
        self, order_id: int, amount: float, commit: bool = True
    ) -> Optional[OrderSchema]:
        """없는 주문이면 None (무시)"""
        instance = self._get_model(order_id)
        if instance is None:
            return None
        apply_fill_to(instance, amount)
        self._save(instance, commit)
        return self._to_schema(instance)
