from typing import List, Optional

from sqlalchemy.orm import Session

from tokenapi.models.trading import TradingPair as TradingPairModel
from tokenapi.schemas.trading import TradingPair as TradingPairSchema
from tokenapi.repositories.base import BaseRepository


class TradingPairRepository(BaseRepository[TradingPairModel, TradingPairSchema]):
    """거래쌍 레퍼런스 테이블 - 심볼 유일성은 서비스에서 확인"""

    def __init__(self, db: Session):
        super().__init__(TradingPairModel, TradingPairSchema, db)

    def get_by_symbol(self, pair_symbol: str) -> Optional[TradingPairSchema]:
        return self.get_by_field("pair_symbol", pair_symbol)

    def get_all(self, active_only: bool = True) -> List[TradingPairSchema]:
        filters = {"is_active": True} if active_only else None
        return self.find_all(filters=filters)

    def create_pair(
        self,
        base_asset: str,
        quote_asset: str,
        min_trade_amount: float,
        pair_symbol: Optional[str] = None,
        max_trade_amount: Optional[float] = None,
        trading_fee: float = 0.001,
        is_active: bool = True,
        commit: bool = True,
    ) -> TradingPairSchema:
        return self.create(
            commit=commit,
            base_asset=base_asset,
            quote_asset=quote_asset,
            pair_symbol=pair_symbol or f"{base_asset}/{quote_asset}",
            min_trade_amount=min_trade_amount,
            max_trade_amount=max_trade_amount,
            trading_fee=trading_fee,
            is_active=is_active,
        )
