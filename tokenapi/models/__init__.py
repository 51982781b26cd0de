# 모든 모델을 임포트해야 Base.metadata.create_all 에 테이블이 등록됨

from .base import Base, BaseModel
from .user import User
from .trading import Order, OrderSide, OrderStatus, OrderType, Trade, TradingPair
from .rewards import RewardsEvent, RewardsTier
from .news import NewsArticle, Subscriber

__all__ = [
    "Base",
    "BaseModel",
    "User",
    "TradingPair",
    "Order",
    "OrderType",
    "OrderSide",
    "OrderStatus",
    "Trade",
    "RewardsEvent",
    "RewardsTier",
    "NewsArticle",
    "Subscriber",
]
