# Repository layer - Data access with Pydantic responses

from .base import BaseRepository
from .user_repository import UserRepository
from .trading_pair_repository import TradingPairRepository
from .order_repository import OrderRepository
from .trade_repository import TradeRepository
from .rewards_repository import RewardsRepository
from .news_repository import NewsRepository
from .subscriber_repository import SubscriberRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "TradingPairRepository",
    "OrderRepository",
    "TradeRepository",
    "RewardsRepository",
    "NewsRepository",
    "SubscriberRepository",
]
