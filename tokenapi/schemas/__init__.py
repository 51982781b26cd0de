from .auth import BaseResponse, Error, ErrorCode
from .user import User, UserPublic
from .trading import Order, Trade, TradingPair
from .rewards import RewardsEvent, RewardsTier
from .news import NewsArticle, Subscriber
