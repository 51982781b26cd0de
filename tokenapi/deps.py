from fastapi import Depends, Request
from sqlalchemy.orm import Session

from tokenapi.config import Settings
from tokenapi.database.session import get_db

# Services
from tokenapi.services.auth_service import AuthService
from tokenapi.services.user_service import UserService
from tokenapi.services.trading_service import TradingService
from tokenapi.services.market_data_service import MarketDataService
from tokenapi.services.reward_service import RewardService
from tokenapi.services.news_service import NewsService
from tokenapi.services.newsletter_service import NewsletterService


def get_settings(request: Request) -> Settings:
    return request.app.container.config.config()


def get_auth_service(request: Request, db: Session = Depends(get_db)) -> AuthService:
    return request.app.container.services.auth_service(db=db)


def get_user_service(request: Request, db: Session = Depends(get_db)) -> UserService:
    return request.app.container.services.user_service(db=db)


def get_trading_service(
    request: Request, db: Session = Depends(get_db)
) -> TradingService:
    return request.app.container.services.trading_service(db=db)


def get_market_data_service(
    request: Request, db: Session = Depends(get_db)
) -> MarketDataService:
    return request.app.container.services.market_data_service(db=db)


def get_reward_service(request: Request, db: Session = Depends(get_db)) -> RewardService:
    return request.app.container.services.reward_service(db=db)


def get_news_service(request: Request, db: Session = Depends(get_db)) -> NewsService:
    return request.app.container.services.news_service(db=db)


def get_newsletter_service(
    request: Request, db: Session = Depends(get_db)
) -> NewsletterService:
    return request.app.container.services.newsletter_service(db=db)
