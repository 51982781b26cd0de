from dependency_injector import containers, providers

from tokenapi.config import Settings
from tokenapi.database.connection import Database
from tokenapi.services.auth_service import AuthService
from tokenapi.services.user_service import UserService
from tokenapi.services.trading_service import TradingService
from tokenapi.services.market_data_service import MarketDataService
from tokenapi.services.reward_service import RewardService
from tokenapi.services.news_service import NewsService
from tokenapi.services.newsletter_service import NewsletterService


class ConfigModule(containers.DeclarativeContainer):
    """Application configuration."""

    config = providers.Singleton(Settings)


class StorageModule(containers.DeclarativeContainer):
    """In-memory entity store - one per container."""

    config = providers.DependenciesContainer()

    database = providers.Singleton(
        Database,
        url=config.config.provided.DATABASE_URL,
    )


class ServiceModule(containers.DeclarativeContainer):
    """Service layer dependencies. `db` is supplied per request."""

    config = providers.DependenciesContainer()

    auth_service = providers.Factory(AuthService, settings=config.config)
    user_service = providers.Factory(UserService, settings=config.config)
    trading_service = providers.Factory(TradingService, settings=config.config)
    market_data_service = providers.Factory(MarketDataService, settings=config.config)
    reward_service = providers.Factory(RewardService, settings=config.config)
    news_service = providers.Factory(NewsService, settings=config.config)
    newsletter_service = providers.Factory(NewsletterService, settings=config.config)


class Container(containers.DeclarativeContainer):
    """Application container."""

    config = providers.Container(ConfigModule)
    storage = providers.Container(StorageModule, config=config)
    services = providers.Container(ServiceModule, config=config)
