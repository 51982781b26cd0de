import logging
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI
from mangum import Mangum
from dependency_injector import providers
from starlette.middleware.cors import CORSMiddleware

from tokenapi import containers
from tokenapi.config import Settings
from tokenapi.core.exception_handlers import register_exception_handlers
from tokenapi.core.logging_middleware import LoggingMiddleware
from tokenapi.database.seed import seed_default_data
from tokenapi.logging_config import setup_logging
from tokenapi.routers import (
    admin_router,
    auth_router,
    health_router,
    news_router,
    newsletter_router,
    reward_router,
    trading_router,
)

load_dotenv("tokenapi/.env")
logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    애플리케이션 생성

    컨테이너(설정, 인메모리 저장소, 서비스)는 앱마다 새로 만들어진다.
    테스트는 앱을 새로 만들어 빈 저장소에서 시작한다.
    """
    container = containers.Container()
    if settings is not None:
        container.config.config.override(providers.Object(settings))
    settings = container.config.config()

    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(title=settings.PROJECT_NAME, debug=settings.DEBUG)
    app.container = container  # type: ignore

    database = container.storage.database()
    if settings.SEED_DEFAULT_DATA:
        seed_default_data(database)

    app.add_middleware(LoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    for module in (
        auth_router,
        trading_router,
        reward_router,
        news_router,
        newsletter_router,
        admin_router,
        health_router,
    ):
        app.include_router(module.router, prefix=settings.API_PREFIX)

    @app.get("/")
    def hello() -> dict:
        return {"message": f"{settings.APP_NAME} is running"}

    logger.info(
        f"{settings.APP_NAME} started (environment={settings.ENVIRONMENT}, "
        f"database={settings.DATABASE_URL})"
    )
    return app


app = create_app()

handler = Mangum(app)
