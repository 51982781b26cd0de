from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file="tokenapi/.env",
        env_file_encoding="utf-8",
        extra="allow",
    )
    # Application
    APP_NAME: str = "T&E Token API"
    PROJECT_NAME: str = "T&E Token Site API"
    API_PREFIX: str = "/api"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"

    # Database (in-process only, nothing survives a restart)
    DATABASE_URL: str = "sqlite://"
    SEED_DEFAULT_DATA: bool = True

    # CORS
    ALLOWED_ORIGINS: List[str] = ["*"]

    # Mock auth
    ADMIN_USER_ID: int = 1
    RESET_TOKEN_EXPIRE_MINUTES: int = 60

    # Simulated exchange
    SYSTEM_USER_ID: int = 999  # 셀프 체결 상대 주문의 소유자
    DEFAULT_TOKEN_PRICE: float = 0.0000327
    POINTS_PER_VOLUME_UNIT: float = 100.0  # 거래대금 100당 1포인트

    # Pagination
    DEFAULT_PAGE_LIMIT: int = 10
    MAX_PAGE_LIMIT: int = 100
