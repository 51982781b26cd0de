import logging
import logging.config
import sys
from typing import Any, Dict

APP_LOGGER = "tokenapi"

# 로그를 너무 많이 남기는 라이브러리 로거
QUIET_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "httpx")


def build_logging_config(log_level: str) -> Dict[str, Any]:
    level = log_level.upper()

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "plain": {
                "format": "%(asctime)s | %(levelname)-8s | %(name)-28s | %(message)s",
            },
            "traceback": {
                "format": "%(asctime)s | %(levelname)-8s | %(pathname)s:%(lineno)d\n%(message)s",
            },
        },
        "handlers": {
            "stdout": {
                "class": "logging.StreamHandler",
                "stream": sys.stdout,
                "formatter": "plain",
            },
            "stderr": {
                "class": "logging.StreamHandler",
                "stream": sys.stderr,
                "formatter": "traceback",
                "level": "ERROR",
            },
        },
        "root": {"handlers": ["stdout"], "level": level},
        "loggers": {
            APP_LOGGER: {
                "handlers": ["stdout", "stderr"],
                "level": level,
                "propagate": False,
            },
            "uvicorn.access": {
                "handlers": ["stdout"],
                "level": level,
                "propagate": False,
            },
            **{name: {"level": "WARNING"} for name in QUIET_LOGGERS},
        },
    }


def setup_logging(log_level: str = "INFO") -> None:
    """앱 생성 시 한 번 호출 - 다시 호출하면 설정을 덮어쓴다"""
    logging.config.dictConfig(build_logging_config(log_level))
    logging.getLogger(APP_LOGGER).debug(f"Logging configured (level={log_level})")
