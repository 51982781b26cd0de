import logging

import pytest
from fastapi.testclient import TestClient

from tokenapi.logging_config import APP_LOGGER, build_logging_config


class CollectingHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


@pytest.fixture
def collected():
    """tokenapi 로거는 propagate=False 라서 caplog 대신 핸들러를 직접 붙인다"""
    handler = CollectingHandler()
    logger = logging.getLogger(APP_LOGGER)
    logger.addHandler(handler)
    yield handler.records
    logger.removeHandler(handler)


def test_unhandled_error_is_logged_once(app, collected):
    # Given: 예외를 던지는 라우트
    @app.get("/boom")
    def boom():
        raise RuntimeError("boom")

    # When
    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get("/boom")

    # Then
    assert response.status_code == 500
    assert response.json()["error"]["code"] == "INTERNAL_001"
    unhandled = [r for r in collected if "[Unhandled Error]" in r.getMessage()]
    assert len(unhandled) == 1
    assert "RuntimeError: boom" in unhandled[0].getMessage()


def test_logging_config_uses_plain_formatters():
    config = build_logging_config("info")

    assert set(config["formatters"]) == {"plain", "traceback"}
    for formatter in config["formatters"].values():
        assert "()" not in formatter
    assert config["loggers"][APP_LOGGER]["level"] == "INFO"
    assert config["loggers"][APP_LOGGER]["propagate"] is False
