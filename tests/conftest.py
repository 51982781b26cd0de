import pytest
from fastapi.testclient import TestClient

from tokenapi.config import Settings
from tokenapi.database.connection import Database
from tokenapi.database.seed import seed_default_data
from tokenapi.main import create_app


@pytest.fixture
def settings():
    return Settings(_env_file=None, LOG_LEVEL="WARNING")


@pytest.fixture
def database():
    """테스트마다 새 인메모리 저장소 (기본 거래쌍/등급 포함)"""
    database = Database("sqlite://")
    seed_default_data(database)
    yield database
    database.dispose()


@pytest.fixture
def db(database):
    with database.session() as session:
        yield session


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def register_user(client):
    """회원가입 헬퍼 - 가입된 사용자 JSON 반환. 첫 번째 사용자는 관리자(id=1)"""

    def _register(username, email=None, password="password123", **extra):
        payload = {
            "username": username,
            "email": email or f"{username}@x.com",
            "password": password,
            "confirm_password": password,
            **extra,
        }
        response = client.post("/api/auth/register", json=payload)
        assert response.status_code == 201, response.text
        return response.json()["data"]["user"]

    return _register
