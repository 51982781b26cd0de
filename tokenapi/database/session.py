from typing import AsyncIterator

from fastapi import Request
from sqlalchemy.orm import Session

from tokenapi.database.connection import Database


def get_database(request: Request) -> Database:
    return request.app.container.storage.database()


async def get_db(request: Request) -> AsyncIterator[Session]:
    """
    요청 단위 세션

    async 의존성이라 이벤트 루프 스레드에서 열고 닫힌다. 라우터 핸들러도 모두
    async 이고 저장소 호출은 동기식이므로, 하나의 저장소 연산은 다른 요청과
    섞이지 않고 끝까지 실행된다.
    """
    db = get_database(request).session_factory()
    try:
        yield db
    except Exception:
        if db.in_transaction():
            db.rollback()
        raise
    finally:
        db.close()
