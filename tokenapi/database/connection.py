import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from tokenapi.models import Base

logger = logging.getLogger(__name__)


class Database:
    """
    프로세스 메모리 안에만 존재하는 엔티티 저장소

    애플리케이션(또는 테스트) 시작 시 한 번 생성되어 컨테이너를 통해 주입된다.
    `sqlite://` 는 커넥션이 살아있는 동안만 데이터가 유지되므로 StaticPool 로
    단일 커넥션을 공유하고, 재시작하면 모든 상태가 사라진다.
    """

    def __init__(self, url: str = "sqlite://", echo: bool = False):
        is_sqlite = url.startswith("sqlite")
        connect_args = {"check_same_thread": False} if is_sqlite else {}
        pool_kwargs = {"poolclass": StaticPool} if is_sqlite else {}
        self.url = url
        self.engine = create_engine(
            url, connect_args=connect_args, echo=echo, **pool_kwargs
        )
        # Use expire_on_commit=False to avoid DetachedInstanceError when accessing
        # attributes after commit within the same request scope.
        self.session_factory = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine,
            expire_on_commit=False,
        )
        Base.metadata.create_all(bind=self.engine)
        logger.info(f"In-memory database ready: {url}")

    @contextmanager
    def session(self) -> Iterator[Session]:
        """컨텍스트 매니저를 사용한 세션 관리 - 예외 시 롤백"""
        db = self.session_factory()
        try:
            yield db
        except Exception:
            if db.in_transaction():
                db.rollback()
            raise
        finally:
            db.close()

    def dispose(self) -> None:
        self.engine.dispose()
