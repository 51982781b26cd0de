from sqlalchemy import Column, DateTime
from sqlalchemy.orm import declarative_base, declared_attr

from tokenapi.utils.date_utils import utcnow

Base = declarative_base()


class TimestampMixin:
    """created_at / updated_at (naive UTC)"""

    @declared_attr
    def created_at(cls):
        return Column(DateTime, default=utcnow, nullable=False)

    @declared_attr
    def updated_at(cls):
        return Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)


class BaseModel(Base):
    """모든 테이블 모델의 베이스 - id 는 각 모델이 autoincrement 로 선언"""

    __abstract__ = True
