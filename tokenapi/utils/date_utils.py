from datetime import datetime, timedelta, timezone
from typing import Optional


def utcnow() -> datetime:
    """
    현재 UTC 시각을 naive datetime으로 반환

    SQLite DateTime 컬럼은 타임존 정보를 보존하지 않으므로 저장/비교 모두
    naive UTC 로 통일합니다.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def expires_at(minutes: int, now: Optional[datetime] = None) -> datetime:
    """지금부터 minutes 분 뒤의 만료 시각"""
    return (now or utcnow()) + timedelta(minutes=minutes)


def is_expired(expiry: Optional[datetime], now: Optional[datetime] = None) -> bool:
    """만료 시각이 없거나 이미 지났으면 True"""
    if expiry is None:
        return True
    return expiry <= (now or utcnow())
