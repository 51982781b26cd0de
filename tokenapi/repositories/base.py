from abc import ABC
from typing import TypeVar, Generic, Optional, List, Dict, Any, Iterable, Type
from sqlalchemy.orm import Query, Session
from pydantic import BaseModel

T = TypeVar("T")
SchemaType = TypeVar("SchemaType", bound=BaseModel)


class BaseRepository(Generic[T, SchemaType], ABC):
    """
    엔티티 타입별 저장소의 베이스 클래스 - Pydantic 레코드 반환

    1. 없는 id 조회는 예외가 아니라 None 을 반환 (404 판단은 호출자 몫)
    2. 모든 쓰기는 commit 인자를 받아 여러 단계를 한 트랜잭션으로 묶을 수 있음
    3. 하드 삭제는 제공하지 않음
    """

    def __init__(
        self, model_class: Type[T], schema_class: Type[SchemaType], db: Session
    ):
        self.model_class = model_class
        self.schema_class = schema_class
        self.db = db

    # 내부 헬퍼

    def _to_schema(self, model_instance: Any) -> Optional[SchemaType]:
        if model_instance is None:
            return None
        return self.schema_class.model_validate(model_instance)

    def _to_schemas(self, model_instances: Iterable[Any]) -> List[SchemaType]:
        return [self.schema_class.model_validate(m) for m in model_instances]

    def _get_model(self, instance_id: Any) -> Optional[T]:
        return self.db.get(self.model_class, instance_id)

    def _filtered(self, filters: Optional[Dict[str, Any]] = None) -> Query:
        """모델에 없는 필터 키는 무시"""
        query = self.db.query(self.model_class)
        for key, value in (filters or {}).items():
            column = getattr(self.model_class, key, None)
            if column is not None:
                query = query.filter(column == value)
        return query

    def _save(self, instance: Any, commit: bool) -> None:
        """flush 로 id/기본값을 채우고, commit=False 면 호출자 트랜잭션에 남긴다"""
        self.db.add(instance)
        try:
            self.db.flush()
            self.db.refresh(instance)
            if commit:
                self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    # 조회

    def get_by_id(self, id: Any) -> Optional[SchemaType]:
        return self._to_schema(self._get_model(id))

    def get_by_field(self, field_name: str, value: Any) -> Optional[SchemaType]:
        """값이 같은 레코드가 여럿이면 가장 먼저 생성된 것"""
        first = (
            self._filtered({field_name: value})
            .order_by(self.model_class.id)
            .first()
        )
        return self._to_schema(first)

    def find_all(
        self,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[SchemaType]:
        """필터 조건 목록 - order_by 다음 id 오름차순으로 정렬"""
        query = self._filtered(filters)
        if order_by and hasattr(self.model_class, order_by):
            query = query.order_by(getattr(self.model_class, order_by))
        query = query.order_by(self.model_class.id)

        if offset:
            query = query.offset(offset)
        if limit:
            query = query.limit(limit)
        return self._to_schemas(query.all())

    def count(self, filters: Optional[Dict[str, Any]] = None) -> int:
        return self._filtered(filters).count()

    def exists(self, filters: Dict[str, Any]) -> bool:
        return self._filtered(filters).first() is not None

    # 쓰기

    def create(self, commit: bool = True, **kwargs) -> SchemaType:
        """id 와 기본값이 채워진 레코드 반환"""
        instance = self.model_class(**kwargs)
        self._save(instance, commit)
        return self.schema_class.model_validate(instance)

    def update(
        self, instance_id: Any, commit: bool = True, **kwargs
    ) -> Optional[SchemaType]:
        """부분 업데이트 - 없는 id 면 None"""
        instance = self._get_model(instance_id)
        if instance is None:
            return None

        for key, value in kwargs.items():
            if hasattr(instance, key):
                setattr(instance, key, value)

        self._save(instance, commit)
        return self._to_schema(instance)
