"""SQLAlchemy 기반 레코드 저장소 어댑터.

SQLAlchemy adapter for the record store interface.
Translates select/filter/order/range calls into async SQLAlchemy queries on
one ``AsyncSession`` and converts ORM instances into row dictionaries.

Error mapping:
    IntegrityError → ValidationError (세션 롤백 후 — after rolling back)
    기타 SQLAlchemyError → StoreError
"""

from typing import Any, Mapping, Sequence
from uuid import UUID

from sqlalchemy import ColumnElement, Select, func, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from student_records.database import Base
from student_records.models import MODEL_REGISTRY
from student_records.store.base import LIKE_ESCAPE, Join, Row
from student_records.utils.exceptions import StoreError, ValidationError


def _column(model: type[Base], field: str) -> Any:
    """모델의 컬럼 속성을 반환합니다. 없는 컬럼이면 StoreError."""
    if field not in model.__table__.columns:
        raise StoreError(f"Unknown column '{field}' on {model.__tablename__}")
    return getattr(model, field)


def _to_row(obj: Base, columns: Sequence[str] | None, joins: Sequence[Join]) -> Row:
    """ORM 인스턴스를 행 딕셔너리로 변환합니다 (Convert an ORM instance to a row)."""
    names: Sequence[str] = columns or [c.key for c in obj.__table__.columns]
    row: Row = {name: getattr(obj, name) for name in names}
    for join in joins:
        related = getattr(obj, join.name)
        row[join.name] = (
            {name: getattr(related, name) for name in join.columns} if related is not None else None
        )
    return row


class SqlAlchemyQuery:
    """SQLAlchemy 조회 빌더 — QueryBuilder 구현."""

    def __init__(
        self,
        session: AsyncSession,
        model: type[Base],
        columns: Sequence[str] | None,
        joins: Sequence[Join],
    ) -> None:
        self._session = session
        self._model = model
        self._columns = list(columns) if columns else None
        self._joins = tuple(joins)
        self._conditions: list[ColumnElement[bool]] = []
        self._ordering: list[Any] = []

        for name in self._columns or []:
            _column(model, name)
        for join in self._joins:
            if join.name not in model.__mapper__.relationships:
                raise StoreError(f"Unknown relationship '{join.name}' on {model.__tablename__}")

    def filter_equals(self, field: str, value: Any) -> "SqlAlchemyQuery":
        column = _column(self._model, field)
        self._conditions.append(column.is_(None) if value is None else column == value)
        return self

    def filter_pattern(self, field: str, pattern: str) -> "SqlAlchemyQuery":
        self._conditions.append(_column(self._model, field).ilike(pattern, escape=LIKE_ESCAPE))
        return self

    def filter_any_pattern(self, fields: Sequence[str], pattern: str) -> "SqlAlchemyQuery":
        self._conditions.append(or_(*[_column(self._model, f).ilike(pattern, escape=LIKE_ESCAPE) for f in fields]))
        return self

    def order_by(self, field: str, ascending: bool = True) -> "SqlAlchemyQuery":
        column = _column(self._model, field)
        self._ordering.append(column.asc() if ascending else column.desc())
        return self

    def _statement(self) -> Select:
        query: Select = select(self._model).where(*self._conditions).order_by(*self._ordering)
        for join in self._joins:
            query = query.options(selectinload(getattr(self._model, join.name)))
        return query

    async def _rows(self, query: Select) -> list[Row]:
        try:
            result = await self._session.execute(query)
        except SQLAlchemyError as exc:
            raise StoreError(f"Query on {self._model.__tablename__} failed: {exc}") from exc
        return [_to_row(obj, self._columns, self._joins) for obj in result.scalars().all()]

    async def range_limit(self, from_index: int, to_index: int) -> tuple[list[Row], int]:
        # 전체 카운트 쿼리 — 서브쿼리로 감싸서 COUNT 실행 (Count total via subquery)
        count_query: Select = select(func.count()).select_from(
            select(self._model).where(*self._conditions).subquery()
        )
        try:
            total: int = (await self._session.execute(count_query)).scalar() or 0
        except SQLAlchemyError as exc:
            raise StoreError(f"Count on {self._model.__tablename__} failed: {exc}") from exc

        limit: int = max(to_index - from_index + 1, 0)
        rows: list[Row] = await self._rows(self._statement().offset(from_index).limit(limit))
        return rows, total

    async def fetch_all(self) -> list[Row]:
        return await self._rows(self._statement())


class SqlAlchemyStore:
    """AsyncSession 위에서 동작하는 RecordStore 구현.

    Record store backed by one async SQLAlchemy session. Writes are flushed
    but not committed; the request handler owns the transaction.

    Attributes:
        session: 비동기 DB 세션 (Async database session)
        models: 엔티티 이름 → ORM 모델 (Entity name to ORM model)
    """

    def __init__(self, session: AsyncSession, models: Mapping[str, type[Base]] | None = None) -> None:
        self.session: AsyncSession = session
        self.models: Mapping[str, type[Base]] = models if models is not None else MODEL_REGISTRY

    def _model(self, entity: str) -> type[Base]:
        model: type[Base] | None = self.models.get(entity)
        if model is None:
            raise StoreError(f"Unknown entity '{entity}'")
        return model

    def select(
        self,
        entity: str,
        columns: Sequence[str] | None = None,
        joins: Sequence[Join] = (),
    ) -> SqlAlchemyQuery:
        return SqlAlchemyQuery(self.session, self._model(entity), columns, joins)

    async def _flush(self, entity: str) -> None:
        try:
            await self.session.flush()
        except IntegrityError as exc:
            await self.session.rollback()
            raise ValidationError(f"Rejected by {entity} constraints: {exc.orig}") from exc
        except SQLAlchemyError as exc:
            await self.session.rollback()
            raise StoreError(f"Write to {entity} failed: {exc}") from exc

    async def _get(self, model: type[Base], record_id: UUID) -> Base | None:
        try:
            return await self.session.get(model, record_id)
        except SQLAlchemyError as exc:
            raise StoreError(f"Lookup on {model.__tablename__} failed: {exc}") from exc

    async def insert(self, entity: str, record: Row) -> Row:
        model: type[Base] = self._model(entity)
        unknown: set[str] = set(record) - set(model.__table__.columns.keys())
        if unknown:
            raise ValidationError(f"Unknown fields for {entity}: {', '.join(sorted(unknown))}")

        db_obj: Base = model(**record)
        self.session.add(db_obj)
        await self._flush(entity)
        await self.session.refresh(db_obj)
        return _to_row(db_obj, None, ())

    async def update(self, entity: str, record_id: UUID, partial: Row) -> Row | None:
        model: type[Base] = self._model(entity)
        db_obj: Base | None = await self._get(model, record_id)
        if db_obj is None:
            return None

        for field, value in partial.items():
            _column(model, field)
            setattr(db_obj, field, value)

        await self._flush(entity)
        await self.session.refresh(db_obj)
        return _to_row(db_obj, None, ())

    async def delete(self, entity: str, record_id: UUID) -> bool:
        model: type[Base] = self._model(entity)
        db_obj: Base | None = await self._get(model, record_id)
        if db_obj is None:
            return False

        await self.session.delete(db_obj)
        await self._flush(entity)
        return True
