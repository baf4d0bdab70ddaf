"""레코드 저장소 인터페이스 정의.

Record store interface.
Repositories talk to the backing store only through these protocols, so any
implementation that provides them (the SQLAlchemy adapter in production, an
in-memory fake in tests) is substitutable.

Rows are plain dictionaries keyed by column name. Joined reference data is
nested one level deep under the join's name.
"""

from dataclasses import dataclass
from typing import Any, Protocol, Sequence
from uuid import UUID

# 저장소가 반환하는 레코드 — A record as returned by the store
Row = dict[str, Any]

# LIKE 패턴 이스케이프 문자 — Escape character for literal % and _ in patterns
LIKE_ESCAPE = "\\"


@dataclass(frozen=True)
class Join:
    """한 단계 조인 — 참조 엔티티의 일부 컬럼을 중첩해서 가져옵니다.

    One level of joined reference data.

    Attributes:
        name: 관계 이름, 결과 행의 키 (Relationship name, also the key in the row)
        columns: 가져올 참조 엔티티 컬럼 (Columns of the referenced record)
    """

    name: str
    columns: tuple[str, ...]


class QueryBuilder(Protocol):
    """조회 빌더 — 모든 조건은 AND로 결합됩니다.

    Query builder. Every filter narrows the result (AND semantics).
    """

    def filter_equals(self, field: str, value: Any) -> "QueryBuilder":
        """``field == value``; ``None`` matches NULL."""
        ...

    def filter_pattern(self, field: str, pattern: str) -> "QueryBuilder":
        """대소문자 무시 LIKE 패턴 (``%`` / ``_`` wildcards, ``\\`` escapes one literally)."""
        ...

    def filter_any_pattern(self, fields: Sequence[str], pattern: str) -> "QueryBuilder":
        """여러 필드 중 하나라도 패턴과 일치 (OR within this one constraint)."""
        ...

    def order_by(self, field: str, ascending: bool = True) -> "QueryBuilder":
        ...

    async def range_limit(self, from_index: int, to_index: int) -> tuple[list[Row], int]:
        """포함 범위 [from_index, to_index]의 행과 필터 전체 개수를 반환합니다.

        Return the rows in the zero-based inclusive range together with the
        exact count of every row matching the filters.
        """
        ...

    async def fetch_all(self) -> list[Row]:
        ...


class RecordStore(Protocol):
    """레코드 저장소 — select/insert/update/delete."""

    def select(
        self,
        entity: str,
        columns: Sequence[str] | None = None,
        joins: Sequence[Join] = (),
    ) -> QueryBuilder:
        ...

    async def insert(self, entity: str, record: Row) -> Row:
        """레코드를 추가하고 서버가 생성한 필드를 포함한 저장 결과를 반환합니다."""
        ...

    async def update(self, entity: str, record_id: UUID, partial: Row) -> Row | None:
        """일부 필드를 변경합니다. 대상이 없으면 None."""
        ...

    async def delete(self, entity: str, record_id: UUID) -> bool:
        """레코드를 삭제합니다. 대상이 없으면 False."""
        ...
