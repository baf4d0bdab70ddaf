"""기본 페이지네이션 레포지토리 — 모든 엔티티 레포지토리의 부모 클래스.

Base paginated repository — parent class for all entity repositories.
Implements list/get/create/update/delete/aggregate once, parameterized by an
``EntityConfig``; entity repositories only add configuration and the odd
domain query.

Usage:
    class StudentRepository(PaginatedRepository):
        def __init__(self) -> None:
            super().__init__(EntityConfig(entity="students", default_sort=SortSpec("created_at", False)))
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Literal, Mapping, Sequence
from uuid import UUID

from pydantic import BaseModel

from student_records.store.base import LIKE_ESCAPE, Join, RecordStore, Row
from student_records.utils.exceptions import NotFoundError, ValidationError
from student_records.utils.pagination import PageRequest, PaginatedResult, build_result


def escape_like(text: str) -> str:
    """``_`` 와 이스케이프 문자를 문자 그대로 처리합니다. ``%`` 는 와일드카드로 유지."""
    return text.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2).replace("_", f"{LIKE_ESCAPE}_")


@dataclass(frozen=True)
class Pattern:
    """부분 일치 필터 값 — 필드가 LIKE 패턴과 일치해야 함.

    Substring filter value. User text is always wrapped as ``%text%`` so it
    matches anywhere in the field; ``_`` in it is literal and ``%`` still
    matches any run of characters. Use ``Pattern.raw`` to pass a complete
    LIKE pattern as-is.
    """

    value: str
    wildcards: bool = False

    @classmethod
    def raw(cls, pattern: str) -> "Pattern":
        """와일드카드를 그대로 사용하는 패턴 (e.g. ``Pattern.raw("%3A%")``)."""
        return cls(pattern, wildcards=True)

    @property
    def like(self) -> str:
        return self.value if self.wildcards else f"%{escape_like(self.value)}%"


@dataclass(frozen=True)
class AnyPattern:
    """여러 필드 중 하나가 텍스트를 포함 (free-text search across fields)."""

    fields: tuple[str, ...]
    value: str

    @property
    def like(self) -> str:
        return Pattern(self.value).like


@dataclass(frozen=True)
class SortSpec:
    """정렬 기준 — 필드 하나와 방향 (One sort key and its direction)."""

    field: str
    ascending: bool = True


# 필터 — 필드명 → 동등 값 | Pattern | AnyPattern, None 값은 조건 없음
Filters = Mapping[str, Any]


@dataclass(frozen=True)
class EntityConfig:
    """엔티티별 레포지토리 설정.

    Per-entity configuration of the generic repository.

    Attributes:
        entity: 저장소 엔티티 이름 (Store entity / table name)
        default_sort: 기본 정렬 (Sort applied when the caller passes none)
        sortable_fields: 정렬 허용 필드 (Fields callers may sort on)
        joins: 조회 시 함께 가져올 참조 데이터 (Joined reference data for list/get)
        touch_updated_at: 수정 시 updated_at 갱신 여부 (Stamp updated_at on update)
        append_only: 추가 전용 여부 — update/delete 거부 (Reject update/delete)
    """

    entity: str
    default_sort: SortSpec
    sortable_fields: tuple[str, ...] = ()
    joins: tuple[Join, ...] = ()
    touch_updated_at: bool = True
    append_only: bool = False


class AggregateStat(BaseModel):
    """그룹별 평균 통계 — 구성원이 1개 이상인 그룹만 생성됨.

    Attributes:
        group_key: 그룹 키 값 (Value of the grouping field)
        average: 평균값, 소수 둘째 자리 반올림 (Mean, rounded half-up to 2 places)
        count: 그룹 구성원 수 (Members in the group, always >= 1)
    """

    group_key: Any
    average: float
    count: int


def round_average(total: float, count: int) -> float:
    """평균을 소수 둘째 자리에서 반올림합니다 (half-up, not banker's rounding)."""
    mean: Decimal = Decimal(str(total)) / Decimal(count)
    return float(mean.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


@dataclass
class CollectionState:
    """엔티티 컬렉션의 화면 표시용 상태.

    Presentation state of one entity collection: the last fetched page and
    the status of the most recent list call. ``loading`` is true strictly
    between issuing a fetch and its outcome; overlapping fetches keep it true
    until the last one settles. Mutations evict ``items``.
    """

    status: Literal["idle", "loading", "error"] = "idle"
    items: list[Row] = field(default_factory=list)
    error: str | None = None
    # 진행 중인 조회 수 — Fetches issued but not yet settled
    pending: int = 0

    @property
    def loading(self) -> bool:
        return self.pending > 0

    def invalidate(self) -> None:
        self.items = []


class PaginatedRepository:
    """제네릭 페이지네이션 CRUD 레포지토리.

    Generic paginated CRUD repository over a ``RecordStore``. The store is
    passed to every call; the repository keeps no authoritative copy of any
    record.

    Attributes:
        config: 엔티티 설정 (Entity configuration)
        state: 마지막 목록 조회 상태 (Last list fetch state)
    """

    def __init__(self, config: EntityConfig) -> None:
        self.config: EntityConfig = config
        self.state: CollectionState = CollectionState()

    @property
    def label(self) -> str:
        """오류 메시지용 단수 이름 (e.g. "students" → "Student")."""
        entity: str = self.config.entity.replace("_", " ")
        return entity[:-1].capitalize() if entity.endswith("s") else entity.capitalize()

    def _apply_filters(self, query: Any, filters: Filters | None) -> Any:
        """필터를 AND로 결합합니다. None 값은 조건 없음으로 취급."""
        for name, value in (filters or {}).items():
            if value is None:
                continue
            if isinstance(value, AnyPattern):
                query = query.filter_any_pattern(value.fields, value.like)
            elif isinstance(value, Pattern):
                query = query.filter_pattern(name, value.like)
            else:
                query = query.filter_equals(name, value)
        return query

    def _resolve_sort(self, sort: SortSpec | None) -> SortSpec:
        if sort is None:
            return self.config.default_sort
        allowed: tuple[str, ...] = self.config.sortable_fields or (self.config.default_sort.field,)
        if sort.field not in allowed:
            raise ValidationError(
                f"Cannot sort {self.config.entity} by '{sort.field}' (allowed: {', '.join(allowed)})"
            )
        return sort

    @asynccontextmanager
    async def _tracking(self) -> AsyncIterator[None]:
        """목록 조회 상태를 loading → idle/error 로 전환합니다.

        The status stays ``loading`` while another fetch on the same
        repository is still in flight.
        """
        self.state.pending += 1
        self.state.status = "loading"
        self.state.error = None
        try:
            yield
        except Exception as exc:
            self.state.status = "error"
            self.state.error = getattr(exc, "detail", None) or str(exc)
            raise
        else:
            if self.state.pending == 1:
                self.state.status = "idle"
                self.state.error = None
        finally:
            self.state.pending -= 1
            if self.state.pending == 0 and self.state.status == "loading":
                self.state.status = "idle"

    async def get(self, store: RecordStore, record_id: UUID) -> Row:
        """ID로 단일 레코드를 조회합니다 (참조 데이터 포함).

        Raises:
            NotFoundError: 일치하는 레코드가 없을 때 (Zero rows matched)
        """
        rows: list[Row] = await (
            store.select(self.config.entity, joins=self.config.joins)
            .filter_equals("id", record_id)
            .fetch_all()
        )
        if not rows:
            raise NotFoundError(f"{self.label} not found")
        return rows[0]

    async def find_one(self, store: RecordStore, filters: Filters) -> Row | None:
        """조건에 맞는 첫 레코드 또는 None (First matching record, or None)."""
        rows, _ = await self._apply_filters(store.select(self.config.entity), filters).range_limit(0, 0)
        return rows[0] if rows else None

    async def create(self, store: RecordStore, data: Mapping[str, Any]) -> Row:
        """새 레코드를 생성하고 저장된 레코드를 반환합니다 (id/타임스탬프 포함)."""
        row: Row = await store.insert(self.config.entity, dict(data))
        self.state.invalidate()
        return row

    async def update(self, store: RecordStore, record_id: UUID, data: Mapping[str, Any]) -> Row:
        """레코드 일부를 수정합니다. updated_at 은 클라이언트에서 현재 UTC로 설정.

        Raises:
            NotFoundError: 레코드가 없을 때 (Record does not exist)
            ValidationError: 추가 전용 엔티티 (Entity is append-only)
        """
        if self.config.append_only:
            raise ValidationError(f"{self.config.entity} records cannot be modified")

        update_data: dict[str, Any] = dict(data)
        if self.config.touch_updated_at:
            update_data["updated_at"] = datetime.now(timezone.utc)

        row: Row | None = await store.update(self.config.entity, record_id, update_data)
        if row is None:
            raise NotFoundError(f"{self.label} not found")
        self.state.invalidate()
        return row

    async def delete(self, store: RecordStore, record_id: UUID) -> None:
        """레코드를 삭제합니다. 이미 없는 ID는 NotFoundError.

        Raises:
            NotFoundError: 레코드가 없을 때 (Record does not exist)
            ValidationError: 추가 전용 엔티티 (Entity is append-only)
        """
        if self.config.append_only:
            raise ValidationError(f"{self.config.entity} records cannot be deleted")

        deleted: bool = await store.delete(self.config.entity, record_id)
        if not deleted:
            raise NotFoundError(f"{self.label} not found")
        self.state.invalidate()

    async def aggregate(
        self,
        store: RecordStore,
        group_field: str,
        value_field: str,
        filters: Filters | None = None,
    ) -> list[AggregateStat]:
        """필터된 전체 레코드를 그룹별로 묶어 평균과 개수를 계산합니다.

        Group every matching row by ``group_field`` and average
        ``value_field``. Groups appear in order of first occurrence; an empty
        match yields an empty list.
        """
        rows: list[Row] = await self._apply_filters(
            store.select(self.config.entity, columns=(group_field, value_field)), filters
        ).fetch_all()

        # dict는 삽입 순서를 유지 — dict preserves first-occurrence order
        groups: dict[Any, list[float]] = {}
        for row in rows:
            groups.setdefault(row[group_field], []).append(row[value_field])

        return [
            AggregateStat(group_key=key, average=round_average(sum(values), len(values)), count=len(values))
            for key, values in groups.items()
        ]

    async def list_all(
        self,
        store: RecordStore,
        filters: Filters | None = None,
        columns: Sequence[str] | None = None,
    ) -> list[Row]:
        """페이지 없이 조건에 맞는 모든 레코드 (Every matching row, unpaginated)."""
        return await self._apply_filters(store.select(self.config.entity, columns=columns), filters).fetch_all()

    # list 는 내장 list 를 가리므로 클래스 본문의 마지막에 둡니다
    # (`list` shadows the builtin for annotations below it in the class body)
    async def list(
        self,
        store: RecordStore,
        filters: Filters | None = None,
        sort: SortSpec | None = None,
        page: PageRequest | None = None,
    ) -> PaginatedResult[Row]:
        """필터/정렬/페이지 조건으로 한 페이지의 레코드와 전체 개수를 조회합니다.

        Fetch one page of records plus the exact count of the filtered set.

        Args:
            store: 레코드 저장소 (Record store)
            filters: 필드 조건 — AND 결합 (Field constraints, combined with AND)
            sort: 정렬 기준, None이면 기본 정렬 (Sort key; None uses the default)
            page: 페이지 요청, None이면 첫 페이지 (Page request; None is page 1)

        Returns:
            PaginatedResult[Row]: 페이지 항목과 메타데이터 (Rows and pagination)

        Raises:
            ValidationError: 허용되지 않은 정렬 필드 (Sort field not allowed)
            StoreError: 저장소 호출 실패 (Store call failed)
        """
        page = page or PageRequest()
        async with self._tracking():
            order: SortSpec = self._resolve_sort(sort)
            query = self._apply_filters(
                store.select(self.config.entity, joins=self.config.joins), filters
            ).order_by(order.field, order.ascending)

            from_index, to_index = page.row_range
            rows, total = await query.range_limit(from_index, to_index)
            self.state.items = rows

        return build_result(rows, total, page)
