"""테스트용 인메모리 레코드 저장소.

In-memory record store implementing the RecordStore protocol, used to test
the repository layer without a database.
"""

import asyncio
import re
import uuid
from datetime import datetime, timezone
from typing import Any, Sequence

from student_records.store.base import LIKE_ESCAPE, Join, Row

# 타임스탬프를 서버에서 채우는 엔티티 — Entities whose timestamps the store fills in
TIMESTAMPED: set[str] = {"students", "grades", "archives", "users"}

# (엔티티, 조인 이름) → (참조 엔티티, 외래 키) — How joins resolve
RELATIONS: dict[tuple[str, str], tuple[str, str]] = {
    ("grades", "student"): ("students", "student_id"),
    ("archives", "student"): ("students", "student_id"),
}


def like_to_regex(pattern: str) -> re.Pattern:
    """SQL LIKE 패턴 → 대소문자 무시 정규식 (``\\`` 이스케이프 지원)."""
    parts: list[str] = []
    escaped: bool = False
    for ch in pattern:
        if escaped:
            parts.append(re.escape(ch))
            escaped = False
        elif ch == LIKE_ESCAPE:
            escaped = True
        elif ch == "%":
            parts.append(".*")
        elif ch == "_":
            parts.append(".")
        else:
            parts.append(re.escape(ch))
    return re.compile("^" + "".join(parts) + "$", re.IGNORECASE | re.DOTALL)


class FakeQuery:
    def __init__(self, store: "InMemoryStore", entity: str, columns: Sequence[str] | None, joins: Sequence[Join]) -> None:
        self.store = store
        self.entity = entity
        self.columns = columns
        self.joins = joins
        self.predicates: list[Any] = []
        self.ordering: list[tuple[str, bool]] = []

    def filter_equals(self, field: str, value: Any) -> "FakeQuery":
        self.predicates.append(lambda row: row.get(field) == value)
        return self

    def filter_pattern(self, field: str, pattern: str) -> "FakeQuery":
        regex = like_to_regex(pattern)
        self.predicates.append(lambda row: row.get(field) is not None and bool(regex.match(str(row[field]))))
        return self

    def filter_any_pattern(self, fields: Sequence[str], pattern: str) -> "FakeQuery":
        regex = like_to_regex(pattern)
        self.predicates.append(
            lambda row: any(row.get(f) is not None and regex.match(str(row[f])) for f in fields)
        )
        return self

    def order_by(self, field: str, ascending: bool = True) -> "FakeQuery":
        self.ordering.append((field, ascending))
        return self

    def _project(self, row: Row) -> Row:
        result: Row = {k: row[k] for k in self.columns} if self.columns else dict(row)
        for join in self.joins:
            target_entity, foreign_key = RELATIONS[(self.entity, join.name)]
            target: Row | None = self.store.tables[target_entity].get(row[foreign_key])
            result[join.name] = {c: target[c] for c in join.columns} if target else None
        return result

    def _matching(self) -> list[Row]:
        self.store.calls.append(("select", self.entity))
        if self.store.fail_with is not None:
            raise self.store.fail_with
        rows: list[Row] = [r for r in self.store.tables[self.entity].values() if all(p(r) for p in self.predicates)]
        # 안정 정렬을 역순으로 적용 — Apply stable sorts from the last key to the first
        for field, ascending in reversed(self.ordering):
            rows.sort(key=lambda r: r[field], reverse=not ascending)
        return rows

    async def range_limit(self, from_index: int, to_index: int) -> tuple[list[Row], int]:
        if self.store.gates:
            await self.store.gates.pop(0).wait()
        rows: list[Row] = self._matching()
        return [self._project(r) for r in rows[from_index:to_index + 1]], len(rows)

    async def fetch_all(self) -> list[Row]:
        return [self._project(r) for r in self._matching()]


class InMemoryStore:
    """RecordStore 프로토콜의 인메모리 구현.

    Attributes:
        tables: 엔티티 → {id: row}
        calls: 호출 기록 (Call log, for assertions)
        fail_with: 설정 시 다음 조회에서 발생시킬 예외 (Exception raised by reads when set)
        gates: 페이지 조회가 차례로 기다리는 이벤트 (Events that page fetches wait on, in order)
    """

    def __init__(self) -> None:
        self.tables: dict[str, dict[uuid.UUID, Row]] = {
            name: {} for name in ("students", "grades", "archives", "users", "login_records", "refresh_tokens")
        }
        self.calls: list[tuple[str, str]] = []
        self.fail_with: Exception | None = None
        self.gates: list[asyncio.Event] = []

    def select(self, entity: str, columns: Sequence[str] | None = None, joins: Sequence[Join] = ()) -> FakeQuery:
        return FakeQuery(self, entity, columns, joins)

    async def insert(self, entity: str, record: Row) -> Row:
        self.calls.append(("insert", entity))
        row: Row = {"id": uuid.uuid4(), **record}
        if entity in TIMESTAMPED:
            now: datetime = datetime.now(timezone.utc)
            row.setdefault("created_at", now)
            row.setdefault("updated_at", now)
        self.tables[entity][row["id"]] = row
        return dict(row)

    async def update(self, entity: str, record_id: uuid.UUID, partial: Row) -> Row | None:
        self.calls.append(("update", entity))
        row: Row | None = self.tables[entity].get(record_id)
        if row is None:
            return None
        row.update(partial)
        return dict(row)

    async def delete(self, entity: str, record_id: uuid.UUID) -> bool:
        self.calls.append(("delete", entity))
        return self.tables[entity].pop(record_id, None) is not None
