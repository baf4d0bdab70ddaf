"""레코드 저장소 패키지 — 원격 데이터 저장소 접근 계층.

Record store package — the only layer that talks to the database.
"""

from student_records.store.base import Join, QueryBuilder, RecordStore, Row
from student_records.store.sqlalchemy_store import SqlAlchemyStore

__all__ = ["Join", "QueryBuilder", "RecordStore", "Row", "SqlAlchemyStore"]
