"""로그인 기록 레포지토리 — 추가 전용.

Login Record Repository — append-only sign-in history.
Records are never updated or deleted once written.
"""

from datetime import datetime, timezone
from typing import Literal
from uuid import UUID

from student_records.repositories.base import EntityConfig, PaginatedRepository, SortSpec
from student_records.store.base import RecordStore, Row


class LoginRecordRepository(PaginatedRepository):
    """login_records 엔티티 레포지토리."""

    def __init__(self) -> None:
        super().__init__(
            EntityConfig(
                entity="login_records",
                default_sort=SortSpec("login_time", ascending=False),
                sortable_fields=("login_time", "status"),
                touch_updated_at=False,
                append_only=True,
            )
        )

    async def record_login(
        self,
        store: RecordStore,
        user_id: UUID,
        ip_address: str,
        user_agent: str,
        status: Literal["success", "failed"],
    ) -> Row:
        """로그인 시도를 기록합니다. login_time 은 현재 UTC 시각.

        Append one sign-in attempt stamped with the current UTC time.

        Args:
            store: 레코드 저장소 (Record store)
            user_id: 로그인을 시도한 사용자 (User who attempted to sign in)
            ip_address: 클라이언트 IP (Client IP address)
            user_agent: 클라이언트 User-Agent
            status: 결과 — "success" | "failed"

        Returns:
            Row: 저장된 로그인 기록 (Stored login record)
        """
        return await self.create(
            store,
            {
                "user_id": user_id,
                "ip_address": ip_address,
                "user_agent": user_agent,
                "login_time": datetime.now(timezone.utc),
                "status": status,
            },
        )


login_record_repository: LoginRecordRepository = LoginRecordRepository()
