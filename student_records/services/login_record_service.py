"""로그인 기록 서비스 — 로그인 이력 조회.

Login Record Service — read access to the sign-in history.
Records are written by the auth service on every sign-in attempt.
"""

from uuid import UUID

from student_records.repositories.base import SortSpec
from student_records.repositories.login_record_repository import login_record_repository
from student_records.schemas.common import PaginatedResponse
from student_records.schemas.login_record import LoginRecordResponse
from student_records.store.base import RecordStore, Row
from student_records.utils.pagination import PageRequest, PaginatedResult


class LoginRecordService:
    """로그인 기록 조회 서비스."""

    def _to_response(self, row: Row) -> LoginRecordResponse:
        return LoginRecordResponse(**{**row, "id": str(row["id"]), "user_id": str(row["user_id"])})

    async def list_login_records(
        self,
        store: RecordStore,
        page: PageRequest,
        user_id: UUID | None = None,
        status: str | None = None,
        sort: SortSpec | None = None,
    ) -> PaginatedResponse[LoginRecordResponse]:
        """로그인 기록을 최신순으로 조회합니다 (Newest first by default)."""
        result: PaginatedResult = await login_record_repository.list(
            store,
            filters={"user_id": user_id, "status": status},
            sort=sort,
            page=page,
        )
        return PaginatedResponse[LoginRecordResponse](
            data=[self._to_response(r) for r in result.data],
            pagination=result.pagination,
        )


login_record_service: LoginRecordService = LoginRecordService()
