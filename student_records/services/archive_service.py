"""학생 기록 서비스 — 기록 CRUD 비즈니스 로직.

Archive Service — Business logic for student file entries.
The author (created_by) is always the signed-in user, never client input.
"""

from uuid import UUID

from student_records.repositories.archive_repository import archive_repository
from student_records.repositories.base import SortSpec
from student_records.repositories.student_repository import student_repository
from student_records.schemas.archive import ArchiveCreate, ArchiveResponse, ArchiveUpdate
from student_records.schemas.common import PaginatedResponse
from student_records.store.base import RecordStore, Row
from student_records.utils.pagination import PageRequest, PaginatedResult


class ArchiveService:
    """학생 기록 관련 비즈니스 로직을 처리하는 서비스."""

    def _to_response(self, row: Row) -> ArchiveResponse:
        return ArchiveResponse(
            **{
                **row,
                "id": str(row["id"]),
                "student_id": str(row["student_id"]),
                "created_by": str(row["created_by"]) if row.get("created_by") else None,
            }
        )

    async def list_archives(
        self,
        store: RecordStore,
        page: PageRequest,
        student_id: UUID | None = None,
        archive_type: str | None = None,
        sort: SortSpec | None = None,
    ) -> PaginatedResponse[ArchiveResponse]:
        """학생 기록 목록을 조회합니다 (기본: 발생일 최신순)."""
        result: PaginatedResult = await archive_repository.list(
            store,
            filters={"student_id": student_id, "type": archive_type},
            sort=sort,
            page=page,
        )
        return PaginatedResponse[ArchiveResponse](
            data=[self._to_response(r) for r in result.data],
            pagination=result.pagination,
        )

    async def get_archive(self, store: RecordStore, archive_id: UUID) -> ArchiveResponse:
        return self._to_response(await archive_repository.get(store, archive_id))

    async def create_archive(
        self,
        store: RecordStore,
        data: ArchiveCreate,
        created_by: UUID,
    ) -> ArchiveResponse:
        """학생 기록을 작성합니다.

        Args:
            store: 레코드 저장소 (Record store)
            data: 기록 생성 데이터 (Archive creation data)
            created_by: 작성자 — 현재 로그인 사용자 (Author, the signed-in user)

        Raises:
            NotFoundError: 학생을 찾을 수 없을 때 (Student not found)
        """
        await student_repository.get(store, data.student_id)
        row: Row = await archive_repository.create(store, {**data.model_dump(), "created_by": created_by})
        return self._to_response(row)

    async def update_archive(self, store: RecordStore, archive_id: UUID, data: ArchiveUpdate) -> ArchiveResponse:
        update_data: dict = data.model_dump(exclude_unset=True)
        if update_data.get("student_id") is not None:
            await student_repository.get(store, update_data["student_id"])
        row: Row = await archive_repository.update(store, archive_id, update_data)
        return self._to_response(row)

    async def delete_archive(self, store: RecordStore, archive_id: UUID) -> None:
        await archive_repository.delete(store, archive_id)


archive_service: ArchiveService = ArchiveService()
