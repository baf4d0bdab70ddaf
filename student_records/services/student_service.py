"""학생 서비스 — 학생 CRUD 비즈니스 로직.

Student Service — Business logic for student CRUD operations.
"""

from uuid import UUID

from student_records.repositories.base import Pattern, SortSpec
from student_records.repositories.student_repository import student_repository
from student_records.schemas.common import PaginatedResponse
from student_records.schemas.student import StudentCreate, StudentResponse, StudentUpdate
from student_records.store.base import RecordStore, Row
from student_records.utils.exceptions import DuplicateError
from student_records.utils.pagination import PageRequest, PaginatedResult


class StudentService:
    """학생 관련 비즈니스 로직을 처리하는 서비스."""

    def _to_response(self, row: Row) -> StudentResponse:
        return StudentResponse(**{**row, "id": str(row["id"])})

    async def _ensure_unique_number(self, store: RecordStore, student_number: str) -> None:
        """학번 중복 확인 — Reject a student number that is already taken."""
        existing: Row | None = await student_repository.find_one(store, {"student_id": student_number})
        if existing is not None:
            raise DuplicateError("A student with this student number already exists")

    async def list_students(
        self,
        store: RecordStore,
        page: PageRequest,
        search: str | None = None,
        status: str | None = None,
        gender: str | None = None,
        class_name: str | None = None,
        sort: SortSpec | None = None,
    ) -> PaginatedResponse[StudentResponse]:
        """학생 목록을 페이지네이션하여 조회합니다.

        List students. ``search`` matches name or student number, ``class_name``
        is a substring match, every other filter is exact; all are combined
        with AND.

        Args:
            store: 레코드 저장소 (Record store)
            page: 페이지 요청 (Page request)
            search: 이름/학번 검색어 (Name or student number search term)
            status: 학적 상태 (Enrolment status)
            gender: 성별 (Gender)
            class_name: 반 이름 부분 일치 (Class name substring)
            sort: 정렬 기준 (Sort key, default newest first)

        Returns:
            PaginatedResponse[StudentResponse]: 학생 목록과 페이지 정보
        """
        result: PaginatedResult = await student_repository.list(
            store,
            filters={
                "search": student_repository.search_filter(search),
                "status": status,
                "gender": gender,
                "class_name": Pattern(class_name) if class_name else None,
            },
            sort=sort,
            page=page,
        )
        return PaginatedResponse[StudentResponse](
            data=[self._to_response(r) for r in result.data],
            pagination=result.pagination,
        )

    async def get_student(self, store: RecordStore, student_id: UUID) -> StudentResponse:
        """학생 상세 조회 — 없으면 NotFoundError."""
        return self._to_response(await student_repository.get(store, student_id))

    async def create_student(self, store: RecordStore, data: StudentCreate) -> StudentResponse:
        """새 학생을 등록합니다.

        Raises:
            DuplicateError: 학번이 이미 존재할 때 (Student number already taken)
        """
        await self._ensure_unique_number(store, data.student_id)
        row: Row = await student_repository.create(store, data.model_dump())
        return self._to_response(row)

    async def update_student(self, store: RecordStore, student_id: UUID, data: StudentUpdate) -> StudentResponse:
        """학생 정보를 수정합니다 (전달된 필드만 변경).

        Raises:
            NotFoundError: 학생을 찾을 수 없을 때 (Student not found)
            DuplicateError: 다른 학생이 이미 사용하는 학번일 때
        """
        update_data: dict = data.model_dump(exclude_unset=True)
        # null 학번은 NOT NULL 제약에서 ValidationError — A null number is rejected by the store
        if update_data.get("student_id") is not None:
            current: Row = await student_repository.get(store, student_id)
            if current["student_id"] != update_data["student_id"]:
                await self._ensure_unique_number(store, update_data["student_id"])

        row: Row = await student_repository.update(store, student_id, update_data)
        return self._to_response(row)

    async def delete_student(self, store: RecordStore, student_id: UUID) -> None:
        """학생을 삭제합니다. 성적과 기록도 함께 삭제됩니다 (grades/archives cascade)."""
        await student_repository.delete(store, student_id)


# 싱글턴 인스턴스 — Singleton instance
student_service: StudentService = StudentService()
