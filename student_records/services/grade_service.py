"""성적 서비스 — 성적 CRUD 및 과목별 통계.

Grade Service — Business logic for grades and per-subject statistics.
"""

from uuid import UUID

from student_records.repositories.base import AggregateStat, SortSpec
from student_records.repositories.grade_repository import grade_repository
from student_records.repositories.student_repository import student_repository
from student_records.schemas.common import PaginatedResponse
from student_records.schemas.grade import GradeCreate, GradeResponse, GradeUpdate, SubjectStatResponse
from student_records.store.base import RecordStore, Row
from student_records.utils.pagination import PageRequest, PaginatedResult


class GradeService:
    """성적 관련 비즈니스 로직을 처리하는 서비스."""

    def _to_response(self, row: Row) -> GradeResponse:
        return GradeResponse(**{**row, "id": str(row["id"]), "student_id": str(row["student_id"])})

    async def list_grades(
        self,
        store: RecordStore,
        page: PageRequest,
        student_id: UUID | None = None,
        subject: str | None = None,
        exam_type: str | None = None,
        semester: str | None = None,
        sort: SortSpec | None = None,
    ) -> PaginatedResponse[GradeResponse]:
        """성적 목록을 페이지네이션하여 조회합니다 (기본: 시험일 최신순).

        Args:
            store: 레코드 저장소 (Record store)
            page: 페이지 요청 (Page request)
            student_id: 학생 UUID 필터 (Filter by student)
            subject: 과목 필터 (Filter by subject, exact)
            exam_type: 시험 유형 필터 (Filter by exam type)
            semester: 학기 필터 (Filter by semester)
            sort: 정렬 기준 (Sort key)

        Returns:
            PaginatedResponse[GradeResponse]: 학생 요약이 포함된 성적 목록
        """
        result: PaginatedResult = await grade_repository.list(
            store,
            filters={
                "student_id": student_id,
                "subject": subject,
                "exam_type": exam_type,
                "semester": semester,
            },
            sort=sort,
            page=page,
        )
        return PaginatedResponse[GradeResponse](
            data=[self._to_response(r) for r in result.data],
            pagination=result.pagination,
        )

    async def get_grade(self, store: RecordStore, grade_id: UUID) -> GradeResponse:
        return self._to_response(await grade_repository.get(store, grade_id))

    async def create_grade(self, store: RecordStore, data: GradeCreate) -> GradeResponse:
        """성적을 등록합니다.

        Raises:
            NotFoundError: 학생을 찾을 수 없을 때 (Student not found)
        """
        await student_repository.get(store, data.student_id)
        row: Row = await grade_repository.create(store, data.model_dump())
        return self._to_response(row)

    async def update_grade(self, store: RecordStore, grade_id: UUID, data: GradeUpdate) -> GradeResponse:
        update_data: dict = data.model_dump(exclude_unset=True)
        if update_data.get("student_id") is not None:
            await student_repository.get(store, update_data["student_id"])
        row: Row = await grade_repository.update(store, grade_id, update_data)
        return self._to_response(row)

    async def delete_grade(self, store: RecordStore, grade_id: UUID) -> None:
        await grade_repository.delete(store, grade_id)

    async def subject_stats(self, store: RecordStore, student_id: UUID) -> list[SubjectStatResponse]:
        """학생의 과목별 평균 점수를 조회합니다 (성적이 없으면 빈 목록).

        Per-subject average score for one student, subjects in order of
        first appearance.
        """
        stats: list[AggregateStat] = await grade_repository.subject_stats(store, student_id)
        return [
            SubjectStatResponse(subject=s.group_key, average=s.average, count=s.count)
            for s in stats
        ]


grade_service: GradeService = GradeService()
