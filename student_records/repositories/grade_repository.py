"""성적 레포지토리 — 성적 조회 및 과목별 평균 통계.

Grade Repository — paginated grades with the owning student joined in,
and per-subject score averages for one student.
"""

from uuid import UUID

from student_records.repositories.base import AggregateStat, EntityConfig, PaginatedRepository, SortSpec
from student_records.store.base import Join, RecordStore

# 성적 행에 포함할 학생 정보 — Student fields nested into each grade row
STUDENT_JOIN: Join = Join("student", ("name", "student_id"))


class GradeRepository(PaginatedRepository):
    """grades 엔티티 레포지토리."""

    def __init__(self) -> None:
        super().__init__(
            EntityConfig(
                entity="grades",
                default_sort=SortSpec("exam_date", ascending=False),
                sortable_fields=("exam_date", "score", "subject", "semester", "created_at"),
                joins=(STUDENT_JOIN,),
            )
        )

    async def subject_stats(self, store: RecordStore, student_id: UUID) -> list[AggregateStat]:
        """학생의 과목별 평균 점수와 응시 횟수를 계산합니다.

        Average score and grade count per subject for one student,
        in order of each subject's first appearance.

        Args:
            store: 레코드 저장소 (Record store)
            student_id: 학생 UUID (students.id)

        Returns:
            list[AggregateStat]: 과목별 통계, 성적이 없으면 빈 목록
                                 (Per-subject stats; empty when the student has no grades)
        """
        return await self.aggregate(store, "subject", "score", {"student_id": student_id})


# 싱글턴 인스턴스 — Singleton instance
grade_repository: GradeRepository = GradeRepository()
