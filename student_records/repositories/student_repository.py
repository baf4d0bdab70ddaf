"""학생 레포지토리 — 학생 목록/상세 및 검색.

Student Repository — paginated listing and free-text search over students.
"""

from student_records.repositories.base import AnyPattern, EntityConfig, PaginatedRepository, SortSpec

# 검색 대상 필드 — Fields matched by the free-text search box
SEARCH_FIELDS: tuple[str, ...] = ("name", "student_id")


class StudentRepository(PaginatedRepository):
    """students 엔티티 레포지토리."""

    def __init__(self) -> None:
        super().__init__(
            EntityConfig(
                entity="students",
                default_sort=SortSpec("created_at", ascending=False),
                sortable_fields=(
                    "created_at", "updated_at", "name", "student_id",
                    "class_name", "enrollment_date", "birth_date",
                ),
            )
        )

    @staticmethod
    def search_filter(term: str | None) -> AnyPattern | None:
        """이름 또는 학번 부분 일치 검색 조건 (None/빈 문자열이면 조건 없음)."""
        if not term:
            return None
        return AnyPattern(SEARCH_FIELDS, term)


# 싱글턴 인스턴스 — Singleton instance
student_repository: StudentRepository = StudentRepository()
