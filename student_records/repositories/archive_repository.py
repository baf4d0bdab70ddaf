"""학생 기록 레포지토리.

Archive Repository — student file entries with the owning student joined in.
"""

from student_records.repositories.base import EntityConfig, PaginatedRepository, SortSpec
from student_records.repositories.grade_repository import STUDENT_JOIN


class ArchiveRepository(PaginatedRepository):
    """archives 엔티티 레포지토리."""

    def __init__(self) -> None:
        super().__init__(
            EntityConfig(
                entity="archives",
                default_sort=SortSpec("date", ascending=False),
                sortable_fields=("date", "created_at", "title", "type"),
                joins=(STUDENT_JOIN,),
            )
        )


archive_repository: ArchiveRepository = ArchiveRepository()
