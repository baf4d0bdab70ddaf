"""공통 Pydantic 응답 스키마 정의.

Common response schema definitions shared by every router.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel

from student_records.utils.pagination import Pagination

T = TypeVar("T")


class PaginatedResponse(BaseModel, Generic[T]):
    """페이지네이션 응답 스키마.

    Paginated response wrapper: ``{data, pagination}``.

    Attributes:
        data: 현재 페이지 항목 (Items of the current page)
        pagination: 페이지 메타데이터 (page, page_size, total, total_pages)
    """

    data: list[T]
    pagination: Pagination


class MessageResponse(BaseModel):
    """범용 메시지 응답 스키마 (Simple confirmation message)."""

    message: str
