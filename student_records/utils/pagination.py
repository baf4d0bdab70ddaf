"""페이지네이션 유틸리티 모듈.

Pagination utility module.
Provides the page request/result models and the two pieces of pagination
arithmetic shared by every list endpoint: the inclusive row range for a page
and the page count for a total.
"""

import math
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class PageRequest(BaseModel):
    """페이지 요청 모델.

    A requested page. Both numbers are 1-based and at least 1.

    Attributes:
        page: 요청 페이지 번호 (Page number, 1-indexed)
        page_size: 페이지당 항목 수 (Items per page)
    """

    page: int = Field(1, ge=1)
    page_size: int = Field(10, ge=1)

    @property
    def row_range(self) -> tuple[int, int]:
        """0부터 시작하는 포함 범위 [from, to] (Zero-based inclusive row range)."""
        return page_range(self.page, self.page_size)


class Pagination(BaseModel):
    """페이지네이션 메타데이터.

    Attributes:
        page: 현재 페이지 번호 (Current page, 1-indexed)
        page_size: 페이지당 항목 수 (Items per page)
        total: 전체 항목 수 (Total item count)
        total_pages: 전체 페이지 수 (ceil(total/page_size), 0 when total is 0)
    """

    page: int
    page_size: int
    total: int
    total_pages: int


class PaginatedResult(BaseModel, Generic[T]):
    """페이지네이션 결과 모델 — 현재 페이지 항목과 메타데이터.

    Paginated result: the rows of one page (page_size or fewer on the last
    page) plus pagination metadata.
    """

    data: list[T]
    pagination: Pagination


def page_range(page: int, page_size: int) -> tuple[int, int]:
    """페이지 번호와 크기로 포함 행 범위를 계산합니다.

    Return the zero-based inclusive row range ``(from, to)`` for a page.

    Example:
        page_range(2, 10)  # (10, 19)
    """
    start: int = (page - 1) * page_size
    return start, start + page_size - 1


def total_pages(total: int, page_size: int) -> int:
    """전체 페이지 수 — Total page count, 0 when there are no rows."""
    return math.ceil(total / page_size)


def build_result(items: list[T], total: int, request: PageRequest) -> PaginatedResult[T]:
    """항목 목록과 전체 개수로 결과 모델을 구성합니다."""
    return PaginatedResult(
        data=items,
        pagination=Pagination(
            page=request.page,
            page_size=request.page_size,
            total=total,
            total_pages=total_pages(total, request.page_size),
        ),
    )
