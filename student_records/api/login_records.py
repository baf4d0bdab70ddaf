"""로그인 기록 라우터 — 관리자 전용 로그인 이력 조회.

Login Record Router — admin-only access to the sign-in history.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends

from student_records.api.deps import Page, Sort, Store, require_admin
from student_records.schemas.common import PaginatedResponse
from student_records.schemas.login_record import LoginRecordResponse
from student_records.services.login_record_service import login_record_service
from student_records.store.base import Row

router: APIRouter = APIRouter()


@router.get("", response_model=PaginatedResponse[LoginRecordResponse])
async def list_login_records(
    store: Store,
    current_user: Annotated[Row, Depends(require_admin)],
    page: Page,
    sort: Sort,
    user_id: UUID | None = None,
    status: str | None = None,
) -> PaginatedResponse[LoginRecordResponse]:
    """로그인 기록 조회 (기본: 최신순)."""
    return await login_record_service.list_login_records(store, page, user_id=user_id, status=status, sort=sort)
