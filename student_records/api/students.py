"""학생 라우터 — 학생 CRUD API.

Student Router — API endpoints for student records.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from student_records.api.deps import CurrentUser, Page, Sort, Store, require_admin, require_editor
from student_records.database import get_db
from student_records.schemas.common import PaginatedResponse
from student_records.schemas.student import StudentCreate, StudentResponse, StudentUpdate
from student_records.services.student_service import student_service
from student_records.store.base import Row

router: APIRouter = APIRouter()


@router.get("", response_model=PaginatedResponse[StudentResponse])
async def list_students(
    store: Store,
    current_user: CurrentUser,
    page: Page,
    sort: Sort,
    search: str | None = None,
    status: str | None = None,
    gender: str | None = None,
    class_name: str | None = None,
) -> PaginatedResponse[StudentResponse]:
    """학생 목록 조회 — 이름/학번 검색, 상태/성별/반 필터.

    List students. ``search`` matches name or student number; ``class_name``
    is a substring match.
    """
    return await student_service.list_students(
        store, page, search=search, status=status, gender=gender, class_name=class_name, sort=sort
    )


@router.get("/{student_id}", response_model=StudentResponse)
async def get_student(student_id: UUID, store: Store, current_user: CurrentUser) -> StudentResponse:
    """학생 상세 조회."""
    return await student_service.get_student(store, student_id)


@router.post("", response_model=StudentResponse, status_code=201)
async def create_student(
    data: StudentCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    store: Store,
    current_user: Annotated[Row, Depends(require_editor)],
) -> StudentResponse:
    """학생 등록 (관리자/교사)."""
    result: StudentResponse = await student_service.create_student(store, data)
    await db.commit()
    return result


@router.put("/{student_id}", response_model=StudentResponse)
async def update_student(
    student_id: UUID,
    data: StudentUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    store: Store,
    current_user: Annotated[Row, Depends(require_editor)],
) -> StudentResponse:
    """학생 정보 수정 (관리자/교사)."""
    result: StudentResponse = await student_service.update_student(store, student_id, data)
    await db.commit()
    return result


@router.delete("/{student_id}", status_code=204)
async def delete_student(
    student_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    store: Store,
    current_user: Annotated[Row, Depends(require_admin)],
) -> None:
    """학생 삭제 (관리자 전용 — admin only)."""
    await student_service.delete_student(store, student_id)
    await db.commit()
