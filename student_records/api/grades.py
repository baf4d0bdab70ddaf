"""성적 라우터 — 성적 CRUD 및 과목별 통계 API.

Grade Router — API endpoints for grades and per-subject statistics.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from student_records.api.deps import CurrentUser, Page, Sort, Store, require_admin, require_editor
from student_records.database import get_db
from student_records.schemas.common import PaginatedResponse
from student_records.schemas.grade import GradeCreate, GradeResponse, GradeUpdate, SubjectStatResponse
from student_records.services.grade_service import grade_service
from student_records.store.base import Row

router: APIRouter = APIRouter()


@router.get("", response_model=PaginatedResponse[GradeResponse])
async def list_grades(
    store: Store,
    current_user: CurrentUser,
    page: Page,
    sort: Sort,
    student_id: UUID | None = None,
    subject: str | None = None,
    exam_type: str | None = None,
    semester: str | None = None,
) -> PaginatedResponse[GradeResponse]:
    """성적 목록 조회 (기본: 시험일 최신순 — newest exam first)."""
    return await grade_service.list_grades(
        store, page, student_id=student_id, subject=subject, exam_type=exam_type, semester=semester, sort=sort
    )


@router.get("/stats/{student_id}", response_model=list[SubjectStatResponse])
async def get_subject_stats(student_id: UUID, store: Store, current_user: CurrentUser) -> list[SubjectStatResponse]:
    """학생의 과목별 평균 점수 조회.

    Per-subject average score and grade count for one student.
    """
    return await grade_service.subject_stats(store, student_id)


@router.get("/{grade_id}", response_model=GradeResponse)
async def get_grade(grade_id: UUID, store: Store, current_user: CurrentUser) -> GradeResponse:
    return await grade_service.get_grade(store, grade_id)


@router.post("", response_model=GradeResponse, status_code=201)
async def create_grade(
    data: GradeCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    store: Store,
    current_user: Annotated[Row, Depends(require_editor)],
) -> GradeResponse:
    """성적 등록 (관리자/교사)."""
    result: GradeResponse = await grade_service.create_grade(store, data)
    await db.commit()
    return result


@router.put("/{grade_id}", response_model=GradeResponse)
async def update_grade(
    grade_id: UUID,
    data: GradeUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    store: Store,
    current_user: Annotated[Row, Depends(require_editor)],
) -> GradeResponse:
    result: GradeResponse = await grade_service.update_grade(store, grade_id, data)
    await db.commit()
    return result


@router.delete("/{grade_id}", status_code=204)
async def delete_grade(
    grade_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    store: Store,
    current_user: Annotated[Row, Depends(require_admin)],
) -> None:
    await grade_service.delete_grade(store, grade_id)
    await db.commit()
