"""학생 기록 라우터 — 기록 CRUD API.

Archive Router — API endpoints for student file entries.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from student_records.api.deps import CurrentUser, Page, Sort, Store, require_admin, require_editor
from student_records.database import get_db
from student_records.schemas.archive import ArchiveCreate, ArchiveResponse, ArchiveUpdate
from student_records.schemas.common import PaginatedResponse
from student_records.services.archive_service import archive_service
from student_records.store.base import Row

router: APIRouter = APIRouter()


@router.get("", response_model=PaginatedResponse[ArchiveResponse])
async def list_archives(
    store: Store,
    current_user: CurrentUser,
    page: Page,
    sort: Sort,
    student_id: UUID | None = None,
    archive_type: Annotated[str | None, Query(alias="type")] = None,
) -> PaginatedResponse[ArchiveResponse]:
    """학생 기록 목록 조회 — 학생/유형 필터."""
    return await archive_service.list_archives(
        store, page, student_id=student_id, archive_type=archive_type, sort=sort
    )


@router.get("/{archive_id}", response_model=ArchiveResponse)
async def get_archive(archive_id: UUID, store: Store, current_user: CurrentUser) -> ArchiveResponse:
    return await archive_service.get_archive(store, archive_id)


@router.post("", response_model=ArchiveResponse, status_code=201)
async def create_archive(
    data: ArchiveCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    store: Store,
    current_user: Annotated[Row, Depends(require_editor)],
) -> ArchiveResponse:
    """학생 기록 작성 — 작성자는 현재 사용자 (Author is the signed-in user)."""
    result: ArchiveResponse = await archive_service.create_archive(store, data, created_by=current_user["id"])
    await db.commit()
    return result


@router.put("/{archive_id}", response_model=ArchiveResponse)
async def update_archive(
    archive_id: UUID,
    data: ArchiveUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    store: Store,
    current_user: Annotated[Row, Depends(require_editor)],
) -> ArchiveResponse:
    result: ArchiveResponse = await archive_service.update_archive(store, archive_id, data)
    await db.commit()
    return result


@router.delete("/{archive_id}", status_code=204)
async def delete_archive(
    archive_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    store: Store,
    current_user: Annotated[Row, Depends(require_admin)],
) -> None:
    await archive_service.delete_archive(store, archive_id)
    await db.commit()
