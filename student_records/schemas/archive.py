"""학생 기록 관련 Pydantic 요청/응답 스키마 정의.

Archive request/response schema definitions.
"""

import datetime as dt
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field

from student_records.schemas.student import StudentSummary

ArchiveType = Literal["reward", "punishment", "activity", "note"]


class ArchiveCreate(BaseModel):
    """학생 기록 등록 요청 스키마. created_by 는 로그인 사용자로 서버에서 설정."""

    student_id: UUID
    title: str = Field(..., min_length=1, max_length=200)
    content: str
    type: ArchiveType
    date: dt.date


class ArchiveUpdate(BaseModel):
    """학생 기록 수정 요청 스키마 (부분 업데이트)."""

    student_id: UUID | None = None
    title: str | None = Field(None, min_length=1, max_length=200)
    content: str | None = None
    type: ArchiveType | None = None
    date: dt.date | None = None


class ArchiveResponse(BaseModel):
    """학생 기록 응답 스키마."""

    id: str
    student_id: str
    title: str
    content: str
    type: str
    date: dt.date
    created_by: str | None
    created_at: dt.datetime
    updated_at: dt.datetime
    student: StudentSummary | None = None
