"""성적 관련 Pydantic 요청/응답 스키마 정의.

Grade request/response schema definitions, including per-subject statistics.
"""

from datetime import date, datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field

from student_records.schemas.student import StudentSummary

ExamType = Literal["midterm", "final", "quiz", "homework"]


class GradeCreate(BaseModel):
    """성적 등록 요청 스키마.

    Attributes:
        student_id: 학생 UUID — students.id (Owning student)
        subject: 과목명 (Subject)
        score: 점수, 0 이상 (Score, non-negative)
        exam_type: 시험 유형 (midterm | final | quiz | homework)
        exam_date: 시험일 (Exam date)
        semester: 학기 (Semester label)
    """

    student_id: UUID
    subject: str = Field(..., min_length=1, max_length=100)
    score: float = Field(..., ge=0)
    exam_type: ExamType
    exam_date: date
    semester: str = Field(..., min_length=1, max_length=20)


class GradeUpdate(BaseModel):
    """성적 수정 요청 스키마 (부분 업데이트)."""

    student_id: UUID | None = None
    subject: str | None = Field(None, min_length=1, max_length=100)
    score: float | None = Field(None, ge=0)
    exam_type: ExamType | None = None
    exam_date: date | None = None
    semester: str | None = Field(None, min_length=1, max_length=20)


class GradeResponse(BaseModel):
    """성적 응답 스키마 — 목록/상세 조회 시 학생 요약 포함.

    Grade response. ``student`` is present on list/detail reads and null on
    create/update responses.
    """

    id: str
    student_id: str
    subject: str
    score: float
    exam_type: str
    exam_date: date
    semester: str
    created_at: datetime
    updated_at: datetime
    student: StudentSummary | None = None


class SubjectStatResponse(BaseModel):
    """과목별 통계 응답 스키마.

    Attributes:
        subject: 과목명 (Subject)
        average: 평균 점수, 소수 둘째 자리 (Average score, 2 decimals)
        count: 성적 개수 (Number of grades)
    """

    subject: str
    average: float
    count: int
