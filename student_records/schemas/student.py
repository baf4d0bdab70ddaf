"""학생 관련 Pydantic 요청/응답 스키마 정의.

Student request/response schema definitions.
"""

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, Field

Gender = Literal["male", "female"]
StudentStatus = Literal["active", "graduated", "suspended", "transferred"]


class StudentCreate(BaseModel):
    """학생 등록 요청 스키마.

    Student creation request schema.

    Attributes:
        student_id: 학번 (School-issued student number)
        name: 이름 (Full name)
        gender: 성별 (male | female)
        birth_date: 생년월일 (Date of birth)
        class_name: 반 이름 (Class name)
        enrollment_date: 입학일 (Enrolment date)
        status: 학적 상태 (Enrolment status, default "active")
    """

    student_id: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=100)
    gender: Gender
    birth_date: date
    phone: str | None = None  # 연락처 (Phone number, optional)
    email: str | None = None  # 이메일 (Email address, optional)
    address: str | None = None  # 주소 (Home address, optional)
    class_name: str = Field(..., min_length=1, max_length=100)
    enrollment_date: date
    status: StudentStatus = "active"


class StudentUpdate(BaseModel):
    """학생 정보 수정 요청 스키마 (부분 업데이트 — partial update)."""

    student_id: str | None = Field(None, min_length=1, max_length=50)
    name: str | None = Field(None, min_length=1, max_length=100)
    gender: Gender | None = None
    birth_date: date | None = None
    phone: str | None = None
    email: str | None = None
    address: str | None = None
    class_name: str | None = Field(None, min_length=1, max_length=100)
    enrollment_date: date | None = None
    status: StudentStatus | None = None


class StudentResponse(BaseModel):
    """학생 응답 스키마."""

    id: str  # 학생 UUID 문자열 (Student UUID as string)
    student_id: str
    name: str
    gender: str
    birth_date: date
    phone: str | None
    email: str | None
    address: str | None
    class_name: str
    enrollment_date: date
    status: str
    created_at: datetime
    updated_at: datetime


class StudentSummary(BaseModel):
    """다른 레코드에 포함되는 학생 요약 (Student fields nested into grades/archives)."""

    name: str
    student_id: str
