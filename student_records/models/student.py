"""학생 관련 SQLAlchemy ORM 모델 정의.

Student record ORM model definitions.

Tables:
    - students: 학생 기본 정보 (Student master records)
"""

import uuid
from datetime import date, datetime, timezone

from sqlalchemy import Date, DateTime, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from student_records.database import Base


class Student(Base):
    """학생 모델 — 학적 기본 정보.

    Student model — enrolment and contact information for one student.

    Attributes:
        id: 고유 식별자 UUID (Primary key)
        student_id: 학번 (School-issued student number, unique)
        name: 이름 (Full name)
        gender: 성별 — "male" | "female"
        birth_date: 생년월일 (Date of birth)
        class_name: 반 이름 (Class the student belongs to, e.g. "Grade 3A")
        enrollment_date: 입학일 (Enrolment date)
        status: 학적 상태 — "active" | "graduated" | "suspended" | "transferred"
    """

    __tablename__ = "students"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 학번 — 학교에서 부여한 번호, 전역 고유 (School-issued number, globally unique)
    student_id: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    gender: Mapped[str] = mapped_column(String(10), nullable=False)
    birth_date: Mapped[date] = mapped_column(Date, nullable=False)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    class_name: Mapped[str] = mapped_column(String(100), nullable=False)
    enrollment_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="active")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    # 관계 — 학생 삭제 시 성적/기록도 삭제 (Grades and archives are removed with the student)
    grades = relationship("Grade", back_populates="student", cascade="all, delete-orphan")
    archives = relationship("Archive", back_populates="student", cascade="all, delete-orphan")
