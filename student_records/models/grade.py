"""성적 ORM 모델.

Grade ORM model — one score for one student in one exam.
"""

import uuid
from datetime import date, datetime, timezone

from sqlalchemy import Date, DateTime, Float, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from student_records.database import Base


class Grade(Base):
    """성적 모델.

    Attributes:
        id: 고유 식별자 UUID (Primary key)
        student_id: 학생 FK — students.id (Owning student)
        subject: 과목명 (Subject name)
        score: 점수 (Numeric score)
        exam_type: 시험 유형 — "midterm" | "final" | "quiz" | "homework"
        exam_date: 시험일 (Exam date)
        semester: 학기 (Semester label, e.g. "2024-1")
    """

    __tablename__ = "grades"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    student_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True)
    subject: Mapped[str] = mapped_column(String(100), nullable=False)
    score: Mapped[float] = mapped_column(Float, nullable=False)
    exam_type: Mapped[str] = mapped_column(String(20), nullable=False)
    exam_date: Mapped[date] = mapped_column(Date, nullable=False)
    semester: Mapped[str] = mapped_column(String(20), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    student = relationship("Student", back_populates="grades")
