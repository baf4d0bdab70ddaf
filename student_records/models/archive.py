"""학생 기록부 ORM 모델.

Archive ORM model — dated entries in a student's file
(rewards, disciplinary actions, activities, notes).
"""

import uuid
import datetime as dt

from sqlalchemy import Date, DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from student_records.database import Base


class Archive(Base):
    """학생 기록 모델.

    Attributes:
        id: 고유 식별자 UUID (Primary key)
        student_id: 학생 FK (Owning student)
        title: 제목 (Entry title)
        content: 내용 (Entry body)
        type: 기록 유형 — "reward" | "punishment" | "activity" | "note"
        date: 발생일 (Date the recorded event happened)
        created_by: 작성자 사용자 ID (Author user id)
    """

    __tablename__ = "archives"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    student_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    # 작성자 — 사용자 삭제 후에도 기록은 유지 (Entries outlive their author)
    created_by: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=lambda: dt.datetime.now(dt.timezone.utc))
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=lambda: dt.datetime.now(dt.timezone.utc))

    student = relationship("Student", back_populates="archives")
