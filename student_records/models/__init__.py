"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package registers every model with the metadata and
builds the entity-name registry the store adapter resolves tables through.

Modules:
    student: 학생 (Students)
    grade: 성적 (Grades)
    archive: 학생 기록 (Archives)
    user: 사용자, 로그인 기록, 리프레시 토큰 (Users, login records, refresh tokens)
"""

from student_records.database import Base
from student_records.models.archive import Archive
from student_records.models.grade import Grade
from student_records.models.student import Student
from student_records.models.user import LoginRecord, RefreshToken, User

# 엔티티 이름 → 모델 매핑 — Entity name (table name) to ORM model
MODEL_REGISTRY: dict[str, type[Base]] = {
    model.__tablename__: model
    for model in (Student, Grade, Archive, User, LoginRecord, RefreshToken)
}

__all__ = [
    "Student", "Grade", "Archive",
    "User", "LoginRecord", "RefreshToken",
    "MODEL_REGISTRY",
]
