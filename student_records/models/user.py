"""사용자, 로그인 기록, 리프레시 토큰 ORM 모델.

User account, login record, and refresh token ORM models.

Tables:
    - users: 시스템 사용자 계정 (Staff accounts: admin, teacher, staff)
    - login_records: 로그인 이력 — 추가 전용 (Append-only sign-in history)
    - refresh_tokens: 발급된 리프레시 토큰 (Issued refresh tokens)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from student_records.database import Base


class User(Base):
    """사용자 모델 — 시스템 사용자 계정 정보.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        email: 로그인 이메일 (Login email, globally unique)
        name: 표시 이름 (Display name, optional)
        role: 역할 — "admin" | "teacher" | "staff"
        password_hash: bcrypt 해시 (Bcrypt password hash)
        is_active: 활성 상태 (Inactive accounts cannot sign in)
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default="staff")
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    login_records = relationship("LoginRecord", back_populates="user", passive_deletes=True)
    refresh_tokens = relationship("RefreshToken", back_populates="user", passive_deletes=True)


class LoginRecord(Base):
    """로그인 기록 — 생성 후 수정되지 않음.

    Append-only sign-in attempt. Carries no created_at/updated_at pair;
    login_time is the record's timestamp.

    Attributes:
        user_id: 로그인 시도한 사용자 (User who attempted to sign in)
        ip_address: 클라이언트 IP (Client IP address)
        user_agent: 클라이언트 User-Agent 헤더
        login_time: 시도 시각 UTC (Attempt timestamp)
        logout_time: 로그아웃 시각 (Sign-out timestamp, unused for now)
        status: 결과 — "success" | "failed"
    """

    __tablename__ = "login_records"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    ip_address: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    user_agent: Mapped[str] = mapped_column(String(512), nullable=False, default="")
    login_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    logout_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    status: Mapped[str] = mapped_column(String(10), nullable=False)

    user = relationship("User", back_populates="login_records")


class RefreshToken(Base):
    """리프레시 토큰 테이블 — 로그아웃 시 삭제되어 재발급이 불가능해짐.

    Attributes:
        user_id: 소유 사용자 ID (Owner user UUID)
        token: JWT 리프레시 토큰 문자열 (JWT refresh token string)
        expires_at: 만료 일시 (Expiration timestamp)
    """

    __tablename__ = "refresh_tokens"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    token: Mapped[str] = mapped_column(String(512), unique=True, nullable=False)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    user = relationship("User", back_populates="refresh_tokens")
