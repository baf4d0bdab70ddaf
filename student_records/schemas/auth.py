"""인증 관련 Pydantic 요청/응답 스키마 정의.

Authentication request/response schema definitions.
Covers sign-in, sign-up, token refresh, and the current user's profile.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

UserRole = Literal["admin", "teacher", "staff"]


class SignInRequest(BaseModel):
    """로그인 요청 스키마.

    Attributes:
        email: 로그인 이메일 (Login email)
        password: 비밀번호 (Plain text, verified against bcrypt hash)
    """

    email: str
    password: str


class SignUpRequest(BaseModel):
    """회원가입 요청 스키마. 새 계정은 staff 역할로 생성됩니다."""

    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=8)  # 비밀번호 — 8자 이상 (At least 8 characters)
    name: str | None = Field(None, max_length=100)


class TokenResponse(BaseModel):
    """JWT 토큰 발급 응답 스키마.

    Attributes:
        access_token: JWT 액세스 토큰 (Short-lived access token)
        refresh_token: JWT 리프레시 토큰 (Long-lived refresh token)
        token_type: 토큰 유형 (Always "bearer")
    """

    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class RefreshRequest(BaseModel):
    """토큰 갱신 요청 스키마."""

    refresh_token: str


class PasswordUpdateRequest(BaseModel):
    """비밀번호 변경 요청 스키마."""

    password: str = Field(..., min_length=8)


class EmailUpdateRequest(BaseModel):
    """이메일 변경 요청 스키마."""

    email: str = Field(..., min_length=3, max_length=255)


class UserResponse(BaseModel):
    """사용자 정보 응답 스키마 (GET /auth/me)."""

    id: str
    email: str
    name: str | None
    role: str
    created_at: datetime
    updated_at: datetime
