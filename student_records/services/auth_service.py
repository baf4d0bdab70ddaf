"""인증 서비스 — 로그인, 회원가입, 토큰 갱신, 계정 정보 변경.

Auth Service — Business logic for sign-in, sign-up, token refresh,
sign-out, and account updates. Every sign-in attempt against a known
account is written to the login history.
"""

from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import UUID

import jwt

from student_records.config import settings
from student_records.repositories.login_record_repository import login_record_repository
from student_records.repositories.user_repository import refresh_token_repository, user_repository
from student_records.schemas.auth import (
    SignInRequest,
    SignUpRequest,
    TokenResponse,
    UserResponse,
)
from student_records.store.base import RecordStore, Row
from student_records.utils.exceptions import DuplicateError, UnauthorizedError
from student_records.utils.jwt import create_access_token, create_refresh_token, decode_token
from student_records.utils.password import hash_password, verify_password


def normalize_email(email: str) -> str:
    """이메일 정규화 — 앞뒤 공백 제거 후 소문자 (Trim and lowercase)."""
    return email.strip().lower()


class AuthService:
    """인증 관련 비즈니스 로직을 처리하는 서비스."""

    def to_user_response(self, user: Row) -> UserResponse:
        return UserResponse(**{**user, "id": str(user["id"])})

    async def _generate_tokens(self, store: RecordStore, user: Row) -> TokenResponse:
        """액세스/리프레시 토큰 쌍을 발급하고 리프레시 토큰을 저장합니다."""
        payload: dict[str, Any] = {"sub": str(user["id"]), "role": user["role"]}
        access_token: str = create_access_token(payload)
        refresh_token: str = create_refresh_token(payload)

        expires_at: datetime = datetime.now(timezone.utc) + timedelta(
            days=settings.JWT_REFRESH_TOKEN_EXPIRE_DAYS
        )
        await refresh_token_repository.save(store, user["id"], refresh_token, expires_at)
        return TokenResponse(access_token=access_token, refresh_token=refresh_token)

    async def sign_in(
        self,
        store: RecordStore,
        data: SignInRequest,
        ip_address: str = "",
        user_agent: str = "",
    ) -> TokenResponse:
        """이메일/비밀번호 로그인을 처리하고 로그인 기록을 남깁니다.

        Verify credentials and issue a token pair. Attempts against an
        existing account are recorded as ``success`` or ``failed``; attempts
        with an unknown email have no account to record against.

        Args:
            store: 레코드 저장소 (Record store)
            data: 로그인 요청 (Sign-in request)
            ip_address: 클라이언트 IP (Client IP address)
            user_agent: 클라이언트 User-Agent

        Returns:
            TokenResponse: 토큰 응답 (Token response)

        Raises:
            UnauthorizedError: 잘못된 인증 정보 또는 비활성 계정
                               (Invalid credentials or deactivated account)
        """
        user: Row | None = await user_repository.get_by_email(store, data.email)
        if user is None:
            raise UnauthorizedError("Invalid email or password")

        if not verify_password(data.password, user["password_hash"]) or not user["is_active"]:
            await login_record_repository.record_login(store, user["id"], ip_address, user_agent, "failed")
            raise UnauthorizedError(
                "Account is deactivated" if user["is_active"] is False else "Invalid email or password"
            )

        await login_record_repository.record_login(store, user["id"], ip_address, user_agent, "success")
        return await self._generate_tokens(store, user)

    async def sign_up(self, store: RecordStore, data: SignUpRequest) -> UserResponse:
        """새 계정을 생성합니다. 역할은 항상 staff.

        Raises:
            DuplicateError: 이미 사용 중인 이메일 (Email already registered)
        """
        email: str = normalize_email(data.email)
        if await user_repository.get_by_email(store, email) is not None:
            raise DuplicateError("Email already registered")

        user: Row = await user_repository.create(
            store,
            {
                "email": email,
                "name": data.name,
                "role": "staff",
                "password_hash": hash_password(data.password),
            },
        )
        return self.to_user_response(user)

    async def refresh(self, store: RecordStore, refresh_token: str) -> TokenResponse:
        """리프레시 토큰으로 새 토큰 쌍을 발급합니다. 기존 토큰은 폐기.

        Raises:
            UnauthorizedError: 만료/폐기/위조된 토큰 (Expired, revoked, or invalid token)
        """
        try:
            payload: dict[str, Any] = decode_token(refresh_token)
        except jwt.InvalidTokenError:
            raise UnauthorizedError("Invalid or expired refresh token")
        if payload.get("type") != "refresh":
            raise UnauthorizedError("Invalid token type")

        stored: Row | None = await refresh_token_repository.get_by_token(store, refresh_token)
        if stored is None:
            raise UnauthorizedError("Refresh token has been revoked")

        user: Row | None = await user_repository.find_one(store, {"id": stored["user_id"]})
        if user is None or not user["is_active"]:
            raise UnauthorizedError("User not found or inactive")

        await refresh_token_repository.delete(store, stored["id"])
        return await self._generate_tokens(store, user)

    async def sign_out(self, store: RecordStore, user_id: UUID) -> int:
        """사용자의 모든 리프레시 토큰을 폐기합니다. 폐기된 개수를 반환."""
        return await refresh_token_repository.revoke_for_user(store, user_id)

    async def update_password(self, store: RecordStore, user_id: UUID, password: str) -> UserResponse:
        user: Row = await user_repository.update(store, user_id, {"password_hash": hash_password(password)})
        return self.to_user_response(user)

    async def update_email(self, store: RecordStore, user_id: UUID, email: str) -> UserResponse:
        """이메일을 변경합니다.

        Raises:
            DuplicateError: 다른 계정이 사용 중인 이메일 (Email taken by another account)
        """
        email = normalize_email(email)
        existing: Row | None = await user_repository.get_by_email(store, email)
        if existing is not None and existing["id"] != user_id:
            raise DuplicateError("Email already registered")

        user: Row = await user_repository.update(store, user_id, {"email": email})
        return self.to_user_response(user)


auth_service: AuthService = AuthService()
