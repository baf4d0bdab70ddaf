"""FastAPI 의존성 주입 모듈 — 저장소, 인증 및 권한 검사.

FastAPI dependency injection module — record store, authentication and
role-based authorization.

Authentication Flow:
    1. 클라이언트가 Authorization: Bearer <token> 헤더를 전송
       (Client sends Authorization: Bearer <token> header)
    2. decode_token()이 JWT를 검증하고 페이로드를 반환
       (decode_token verifies JWT and returns payload)
    3. 페이로드의 "sub" 필드로 저장소에서 사용자를 조회하고 활성 상태 확인
       (User is loaded by "sub" and must be active)
"""

from typing import Annotated, Any, Awaitable, Callable
from uuid import UUID

import jwt
from fastapi import Depends, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from student_records.config import settings
from student_records.database import get_db
from student_records.repositories.base import SortSpec
from student_records.repositories.user_repository import user_repository
from student_records.store.base import RecordStore, Row
from student_records.store.sqlalchemy_store import SqlAlchemyStore
from student_records.utils.exceptions import ForbiddenError, UnauthorizedError
from student_records.utils.jwt import decode_token
from student_records.utils.pagination import PageRequest

# auto_error=False: 토큰 누락 시 403 대신 401 반환 (Missing token → 401, not 403)
security: HTTPBearer = HTTPBearer(auto_error=False)


async def get_store(db: Annotated[AsyncSession, Depends(get_db)]) -> RecordStore:
    """요청 세션 위의 레코드 저장소 (Record store bound to the request session)."""
    return SqlAlchemyStore(db)


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    store: Annotated[RecordStore, Depends(get_store)],
) -> Row:
    """JWT 토큰에서 현재 인증된 사용자를 추출합니다.

    Raises:
        UnauthorizedError: 토큰 누락/만료/위조, 사용자 없음 또는 비활성
                           (Missing/expired/invalid token, unknown or inactive user)
    """
    if credentials is None:
        raise UnauthorizedError("Not signed in")

    try:
        payload: dict[str, Any] = decode_token(credentials.credentials)
        # 리프레시 토큰을 액세스 토큰으로 사용하는 것을 거부 — Reject refresh tokens
        if payload.get("type") != "access":
            raise UnauthorizedError("Invalid token type")
        user_id: UUID = UUID(payload["sub"])
    except (jwt.InvalidTokenError, KeyError, ValueError):
        raise UnauthorizedError("Invalid or expired token")

    user: Row | None = await user_repository.find_one(store, {"id": user_id})
    if user is None or not user["is_active"]:
        raise UnauthorizedError("User not found or inactive")
    return user


def require_role(*roles: str) -> Callable[..., Awaitable[Row]]:
    """역할 기반 권한 검사 의존성 팩토리.

    Dependency factory allowing only users whose role is in ``roles``.

    Returns:
        FastAPI 의존성 함수 — 인증된 사용자 반환 또는 403 발생
        (Dependency returning the user or raising 403)
    """

    async def _check(current_user: Annotated[Row, Depends(get_current_user)]) -> Row:
        if current_user["role"] not in roles:
            raise ForbiddenError("Insufficient permissions")
        return current_user

    return _check


# 편의 의존성 — Pre-configured role dependencies
require_admin = require_role("admin")
require_editor = require_role("admin", "teacher")


def page_params(
    page: Annotated[int, Query(ge=1)] = 1,
    page_size: Annotated[int | None, Query(ge=1)] = None,
) -> PageRequest:
    """page/page_size 쿼리 파라미터 → PageRequest (page_size 상한: MAX_PAGE_SIZE)."""
    size: int = page_size or settings.DEFAULT_PAGE_SIZE
    return PageRequest(page=page, page_size=min(size, settings.MAX_PAGE_SIZE))


def sort_params(
    sort_by: str | None = None,
    ascending: bool = False,
) -> SortSpec | None:
    """sort_by/ascending 쿼리 파라미터 → SortSpec (없으면 엔티티 기본 정렬)."""
    if sort_by is None:
        return None
    return SortSpec(sort_by, ascending)


Store = Annotated[RecordStore, Depends(get_store)]
CurrentUser = Annotated[Row, Depends(get_current_user)]
Page = Annotated[PageRequest, Depends(page_params)]
Sort = Annotated[SortSpec | None, Depends(sort_params)]
