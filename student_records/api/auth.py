"""인증 라우터 — 로그인, 회원가입, 토큰 갱신, 로그아웃, 계정 정보.

Auth Router — sign-in, sign-up, token refresh, sign-out, and profile endpoints.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from student_records.api.deps import CurrentUser, Store
from student_records.database import get_db
from student_records.schemas.auth import (
    EmailUpdateRequest,
    PasswordUpdateRequest,
    RefreshRequest,
    SignInRequest,
    SignUpRequest,
    TokenResponse,
    UserResponse,
)
from student_records.services.auth_service import auth_service
from student_records.utils.exceptions import UnauthorizedError

router: APIRouter = APIRouter()


@router.post("/sign-in", response_model=TokenResponse)
async def sign_in(
    data: SignInRequest,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
    store: Store,
) -> TokenResponse:
    """로그인 — 성공/실패 모두 로그인 기록에 남김.

    Sign in with email and password. Failed attempts against an existing
    account are committed to the login history before the 401 is returned.
    """
    try:
        result: TokenResponse = await auth_service.sign_in(
            store,
            data,
            ip_address=request.client.host if request.client else "",
            user_agent=request.headers.get("user-agent", ""),
        )
    except UnauthorizedError:
        await db.commit()
        raise
    await db.commit()
    return result


@router.post("/sign-up", response_model=UserResponse, status_code=201)
async def sign_up(
    data: SignUpRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    store: Store,
) -> UserResponse:
    """회원가입 — staff 역할로 계정 생성."""
    result: UserResponse = await auth_service.sign_up(store, data)
    await db.commit()
    return result


@router.post("/refresh", response_model=TokenResponse)
async def refresh_token(
    data: RefreshRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    store: Store,
) -> TokenResponse:
    """토큰 갱신 — 리프레시 토큰으로 새 토큰 쌍 발급."""
    result: TokenResponse = await auth_service.refresh(store, data.refresh_token)
    await db.commit()
    return result


@router.post("/sign-out", status_code=204)
async def sign_out(
    db: Annotated[AsyncSession, Depends(get_db)],
    store: Store,
    current_user: CurrentUser,
) -> None:
    """로그아웃 — 사용자의 모든 리프레시 토큰 폐기."""
    await auth_service.sign_out(store, current_user["id"])
    await db.commit()


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: CurrentUser) -> UserResponse:
    """현재 사용자 프로필 조회."""
    return auth_service.to_user_response(current_user)


@router.put("/me/password", response_model=UserResponse)
async def update_password(
    data: PasswordUpdateRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    store: Store,
    current_user: CurrentUser,
) -> UserResponse:
    result: UserResponse = await auth_service.update_password(store, current_user["id"], data.password)
    await db.commit()
    return result


@router.put("/me/email", response_model=UserResponse)
async def update_email(
    data: EmailUpdateRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    store: Store,
    current_user: CurrentUser,
) -> UserResponse:
    result: UserResponse = await auth_service.update_email(store, current_user["id"], data.email)
    await db.commit()
    return result
