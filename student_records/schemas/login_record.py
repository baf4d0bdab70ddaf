"""로그인 기록 응답 스키마.

Login record response schema (records are created by sign-in only).
"""

from datetime import datetime

from pydantic import BaseModel


class LoginRecordResponse(BaseModel):
    """로그인 기록 응답 스키마.

    Attributes:
        user_id: 사용자 UUID (User who attempted to sign in)
        ip_address: 클라이언트 IP
        user_agent: 클라이언트 User-Agent
        login_time: 시도 시각 (Attempt timestamp)
        logout_time: 로그아웃 시각 (Sign-out timestamp, null when unknown)
        status: 결과 — "success" | "failed"
    """

    id: str
    user_id: str
    ip_address: str
    user_agent: str
    login_time: datetime
    logout_time: datetime | None
    status: str
