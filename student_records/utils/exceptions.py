"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
The store adapter, repositories and services raise these directly; FastAPI
renders them as JSON error responses with the matching status code.

Taxonomy:
    StoreError: 원격 저장소 호출 실패 (Remote store call failed — network, server)
    NotFoundError: 단건 조회 결과 없음 (Point lookup matched zero rows)
    ValidationError: 저장소가 데이터 형태를 거부 (Store rejected the record shape)

Usage:
    from student_records.utils.exceptions import NotFoundError
    raise NotFoundError("Student not found")
"""

from fastapi import HTTPException, status


class StoreError(HTTPException):
    """502 Bad Gateway 예외 — 원격 저장소 호출이 실패했을 때 사용.

    Raised when a call to the backing store fails for any reason other than
    a rejected record shape. Never retried by this layer.
    """

    def __init__(self, detail: str = "Data store request failed") -> None:
        super().__init__(status_code=status.HTTP_502_BAD_GATEWAY, detail=detail)


class NotFoundError(HTTPException):
    """404 Not Found 예외 — 요청한 레코드를 찾을 수 없을 때 사용."""

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ValidationError(HTTPException):
    """422 Unprocessable Entity 예외 — 제약 조건 위반 등 데이터 형태 거부 시 사용.

    Raised when the store rejects a record (constraint violation) or a query
    names a field that cannot be filtered or sorted on.
    """

    def __init__(self, detail: str = "Invalid data") -> None:
        super().__init__(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=detail)


class DuplicateError(HTTPException):
    """409 Conflict 예외 — 중복 리소스 생성 시도 시 사용 (e.g. duplicate email)."""

    def __init__(self, detail: str = "Resource already exists") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class ForbiddenError(HTTPException):
    """403 Forbidden 예외 — 역할 권한 부족 시 사용."""

    def __init__(self, detail: str = "Insufficient permissions") -> None:
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class UnauthorizedError(HTTPException):
    """401 Unauthorized 예외 — 인증 실패 시 사용.

    Raised when authentication is missing, invalid, or expired
    (e.g. missing JWT token, expired token, invalid credentials).
    """

    def __init__(self, detail: str = "Authentication required") -> None:
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)
