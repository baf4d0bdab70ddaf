"""Axiom API 로깅 미들웨어.

Axiom API logging middleware.
Sends one structured event per request to Axiom: endpoint, method, query
and body data, status code, duration, and the error reason for 4xx/5xx.
Credentials and student personal data are masked before leaving the process.
"""

import json
import re
import time
from typing import Any

from axiom_py import Client as AxiomClient
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from student_records.config import settings

# 마스킹 대상 필드 — 인증 정보 및 학생 개인정보 (Credentials and student PII)
_SENSITIVE_KEYS = re.compile(
    r"(password|secret|token|authorization|api_key|credential"
    r"|phone|email|address|birth_date|user_agent|ip_address)",
    re.IGNORECASE,
)

# 로깅 제외 경로 — Paths excluded from logging
_SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}

_MAX_ERROR_LEN = 500


def mask_sensitive(data: Any, depth: int = 0) -> Any:
    """민감 필드 자동 마스킹 — Recursively mask sensitive fields in dicts/lists."""
    if depth > 5:
        return "..."
    if isinstance(data, dict):
        return {
            k: "***" if _SENSITIVE_KEYS.search(k) else mask_sensitive(v, depth + 1)
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [mask_sensitive(item, depth + 1) for item in data[:20]]
    return data


def _error_detail(body: bytes) -> str:
    """오류 응답 본문에서 사유 추출 — Extract the error reason from a response body."""
    try:
        detail: Any = json.loads(body).get("detail", body.decode("utf-8", errors="replace"))
    except (json.JSONDecodeError, UnicodeDecodeError, AttributeError):
        detail = body.decode("utf-8", errors="replace")
    if not isinstance(detail, str):
        # 422 검증 오류는 목록 — FastAPI validation errors are a list of dicts
        detail = json.dumps(detail, default=str)
    return detail[:_MAX_ERROR_LEN]


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """모든 API 요청/응답을 Axiom에 로깅하는 미들웨어.

    Pass-through when AXIOM_API_TOKEN or AXIOM_DATASET is not configured.
    """

    def __init__(self, app: Any, client: AxiomClient | None = None) -> None:
        super().__init__(app)
        self._dataset: str = settings.AXIOM_DATASET
        self._client: AxiomClient | None = client
        if self._client is None and settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET:
            self._client = AxiomClient(token=settings.AXIOM_API_TOKEN)

    async def _read_body(self, request: Request) -> Any:
        if request.method not in ("POST", "PUT", "PATCH"):
            return None
        try:
            body_bytes: bytes = await request.body()
            return mask_sensitive(json.loads(body_bytes)) if body_bytes else None
        except (json.JSONDecodeError, UnicodeDecodeError):
            return "(non-json body)"

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if self._client is None or request.url.path in _SKIP_PATHS:
            return await call_next(request)

        start_time: float = time.perf_counter()
        request_body: Any = await self._read_body(request)

        error_detail: str | None = None
        status_code: int = 500
        try:
            response: Response = await call_next(request)
            status_code = response.status_code

            if status_code >= 400:
                resp_body: bytes = b""
                async for chunk in response.body_iterator:
                    resp_body += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")
                error_detail = _error_detail(resp_body)

                # 소비한 body를 다시 응답으로 반환 — Re-wrap consumed body
                response = Response(
                    content=resp_body,
                    status_code=status_code,
                    headers=dict(response.headers),
                    media_type=response.media_type,
                )
        except Exception as exc:
            error_detail = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            log_event: dict[str, Any] = {
                "method": request.method,
                "path": request.url.path,
                "status_code": status_code,
                "duration_ms": round((time.perf_counter() - start_time) * 1000, 2),
            }
            if request.query_params:
                log_event["query_params"] = mask_sensitive(dict(request.query_params))
            if request.path_params:
                log_event["path_params"] = dict(request.path_params)
            if request_body is not None:
                log_event["request_body"] = request_body
            if error_detail:
                log_event["error"] = error_detail

            try:
                self._client.ingest_events(self._dataset, [log_event])
            except Exception:
                pass  # 로깅 실패가 요청 처리에 영향주지 않도록 — Never break a request on log failure

        return response
