"""FastAPI 애플리케이션 엔트리포인트 — 미들웨어 및 라우터 등록.

FastAPI application entry point.
``create_app`` builds the application; the database client is constructed
in the lifespan handler, which also creates any missing tables, and stored
on ``app.state.database``.

Usage:
    uvicorn student_records.main:app
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from student_records.api import api_router
from student_records.config import settings
from student_records.database import Database
from student_records.middleware.axiom_logging import AxiomLoggingMiddleware


def create_app(database: Database | None = None) -> FastAPI:
    """애플리케이션을 생성합니다.

    Args:
        database: 사용할 DB 클라이언트, None이면 설정의 DATABASE_URL로 생성
                  (Database client to use; built from settings when None)

    Returns:
        FastAPI: 애플리케이션 인스턴스 (Application instance)
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        owned: bool = database is None
        app.state.database = database or Database(settings.DATABASE_URL, echo=settings.DEBUG)
        # 마이그레이션 없이 ORM 메타데이터로 누락된 테이블 생성 — Create missing tables
        await app.state.database.create_all()
        try:
            yield
        finally:
            # 외부에서 주입된 DB는 주입한 쪽에서 정리 — Injected clients are disposed by their owner
            if owned:
                await app.state.database.dispose()

    app: FastAPI = FastAPI(
        title=settings.APP_NAME,
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    if database is not None:
        # lifespan 없이 구동되는 ASGI 테스트 클라이언트 대응 — Available before startup too
        app.state.database = database

    # CORS보다 먼저 등록하여 모든 요청을 캡처 (Registered before CORS to capture all requests)
    app.add_middleware(AxiomLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """서버 상태 확인 엔드포인트 (Health check for load balancers)."""
        return {"status": "ok"}

    app.include_router(api_router, prefix="/api/v1")
    return app


app: FastAPI = create_app()
