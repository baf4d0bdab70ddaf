"""데이터베이스 엔진 및 세션 설정 모듈.

Database engine and session configuration module.
The engine and session factory are owned by a ``Database`` instance that the
application factory builds at startup and stores on ``app.state``; request
handlers receive sessions through the ``get_db`` dependency.
"""

from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """SQLAlchemy 선언적 베이스 클래스.

    Declarative base class for all ORM models.
    """

    pass


class Database:
    """비동기 엔진과 세션 팩토리를 묶은 스토어 클라이언트.

    Store client bundling the async engine and its session factory.
    Constructed once per application (or per test) and disposed on shutdown.

    Attributes:
        engine: 비동기 데이터베이스 엔진 (Async database engine)
        session_factory: 세션 팩토리 (Async session factory)
    """

    def __init__(self, url: str, echo: bool = False, **engine_kwargs) -> None:
        if url.startswith("postgresql"):
            # Supavisor(트랜잭션 모드 풀러)에서 prepared statement 비활성화
            # Disable prepared statement caches for Supavisor transaction-mode pooling
            engine_kwargs.setdefault("pool_pre_ping", True)
            engine_kwargs.setdefault("pool_size", 5)
            engine_kwargs.setdefault("max_overflow", 10)
            engine_kwargs.setdefault("connect_args", {"statement_cache_size": 0})

        self.engine: AsyncEngine = create_async_engine(url, echo=echo, **engine_kwargs)
        # expire_on_commit=False: 커밋 후에도 객체 속성 접근 가능
        self.session_factory: async_sessionmaker[AsyncSession] = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def create_all(self) -> None:
        """ORM 메타데이터로 테이블을 생성합니다 (Create tables from ORM metadata)."""
        # 모든 모델을 메타데이터에 등록 — Register every model with the metadata
        import student_records.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """요청마다 비동기 세션을 생성하고 요청 종료 시 닫습니다.

    FastAPI dependency that yields an async session from the application's
    ``Database``. The session is closed after the request completes.

    Yields:
        AsyncSession: SQLAlchemy 비동기 세션 인스턴스 (Async session instance)
    """
    database: Database = request.app.state.database
    async with database.session_factory() as session:
        try:
            yield session
        finally:
            await session.close()
