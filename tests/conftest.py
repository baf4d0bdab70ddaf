"""테스트 인프라 — 인메모리 SQLite DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure — in-memory SQLite database, session, record store,
and httpx client fixtures. Every test gets a fresh database.
"""

import os

# 설정이 로드되기 전에 테스트 환경 변수 지정 — Must run before settings are imported
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-at-least-32-characters-long"
os.environ["AXIOM_API_TOKEN"] = ""
os.environ["AXIOM_DATASET"] = ""

from collections.abc import AsyncGenerator  # noqa: E402
from datetime import date  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from student_records.database import Database  # noqa: E402
from student_records.main import create_app  # noqa: E402
from student_records.repositories.student_repository import student_repository  # noqa: E402
from student_records.repositories.user_repository import user_repository  # noqa: E402
from student_records.store.base import Row  # noqa: E402
from student_records.store.sqlalchemy_store import SqlAlchemyStore  # noqa: E402
from student_records.utils.jwt import create_access_token  # noqa: E402
from student_records.utils.password import hash_password  # noqa: E402


# ---------------------------------------------------------------------------
# DB, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def database() -> AsyncGenerator[Database, None]:
    """테스트마다 새 인메모리 DB — StaticPool로 단일 연결 공유."""
    db = Database(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await db.create_all()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    async with database.session_factory() as s:
        yield s


@pytest.fixture
def store(session: AsyncSession) -> SqlAlchemyStore:
    return SqlAlchemyStore(session)


@pytest_asyncio.fixture
async def client(database: Database) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — 테스트 DB를 주입한 앱."""
    app = create_app(database)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
async def make_user(session: AsyncSession, email: str, password: str, role: str, is_active: bool = True) -> Row:
    user: Row = await user_repository.create(
        SqlAlchemyStore(session),
        {
            "email": email,
            "name": role.capitalize(),
            "role": role,
            "password_hash": hash_password(password),
            "is_active": is_active,
        },
    )
    await session.commit()
    return user


@pytest_asyncio.fixture
async def admin_user(session: AsyncSession) -> Row:
    return await make_user(session, "admin@test.com", "admin123!", "admin")


@pytest_asyncio.fixture
async def teacher_user(session: AsyncSession) -> Row:
    return await make_user(session, "teacher@test.com", "teacher123!", "teacher")


@pytest_asyncio.fixture
async def staff_user(session: AsyncSession) -> Row:
    return await make_user(session, "staff@test.com", "staff123!", "staff")


@pytest_asyncio.fixture
async def student(session: AsyncSession) -> Row:
    """테스트 학생을 생성합니다."""
    row: Row = await student_repository.create(
        SqlAlchemyStore(session),
        {
            "student_id": "S2024001",
            "name": "Kim Minjun",
            "gender": "male",
            "birth_date": date(2010, 3, 14),
            "class_name": "Grade 3A",
            "enrollment_date": date(2022, 3, 2),
            "status": "active",
        },
    )
    await session.commit()
    return row


def make_token(user: Row) -> str:
    """테스트용 JWT 액세스 토큰을 생성합니다."""
    return create_access_token({"sub": str(user["id"]), "role": user["role"]})


@pytest.fixture
def admin_token(admin_user: Row) -> str:
    return make_token(admin_user)


@pytest.fixture
def teacher_token(teacher_user: Row) -> str:
    return make_token(teacher_user)


@pytest.fixture
def staff_token(staff_user: Row) -> str:
    return make_token(staff_user)


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
