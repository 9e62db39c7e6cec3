"""테스트 인프라 — 인메모리 SQLite DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure — In-memory SQLite database, session, and httpx client fixtures.
A single aiosqlite connection (StaticPool) backs each test; the schema is
created before and dropped after every test, so tests never share rows.
"""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from parkspot.database import Base, enable_sqlite_foreign_keys, get_db
from parkspot.main import app
from parkspot.models import *  # noqa: F401,F403
from parkspot.utils.jwt import create_access_token
from parkspot.utils.password import hash_password

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진. 테스트마다 스키마를 새로 만듭니다."""
    eng = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(eng)

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield eng

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
async def _make_user(db: AsyncSession, username: str, password: str, role: str, contact: str | None = None):
    from parkspot.models.user import User
    user = User(
        username=username,
        password_hash=hash_password(password),
        role=role,
        contact=contact,
    )
    db.add(user)
    await db.flush()
    await db.refresh(user)
    return user


@pytest_asyncio.fixture
async def renter_user(db: AsyncSession):
    """Renter 사용자를 생성합니다."""
    return await _make_user(db, "renter", "renter123!", "Renter", contact="010-1111-2222")


@pytest_asyncio.fixture
async def other_renter(db: AsyncSession):
    """두 번째 Renter 사용자를 생성합니다."""
    return await _make_user(db, "renter2", "renter123!", "Renter")


@pytest_asyncio.fixture
async def owner_user(db: AsyncSession):
    """Owner 사용자를 생성합니다."""
    return await _make_user(db, "owner", "owner123!", "Owner", contact="010-3333-4444")


@pytest_asyncio.fixture
async def other_owner(db: AsyncSession):
    """두 번째 Owner 사용자를 생성합니다."""
    return await _make_user(db, "owner2", "owner123!", "Owner")


@pytest_asyncio.fixture
async def admin_user(db: AsyncSession):
    """Admin 사용자를 생성합니다."""
    return await _make_user(db, "Ahmed", "12345", "Admin")


@pytest_asyncio.fixture
async def listing(db: AsyncSession, owner_user):
    """owner_user 소유의 주차 공간을 생성합니다 (10/50/500)."""
    from parkspot.models.listing import Listing
    spot = Listing(
        owner_id=owner_user.id,
        location="Gulshan 1, Road 12",
        price_hourly=10.0,
        price_daily=50.0,
        price_monthly=500.0,
        availability="Available",
    )
    db.add(spot)
    await db.flush()
    await db.refresh(spot)
    return spot


def make_token(user) -> str:
    """테스트용 JWT 액세스 토큰을 생성합니다."""
    return create_access_token({
        "sub": str(user.id),
        "username": user.username,
        "role": user.role,
    })


@pytest.fixture
def renter_token(renter_user) -> str:
    return make_token(renter_user)


@pytest.fixture
def other_renter_token(other_renter) -> str:
    return make_token(other_renter)


@pytest.fixture
def owner_token(owner_user) -> str:
    return make_token(owner_user)


@pytest.fixture
def other_owner_token(other_owner) -> str:
    return make_token(other_owner)


@pytest.fixture
def admin_token(admin_user) -> str:
    return make_token(admin_user)


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
