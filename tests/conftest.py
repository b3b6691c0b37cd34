"""
Shared test fixtures.

Uses an in-memory SQLite database (via aiosqlite) so tests run without
Docker / PostgreSQL.  Every test gets a fresh engine, so state never leaks
between tests.
"""

from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator

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

from fleetops.domain.entities import Identity
from fleetops.domain.enums import ApprovalStatus, Role
from fleetops.infrastructure.database import Base
import fleetops.infrastructure.models  # noqa: F401  (registers tables)


TEST_DB_URL = "sqlite+aiosqlite:///:memory:"


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime = datetime(2026, 3, 1, 8, 0, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


def make_identity(role: Role, user_id: int = 1) -> Identity:
    return Identity(
        id=user_id,
        email=f"{role.value.lower()}@example.com",
        name=f"Test {role.value.title()}",
        role=role,
        approval_status=ApprovalStatus.APPROVED,
    )


# ── Fixtures ──────────────────────────────────────────────────────────


@pytest_asyncio.fixture
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    engine = create_async_engine(TEST_DB_URL, echo=False, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    factory = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(test_engine: AsyncEngine) -> AsyncGenerator[AsyncClient, None]:
    """AsyncClient whose requests run against the per-test SQLite database."""
    from fleetops.api.app import create_app
    from fleetops.api.dependencies import get_db
    from fleetops.api.middleware import limiter

    factory = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)

    async def _test_db():
        async with factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    limiter.reset()
    app = create_app()
    app.dependency_overrides[get_db] = _test_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def admin() -> Identity:
    return make_identity(Role.ADMIN, user_id=100)


@pytest.fixture
def manager() -> Identity:
    return make_identity(Role.FLEET_MANAGER, user_id=101)


@pytest.fixture
def driver() -> Identity:
    return make_identity(Role.DRIVER, user_id=102)


@pytest.fixture
def customer() -> Identity:
    return make_identity(Role.CUSTOMER, user_id=103)
