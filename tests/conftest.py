"""Shared fixtures: in-memory database, app client and a controllable clock."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from collections.abc import Callable
from datetime import datetime, timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from wormwatch.config import Settings, get_settings
from wormwatch.database import Base, get_db, utc_now
from wormwatch.main import app
from wormwatch.models import Report
from wormwatch.services.rate_limiter import RateLimiter, get_rate_limiter

ADMIN_SECRET = "test-admin-secret"


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def limiter(clock: FakeClock) -> RateLimiter:
    return RateLimiter(limit=5, window_seconds=3600, clock=clock)


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        admin_secret=ADMIN_SECRET,
        report_ttl_hours=24,
    )


@pytest.fixture
async def session_maker():
    """Fresh in-memory database with the schema created."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
def add_reports(session_maker) -> Callable:
    """Insert reports directly, bypassing validation and rate limiting."""

    async def _add(*reports: Report) -> list[Report]:
        async with session_maker() as session:
            session.add_all(reports)
            await session.commit()
        return list(reports)

    return _add


@pytest.fixture
def count_reports(session_maker) -> Callable:
    async def _count() -> int:
        async with session_maker() as session:
            return (await session.execute(select(func.count(Report.id)))).scalar_one()

    return _count


@pytest.fixture
async def client(session_maker, limiter, test_settings):
    """HTTP client bound to the app, with DB, limiter and settings overridden."""

    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_rate_limiter] = lambda: limiter
    app.dependency_overrides[get_settings] = lambda: test_settings

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


def build_report(
    lat: float = 49.9,
    lng: float = -97.14,
    intensity: int = 3,
    notes: str | None = None,
    created_at: datetime | None = None,
    expires_at: datetime | None = None,
) -> Report:
    """Build a Report with sensible defaults around the current time."""
    created_at = created_at or utc_now()
    return Report(
        lat=lat,
        lng=lng,
        intensity=intensity,
        notes=notes,
        created_at=created_at,
        expires_at=expires_at or created_at + timedelta(hours=24),
    )


@pytest.fixture
def make_report() -> Callable[..., Report]:
    return build_report


@pytest.fixture
def broken_db(client):
    """Replace the app's database session with one whose every query fails."""
    session = AsyncMock()
    session.add = MagicMock()
    failure = OperationalError("SELECT", {}, Exception("connection lost"))
    session.execute.side_effect = failure
    session.commit.side_effect = failure

    async def override_get_db():
        yield session

    app.dependency_overrides[get_db] = override_get_db
    return session
