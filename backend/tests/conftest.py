"""Shared pytest fixtures configured to use SQLite in-memory for all tests."""

import logging
import os

# must be set before the app (and its settings) are imported
os.environ.setdefault("NOTEVAULT_SKIP_LIFESPAN_DB", "1")
os.environ.setdefault("LOG_TO_FILE", "false")

from datetime import datetime, timedelta, timezone  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import event  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from notevault.config import Settings, get_settings  # noqa: E402
from notevault.core.models import BaseModel  # noqa: E402
from notevault.core.repositories.user_repository import UserRepository  # noqa: E402
from notevault.database import get_db_session  # noqa: E402
from notevault.main import app  # noqa: E402
from notevault.security.password import hash_password  # noqa: E402

# Silence extremely verbose DEBUG logs from aiosqlite to keep test output readable
logging.getLogger("aiosqlite").setLevel(logging.WARNING)

TEST_PASSWORD = "correct horse battery"


class FakeClock:
    """Manually advanced clock for session expiry tests."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


class FakeRedisClient:
    """In-memory stand-in for RedisClient's counter API."""

    def __init__(self):
        self.counters = {}
        self.expiries = {}

    @property
    def connected(self) -> bool:
        return True

    async def get_counter(self, key):
        return self.counters.get(key, 0)

    async def increment_counter(self, key, expire):
        self.counters[key] = self.counters.get(key, 0) + 1
        self.expiries.setdefault(key, expire)
        return self.counters[key]

    async def delete(self, key):
        self.expiries.pop(key, None)
        return self.counters.pop(key, None) is not None


@pytest.fixture
def test_settings():
    """Settings for tests: SQLite in-memory, no log files, plain-http cookies."""
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        debug=True,
        log_to_file=False,
        session_cookie_secure=False,
    )


@pytest.fixture
async def test_engine(test_settings):
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        test_settings.database_url,
        echo=False,
        poolclass=StaticPool,  # keep the same memory DB across connections
        connect_args={"check_same_thread": False},
    )

    # SQLite only enforces foreign keys (and so ON DELETE CASCADE) when asked
    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):  # noqa: ANN001
        cursor = dbapi_connection.cursor()
        try:
            cursor.execute("PRAGMA foreign_keys=ON")
        finally:
            cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.create_all)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
async def test_session(test_engine):
    """Database session shared by the test and the app under test."""
    session_maker = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as session:
        try:
            yield session
        finally:
            await session.rollback()


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def fake_redis():
    return FakeRedisClient()


@pytest.fixture(scope="session")
def password_hash():
    """One bcrypt hash for the whole run, hashing is slow on purpose."""
    return hash_password(TEST_PASSWORD)


@pytest.fixture
def make_user(test_session, password_hash):
    """Insert a user directly, password is TEST_PASSWORD."""

    async def _make(email: str = "ada@example.com", name: str = "Ada"):
        repo = UserRepository(test_session)
        return await repo.create_user({"name": name, "email": email, "password_hash": password_hash})

    return _make


@pytest.fixture
def test_app(test_session, test_settings):
    """App with DB and settings dependencies pointed at the test fixtures."""

    async def _override_get_db():
        yield test_session

    app.dependency_overrides[get_db_session] = _override_get_db
    app.dependency_overrides[get_settings] = lambda: test_settings
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def async_client(test_app):
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def login_as(async_client):
    """Register (if needed) and log in through the API, return auth headers."""

    async def _login(email: str = "ada@example.com", name: str = "Ada", password: str = TEST_PASSWORD):
        await async_client.post(
            "/api/auth/register", json={"name": name, "email": email, "password": password}
        )
        resp = await async_client.post("/api/auth/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.text
        return {"Authorization": f"Bearer {resp.json()['accessToken']}"}

    return _login


@pytest.fixture
def test_password():
    return TEST_PASSWORD
