"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database with system categories seeded
    - get_db dependency overridden to use test DB session
    - db_manager patched so the readiness probe sees the test engine
    - AI is disabled unless a test installs canned replies through ai_replies

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (ADR: PostgreSQL-specific features not exercised here)
    - StaticPool: one connection, so every session sees the same in-memory database
    - Categories seeded in a fixture: ASGITransport does not run the app lifespan
"""

from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)
from sqlalchemy.pool import StaticPool

import aurora.infrastructure.database as db_module
import aurora.models  # noqa: F401
from aurora.api.dependencies import get_ai_assistant
from aurora.db.base import Base
from aurora.infrastructure.database import DatabaseSessionManager, get_db
from aurora.main import app
from aurora.services import category_service, self_care_service
from aurora.services.ai_assistant import AIAssistant
from tests.services.mock_anthropic import MockAnthropicClient


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    factory = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )
    async with factory() as session:
        await category_service.ensure_system_categories(session)
    return factory


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture(autouse=True)
def _reset_self_care_usage():
    self_care_service.clear_usage()
    yield
    self_care_service.clear_usage()


@pytest.fixture
def user_id():
    return uuid4()


@pytest.fixture
def headers(user_id):
    return {"X-User-Id": str(user_id)}


@pytest.fixture
def assistant():
    """The AIAssistant handed to routes. Disabled by default."""
    return AIAssistant(None)


@pytest.fixture
def ai_replies(assistant):
    """Enable AI with canned replies: ai_replies("reply 1", "reply 2", ...)."""
    def install(*replies):
        client = MockAnthropicClient(list(replies))
        assistant.client = client
        return client
    return install


@pytest.fixture
async def client(test_engine, test_session_factory, assistant):
    """FastAPI test client with DB and AI dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_ai_assistant] = lambda: assistant

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
