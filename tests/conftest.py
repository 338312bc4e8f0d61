"""
Pytest fixtures: an in-memory SQLite store, fake notifiers and an HTTP client
bound to the order app with both injected through dependency overrides.
"""
import os

# Configure the process before any application module reads the environment
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.pop("SNS_TOPIC_ARN", None)
os.environ.pop("OTLP_ENDPOINT", None)

from collections.abc import AsyncGenerator

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from shared.config.database import Base, get_db
from services.order_service.dependencies import get_notifier
from services.order_service.main import order_app
from services.order_service.notifier import PublishResult
from services.order_service.repository import OrderRepository


class RecordingNotifier:
    """Accepts every publish and remembers what it was given."""

    def __init__(self):
        self.published: list[tuple[str, str]] = []

    async def publish(self, message: str, event_type: str) -> PublishResult:
        self.published.append((message, event_type))
        return PublishResult.success(event_type, message_id=f"msg-{len(self.published)}")


class FailingNotifier:
    """Reports a failed publish every time, like an unreachable topic."""

    def __init__(self):
        self.attempts = 0

    async def publish(self, message: str, event_type: str) -> PublishResult:
        self.attempts += 1
        return PublishResult.failure(event_type, "channel unavailable")


class RaisingNotifier:
    """Breaks the notifier contract by raising instead of returning a result."""

    def __init__(self):
        self.attempts = 0

    async def publish(self, message: str, event_type: str) -> PublishResult:
        self.attempts += 1
        raise ConnectionError("connection reset by peer")


@pytest_asyncio.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker, None]:
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, expire_on_commit=False)
    await engine.dispose()


@pytest_asyncio.fixture
async def db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def store(db) -> OrderRepository:
    return OrderRepository(db)


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def failing_notifier() -> FailingNotifier:
    return FailingNotifier()


@pytest.fixture
def raising_notifier() -> RaisingNotifier:
    return RaisingNotifier()


def _client_for(session_factory, notifier_instance):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    order_app.dependency_overrides[get_db] = override_get_db
    order_app.dependency_overrides[get_notifier] = lambda: notifier_instance
    transport = httpx.ASGITransport(app=order_app)
    return httpx.AsyncClient(transport=transport, base_url="http://test")


@pytest_asyncio.fixture
async def client(session_factory, notifier) -> AsyncGenerator[httpx.AsyncClient, None]:
    async with _client_for(session_factory, notifier) as c:
        yield c
    order_app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def failing_client(session_factory, failing_notifier) -> AsyncGenerator[httpx.AsyncClient, None]:
    async with _client_for(session_factory, failing_notifier) as c:
        yield c
    order_app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def raising_client(session_factory, raising_notifier) -> AsyncGenerator[httpx.AsyncClient, None]:
    async with _client_for(session_factory, raising_notifier) as c:
        yield c
    order_app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def broken_client(notifier) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Client whose database has no orders table, so every store call fails."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with _client_for(async_sessionmaker(engine, expire_on_commit=False), notifier) as c:
        yield c
    order_app.dependency_overrides.clear()
    await engine.dispose()
