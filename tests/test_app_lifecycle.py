from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from shared.config import aws
from services.order_service import main
from services.order_service.main import order_app, shutdown_event, startup_event
from services.order_service.notifier import DisabledNotifier, SnsNotifier


@pytest_asyncio.fixture
async def app_engine(monkeypatch):
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    monkeypatch.setattr(main, "engine", engine)
    # Removed again on teardown so other tests see a bare app.state
    monkeypatch.setattr(order_app.state, "notifier", None, raising=False)
    yield engine
    await engine.dispose()


async def test_startup_creates_tables_and_disabled_notifier(app_engine, monkeypatch):
    monkeypatch.setattr(aws, "SNS_TOPIC_ARN", None)

    await startup_event()

    async with app_engine.connect() as conn:
        tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
    assert "orders" in tables
    assert isinstance(order_app.state.notifier, DisabledNotifier)

    await shutdown_event()


async def test_startup_and_shutdown_manage_sns_client(app_engine, monkeypatch):
    monkeypatch.setattr(aws, "SNS_TOPIC_ARN", "arn:aws:sns:us-east-1:000000000000:order-events")
    monkeypatch.setattr(aws, "LOCALSTACK_ENDPOINT", "http://localhost:4566")

    await startup_event()
    notifier = order_app.state.notifier
    assert isinstance(notifier, SnsNotifier)
    assert notifier._client is not None

    await shutdown_event()
    assert notifier._client is None


async def test_engine_disposed_when_notifier_shutdown_fails(monkeypatch):
    class BrokenNotifier:
        async def shutdown(self):
            raise RuntimeError("close failed")

    engine = AsyncMock()
    monkeypatch.setattr(main, "engine", engine)
    monkeypatch.setattr(order_app.state, "notifier", BrokenNotifier(), raising=False)

    with pytest.raises(RuntimeError):
        await shutdown_event()

    engine.dispose.assert_awaited_once()
