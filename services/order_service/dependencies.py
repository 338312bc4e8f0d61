from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession
from shared.config.database import get_db
from .notifier import DisabledNotifier, OrderEventNotifier
from .repository import OrderRepository
from .service import OrderService

def get_notifier(request: Request) -> OrderEventNotifier:
    """The process-wide notifier built at startup, or a disabled one before that."""
    return getattr(request.app.state, "notifier", None) or DisabledNotifier()

def get_order_repository(db: AsyncSession = Depends(get_db)) -> OrderRepository:
    return OrderRepository(db)

def get_order_service(
    store: OrderRepository = Depends(get_order_repository),
    notifier: OrderEventNotifier = Depends(get_notifier),
) -> OrderService:
    return OrderService(store, notifier)
