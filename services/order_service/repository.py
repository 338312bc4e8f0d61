import structlog
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import select
from .models import Order
from .exceptions import StoreUnavailableError

logger = structlog.get_logger(__name__)

class OrderRepository:
    """Persistence boundary for orders, bound to one request's session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def save(self, order: Order) -> Order:
        """Insert when the order has no id yet, otherwise update it in place."""
        order_id = order.id
        try:
            self.db.add(order)
            await self.db.commit()
            await self.db.refresh(order)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("order_store_error", operation="save", order_id=order_id, error=str(e))
            raise StoreUnavailableError("Failed to persist order") from e
        return order

    async def get_order(self, order_id: int) -> Order | None:
        result = await self._execute(select(Order).where(Order.id == order_id))
        return result.scalars().first()

    async def get_orders_by_user(self, user_id: int) -> list[Order]:
        result = await self._execute(
            select(Order).where(Order.user_id == user_id).order_by(Order.id)
        )
        return list(result.scalars().all())

    async def get_all_orders(self) -> list[Order]:
        result = await self._execute(select(Order).order_by(Order.id))
        return list(result.scalars().all())

    async def _execute(self, statement):
        try:
            return await self.db.execute(statement)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("order_store_error", operation="read", error=str(e))
            raise StoreUnavailableError("Failed to read orders") from e
