import structlog
from sqlalchemy import func
from shared.observability import (
    ecomm_orders_created_total,
    ecomm_order_status_updates_total,
    ecomm_order_events_total,
)
from .exceptions import InvalidOrderStatusError, OrderNotFoundError
from .models import Order, OrderStatus
from .notifier import OrderEventNotifier, PublishResult, PublishStatus
from .repository import OrderRepository
from .schemas import OrderCreate, OrderResponse

logger = structlog.get_logger(__name__)

ORDER_CREATED = "ORDER_CREATED"
ORDER_STATUS_UPDATED = "ORDER_STATUS_UPDATED"


def parse_status(value) -> OrderStatus:
    """Resolve a status name (case-insensitive) to an OrderStatus."""
    if isinstance(value, OrderStatus):
        return value
    try:
        return OrderStatus(str(value).strip().upper())
    except ValueError:
        raise InvalidOrderStatusError(value) from None


class OrderService:
    """
    Order workflow: persist first, then notify.

    The write to the store is the only step that can fail the operation.
    Publishing happens afterwards and its outcome is reported as a
    PublishResult that is logged and counted, never raised.
    """

    def __init__(self, store: OrderRepository, notifier: OrderEventNotifier):
        self.store = store
        self.notifier = notifier

    async def create_order(self, data: OrderCreate) -> Order:
        order = Order(
            user_id=data.user_id,
            product_name=data.product_name,
            quantity=data.quantity,
            total_amount=data.total_amount,
            items=data.items,
            status=OrderStatus.PENDING.value,
        )
        saved = await self.store.save(order)
        ecomm_orders_created_total.inc()
        logger.info("order_created", order_id=saved.id, user_id=saved.user_id)

        await self.publish_event(saved, ORDER_CREATED)
        return saved

    async def get_order(self, order_id: int) -> Order:
        order = await self.store.get_order(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return order

    async def get_orders_by_user(self, user_id: int) -> list[Order]:
        return await self.store.get_orders_by_user(user_id)

    async def get_all_orders(self) -> list[Order]:
        return await self.store.get_all_orders()

    async def update_order_status(self, order_id: int, status) -> Order:
        # Validate before touching the store
        new_status = parse_status(status)

        order = await self.get_order(order_id)
        order.status = new_status.value
        # Always emit the UPDATE, even when the status is unchanged
        order.updated_at = func.now()
        updated = await self.store.save(order)
        ecomm_order_status_updates_total.labels(status=new_status.value).inc()
        logger.info("order_status_updated", order_id=order_id, status=new_status.value)

        await self.publish_event(updated, ORDER_STATUS_UPDATED)
        return updated

    async def publish_event(self, order: Order, event_type: str) -> PublishResult:
        """Best-effort publish of an order snapshot. Never raises."""
        try:
            message = OrderResponse.model_validate(order).model_dump_json(by_alias=True)
            result = await self.notifier.publish(message, event_type)
        except Exception as e:
            result = PublishResult.failure(event_type, f"{type(e).__name__}: {e}")

        ecomm_order_events_total.labels(event_type=event_type, outcome=result.status.value).inc()
        if result.status == PublishStatus.SUCCESS:
            logger.info("order_event_published", event_type=event_type,
                        order_id=order.id, message_id=result.message_id)
        elif result.status == PublishStatus.SKIPPED:
            logger.debug("order_event_publish_skipped", event_type=event_type,
                         order_id=order.id, reason=result.error)
        else:
            logger.error("order_event_publish_failed", event_type=event_type,
                         order_id=order.id, error=result.error)
        return result
