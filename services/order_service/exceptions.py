from .models import OrderStatus

class OrderServiceError(Exception):
    """Base class for errors the order workflow surfaces to its callers."""

class OrderNotFoundError(OrderServiceError):
    def __init__(self, order_id: int):
        self.order_id = order_id
        super().__init__(f"Order not found with id: {order_id}")

class InvalidOrderStatusError(OrderServiceError):
    def __init__(self, value):
        self.value = value
        allowed = ", ".join(s.value for s in OrderStatus)
        super().__init__(f"Invalid order status {value!r}. Expected one of: {allowed}")

class StoreUnavailableError(OrderServiceError):
    """The order store could not complete a read or write."""
