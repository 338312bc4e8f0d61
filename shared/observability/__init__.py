from .setup import setup_observability
from .metrics import (
    ecomm_orders_created_total,
    ecomm_order_status_updates_total,
    ecomm_order_events_total
)
