from prometheus_client import Counter

# Business Metrics
ecomm_orders_created_total = Counter(
    "ecomm_orders_created_total",
    "Total orders persisted by the order service"
)

ecomm_order_status_updates_total = Counter(
    "ecomm_order_status_updates_total",
    "Total order status updates persisted",
    ["status"] # Labels: the new status, e.g. 'SHIPPED'
)

ecomm_order_events_total = Counter(
    "ecomm_order_events_total",
    "Order event publish attempts",
    ["event_type", "outcome"] # Labels: outcome='success', 'failure' or 'skipped'
)
