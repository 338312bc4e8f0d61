"""
Process entrypoint: `uvicorn main:app`.

The order service owns its own startup/shutdown hooks (table creation and
the notifier client), so it is served directly instead of being mounted
under a parent app, whose mounts would not run those hooks.
"""
from services.order_service.main import order_app as app

__all__ = ["app"]
