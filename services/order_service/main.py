import os
import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from shared.config.database import engine, Base
from shared.observability import setup_observability
from .notifier import build_notifier
from .router import router, public_router
from .models import Order # Import to register with Base

logger = structlog.get_logger(__name__)

order_app = FastAPI(title="Order Service", version="1.0.0")

# --- OBSERVABILITY BOOTSTRAP ---
setup_observability(order_app, "order_service")

CORS_ALLOW_ORIGINS = [o.strip() for o in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",") if o.strip()]
order_app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

order_app.include_router(public_router)
order_app.include_router(router)

@order_app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Malformed input is a client error, reported as 400 rather than FastAPI's 422
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )

@order_app.on_event("startup")
async def startup_event():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    notifier = build_notifier()
    if hasattr(notifier, "initialize"):
        await notifier.initialize()
    order_app.state.notifier = notifier
    logger.info("order_service_started", notifier=type(notifier).__name__)

@order_app.on_event("shutdown")
async def shutdown_event():
    notifier = getattr(order_app.state, "notifier", None)
    try:
        if notifier is not None and hasattr(notifier, "shutdown"):
            await notifier.shutdown()
    finally:
        await engine.dispose()
