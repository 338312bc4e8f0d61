from fastapi import APIRouter, Depends, HTTPException, Query, status
from .dependencies import get_order_service
from .exceptions import InvalidOrderStatusError, OrderNotFoundError, StoreUnavailableError
from .schemas import OrderCreate, OrderResponse
from .service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])
public_router = APIRouter(prefix="/orders")  # Must be included first so /health wins over /{order_id}

@public_router.get("/health")
async def health_check():
    return {"service": "order", "status": "Order Service is healthy"}


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
async def create_order(order: OrderCreate, service: OrderService = Depends(get_order_service)):
    try:
        return await service.create_order(order)
    except StoreUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))

@router.get("", response_model=list[OrderResponse])
async def list_orders(
    user_id: int | None = Query(default=None, alias="userId"),
    service: OrderService = Depends(get_order_service),
):
    try:
        if user_id is not None:
            return await service.get_orders_by_user(user_id)
        return await service.get_all_orders()
    except StoreUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))

@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: int, service: OrderService = Depends(get_order_service)):
    try:
        return await service.get_order(order_id)
    except OrderNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StoreUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))

@router.put("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: int,
    new_status: str = Query(alias="status"),
    service: OrderService = Depends(get_order_service),
):
    try:
        return await service.update_order_status(order_id, new_status)
    except InvalidOrderStatusError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except OrderNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StoreUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))
