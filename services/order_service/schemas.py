from datetime import datetime
from typing import Any
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from .models import OrderStatus

class OrderCreate(BaseModel):
    # id and status are not fields here, so any caller-supplied values are dropped
    user_id: int
    product_name: str | None = None
    quantity: int | None = Field(default=None, gt=0)
    total_amount: float | None = Field(default=None, ge=0)
    items: list[Any] = Field(default_factory=list)

    class Config:
        alias_generator = to_camel
        populate_by_name = True

class OrderResponse(BaseModel):
    id: int
    user_id: int
    product_name: str | None
    quantity: int | None
    total_amount: float | None
    items: list[Any]
    status: OrderStatus
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True
