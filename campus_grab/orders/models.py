from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class OrderStatus(str, Enum):
    pending = "pending"
    preparing = "preparing"
    ready = "ready"
    completed = "completed"


class OrderLine(BaseModel):
    item_id: str
    name: str
    quantity: int = Field(..., ge=1)
    price: float
    eta_minutes: int = 0


class Order(BaseModel):
    id: str
    token_number: str
    items: list[OrderLine]
    total: float
    status: OrderStatus = OrderStatus.pending
    created_at: datetime
    estimated_time: int
    completed_at: datetime | None = None
    admin_id: str | None = None
    user_id: str | None = None
    payment_method: str = "cash"


class CartItem(BaseModel):
    id: str
    name: str
    price: float
    quantity: int = 1
    eta_minutes: int = 0
    admin_id: str | None = None


class CartAddRequest(BaseModel):
    item_id: str = Field(..., min_length=1)


class CartQuantityRequest(BaseModel):
    quantity: int


class CartResponse(BaseModel):
    items: list[CartItem]
    cart_total: float
    cart_count: int
    max_eta: int


class CheckoutRequest(BaseModel):
    payment_method: str = Field(default="cash", min_length=1)


class StatusUpdateRequest(BaseModel):
    status: OrderStatus
