# storefront/schemas/order.py
from __future__ import annotations

from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, Field

OrderStatus = Literal["created", "paid"]


# keep unknown fields (the storefront client sends whatever it has)
class _Base(BaseModel):
    class Config:
        extra = "allow"


# (Input) POST /api/create-razorpay-order
class CreateOrderRequest(_Base):
    # Any on purpose: "abc" must reach the service and come back as 400, not 422
    amount: Any = Field(None, description="Amount in minor units (paise)")
    currency: Optional[str] = "INR"
    receipt: Optional[str] = None
    orderData: Optional[Dict[str, Any]] = Field(default=None, description="Stored on the order document as-is")


# (Output) gateway-authoritative order values
class CreateOrderResponse(_Base):
    id: str
    currency: str
    amount: int
    receipt: Optional[str] = None


class OrderPayment(_Base):
    status: Optional[str] = None
    razorpayPaymentId: Optional[str] = None
    razorpayOrderId: Optional[str] = None
    verifiedAt: Optional[Any] = None


# Firestore `orders/{razorpayOrderId}`
class OrderRecord(_Base):
    razorpayOrderId: str
    status: OrderStatus = "created"
    amount: Optional[int] = None
    currency: Optional[str] = None
    receipt: Optional[str] = None
    payment: Optional[OrderPayment] = None
    createdAt: Optional[Any] = None
    updatedAt: Optional[Any] = None
