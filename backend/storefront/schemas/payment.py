"""
storefront/schemas/payment.py - Pydantic models for payment verification and health.
"""
from typing import Dict, Optional

from pydantic import BaseModel, Field


class VerifyPaymentRequest(BaseModel):
    """Razorpay checkout callback payload, forwarded by the storefront client."""
    orderId: Optional[str] = Field(None, description="Order document id (the gateway order id)")
    razorpayOrderId: Optional[str] = None
    razorpayPaymentId: Optional[str] = None
    razorpaySignature: Optional[str] = None


class VerifyPaymentResponse(BaseModel):
    success: bool
    orderId: str
    razorpayPaymentId: str
    message: Optional[str] = None
    timestamp: Optional[str] = None
    warning: Optional[str] = None
    error: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    message: str
    timestamp: str
    environment: str
    services: Dict[str, str]
