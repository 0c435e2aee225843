"""
storefront/routers/checkout.py
Checkout endpoints used by the storefront's Razorpay checkout button.

- POST /api/create-razorpay-order: creates the gateway order (amount in paise) and
  records a pending order document. Returns the gateway's id/currency/amount/receipt.
- POST /api/verify-payment: verifies the Razorpay callback signature and marks the
  order paid.

Error bodies follow what the storefront JS reads: `{"error": ...}` for order
creation, `{"success": false, "error": ...}` for verification.
"""
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from storefront.core.deps import Dependencies, get_deps
from storefront.core.errors import CheckoutError
from storefront.schemas.order import CreateOrderRequest, CreateOrderResponse
from storefront.schemas.payment import VerifyPaymentRequest, VerifyPaymentResponse
from storefront.services import checkout as checkout_service
from storefront.services import payments as payments_service

router = APIRouter(prefix="/api", tags=["Checkout"])


def _error_response(err: CheckoutError) -> JSONResponse:
    return JSONResponse(status_code=err.status_code, content=err.to_response())


@router.post("/create-razorpay-order", response_model=CreateOrderResponse)
def create_razorpay_order(payload: CreateOrderRequest, deps: Dependencies = Depends(get_deps)):
    try:
        return checkout_service.create_order(
            deps,
            amount=payload.amount,
            currency=payload.currency,
            receipt=payload.receipt,
            order_data=payload.orderData,
        )
    except CheckoutError as e:
        return _error_response(e)


@router.post("/verify-payment", response_model=VerifyPaymentResponse, response_model_exclude_none=True)
def verify_payment(payload: VerifyPaymentRequest, deps: Dependencies = Depends(get_deps)):
    try:
        return payments_service.verify_payment(
            deps,
            order_id=payload.orderId,
            razorpay_order_id=payload.razorpayOrderId,
            razorpay_payment_id=payload.razorpayPaymentId,
            razorpay_signature=payload.razorpaySignature,
        )
    except CheckoutError as e:
        return _error_response(e)
