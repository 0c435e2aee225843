"""
storefront/core/errors.py - Checkout/payment error types.

Services raise these; routers turn them into the JSON bodies the storefront
client expects (`{"error": ...}` for order creation, `{"success": false, ...}`
for payment verification).
"""
from typing import Any, Dict, Optional


class CheckoutError(Exception):
    status_code = 500
    # verification responses carry a `success` flag, order creation responses don't
    with_success_flag = False

    def __init__(self, error: str, details: Optional[str] = None):
        super().__init__(error)
        self.error = error
        self.details = details

    def to_response(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {}
        if self.with_success_flag:
            body["success"] = False
        body["error"] = self.error
        if self.details is not None:
            body["details"] = self.details
        return body


class InvalidAmountError(CheckoutError):
    status_code = 400

    def __init__(self):
        super().__init__("Invalid amount")


class OrderCreationError(CheckoutError):
    """The gateway refused or failed to create the order."""

    def __init__(self, details: Optional[str] = None):
        super().__init__("Failed to create order", details=details or "Unknown gateway error")


class PaymentError(CheckoutError):
    with_success_flag = True


class MissingParametersError(PaymentError):
    status_code = 400

    def __init__(self):
        super().__init__(
            "Missing required parameters. Need orderId, razorpayPaymentId, "
            "razorpayOrderId, and razorpaySignature"
        )


class SignatureMismatchError(PaymentError):
    status_code = 400

    def __init__(self):
        super().__init__("Invalid payment signature")


class VerificationFailedError(PaymentError):
    def __init__(self, details: Optional[str] = None):
        super().__init__("Payment verification failed", details=details)
