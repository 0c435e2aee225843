"""
storefront/integrations/payment.py - Payment gateway (Razorpay) integration.

Wraps the official Razorpay SDK client (key id / key secret) for order creation,
plus the HMAC signature check Razorpay's checkout callback is verified with.
Responses are returned as plain dicts, exactly as Razorpay sends them.
"""
import logging
from typing import Any, Dict, Optional

import razorpay
import requests
from razorpay.errors import BadRequestError, GatewayError, ServerError

from storefront.core.crypto import hmac_hash

logger = logging.getLogger("storefront.razorpay")

_ERROR_CODES = {
    BadRequestError: "BAD_REQUEST_ERROR",
    GatewayError: "GATEWAY_ERROR",
    ServerError: "SERVER_ERROR",
}


class RazorpayError(Exception):
    """Razorpay rejected a request or could not be reached."""

    def __init__(self, description: str, code: Optional[str] = None):
        super().__init__(description)
        self.description = description
        self.code = code


class RazorpayGateway:
    def __init__(self, key_id: str, key_secret: str,
                 base_url: str = "https://api.razorpay.com", timeout: float = 15.0,
                 session: Optional[requests.Session] = None):
        self.key_id = key_id
        self.key_secret = key_secret
        self.timeout = timeout
        self._client = razorpay.Client(session=session, auth=(key_id, key_secret),
                                       base_url=base_url.rstrip("/"))

    @property
    def configured(self) -> bool:
        return bool(self.key_id and self.key_secret)

    def create_order(self, amount: int, currency: str, receipt: str,
                     payment_capture: int = 1) -> Dict[str, Any]:
        """
        `amount` must already be an integer in minor units (paise).
        Raises RazorpayError with the gateway's error description on failure.
        """
        data = {
            "amount": amount,
            "currency": currency,
            "receipt": receipt,
            "payment_capture": payment_capture,
        }
        try:
            return self._client.order.create(data=data, timeout=self.timeout)
        except (BadRequestError, GatewayError, ServerError) as e:
            # SDK errors carry the gateway's error.description as their message
            logger.warning("Razorpay order create failed: %s", e)
            raise RazorpayError(str(e) or "Razorpay error", code=_ERROR_CODES[type(e)]) from e
        except requests.RequestException as e:
            raise RazorpayError(f"Razorpay request failed: {e}") from e

    def expected_signature(self, razorpay_order_id: str, razorpay_payment_id: str) -> str:
        return hmac_hash(self.key_secret, razorpay_order_id, razorpay_payment_id)

    def close(self) -> None:
        self._client.session.close()
