# storefront/services/payments.py
"""
Razorpay payment verification.

Order.status state machine:  created --(signature ok & store update ok)--> paid
A signature mismatch leaves the order at `created`. Two concurrent verifications
of the same order race on the update (last write wins); there is no transaction.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from storefront.core.crypto import signature_payload, signatures_match
from storefront.core.deps import Dependencies
from storefront.core.errors import (
    CheckoutError,
    MissingParametersError,
    SignatureMismatchError,
    VerificationFailedError,
)
from storefront.repositories import orders as orders_repo
from storefront.repositories import payment_attempts
from storefront.utils.clock import iso_now

logger = logging.getLogger("storefront.payments")

STATUS_UPDATE_WARNING = "Payment verified but order status update failed"


def verify_payment(
    deps: Dependencies,
    order_id: Optional[str],
    razorpay_order_id: Optional[str],
    razorpay_payment_id: Optional[str],
    razorpay_signature: Optional[str],
) -> Dict[str, Any]:
    if not (order_id and razorpay_order_id and razorpay_payment_id and razorpay_signature):
        logger.error(
            "Missing required parameters: orderId=%r razorpayPaymentId=%s razorpayOrderId=%s",
            order_id, bool(razorpay_payment_id), bool(razorpay_order_id),
        )
        raise MissingParametersError()

    try:
        return _verify(deps, order_id, razorpay_order_id, razorpay_payment_id, razorpay_signature)
    except CheckoutError:
        raise
    except Exception as e:
        logger.exception("Payment verification error")
        raise VerificationFailedError(details=str(e))


def _verify(deps: Dependencies, order_id: str, razorpay_order_id: str,
            razorpay_payment_id: str, razorpay_signature: str) -> Dict[str, Any]:
    logger.info("Verifying payment for order: %s", order_id)
    expected = deps.gateway.expected_signature(razorpay_order_id, razorpay_payment_id)

    if not signatures_match(expected, razorpay_signature):
        logger.error(
            "Invalid signature received for order %s (payload %r)",
            order_id, signature_payload(razorpay_order_id, razorpay_payment_id),
        )
        if deps.db is not None:
            try:
                payment_attempts.log_signature_mismatch(
                    deps.db,
                    deps.settings.collection(payment_attempts.COL),
                    order_id=order_id,
                    razorpay_order_id=razorpay_order_id,
                    razorpay_payment_id=razorpay_payment_id,
                    received=razorpay_signature,
                    expected=expected,
                )
            except Exception:
                logger.error("Failed to log failed verification attempt", exc_info=True)
        raise SignatureMismatchError()

    logger.info("Payment signature verified for order: %s", order_id)

    if deps.db is not None:
        try:
            orders_repo.mark_paid(
                deps.db,
                deps.settings.collection(orders_repo.COL),
                order_id,
                razorpay_order_id=razorpay_order_id,
                razorpay_payment_id=razorpay_payment_id,
            )
            logger.info("Updated order status to paid: %s", order_id)
        except Exception as e:
            # money has moved; report success and let the caller reconcile
            logger.error("Firestore update error for order %s: %s", order_id, e)
            return {
                "success": True,
                "orderId": order_id,
                "razorpayPaymentId": razorpay_payment_id,
                "warning": STATUS_UPDATE_WARNING,
                "error": str(e),
            }
    else:
        logger.warning("Firestore not available - skipping order status update")

    return {
        "success": True,
        "orderId": order_id,
        "razorpayPaymentId": razorpay_payment_id,
        "message": "Payment verified successfully",
        "timestamp": iso_now(),
    }
