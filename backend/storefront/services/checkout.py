# storefront/services/checkout.py
"""
Gateway order creation for checkout.

Amounts are ALWAYS integer minor units (paise for INR) at this boundary; the
storefront converts its cart subtotal before calling (see storefront.cart.checkout).
"""
from __future__ import annotations

import logging
import time
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Dict, Optional

from storefront.core.deps import Dependencies
from storefront.core.errors import InvalidAmountError, OrderCreationError
from storefront.repositories import orders as orders_repo

logger = logging.getLogger("storefront.checkout")

DEFAULT_CURRENCY = "INR"


def parse_amount(value: Any) -> int:
    """Numeric (number or numeric string) → positive int, rounded half-up."""
    if value is None or isinstance(value, bool):
        raise InvalidAmountError()
    if isinstance(value, str):
        value = value.strip()
        if not value:
            raise InvalidAmountError()
    try:
        d = Decimal(str(value))
        if not d.is_finite():
            raise InvalidAmountError()
        # quantize traps InvalidOperation past the context precision (28 digits)
        rounded = int(d.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    except (InvalidOperation, ValueError):
        raise InvalidAmountError()
    if rounded < 1:
        raise InvalidAmountError()
    return rounded


def fallback_receipt() -> str:
    return f"order_{int(time.time() * 1000)}"


def create_order(
    deps: Dependencies,
    amount: Any,
    currency: Optional[str] = DEFAULT_CURRENCY,
    receipt: Optional[str] = None,
    order_data: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    amount_minor = parse_amount(amount)
    currency = (currency or DEFAULT_CURRENCY).upper()
    receipt = receipt or fallback_receipt()

    try:
        order = deps.gateway.create_order(
            amount=amount_minor,
            currency=currency,
            receipt=receipt,
            payment_capture=1,
        )
    except Exception as e:
        logger.error("Error creating Razorpay order: %s", e)
        raise OrderCreationError(details=getattr(e, "description", None) or str(e) or None)

    # Gateway order exists from here on; the local record is best-effort.
    if deps.db is not None:
        try:
            orders_repo.create_pending(
                deps.db,
                deps.settings.collection(orders_repo.COL),
                order,
                order_data=order_data,
            )
        except Exception:
            logger.warning("Failed to save order %s to Firestore", order.get("id"), exc_info=True)

    logger.info("Created Razorpay order %s (%s %s)", order.get("id"), order.get("amount"), order.get("currency"))
    return {
        "id": order["id"],
        "currency": order.get("currency"),
        "amount": order.get("amount"),
        "receipt": order.get("receipt"),
    }
