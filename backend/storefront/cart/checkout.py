"""
storefront/cart/checkout.py - Cart → create-order request body.

Cart prices are major units (rupees); the order API takes minor units (paise),
so the conversion happens exactly once, here.
"""
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Dict, Optional

from storefront.cart.store import CartStore

MINOR_UNITS = 100


def to_minor_units(amount: float) -> int:
    """Raises ValueError when the amount has no integer minor-unit value."""
    try:
        return int((Decimal(str(amount)) * MINOR_UNITS).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    except (InvalidOperation, OverflowError):
        raise ValueError(f"Amount {amount!r} cannot be charged")


def build_order_request(store: CartStore, currency: str = "INR",
                        receipt: Optional[str] = None) -> Dict[str, Any]:
    """Body for POST /api/create-razorpay-order. Raises ValueError for an empty cart."""
    items = store.items
    if not items:
        raise ValueError("Cannot check out an empty cart")
    subtotal = store.calculate_subtotal()
    body: Dict[str, Any] = {
        "amount": to_minor_units(subtotal),
        "currency": currency,
        "orderData": {
            "items": [
                {
                    "id": it.id,
                    "name": it.name,
                    "price": it.price,
                    "quantity": it.quantity,
                    **({"size": it.size} if it.size is not None else {}),
                    **({"color": it.color} if it.color is not None else {}),
                }
                for it in items
            ],
            "itemCount": store.get_item_count(),
            "subtotal": subtotal,
        },
    }
    if receipt:
        body["receipt"] = receipt
    return body
