"""
storefront/cart/renderer.py - Projects cart state into the cart dropdown view.

No diffing: every store change produces a complete CartView which the sink
(template layer, websocket push, test recorder ...) draws as-is.
"""
from typing import Callable, List, Optional

from pydantic import BaseModel

from storefront.schemas.cart import CartItem

EMPTY_MESSAGE = "Your bag is empty"
CURRENCY_SYMBOL = "₹"


class CartRow(BaseModel):
    id: str
    name: str
    image: str
    unit_price: str
    quantity: int
    line_total: str
    can_decrease: bool


class CartView(BaseModel):
    rows: List[CartRow]
    item_count: int
    item_count_label: str
    subtotal: str
    is_empty: bool
    empty_message: Optional[str] = None


def format_currency(amount: float) -> str:
    """1234.5 -> '₹1,234.50'"""
    return f"{CURRENCY_SYMBOL}{amount:,.2f}"


def render_cart(items: List[CartItem]) -> CartView:
    count = sum(it.quantity for it in items)
    subtotal = sum((it.price * it.quantity for it in items), 0.0)
    rows = [
        CartRow(
            id=it.id,
            name=it.name,
            image=it.image,
            unit_price=format_currency(it.price),
            quantity=it.quantity,
            line_total=format_currency(it.line_total),
            can_decrease=it.quantity > 1,
        )
        for it in items
    ]
    return CartView(
        rows=rows,
        item_count=count,
        item_count_label=f"{count} {'item' if count == 1 else 'items'}",
        subtotal=format_currency(subtotal),
        is_empty=not rows,
        empty_message=EMPTY_MESSAGE if not rows else None,
    )


class CartRenderer:
    """Subscribes to a CartStore and pushes a full redraw on every mutation."""

    def __init__(self, store, sink: Callable[[CartView], None]):
        self.sink = sink
        self.last_view: Optional[CartView] = None
        store.subscribe(self.render)
        self.render(store.items)

    def render(self, items: List[CartItem]) -> CartView:
        self.last_view = render_cart(items)
        self.sink(self.last_view)
        return self.last_view
