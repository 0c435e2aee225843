"""
storefront/cart/store.py - The shopping cart state container.

Behavior
- One ordered list of CartItem per browser session, insertion order preserved.
- Lines are unique by (id, size, color); adding the same triple again bumps quantity.
- remove_item() drops EVERY line with the given id, whatever its size/color.
- Every mutation writes the whole cart to storage right away (key `shoppingCart`),
  then notifies subscribers (the renderer redraws from scratch).
- A corrupt stored cart is logged and replaced by an empty one, persisted immediately.
"""
import json
import logging
import math
import re
from typing import Any, Callable, List, Mapping, Optional

from pydantic import BaseModel, ValidationError

from storefront.cart.notifications import Notifier
from storefront.cart.storage import CartStorage
from storefront.schemas.cart import CartItem
from storefront.utils.clock import iso_now

logger = logging.getLogger("storefront.cart")

STORAGE_KEY = "shoppingCart"
REQUIRED_FIELDS = ("id", "name", "price", "image")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

Listener = Callable[[List[CartItem]], None]


def serialize(items: List[CartItem]) -> str:
    return json.dumps([it.model_dump(mode="json", exclude_none=True) for it in items], ensure_ascii=False)


def deserialize(raw: str) -> List[CartItem]:
    data = json.loads(raw)
    if not isinstance(data, list):
        raise ValueError("stored cart is not a list")
    return [CartItem.model_validate(entry) for entry in data]


def parse_quantity(value: Any) -> Optional[int]:
    """
    Positive integer or None. Numbers are truncated and strings read up to their
    first non-digit, so 5.5 and "5.5" both give 5 (same as a quantity input).
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        n = value
    elif isinstance(value, float):
        if not math.isfinite(value):
            return None
        n = int(value)
    elif isinstance(value, str):
        m = _LEADING_INT.match(value)
        if m is None:
            return None
        n = int(m.group(1))
    else:
        return None
    return n if n >= 1 else None


def _parse_price(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        price = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(price) or price < 0:
        return None
    return price


def _optional_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)


class CartStore:
    def __init__(self, storage: CartStorage, notifier: Optional[Notifier] = None,
                 clock: Callable[[], str] = iso_now):
        self.storage = storage
        self.notifier = notifier or Notifier()
        self._clock = clock
        self._items: List[CartItem] = []
        self._listeners: List[Listener] = []
        self.load()

    # ---------- persistence ----------
    def load(self) -> None:
        try:
            raw = self.storage.get_item(STORAGE_KEY)
            self._items = deserialize(raw) if raw else []
        except (ValueError, TypeError, ValidationError) as e:
            logger.error("Error loading cart from storage, resetting: %s", e)
            self._items = []
            self._save()

    def _save(self) -> None:
        try:
            self.storage.set_item(STORAGE_KEY, serialize(self._items))
        except OSError:
            logger.exception("Error saving cart to storage")

    # ---------- observers ----------
    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def _changed(self) -> None:
        self._save()
        snapshot = self.items
        for listener in self._listeners:
            listener(snapshot)

    # ---------- reads ----------
    @property
    def items(self) -> List[CartItem]:
        return [it.model_copy(deep=True) for it in self._items]

    def calculate_subtotal(self) -> float:
        return sum((it.price * it.quantity for it in self._items), 0.0)

    def get_item_count(self) -> int:
        return sum(it.quantity for it in self._items)

    # ---------- mutations ----------
    def _validate(self, item: Any) -> Optional[dict]:
        if isinstance(item, BaseModel):
            item = item.model_dump()
        if not isinstance(item, Mapping):
            return None
        for field in REQUIRED_FIELDS:
            value = item.get(field)
            if value is None or value == "":
                logger.error("Missing or invalid field: %s (%r)", field, item)
                return None
        price = _parse_price(item.get("price"))
        if price is None:
            logger.error("Invalid price %r for item %r", item.get("price"), item.get("id"))
            return None
        data = {k: v for k, v in item.items() if k not in ("quantity", "addedAt")}
        data.update(
            id=str(item["id"]),
            name=str(item["name"]),
            image=str(item["image"]),
            price=price,
            size=_optional_str(item.get("size")),
            color=_optional_str(item.get("color")),
        )
        # memory holds exactly what storage will hold
        try:
            stored = CartItem(**data, quantity=1).model_dump(mode="json", exclude={"quantity", "addedAt"})
            json.dumps(stored)
        except (ValueError, TypeError) as e:
            logger.error("Item %r cannot be stored: %s", data["id"], e)
            return None
        return stored

    def add_item(self, item: Any) -> bool:
        data = self._validate(item)
        if data is None:
            logger.error("Invalid item format")
            return False
        quantity = parse_quantity(item.get("quantity") if isinstance(item, Mapping) else getattr(item, "quantity", None)) or 1

        key = (data["id"], data["size"], data["color"])
        for existing in self._items:
            if existing.key == key:
                existing.quantity += quantity
                break
        else:
            self._items.append(CartItem(**data, quantity=quantity, addedAt=self._clock()))

        self._changed()
        self.notifier.info("Item added to cart")
        return True

    def remove_item(self, item_id: Any) -> None:
        item_id = str(item_id)
        self._items = [it for it in self._items if it.id != item_id]
        self._changed()
        self.notifier.info("Item removed from cart")

    def update_quantity(self, item_id: Any, quantity: Any) -> None:
        n = parse_quantity(quantity)
        if n is None:
            return
        item_id = str(item_id)
        for it in self._items:
            if it.id == item_id:
                it.quantity = n
                self._changed()
                return

    def clear(self) -> None:
        self._items = []
        self._changed()
