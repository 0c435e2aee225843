"""
storefront/cart/dispatcher.py - Single entry point for storefront UI intents.

Every button/input on the page maps to one CartIntent; the dispatcher routes it
to the CartStore or toggles a panel. Panels are a closed enum, and at most one
of them is open at a time (opening the cart closes the account dropdown, and
the login/register modals replace each other).
"""
import enum
import logging
from typing import Any, Mapping, Optional, Set

from storefront.cart.store import CartStore

logger = logging.getLogger("storefront.ui")


class CartIntent(str, enum.Enum):
    ADD_ITEM = "add-item"
    REMOVE_ITEM = "remove-item"
    CHANGE_QUANTITY = "change-quantity"
    TOGGLE_PANEL = "toggle-panel"


class PanelKind(str, enum.Enum):
    CART = "cart"
    USER = "user"
    LOGIN = "login"
    REGISTER = "register"


class UIDispatcher:
    def __init__(self, store: CartStore):
        self.store = store
        self.open_panels: Set[PanelKind] = set()

    def is_open(self, panel: PanelKind) -> bool:
        return panel in self.open_panels

    def open(self, panel: PanelKind) -> None:
        self.open_panels = {panel}

    def close(self, panel: PanelKind) -> None:
        self.open_panels.discard(panel)

    def toggle(self, panel: PanelKind) -> bool:
        """Returns whether the panel is open afterwards."""
        if self.is_open(panel):
            self.close(panel)
            return False
        self.open(panel)
        return True

    def dispatch(self, intent: CartIntent, payload: Optional[Mapping[str, Any]] = None) -> Any:
        payload = payload or {}
        intent = CartIntent(intent)
        logger.debug("dispatch %s %r", intent.value, payload)

        if intent is CartIntent.ADD_ITEM:
            return self.store.add_item(payload.get("item", payload))
        if intent is CartIntent.TOGGLE_PANEL:
            panel = payload.get("panel")
            if panel is None:
                logger.error("Missing panel for %s", intent.value)
                return None
            return self.toggle(PanelKind(panel))

        item_id = payload.get("id")
        if item_id is None or item_id == "":
            logger.error("Missing item id for %s", intent.value)
            return None
        if intent is CartIntent.REMOVE_ITEM:
            return self.store.remove_item(item_id)
        if intent is CartIntent.CHANGE_QUANTITY:
            return self.store.update_quantity(item_id, payload.get("quantity"))
        raise ValueError(f"Unhandled intent: {intent}")
