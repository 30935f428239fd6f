from __future__ import annotations
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, Dict, List, Optional, Tuple

from schemas import CartLineItem
from services.logger import get_logger

logger = get_logger(__name__)

LineKey = Tuple[int, str, str]
Listener = Callable[[Tuple[CartLineItem, ...]], None]

_CENTS = Decimal("0.01")


def format_price(value: Decimal) -> str:
    """Round to cents for display only; stored totals stay exact."""
    return str(Decimal(value).quantize(_CENTS, rounding=ROUND_HALF_UP))


class CartStore:
    """
    Session cart keyed by (product_id, size, color).
    All writes go through add/remove/update/clear; subscribers get a
    snapshot of the lines after every change that actually happened.
    """
    def __init__(self):
        self._lines: Dict[LineKey, CartLineItem] = {}
        self._listeners: List[Listener] = []

    # ---- observers ----

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    def _publish(self):
        snapshot = self.items
        for listener in list(self._listeners):
            listener(snapshot)

    # ---- queries ----

    @property
    def items(self) -> Tuple[CartLineItem, ...]:
        return tuple(self._lines.values())

    def get_total_price(self) -> Decimal:
        return sum((line.price * line.quantity for line in self._lines.values()), Decimal("0"))

    def get_item_count(self) -> int:
        return sum(line.quantity for line in self._lines.values())

    # ---- commands ----

    def add_item(self, item: CartLineItem) -> None:
        existing = self._lines.get(item.key)
        if existing:
            qty = existing.quantity + item.quantity
            self._lines[item.key] = existing.model_copy(update={"quantity": qty})
            logger.debug(f"cart: {item.key} quantity {existing.quantity} -> {qty}")
        else:
            self._lines[item.key] = item.model_copy()
            logger.debug(f"cart: added {item.key} x{item.quantity}")
        self._publish()

    def remove_item(self, product_id: int, size: str, color: str) -> None:
        if self._lines.pop((product_id, size, color), None) is None:
            return
        logger.debug(f"cart: removed {(product_id, size, color)}")
        self._publish()

    def update_quantity(self, product_id: int, size: str, color: str, new_quantity: int) -> None:
        if new_quantity <= 0:
            self.remove_item(product_id, size, color)
            return
        key = (product_id, size, color)
        existing = self._lines.get(key)
        if existing is None:
            return
        self._lines[key] = existing.model_copy(update={"quantity": int(new_quantity)})
        logger.debug(f"cart: {key} quantity set to {new_quantity}")
        self._publish()

    def clear(self) -> None:
        self._lines.clear()
        logger.debug("cart: cleared")
        self._publish()


class CartRegistry:
    """Process-local carts, one per session id."""
    def __init__(self):
        self._carts: Dict[str, CartStore] = {}

    def get(self, session_id: str) -> CartStore:
        cart = self._carts.get(session_id)
        if cart is None:
            cart = self._carts[session_id] = CartStore()
            logger.info(f"New cart for session {session_id}")
        return cart

    def find(self, session_id: str) -> Optional[CartStore]:
        """Existing cart or None; never creates one."""
        return self._carts.get(session_id)

    def drop(self, session_id: str) -> bool:
        if self._carts.pop(session_id, None) is None:
            return False
        logger.info(f"Dropped cart for session {session_id}")
        return True

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._carts

    def __len__(self) -> int:
        return len(self._carts)
