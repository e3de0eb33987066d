# cart/store.py

"""
CART STORE

Holds the current CartState, dispatches every mutation through `reduce`,
and writes the line list back to storage synchronously after each one.
Drawer visibility is never persisted.
"""

from __future__ import annotations

import logging

from django.conf import settings

from cart.exceptions import CorruptCartError
from cart.state import (
    AddItem,
    CartState,
    ClearCart,
    CloseCart,
    LoadCart,
    OpenCart,
    ProductSnapshot,
    RemoveItem,
    ToggleCart,
    UpdateQuantity,
    reduce,
)
from cart.storage import CartStorage, deserialize_lines, serialize_lines

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "justfits-cart"


def storage_key() -> str:
    config = getattr(settings, "CHECKOUT", None) or {}
    return config.get("CART_STORAGE_KEY") or DEFAULT_STORAGE_KEY


class CartStore:
    def __init__(self, storage: CartStorage, *, key: str | None = None):
        self.storage = storage
        self.key = key or storage_key()
        self.state = CartState()
        self._load()

    def _load(self):
        raw = self.storage.read(self.key)
        if not raw:
            return
        try:
            lines = deserialize_lines(raw)
            self.state = reduce(self.state, LoadCart(lines=lines))
        except CorruptCartError:
            logger.warning("Discarding unreadable stored cart", extra={"key": self.key})
            self.state = CartState()
        except Exception:
            logger.exception("Discarding stored cart that failed to load", extra={"key": self.key})
            self.state = CartState()

    def _persist(self):
        self.storage.write(self.key, serialize_lines(self.state.lines))

    def dispatch(self, action) -> CartState:
        self.state = reduce(self.state, action)
        return self.state

    # ----------------------------
    # Mutations (persisted)
    # ----------------------------
    def add_item(self, product: ProductSnapshot, quantity: int = 1, size: str | None = None):
        self.dispatch(AddItem(product=product, quantity=quantity, size=size))
        self._persist()

    def remove_item(self, product_id, size: str | None = None):
        self.dispatch(RemoveItem(product_id=str(product_id), size=size))
        self._persist()

    def update_quantity(self, product_id, size: str | None, quantity: int):
        self.dispatch(UpdateQuantity(product_id=str(product_id), size=size, quantity=quantity))
        self._persist()

    def clear_cart(self):
        self.dispatch(ClearCart())
        self._persist()

    # ----------------------------
    # Drawer (not persisted)
    # ----------------------------
    def open_cart(self):
        self.dispatch(OpenCart())

    def close_cart(self):
        self.dispatch(CloseCart())

    def toggle_cart(self):
        self.dispatch(ToggleCart())

    # ----------------------------
    # Read side
    # ----------------------------
    @property
    def items(self) -> tuple:
        return self.state.lines

    @property
    def is_open(self) -> bool:
        return self.state.is_open

    @property
    def total_items(self) -> int:
        return self.state.total_items

    @property
    def total_price(self):
        return self.state.total_price
