# cart/state.py

"""
CART STATE + REDUCER

Purpose:
- Immutable cart state and the actions that change it.
- `reduce(state, action)` is the ONLY transition function. It is pure:
  no I/O, no stock lookups, no persistence.

Rules:
- A line is identified by (product id, size). At most one line per key.
- Quantity <= 0 on update removes the line.
- Adding opens the drawer; clearing leaves drawer visibility alone.
- Totals are derived on read, never stored.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from decimal import Decimal

from cart.exceptions import InvalidCartLineError

NO_SIZE = "no size selected"


def normalize_size(size) -> str:
    size = str(size).strip() if size is not None else ""
    return size or NO_SIZE


# ============================================================
# VALUE TYPES
# ============================================================


@dataclass(frozen=True)
class ProductSnapshot:
    """Copy of the product as the shopper saw it when adding to cart."""

    id: str
    slug: str
    name: str
    price: Decimal
    images: tuple = ()
    category: str = ""
    sizes: tuple = ()

    def __post_init__(self):
        object.__setattr__(self, "id", str(self.id))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "slug": self.slug,
            "name": self.name,
            "price": str(self.price),
            "images": list(self.images),
            "category": self.category,
            "sizes": list(self.sizes),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ProductSnapshot":
        return cls(
            id=str(data["id"]),
            slug=str(data.get("slug") or ""),
            name=str(data.get("name") or ""),
            price=Decimal(str(data["price"])),
            images=tuple(data.get("images") or ()),
            category=str(data.get("category") or ""),
            sizes=tuple(data.get("sizes") or ()),
        )


@dataclass(frozen=True)
class CartLine:
    product: ProductSnapshot
    quantity: int
    size: str = NO_SIZE

    @property
    def key(self) -> tuple:
        return (self.product.id, self.size)

    @property
    def line_id(self) -> str:
        suffix = self.size if self.size and self.size != NO_SIZE else "default"
        return f"{self.product.id}-{suffix}"

    @property
    def line_total(self) -> Decimal:
        return self.product.price * self.quantity


@dataclass(frozen=True)
class CartState:
    lines: tuple = ()
    is_open: bool = False

    @property
    def total_items(self) -> int:
        return sum(line.quantity for line in self.lines)

    @property
    def total_price(self) -> Decimal:
        return sum((line.line_total for line in self.lines), Decimal("0"))

    def find(self, product_id, size) -> CartLine | None:
        key = (str(product_id), normalize_size(size))
        for line in self.lines:
            if line.key == key:
                return line
        return None


# ============================================================
# ACTIONS
# ============================================================


@dataclass(frozen=True)
class AddItem:
    product: ProductSnapshot
    quantity: int = 1
    size: str | None = None


@dataclass(frozen=True)
class RemoveItem:
    product_id: str
    size: str | None = None


@dataclass(frozen=True)
class UpdateQuantity:
    product_id: str
    size: str | None
    quantity: int


@dataclass(frozen=True)
class ClearCart:
    pass


@dataclass(frozen=True)
class OpenCart:
    pass


@dataclass(frozen=True)
class CloseCart:
    pass


@dataclass(frozen=True)
class ToggleCart:
    pass


@dataclass(frozen=True)
class LoadCart:
    lines: tuple = field(default_factory=tuple)


# ============================================================
# REDUCER
# ============================================================


def _merge(lines) -> tuple:
    merged: dict = {}
    for line in lines:
        if line.key in merged:
            existing = merged[line.key]
            merged[line.key] = replace(existing, quantity=existing.quantity + line.quantity)
        else:
            merged[line.key] = line
    return tuple(merged.values())


def _without(lines, key) -> tuple:
    return tuple(line for line in lines if line.key != key)


def reduce(state: CartState, action) -> CartState:
    if isinstance(action, AddItem):
        quantity = int(action.quantity)
        if quantity < 1:
            raise InvalidCartLineError("quantity must be at least 1")

        size = normalize_size(action.size)
        key = (str(action.product.id), size)

        if any(line.key == key for line in state.lines):
            lines = tuple(
                replace(line, quantity=line.quantity + quantity) if line.key == key else line
                for line in state.lines
            )
        else:
            lines = state.lines + (CartLine(product=action.product, quantity=quantity, size=size),)

        return replace(state, lines=lines, is_open=True)

    if isinstance(action, RemoveItem):
        key = (str(action.product_id), normalize_size(action.size))
        return replace(state, lines=_without(state.lines, key))

    if isinstance(action, UpdateQuantity):
        key = (str(action.product_id), normalize_size(action.size))
        quantity = int(action.quantity)
        if quantity <= 0:
            return replace(state, lines=_without(state.lines, key))
        return replace(
            state,
            lines=tuple(
                replace(line, quantity=quantity) if line.key == key else line
                for line in state.lines
            ),
        )

    if isinstance(action, ClearCart):
        return replace(state, lines=())

    if isinstance(action, OpenCart):
        return replace(state, is_open=True)

    if isinstance(action, CloseCart):
        return replace(state, is_open=False)

    if isinstance(action, ToggleCart):
        return replace(state, is_open=not state.is_open)

    if isinstance(action, LoadCart):
        return replace(state, lines=_merge(action.lines))

    raise TypeError(f"Unknown cart action: {type(action).__name__}")
