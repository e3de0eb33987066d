# cart/storage.py

"""
CART PERSISTENCE

The cart survives between requests as a JSON list of lines stored under one
fixed key. Two adapters:
- SessionCartStorage: Django session (server-side stand-in for the
  browser's local storage)
- MemoryCartStorage: plain dict, for tests and scripts

Limitation: two sessions editing the "same" cart is last-write-wins.
"""

from __future__ import annotations

import json
from decimal import Decimal, InvalidOperation
from typing import Protocol

from cart.exceptions import CorruptCartError
from cart.state import CartLine, ProductSnapshot, normalize_size

# Stored-line bounds; the price cap matches ProductVariant.price (12 digits, 2dp).
MAX_STORED_PRICE = Decimal("9999999999.99")
MAX_STORED_QUANTITY = 10_000


class CartStorage(Protocol):
    def read(self, key: str) -> str | None: ...

    def write(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryCartStorage:
    def __init__(self, initial: dict | None = None):
        self.data = dict(initial or {})

    def read(self, key: str) -> str | None:
        return self.data.get(key)

    def write(self, key: str, value: str) -> None:
        self.data[key] = value

    def delete(self, key: str) -> None:
        self.data.pop(key, None)


class SessionCartStorage:
    def __init__(self, session):
        self.session = session

    def read(self, key: str) -> str | None:
        value = self.session.get(key)
        return value if value is None or isinstance(value, str) else json.dumps(value)

    def write(self, key: str, value: str) -> None:
        self.session[key] = value
        self.session.modified = True

    def delete(self, key: str) -> None:
        if key in self.session:
            del self.session[key]


def serialize_lines(lines) -> str:
    return json.dumps(
        [
            {
                "id": line.line_id,
                "product": line.product.to_dict(),
                "quantity": line.quantity,
                "size": line.size,
            }
            for line in lines
        ]
    )


def deserialize_lines(raw: str) -> tuple:
    try:
        payload = json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise CorruptCartError("Stored cart is not valid JSON") from exc

    if not isinstance(payload, list):
        raise CorruptCartError("Stored cart must be a list of lines")

    lines = []
    for idx, entry in enumerate(payload):
        try:
            quantity = int(entry["quantity"])
            product = ProductSnapshot.from_dict(entry["product"])
        except (KeyError, TypeError, ValueError, OverflowError, InvalidOperation) as exc:
            raise CorruptCartError(f"Stored cart line {idx} is malformed") from exc

        price = product.price
        if not price.is_finite() or not Decimal("0") <= price <= MAX_STORED_PRICE:
            raise CorruptCartError(f"Stored cart line {idx} has an invalid price")
        if not 1 <= quantity <= MAX_STORED_QUANTITY:
            raise CorruptCartError(f"Stored cart line {idx} has invalid values")

        lines.append(CartLine(product=product, quantity=quantity, size=normalize_size(entry.get("size"))))

    return tuple(lines)
