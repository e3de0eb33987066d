# orders/services/pricing.py

"""
PRICING RULES

Single source of truth for shipping + tax. Cart summaries, checkout totals
and the order materializer all go through here.

Rules:
- subtotal >= FREE_SHIPPING_THRESHOLD -> shipping is free
- otherwise a flat FLAT_SHIPPING_FEE applies
- tax = subtotal * TAX_RATE (zero unless configured)
- all money is Decimal, 2dp, ROUND_HALF_UP
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from django.conf import settings

TWOPLACES = Decimal("0.01")

_DEFAULTS = {
    "FREE_SHIPPING_THRESHOLD": "50000",
    "FLAT_SHIPPING_FEE": "3500",
    "TAX_RATE": "0",
}


def money(v) -> Decimal:
    if v is None or v == "":
        return Decimal("0.00")
    return Decimal(str(v)).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def _setting(name: str):
    config = getattr(settings, "CHECKOUT", None) or {}
    value = config.get(name)
    if value is None or value == "":
        return _DEFAULTS[name]
    return value


def free_shipping_threshold() -> Decimal:
    return money(_setting("FREE_SHIPPING_THRESHOLD"))


def shipping_fee() -> Decimal:
    return money(_setting("FLAT_SHIPPING_FEE"))


def tax_rate() -> Decimal:
    return Decimal(str(_setting("TAX_RATE")))


def shipping_for(subtotal) -> Decimal:
    if money(subtotal) >= free_shipping_threshold():
        return Decimal("0.00")
    return shipping_fee()


def amount_to_free_shipping(subtotal) -> Decimal:
    remaining = free_shipping_threshold() - money(subtotal)
    return remaining if remaining > 0 else Decimal("0.00")


@dataclass(frozen=True)
class OrderTotals:
    subtotal: Decimal
    shipping_cost: Decimal
    tax: Decimal
    total: Decimal

    def as_dict(self) -> dict:
        return {
            "subtotal": str(self.subtotal),
            "shipping": str(self.shipping_cost),
            "tax": str(self.tax),
            "total": str(self.total),
        }


def compute_totals(subtotal) -> OrderTotals:
    sub = money(subtotal)
    shipping = shipping_for(sub)
    tax = money(sub * tax_rate())
    return OrderTotals(
        subtotal=sub,
        shipping_cost=shipping,
        tax=tax,
        total=money(sub + shipping + tax),
    )


def default_country() -> str:
    config = getattr(settings, "CHECKOUT", None) or {}
    return (config.get("DEFAULT_COUNTRY") or "Nigeria").strip()
