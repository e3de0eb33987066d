# orders/services/order_materializer.py

"""
ORDER MATERIALIZER (APPLICATION SERVICE)

Purpose:
- Turn a submitted cart + contact + shipping details into a durable
  Address -> Order -> OrderItem graph.

Hard rules:
- Money values are computed server-side; client totals are only checked,
  never trusted. A mismatch rejects the request.
- Line prices are the cart prices the customer saw (price integrity).
- Orders start PENDING. No payment capture, no stock decrement, no emails.

Notes:
- Everything from the Address insert to the last OrderItem runs in ONE
  transaction: a failure anywhere (including catalog fabrication) leaves
  no orphaned address and no half-written order.
- OperationalError (connection / lock timeout) is surfaced as retryable;
  any other DatabaseError is permanent.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import validate_email
from django.db import DatabaseError, OperationalError, transaction

from orders.models import Address, Order, OrderItem
from orders.services import pricing
from orders.services.exceptions import (
    CheckoutError,
    CheckoutValidationError,
    PermanentPersistenceError,
    TransientPersistenceError,
)
from orders.services.order_number import generate_order_number
from products.services.catalog_resolver import CartLineInput, ResolvedLine, resolve_lines

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContactDetails:
    email: str
    phone: str = ""


@dataclass(frozen=True)
class ShippingDetails:
    first_name: str
    last_name: str
    street: str
    city: str
    state: str
    postal_code: str = ""
    country: str = ""


@dataclass(frozen=True)
class CheckoutRequest:
    user: object
    contact: ContactDetails
    shipping: ShippingDetails
    lines: list = field(default_factory=list)
    subtotal: Decimal | None = None
    shipping_cost: Decimal | None = None
    total: Decimal | None = None


@dataclass(frozen=True)
class MaterializedOrder:
    order: Order
    resolutions: list = field(default_factory=list)

    @property
    def id(self):
        return self.order.id

    @property
    def order_number(self) -> str:
        return self.order.order_number


# ============================================================
# VALIDATION (before any write)
# ============================================================


def _require(errors: dict, name: str, value) -> None:
    if not (value or "").strip():
        errors[name] = "This field is required."


def _validate(request: CheckoutRequest) -> None:
    errors = {}

    if not request.lines:
        raise CheckoutValidationError("Cart is empty")

    _require(errors, "email", request.contact.email)
    if "email" not in errors:
        try:
            validate_email(request.contact.email.strip())
        except ValidationError:
            errors["email"] = "Enter a valid email address."

    shipping = request.shipping
    for name in ("first_name", "last_name", "street", "city", "state"):
        _require(errors, name, getattr(shipping, name))

    line_errors = {}
    for idx, line in enumerate(request.lines):
        if int(line.quantity or 0) < 1:
            line_errors[idx] = "quantity must be at least 1"
        elif line.price is None or Decimal(str(line.price)) < 0:
            line_errors[idx] = "price must be >= 0"
        elif not ((line.product_slug or "").strip() or (line.product_name or "").strip()):
            line_errors[idx] = "productSlug or productName is required"
    if line_errors:
        errors["items"] = line_errors

    if errors:
        raise CheckoutValidationError("Missing required fields", details=errors)


def subtotal_of(lines) -> Decimal:
    return pricing.money(
        sum((Decimal(str(l.price)) * int(l.quantity) for l in lines), Decimal("0.00"))
    )


def _check_client_totals(request: CheckoutRequest, totals: pricing.OrderTotals) -> None:
    claimed = {
        "subtotal": (request.subtotal, totals.subtotal),
        "shipping": (request.shipping_cost, totals.shipping_cost),
        "total": (request.total, totals.total),
    }
    mismatched = {
        name: {"submitted": str(pricing.money(sent)), "expected": str(expected)}
        for name, (sent, expected) in claimed.items()
        if sent is not None and pricing.money(sent) != expected
    }
    if mismatched:
        raise CheckoutValidationError("Order totals do not match", details=mismatched)


# ============================================================
# PERSISTENCE (single transaction)
# ============================================================


@transaction.atomic
def _persist(request: CheckoutRequest, totals: pricing.OrderTotals) -> MaterializedOrder:
    shipping = request.shipping

    address = Address.objects.create(
        user=request.user,
        first_name=shipping.first_name.strip(),
        last_name=shipping.last_name.strip(),
        phone=(request.contact.phone or "").strip(),
        street=shipping.street.strip(),
        city=shipping.city.strip(),
        state=shipping.state.strip(),
        postal_code=(shipping.postal_code or "").strip(),
        country=(shipping.country or "").strip() or pricing.default_country(),
    )

    resolutions: list[ResolvedLine] = resolve_lines(request.lines)

    order = Order.objects.create(
        order_number=generate_order_number(),
        user=request.user,
        shipping_address=address,
        status=Order.STATUS_PENDING,
        subtotal=totals.subtotal,
        shipping_cost=totals.shipping_cost,
        tax=totals.tax,
        total=totals.total,
    )

    OrderItem.objects.bulk_create(
        [
            OrderItem(
                order=order,
                variant=r.variant,
                quantity=r.quantity,
                price=pricing.money(r.price),
            )
            for r in resolutions
        ]
    )

    return MaterializedOrder(order=order, resolutions=resolutions)


def materialize_order(request: CheckoutRequest) -> MaterializedOrder:
    _validate(request)

    totals = pricing.compute_totals(subtotal_of(request.lines))
    _check_client_totals(request, totals)

    try:
        result = _persist(request, totals)
    except CheckoutError:
        raise
    except OperationalError as exc:
        logger.exception("Order persistence failed (transient)")
        raise TransientPersistenceError(
            "Could not save your order right now. Please try again."
        ) from exc
    except DatabaseError as exc:
        logger.exception("Order persistence failed")
        raise PermanentPersistenceError("Failed to create order") from exc

    logger.info(
        "Order created",
        extra={
            "order_number": result.order_number,
            "user_id": str(getattr(request.user, "id", "")),
            "total": str(totals.total),
            "lines": len(result.resolutions),
        },
    )
    return result


def build_line(*, product_slug: str, product_name: str, size: str, price, quantity) -> CartLineInput:
    return CartLineInput(
        product_slug=(product_slug or "").strip(),
        product_name=(product_name or "").strip(),
        size=(size or "").strip(),
        price=Decimal(str(price)),
        quantity=int(quantity),
    )
