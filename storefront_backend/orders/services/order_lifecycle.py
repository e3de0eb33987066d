"""
ORDER LIFECYCLE DOMAIN RULES

This module defines the ONLY allowed status transitions for Order entities.

PENDING -> PROCESSING -> SHIPPED -> DELIVERED
PENDING / PROCESSING -> CANCELLED

DELIVERED and CANCELLED are terminal.
"""

import logging

from django.db import transaction

from orders.models import Order
from orders.services.exceptions import InvalidOrderTransitionError

logger = logging.getLogger(__name__)

# ============================================================
# STATE DEFINITIONS
# ============================================================

TERMINAL_STATES = {
    Order.STATUS_DELIVERED,
    Order.STATUS_CANCELLED,
}

ALLOWED_TRANSITIONS = {
    Order.STATUS_PENDING: {
        Order.STATUS_PROCESSING,
        Order.STATUS_CANCELLED,
    },
    Order.STATUS_PROCESSING: {
        Order.STATUS_SHIPPED,
        Order.STATUS_CANCELLED,
    },
    Order.STATUS_SHIPPED: {
        Order.STATUS_DELIVERED,
    },
}


# ============================================================
# DOMAIN RULES
# ============================================================


def can_transition(*, from_status: str, to_status: str) -> bool:
    if from_status in TERMINAL_STATES:
        return False

    return to_status in ALLOWED_TRANSITIONS.get(from_status, set())


def validate_transition(*, order: Order, target_status: str):
    if not can_transition(
        from_status=order.status,
        to_status=target_status,
    ):
        raise InvalidOrderTransitionError(
            f"Order {order.order_number} cannot transition from "
            f"'{order.status}' to '{target_status}'"
        )


@transaction.atomic
def apply_admin_update(*, order: Order, status: str | None = None, notes: str | None = None) -> Order:
    """
    Back-office edit. Only status and notes ever change after checkout.
    Setting the current status again is a no-op, not a transition.
    """
    order = Order.objects.select_for_update().get(pk=order.pk)
    update_fields = []

    if status is not None and status != order.status:
        validate_transition(order=order, target_status=status)
        previous = order.status
        order.status = status
        update_fields.append("status")
        logger.info(
            "Order status changed",
            extra={
                "order_number": order.order_number,
                "from_status": previous,
                "to_status": status,
            },
        )

    if notes is not None and notes != order.notes:
        order.notes = notes
        update_fields.append("notes")

    if update_fields:
        update_fields.append("updated_at")
        order.save(update_fields=update_fields)

    return order
