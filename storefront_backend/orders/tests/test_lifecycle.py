# orders/tests/test_lifecycle.py

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase

from orders.models import Address, Order
from orders.services.exceptions import InvalidOrderTransitionError
from orders.services.order_lifecycle import (
    apply_admin_update,
    can_transition,
    validate_transition,
)

User = get_user_model()


class OrderLifecycleTests(TestCase):
    """
    GUARANTEES:
    - Only forward moves along PENDING -> PROCESSING -> SHIPPED -> DELIVERED
    - Cancellation only before shipping
    - DELIVERED and CANCELLED are terminal
    - Admin edits touch status + notes only
    """

    def setUp(self):
        user = User.objects.create_user(email="buyer@example.com", password="pass12345")
        address = Address.objects.create(
            user=user, first_name="A", last_name="B", street="1 Road", city="Ikeja", state="Lagos"
        )
        self.order = Order.objects.create(
            order_number="JF-LIFE-0001",
            user=user,
            shipping_address=address,
            subtotal=Decimal("25000"),
            shipping_cost=Decimal("3500"),
            total=Decimal("28500"),
        )

    def test_happy_path(self):
        path = [Order.STATUS_PROCESSING, Order.STATUS_SHIPPED, Order.STATUS_DELIVERED]
        for target in path:
            apply_admin_update(order=self.order, status=target)
            self.order.refresh_from_db()
            self.assertEqual(self.order.status, target)

    def test_cancel_allowed_before_shipping(self):
        self.assertTrue(can_transition(from_status=Order.STATUS_PENDING, to_status=Order.STATUS_CANCELLED))
        self.assertTrue(
            can_transition(from_status=Order.STATUS_PROCESSING, to_status=Order.STATUS_CANCELLED)
        )
        self.assertFalse(
            can_transition(from_status=Order.STATUS_SHIPPED, to_status=Order.STATUS_CANCELLED)
        )

    def test_terminal_states(self):
        for terminal in (Order.STATUS_DELIVERED, Order.STATUS_CANCELLED):
            for target, _ in Order.STATUS_CHOICES:
                self.assertFalse(can_transition(from_status=terminal, to_status=target))

    def test_skipping_steps_is_rejected(self):
        with self.assertRaises(InvalidOrderTransitionError):
            validate_transition(order=self.order, target_status=Order.STATUS_DELIVERED)

    def test_admin_update_keeps_money_fields(self):
        apply_admin_update(order=self.order, status=Order.STATUS_PROCESSING, notes="Packed")

        self.order.refresh_from_db()
        self.assertEqual(self.order.notes, "Packed")
        self.assertEqual(self.order.total, Decimal("28500.00"))

    def test_notes_only_update(self):
        apply_admin_update(order=self.order, notes="Call before delivery")

        self.order.refresh_from_db()
        self.assertEqual(self.order.status, Order.STATUS_PENDING)
        self.assertEqual(self.order.notes, "Call before delivery")
