# orders/tests/test_order_api.py

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

from orders.models import Address, Order, OrderItem
from products.models import Category, Product, ProductVariant

User = get_user_model()


class OrderFixtureMixin:
    def make_order(self, user, number, status=Order.STATUS_PENDING):
        address = Address.objects.create(
            user=user,
            first_name=user.first_name or "Ada",
            last_name=user.last_name or "Obi",
            street="12 Allen Avenue",
            city="Ikeja",
            state="Lagos",
        )
        order = Order.objects.create(
            order_number=number,
            user=user,
            shipping_address=address,
            status=status,
            subtotal=Decimal("25000"),
            shipping_cost=Decimal("3500"),
            total=Decimal("28500"),
        )
        OrderItem.objects.create(order=order, variant=self.variant, quantity=2, price=Decimal("12500"))
        return order

    def setUp(self):
        self.client = APIClient()
        category = Category.objects.create(name="Caps")
        product = Product.objects.create(
            category=category, slug="classic-snapback", name="Classic Snapback", base_price=Decimal("12500")
        )
        self.variant = ProductVariant.objects.create(
            product=product, sku="CS-M", size="M", price=Decimal("12500"), stock_quantity=5
        )
        self.ada = User.objects.create_user(
            email="ada@example.com", password="pass12345", first_name="Ada", last_name="Obi"
        )
        self.bola = User.objects.create_user(
            email="bola@example.com", password="pass12345", first_name="Bola", last_name="Ade"
        )
        self.admin = User.objects.create_superuser(email="admin@example.com", password="pass12345")


class CustomerOrderHistoryTests(OrderFixtureMixin, TestCase):
    def setUp(self):
        super().setUp()
        self.mine = self.make_order(self.ada, "JF-ADA-0001")
        self.theirs = self.make_order(self.bola, "JF-BOLA-0001")

    def test_requires_authentication(self):
        self.assertEqual(self.client.get("/api/orders/").status_code, 401)

    def test_lists_only_own_orders(self):
        self.client.force_authenticate(self.ada)

        response = self.client.get("/api/orders/")

        self.assertEqual(response.status_code, 200)
        numbers = [row["orderNumber"] for row in response.data["results"]]
        self.assertEqual(numbers, ["JF-ADA-0001"])
        self.assertEqual(response.data["results"][0]["itemCount"], 2)

    def test_detail_of_someone_elses_order_is_404(self):
        self.client.force_authenticate(self.ada)

        self.assertEqual(self.client.get("/api/orders/JF-ADA-0001/").status_code, 200)
        self.assertEqual(self.client.get("/api/orders/JF-BOLA-0001/").status_code, 404)


class AdminOrderApiTests(OrderFixtureMixin, TestCase):
    """
    GUARANTEES:
    - Admin-only
    - List carries global per-status counts
    - PATCH edits status + notes through the lifecycle rules
    """

    def setUp(self):
        super().setUp()
        self.pending = self.make_order(self.ada, "JF-ADA-0001")
        self.shipped = self.make_order(self.bola, "JF-BOLA-0001", status=Order.STATUS_SHIPPED)
        self.client.force_authenticate(self.admin)

    def test_customers_are_forbidden(self):
        self.client.force_authenticate(self.ada)

        self.assertEqual(self.client.get("/api/admin/orders/").status_code, 403)

    def test_list_with_counts(self):
        response = self.client.get("/api/admin/orders/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["count"], 2)
        self.assertEqual(response.data["counts"]["all"], 2)
        self.assertEqual(response.data["counts"]["pending"], 1)
        self.assertEqual(response.data["counts"]["shipped"], 1)
        self.assertEqual(response.data["counts"]["cancelled"], 0)

    def test_status_filter(self):
        response = self.client.get("/api/admin/orders/", {"status": "shipped"})

        numbers = [row["orderNumber"] for row in response.data["results"]]
        self.assertEqual(numbers, ["JF-BOLA-0001"])
        self.assertEqual(response.data["counts"]["all"], 2)

        response = self.client.get("/api/admin/orders/", {"status": "all"})
        self.assertEqual(response.data["count"], 2)

    def test_search_by_customer(self):
        response = self.client.get("/api/admin/orders/", {"search": "bola"})

        numbers = [row["orderNumber"] for row in response.data["results"]]
        self.assertEqual(numbers, ["JF-BOLA-0001"])

    def test_detail_by_number_or_id(self):
        by_number = self.client.get("/api/admin/orders/JF-ADA-0001/")
        by_id = self.client.get(f"/api/admin/orders/{self.pending.id}/")

        self.assertEqual(by_number.status_code, 200)
        self.assertEqual(by_id.data["order"]["orderNumber"], "JF-ADA-0001")
        self.assertEqual(by_number.data["order"]["customer"]["email"], "ada@example.com")

    def test_unknown_order_is_404(self):
        self.assertEqual(self.client.get("/api/admin/orders/JF-NOPE-0000/").status_code, 404)

    def test_patch_status_and_notes(self):
        response = self.client.patch(
            "/api/admin/orders/JF-ADA-0001/",
            {"status": "processing", "notes": "Packed"},
            format="json",
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["order"]["status"], Order.STATUS_PROCESSING)
        self.assertEqual(response.data["order"]["notes"], "Packed")

    def test_patch_invalid_transition(self):
        response = self.client.patch(
            "/api/admin/orders/JF-BOLA-0001/", {"status": "CANCELLED"}, format="json"
        )

        self.assertEqual(response.status_code, 400)
        self.shipped.refresh_from_db()
        self.assertEqual(self.shipped.status, Order.STATUS_SHIPPED)

    def test_patch_unknown_status(self):
        response = self.client.patch(
            "/api/admin/orders/JF-ADA-0001/", {"status": "LOST"}, format="json"
        )

        self.assertEqual(response.status_code, 400)
        self.assertIn("status", response.data["details"])

    def test_order_items_keep_variants_alive(self):
        response = self.client.delete(f"/api/admin/variants/{self.variant.id}/")

        self.assertEqual(response.status_code, 200)
        self.variant.refresh_from_db()
        self.assertFalse(self.variant.is_available)
        self.assertEqual(self.pending.items.get().variant_id, self.variant.id)
