# cart/tests/test_api.py

from decimal import Decimal

from django.test import TestCase
from rest_framework.test import APIClient

from cart.services import clamp_to_stock
from products.models import Category, Product, ProductVariant


class ClampToStockTests(TestCase):
    def setUp(self):
        category = Category.objects.create(name="Caps")
        product = Product.objects.create(
            category=category, slug="cap", name="Cap", base_price=Decimal("12500")
        )
        self.variant = ProductVariant.objects.create(
            product=product, sku="CAP-OS", size="One Size", price=Decimal("12500"), stock_quantity=5
        )

    def test_within_stock(self):
        self.assertEqual(clamp_to_stock(self.variant, 2, 0), 2)

    def test_clamped_to_remaining_room(self):
        self.assertEqual(clamp_to_stock(self.variant, 4, 3), 2)

    def test_nothing_left(self):
        self.assertEqual(clamp_to_stock(self.variant, 1, 5), 0)

    def test_unsellable_variant(self):
        self.variant.archive()
        self.assertEqual(clamp_to_stock(self.variant, 1, 0), 0)


class SessionCartApiTests(TestCase):
    """
    GUARANTEES:
    - Cart survives across requests in the session
    - Add-to-cart never exceeds live stock
    - Summary applies the free-shipping rule
    """

    def setUp(self):
        self.client = APIClient()
        category = Category.objects.create(name="Caps")
        self.product = Product.objects.create(
            category=category,
            slug="classic-snapback",
            name="Classic Snapback",
            base_price=Decimal("12500"),
        )
        ProductVariant.objects.create(
            product=self.product, sku="CS-M", size="M", price=Decimal("12500"), stock_quantity=3
        )

    def _add(self, quantity, size="M", slug="classic-snapback"):
        return self.client.post(
            "/api/cart/items/",
            {"productSlug": slug, "size": size, "quantity": quantity},
            format="json",
        )

    def test_empty_cart(self):
        response = self.client.get("/api/cart/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["items"], [])
        self.assertEqual(response.data["total"], "0.00")
        self.assertEqual(response.data["shipping"], "0.00")

    def test_add_then_read_back(self):
        self.assertEqual(self._add(2).status_code, 200)

        response = self.client.get("/api/cart/")

        self.assertEqual(response.data["totalItems"], 2)
        self.assertEqual(response.data["subtotal"], "25000.00")
        self.assertEqual(response.data["shipping"], "3500.00")
        self.assertEqual(response.data["total"], "28500.00")
        self.assertEqual(response.data["amountToFreeShipping"], "25000.00")
        self.assertTrue(response.data["isOpen"])

    def test_add_is_clamped_to_stock(self):
        self._add(2)

        response = self._add(5)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["added"], 1)
        self.assertTrue(response.data["clamped"])
        self.assertEqual(response.data["totalItems"], 3)

    def test_add_when_stock_exhausted_is_conflict(self):
        self._add(3)

        response = self._add(1)

        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.data["code"], "OUT_OF_STOCK")

    def test_unknown_product_is_404(self):
        response = self._add(1, slug="nope")
        self.assertEqual(response.status_code, 404)

    def test_update_to_zero_removes(self):
        self._add(2)

        response = self.client.patch(
            "/api/cart/items/",
            {"productId": str(self.product.id), "size": "M", "quantity": 0},
            format="json",
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["items"], [])

    def test_remove_and_clear(self):
        self._add(1)
        response = self.client.delete(
            "/api/cart/items/",
            {"productId": str(self.product.id), "size": "M"},
            format="json",
        )
        self.assertEqual(response.data["totalItems"], 0)

        self._add(1)
        response = self.client.post("/api/cart/clear/", {}, format="json")
        self.assertEqual(response.data["items"], [])

    def test_drawer_toggle(self):
        response = self.client.post("/api/cart/drawer/", {"action": "open"}, format="json")
        self.assertTrue(response.data["isOpen"])

        response = self.client.post("/api/cart/drawer/", {"action": "toggle"}, format="json")
        self.assertFalse(response.data["isOpen"])

        self.assertFalse(self.client.get("/api/cart/").data["isOpen"])
