# orders/tests/test_checkout.py

from decimal import Decimal
from unittest import mock

from django.contrib.auth import get_user_model
from django.db import IntegrityError, OperationalError
from django.test import TestCase
from rest_framework.test import APIClient

from cart.state import NO_SIZE
from orders.models import Address, Order, OrderItem
from orders.services.exceptions import (
    CatalogConfigurationError,
    CheckoutValidationError,
    PermanentPersistenceError,
    TransientPersistenceError,
)
from orders.services.order_materializer import (
    CheckoutRequest,
    ContactDetails,
    ShippingDetails,
    build_line,
    materialize_order,
)
from products.models import Category, Product, ProductVariant

User = get_user_model()


def checkout_payload(**overrides):
    payload = {
        "email": "ada@example.com",
        "phone": "08030000000",
        "firstName": "Ada",
        "lastName": "Obi",
        "address": "12 Allen Avenue",
        "city": "Ikeja",
        "state": "Lagos",
        "postalCode": "100001",
        "country": "Nigeria",
        "items": [
            {
                "productSlug": "classic-snapback",
                "productName": "Classic Snapback",
                "size": "M",
                "price": "12500",
                "quantity": 2,
            }
        ],
    }
    payload.update(overrides)
    return payload


class MaterializerTests(TestCase):
    """
    GUARANTEES:
    - Address, order and items are written together or not at all
    - Item prices are the cart prices
    - Totals are computed here, client totals are only cross-checked
    """

    def setUp(self):
        self.user = User.objects.create_user(email="ada@example.com", password="pass12345")
        category = Category.objects.create(name="Caps")
        self.product = Product.objects.create(
            category=category,
            slug="classic-snapback",
            name="Classic Snapback",
            base_price=Decimal("12000"),
        )
        self.variant = ProductVariant.objects.create(
            product=self.product, sku="CS-M", size="M", price=Decimal("11000"), stock_quantity=10
        )

    def _request(self, lines=None, **totals):
        if lines is None:
            lines = [
                build_line(
                    product_slug="classic-snapback",
                    product_name="Classic Snapback",
                    size="M",
                    price="12500",
                    quantity=2,
                )
            ]
        return CheckoutRequest(
            user=self.user,
            contact=ContactDetails(email="ada@example.com", phone="0803"),
            shipping=ShippingDetails(
                first_name="Ada", last_name="Obi", street="12 Allen Avenue", city="Ikeja", state="Lagos"
            ),
            lines=lines,
            **totals,
        )

    def test_creates_pending_order_with_cart_prices(self):
        result = materialize_order(self._request())
        order = result.order

        self.assertEqual(order.status, Order.STATUS_PENDING)
        self.assertEqual(order.subtotal, Decimal("25000.00"))
        self.assertEqual(order.shipping_cost, Decimal("3500.00"))
        self.assertEqual(order.total, Decimal("28500.00"))

        item = order.items.get()
        self.assertEqual(item.variant, self.variant)
        self.assertEqual(item.quantity, 2)
        self.assertEqual(item.price, Decimal("12500.00"))

    def test_stock_is_not_decremented(self):
        materialize_order(self._request())

        self.variant.refresh_from_db()
        self.assertEqual(self.variant.stock_quantity, 10)

    def test_country_defaults(self):
        result = materialize_order(self._request())

        self.assertEqual(result.order.shipping_address.country, "Nigeria")

    def test_free_shipping_at_threshold(self):
        lines = [
            build_line(
                product_slug="classic-snapback", product_name="", size="M", price="50000", quantity=1
            )
        ]
        result = materialize_order(self._request(lines=lines))

        self.assertEqual(result.order.shipping_cost, Decimal("0.00"))
        self.assertEqual(result.order.total, Decimal("50000.00"))

    def test_just_below_threshold(self):
        lines = [
            build_line(
                product_slug="classic-snapback", product_name="", size="M", price="49999", quantity=1
            )
        ]
        result = materialize_order(self._request(lines=lines))

        self.assertEqual(result.order.shipping_cost, Decimal("3500.00"))
        self.assertEqual(result.order.total, Decimal("53499.00"))

    def test_empty_cart_rejected(self):
        with self.assertRaisesMessage(CheckoutValidationError, "Cart is empty"):
            materialize_order(self._request(lines=[]))
        self.assertFalse(Address.objects.exists())

    def test_matching_client_totals_accepted(self):
        result = materialize_order(
            self._request(
                subtotal=Decimal("25000"), shipping_cost=Decimal("3500"), total=Decimal("28500")
            )
        )
        self.assertEqual(result.order.total, Decimal("28500.00"))

    def test_mismatched_client_totals_rejected(self):
        with self.assertRaises(CheckoutValidationError) as ctx:
            materialize_order(self._request(total=Decimal("100")))

        self.assertEqual(ctx.exception.message, "Order totals do not match")
        self.assertIn("total", ctx.exception.details)
        self.assertFalse(Order.objects.exists())

    def test_failure_after_address_rolls_back(self):
        with mock.patch(
            "orders.services.order_materializer.generate_order_number",
            side_effect=IntegrityError("duplicate order number"),
        ):
            with self.assertRaises(PermanentPersistenceError):
                materialize_order(self._request())

        self.assertFalse(Address.objects.exists())
        self.assertFalse(Order.objects.exists())
        self.assertFalse(OrderItem.objects.exists())

    def test_operational_error_is_retryable(self):
        with mock.patch(
            "orders.services.order_materializer.generate_order_number",
            side_effect=OperationalError("database is locked"),
        ):
            with self.assertRaises(TransientPersistenceError) as ctx:
                materialize_order(self._request())

        self.assertTrue(ctx.exception.retryable)
        self.assertEqual(ctx.exception.status_code, 503)
        self.assertFalse(Address.objects.exists())

    def test_missing_category_rolls_back_address(self):
        lines = [
            build_line(
                product_slug="never-seen", product_name="Never Seen", size="L", price="9000", quantity=1
            )
        ]
        Product.objects.all().delete()
        Category.objects.all().delete()

        with self.assertRaises(CatalogConfigurationError):
            materialize_order(self._request(lines=lines))

        self.assertFalse(Address.objects.exists())
        self.assertFalse(Product.objects.exists())


class CheckoutApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(email="ada@example.com", password="pass12345")
        category = Category.objects.create(name="Caps")
        product = Product.objects.create(
            category=category,
            slug="classic-snapback",
            name="Classic Snapback",
            base_price=Decimal("12500"),
        )
        self.variant = ProductVariant.objects.create(
            product=product, sku="CS-M", size="M", price=Decimal("12500"), stock_quantity=10
        )

    def test_requires_sign_in(self):
        response = self.client.post("/api/checkout/", checkout_payload(), format="json")

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.data["error"], "Please sign in to place an order")
        self.assertFalse(Order.objects.exists())

    def test_places_order_and_clears_session_cart(self):
        self.client.force_authenticate(self.user)
        self.client.post(
            "/api/cart/items/",
            {"productSlug": "classic-snapback", "size": "M", "quantity": 2},
            format="json",
        )
        self.assertEqual(self.client.get("/api/cart/").data["totalItems"], 2)

        response = self.client.post(
            "/api/checkout/",
            checkout_payload(subtotal="25000", shippingCost="3500", total="28500"),
            format="json",
        )

        self.assertEqual(response.status_code, 201)
        self.assertTrue(response.data["success"])
        order = Order.objects.get(order_number=response.data["order"]["orderNumber"])
        self.assertEqual(str(order.id), response.data["order"]["id"])
        self.assertEqual(order.user, self.user)
        self.assertEqual(order.total, Decimal("28500.00"))
        self.assertEqual(order.items.get().price, Decimal("12500.00"))

        self.assertEqual(self.client.get("/api/cart/").data["items"], [])

    def test_missing_fields(self):
        self.client.force_authenticate(self.user)
        payload = checkout_payload()
        del payload["city"]
        payload["firstName"] = ""

        response = self.client.post("/api/checkout/", payload, format="json")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["error"], "Missing required fields")
        self.assertIn("city", response.data["details"])
        self.assertIn("firstName", response.data["details"])

    def test_empty_cart(self):
        self.client.force_authenticate(self.user)

        response = self.client.post("/api/checkout/", checkout_payload(items=[]), format="json")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["error"], "Cart is empty")

    def test_totals_mismatch(self):
        self.client.force_authenticate(self.user)

        response = self.client.post(
            "/api/checkout/", checkout_payload(total="1.00"), format="json"
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["error"], "Order totals do not match")

    def test_no_size_sentinel_is_normalized(self):
        self.client.force_authenticate(self.user)
        items = [
            {
                "productSlug": "classic-snapback",
                "productName": "Classic Snapback",
                "size": NO_SIZE,
                "price": "12500",
                "quantity": 1,
            }
        ]

        response = self.client.post("/api/checkout/", checkout_payload(items=items), format="json")

        self.assertEqual(response.status_code, 201)
        order = Order.objects.get()
        self.assertEqual(order.items.get().variant, self.variant)

    def test_unavailable_product_conflict(self):
        self.client.force_authenticate(self.user)
        self.variant.archive()

        response = self.client.post("/api/checkout/", checkout_payload(), format="json")

        self.assertEqual(response.status_code, 409)
        self.assertFalse(Order.objects.exists())
        self.assertFalse(Address.objects.exists())

    def test_catalog_not_configured(self):
        self.client.force_authenticate(self.user)
        items = [
            {"productSlug": "mystery", "productName": "Mystery", "size": "L", "price": "100", "quantity": 1}
        ]
        ProductVariant.objects.all().delete()
        Product.objects.all().delete()
        Category.objects.all().delete()

        response = self.client.post("/api/checkout/", checkout_payload(items=items), format="json")

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.data["code"], "CATALOG_NOT_CONFIGURED")
        self.assertFalse(Address.objects.exists())
