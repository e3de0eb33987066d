# orders/tests/test_dashboard.py

from datetime import datetime, timezone as dt_timezone
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase, override_settings
from rest_framework.test import APIClient

from orders.models import Address, Order, OrderItem
from orders.services.dashboard import _months_back, get_dashboard
from products.models import Category, Product, ProductVariant

User = get_user_model()


@override_settings(LOW_STOCK_THRESHOLD=5)
class DashboardTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.admin = User.objects.create_superuser(email="admin@example.com", password="pass12345")
        self.customer = User.objects.create_user(
            email="ada@example.com", password="pass12345", first_name="Ada", last_name="Obi"
        )
        category = Category.objects.create(name="Caps")
        product = Product.objects.create(
            category=category, slug="classic-snapback", name="Classic Snapback", base_price=Decimal("12500")
        )
        self.variant = ProductVariant.objects.create(
            product=product, sku="CS-M", size="M", price=Decimal("12500"), stock_quantity=3
        )
        ProductVariant.objects.create(
            product=product, sku="CS-L", size="L", price=Decimal("12500"), stock_quantity=40
        )
        self.address = Address.objects.create(
            user=self.customer, first_name="Ada", last_name="Obi", street="1 Road", city="Ikeja", state="Lagos"
        )

    def _order(self, number, status, total):
        order = Order.objects.create(
            order_number=number,
            user=self.customer,
            shipping_address=self.address,
            status=status,
            subtotal=Decimal(total),
            total=Decimal(total),
        )
        OrderItem.objects.create(order=order, variant=self.variant, quantity=1, price=Decimal(total))
        return order

    def test_stats(self):
        self._order("JF-1-AAAA", Order.STATUS_PENDING, "28500")
        self._order("JF-2-BBBB", Order.STATUS_DELIVERED, "50000")
        self._order("JF-3-CCCC", Order.STATUS_DELIVERED, "12500.50")
        self._order("JF-4-DDDD", Order.STATUS_CANCELLED, "9000")

        data = get_dashboard()
        stats = data["stats"]

        self.assertEqual(stats["totalOrders"], 4)
        self.assertEqual(stats["pendingOrders"], 1)
        self.assertEqual(stats["completedOrders"], 2)
        self.assertEqual(stats["totalRevenue"], "62500.50")
        self.assertEqual(stats["totalProducts"], 1)
        self.assertEqual(stats["lowStockProducts"], 1)
        self.assertEqual(stats["totalUsers"], 2)

        self.assertEqual(data["recentOrders"][0]["customer"], "Ada Obi")
        self.assertEqual(data["recentOrders"][0]["items"], 1)
        self.assertEqual(data["lowStockItems"][0]["sku"], "CS-M")
        self.assertEqual(len(data["revenueChart"]), 1)
        self.assertEqual(data["revenueChart"][0]["value"], "62500.50")

    def test_empty_store(self):
        stats = get_dashboard()["stats"]

        self.assertEqual(stats["totalRevenue"], "0.00")
        self.assertEqual(stats["totalOrders"], 0)

    def test_months_back_crosses_year(self):
        now = datetime(2026, 2, 14, 10, 30, tzinfo=dt_timezone.utc)

        self.assertEqual(_months_back(now, 6), datetime(2025, 9, 1, tzinfo=dt_timezone.utc))
        self.assertEqual(_months_back(now, 1), datetime(2026, 2, 1, tzinfo=dt_timezone.utc))

    def test_admin_only(self):
        self.client.force_authenticate(self.customer)
        self.assertEqual(self.client.get("/api/admin/dashboard/").status_code, 403)

        self.client.force_authenticate(self.admin)
        response = self.client.get("/api/admin/dashboard/")
        self.assertEqual(response.status_code, 200)
        self.assertIn("stats", response.data)
