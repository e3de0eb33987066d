# orders/services/dashboard.py

"""
BACK-OFFICE DASHBOARD KPIs

Read-only snapshot for the admin home screen.

Contract:
- Revenue counts DELIVERED orders only
- Money is returned as 2dp strings (same as every other API money field)
- Low stock = any variant with stock_quantity <= LOW_STOCK_THRESHOLD
"""

from __future__ import annotations

from datetime import datetime

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db.models import Count, Q, Sum
from django.db.models.functions import TruncMonth
from django.utils import timezone

from orders.models import Order
from orders.services.pricing import money
from products.models import Product, ProductVariant

DEFAULT_LOW_STOCK_THRESHOLD = 5


def low_stock_threshold() -> int:
    return int(getattr(settings, "LOW_STOCK_THRESHOLD", DEFAULT_LOW_STOCK_THRESHOLD))


def _months_back(now: datetime, months: int) -> datetime:
    """First instant of the month `months - 1` months before `now`'s month."""
    index = now.year * 12 + (now.month - 1) - (months - 1)
    return now.replace(
        year=index // 12, month=index % 12 + 1, day=1, hour=0, minute=0, second=0, microsecond=0
    )


def revenue_by_month(*, months: int = 6, now: datetime | None = None) -> list[dict]:
    now = timezone.localtime(now or timezone.now())
    since = _months_back(now, months)

    rows = (
        Order.objects.filter(status=Order.STATUS_DELIVERED, created_at__gte=since)
        .annotate(month=TruncMonth("created_at"))
        .values("month")
        .annotate(revenue=Sum("total"))
        .order_by("month")
    )
    return [
        {
            "name": row["month"].strftime("%b"),
            "month": row["month"].strftime("%Y-%m"),
            "value": str(money(row["revenue"])),
        }
        for row in rows
    ]


def get_dashboard(*, recent: int = 5, months: int = 6, now: datetime | None = None) -> dict:
    threshold = low_stock_threshold()

    counts = Order.objects.aggregate(
        order_count=Count("id"),
        pending=Count("id", filter=Q(status=Order.STATUS_PENDING)),
        processing=Count("id", filter=Q(status=Order.STATUS_PROCESSING)),
        delivered=Count("id", filter=Q(status=Order.STATUS_DELIVERED)),
        revenue=Sum("total", filter=Q(status=Order.STATUS_DELIVERED)),
    )

    low_stock = ProductVariant.objects.filter(stock_quantity__lte=threshold).select_related("product")

    recent_orders = (
        Order.objects.select_related("user")
        .annotate(line_count=Count("items"))
        .order_by("-created_at")[:recent]
    )

    return {
        "stats": {
            "totalRevenue": str(money(counts["revenue"])),
            "totalOrders": counts["order_count"],
            "pendingOrders": counts["pending"],
            "processingOrders": counts["processing"],
            "completedOrders": counts["delivered"],
            "totalProducts": Product.objects.count(),
            "lowStockProducts": low_stock.count(),
            "totalUsers": get_user_model().objects.count(),
        },
        "recentOrders": [
            {
                "id": str(order.id),
                "orderNumber": order.order_number,
                "customer": order.user.full_name or order.user.email,
                "items": order.line_count,
                "total": str(order.total),
                "status": order.status.lower(),
                "createdAt": order.created_at.isoformat(),
            }
            for order in recent_orders
        ],
        "lowStockItems": [
            {
                "name": f"{v.product.name} - {v.color} {v.size}".strip(),
                "sku": v.sku,
                "stock": v.stock_quantity,
                "threshold": threshold,
            }
            for v in low_stock.order_by("stock_quantity", "sku")[:recent]
        ],
        "revenueChart": revenue_by_month(months=months, now=now),
    }
