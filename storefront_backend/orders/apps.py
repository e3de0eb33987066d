# orders/apps.py

"""
ORDERS APP CONFIG

Checkout materialization + order history:
- Address / Order / OrderItem persistence
- Pricing rules (shipping threshold, tax)
- Order lifecycle (status transitions)
"""

from django.apps import AppConfig


class OrdersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "orders"
    verbose_name = "Orders"
