# orders/serializers/__init__.py

from .checkout import CheckoutItemSerializer, CheckoutSerializer
from .order import (
    AddressSerializer,
    AdminOrderListSerializer,
    AdminOrderSerializer,
    AdminOrderUpdateSerializer,
    OrderItemSerializer,
    OrderSerializer,
)

__all__ = [
    "AddressSerializer",
    "AdminOrderListSerializer",
    "AdminOrderSerializer",
    "AdminOrderUpdateSerializer",
    "CheckoutItemSerializer",
    "CheckoutSerializer",
    "OrderItemSerializer",
    "OrderSerializer",
]
