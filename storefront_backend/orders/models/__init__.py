# orders/models/__init__.py

"""
ORDERS MODELS PACKAGE EXPORTS
"""

from .address import Address
from .order import Order
from .order_item import OrderItem

__all__ = [
    "Address",
    "Order",
    "OrderItem",
]
