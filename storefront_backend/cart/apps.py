# cart/apps.py

"""
CART APP CONFIG

Storefront cart (no database tables):
- Pure reducer over immutable cart state
- Pluggable persistence (Django session / in-memory)
- Session-cart API for the storefront client
"""

from django.apps import AppConfig


class CartConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "cart"
    verbose_name = "Cart"
