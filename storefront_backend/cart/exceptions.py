# cart/exceptions.py

"""
CART ERRORS
"""


class CartError(Exception):
    """Base exception for cart failures."""


class InvalidCartLineError(CartError):
    """Raised when a cart action carries an invalid quantity or product."""


class CorruptCartError(CartError):
    """Raised when persisted cart data cannot be parsed."""
