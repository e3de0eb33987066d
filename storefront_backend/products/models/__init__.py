"""
PATH: products/models/__init__.py

Products models export surface.
"""

from .category import Category
from .product import Product, ProductImage
from .variant import ProductVariant

__all__ = [
    "Category",
    "Product",
    "ProductImage",
    "ProductVariant",
]
