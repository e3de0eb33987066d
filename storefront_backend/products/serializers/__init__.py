# products/serializers/__init__.py

from .category import CategorySerializer
from .product import (
    AdminProductListSerializer,
    AdminProductSerializer,
    PublicProductSerializer,
    VariantSerializer,
)

__all__ = [
    "CategorySerializer",
    "AdminProductListSerializer",
    "AdminProductSerializer",
    "PublicProductSerializer",
    "VariantSerializer",
]
