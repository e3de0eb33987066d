# products/views/__init__.py

"""
Products views package exports.
"""

from .admin import AdminCategoryViewSet, AdminProductViewSet, AdminVariantView
from .catalog import PublicCategoryListView, PublicProductDetailView, PublicProductListView

__all__ = [
    "AdminCategoryViewSet",
    "AdminProductViewSet",
    "AdminVariantView",
    "PublicCategoryListView",
    "PublicProductDetailView",
    "PublicProductListView",
]
