# products/urls.py

"""
PRODUCTS URLS

Public (mounted under /api/):
    products/            products/<slug>/            categories/

Admin (mounted under /api/admin/):
    products/            products/<id>/
    variants/<id>/
    categories/          categories/<id>/
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from products.views import (
    AdminCategoryViewSet,
    AdminProductViewSet,
    AdminVariantView,
    PublicCategoryListView,
    PublicProductDetailView,
    PublicProductListView,
)

admin_router = DefaultRouter()
admin_router.register(r"products", AdminProductViewSet, basename="admin-products")
admin_router.register(r"categories", AdminCategoryViewSet, basename="admin-categories")

public_urlpatterns = [
    path("products/", PublicProductListView.as_view(), name="product-list"),
    path("products/<slug:slug>/", PublicProductDetailView.as_view(), name="product-detail"),
    path("categories/", PublicCategoryListView.as_view(), name="category-list"),
]

admin_urlpatterns = [
    path("variants/<uuid:variant_id>/", AdminVariantView.as_view(), name="admin-variant-delete"),
    path("", include(admin_router.urls)),
]
