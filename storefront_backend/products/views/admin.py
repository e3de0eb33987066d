# products/views/admin.py

"""
ADMIN CATALOG MANAGEMENT

/api/admin/products/            GET, POST
/api/admin/products/<id>/       GET, PUT, PATCH, DELETE
/api/admin/variants/<id>/       DELETE
/api/admin/categories/          GET, POST
/api/admin/categories/<id>/     GET, PUT, PATCH, DELETE

Deletes go through the inventory guard: anything with order history is
archived instead, and the response says which happened.
"""

from django.db.models import Count, ProtectedError, Q
from django.shortcuts import get_object_or_404
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from products.filters import AdminProductFilter
from products.models import Category, Product, ProductVariant
from products.serializers import (
    AdminProductListSerializer,
    AdminProductSerializer,
    CategorySerializer,
)
from products.services.inventory_guard import (
    InventoryGuardError,
    delete_product,
    delete_variant,
)
from users.permissions import IsAdmin


def _deletion_payload(result) -> dict:
    return {
        "success": True,
        "outcome": result.outcome.value,
        "message": result.message,
    }


class AdminProductViewSet(viewsets.ModelViewSet):
    permission_classes = [IsAuthenticated, IsAdmin]
    filterset_class = AdminProductFilter

    def get_queryset(self):
        return (
            Product.objects.select_related("category")
            .prefetch_related("images", "variants")
            .order_by("-created_at")
        )

    def get_serializer_class(self):
        if self.action == "list":
            return AdminProductListSerializer
        return AdminProductSerializer

    def perform_update(self, serializer):
        try:
            serializer.save()
        except InventoryGuardError as exc:
            raise ValidationError({"variants": [str(exc)]}) from exc

    perform_create = perform_update

    @extend_schema(
        tags=["Admin"],
        responses={
            200: OpenApiResponse(description="Product deleted or archived"),
            404: OpenApiResponse(description="Product not found"),
        },
    )
    def destroy(self, request, *args, **kwargs):
        product = self.get_object()
        result = delete_product(product)
        return Response(_deletion_payload(result), status=status.HTTP_200_OK)


class AdminVariantView(APIView):
    permission_classes = [IsAuthenticated, IsAdmin]

    @extend_schema(
        tags=["Admin"],
        responses={
            200: OpenApiResponse(description="Variant deleted or archived"),
            404: OpenApiResponse(description="Variant not found"),
        },
    )
    def delete(self, request, variant_id):
        variant = get_object_or_404(ProductVariant, pk=variant_id)
        result = delete_variant(variant)
        return Response(_deletion_payload(result), status=status.HTTP_200_OK)


class AdminCategoryViewSet(viewsets.ModelViewSet):
    """
    Categories still referenced by products cannot be deleted (PROTECT).
    """

    permission_classes = [IsAuthenticated, IsAdmin]
    serializer_class = CategorySerializer
    pagination_class = None

    def get_queryset(self):
        return Category.objects.annotate(
            active_product_count=Count("products", filter=Q(products__is_active=True))
        ).order_by("name")

    def destroy(self, request, *args, **kwargs):
        category = self.get_object()
        try:
            category.delete()
        except ProtectedError:
            return Response(
                {"error": "Category still has products", "code": "CATEGORY_IN_USE"},
                status=status.HTTP_409_CONFLICT,
            )
        return Response(status=status.HTTP_204_NO_CONTENT)
