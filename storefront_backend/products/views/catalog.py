# products/views/catalog.py

"""
PUBLIC CATALOG (ONLINE STORE)

GET /api/products/?q=&category=&featured=&sort=
GET /api/products/<slug>/
GET /api/categories/

Rules:
- AllowAny (public)
- Only active products, only available variants
- Throttled to reduce scraping/abuse
"""

from __future__ import annotations

from django.db.models import Count, Prefetch, Q
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import generics
from rest_framework.permissions import AllowAny
from rest_framework.throttling import AnonRateThrottle

from products.filters import PublicProductFilter
from products.models import Category, Product, ProductVariant
from products.serializers import CategorySerializer, PublicProductSerializer

SORTS = {
    "price-low": ["base_price"],
    "price-high": ["-base_price"],
    "name": ["name"],
    "newest": ["-created_at"],
    "featured": ["-featured", "-created_at"],
}


class PublicCatalogThrottle(AnonRateThrottle):
    scope = "public_catalog"


def _storefront_queryset():
    return (
        Product.objects.filter(is_active=True)
        .select_related("category")
        .prefetch_related(
            "images",
            Prefetch("variants", queryset=ProductVariant.objects.order_by("size", "created_at")),
        )
    )


class PublicProductListView(generics.ListAPIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [PublicCatalogThrottle]
    serializer_class = PublicProductSerializer
    filterset_class = PublicProductFilter

    def get_queryset(self):
        sort = (self.request.query_params.get("sort") or "featured").strip()
        return _storefront_queryset().order_by(*SORTS.get(sort, SORTS["featured"]))

    @extend_schema(
        tags=["Public"],
        parameters=[
            OpenApiParameter("q", str, OpenApiParameter.QUERY, required=False),
            OpenApiParameter("category", str, OpenApiParameter.QUERY, required=False),
            OpenApiParameter("featured", bool, OpenApiParameter.QUERY, required=False),
            OpenApiParameter(
                "sort",
                str,
                OpenApiParameter.QUERY,
                required=False,
                enum=list(SORTS),
            ),
        ],
        responses={200: PublicProductSerializer(many=True)},
        description="Public storefront product listing (AllowAny).",
    )
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)


class PublicProductDetailView(generics.RetrieveAPIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [PublicCatalogThrottle]
    serializer_class = PublicProductSerializer
    lookup_field = "slug"

    def get_queryset(self):
        return _storefront_queryset()

    @extend_schema(
        tags=["Public"],
        responses={
            200: PublicProductSerializer,
            404: OpenApiResponse(description="Product not found"),
        },
    )
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)


class PublicCategoryListView(generics.ListAPIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [PublicCatalogThrottle]
    serializer_class = CategorySerializer
    pagination_class = None

    def get_queryset(self):
        return Category.objects.annotate(
            active_product_count=Count("products", filter=Q(products__is_active=True))
        ).order_by("name")

    @extend_schema(tags=["Public"], responses={200: CategorySerializer(many=True)})
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)
