# cart/views.py

"""
SESSION CART API

GET    /api/cart/            current cart + totals preview
POST   /api/cart/items/      {productSlug, size?, quantity}
PATCH  /api/cart/items/      {productId, size?, quantity}   (quantity <= 0 removes)
DELETE /api/cart/items/      {productId, size?}
POST   /api/cart/clear/
POST   /api/cart/drawer/     {action: open|close|toggle}

Hard rules:
- The cart lives in the Django session; no login required.
- Price is snapshotted from the chosen variant when the line is added.
- Add-to-cart never exceeds live stock (clamped here, not in the reducer).
"""

from __future__ import annotations

from django.db.models import Prefetch
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.parsers import JSONParser
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle
from rest_framework.views import APIView

from cart.exceptions import CartError
from cart.serializers import (
    AddCartItemInputSerializer,
    DrawerInputSerializer,
    RemoveCartItemInputSerializer,
    UpdateCartItemInputSerializer,
)
from cart.services import (
    clamp_to_stock,
    remember_drawer,
    session_store,
    snapshot_for,
    summarize,
)
from cart.state import NO_SIZE, normalize_size
from products.models import Product, ProductVariant


class CartThrottle(AnonRateThrottle):
    scope = "public_catalog"


# =====================================================
# API ERROR NORMALIZATION
# =====================================================

def error_response(*, code: str, message: str, http_status: int):
    return Response({"error": message, "code": code}, status=http_status)


def _invalid(serializer):
    return Response(
        {"error": "Invalid cart request", "details": serializer.errors},
        status=status.HTTP_400_BAD_REQUEST,
    )


# =====================================================
# HELPERS
# =====================================================

def _pick_variant(product: Product, size: str):
    sellable = [v for v in product.variants.all() if v.is_sellable]
    if size != NO_SIZE:
        return next((v for v in sellable if v.size == size), None)
    return sellable[0] if sellable else None


class CartBaseView(APIView):
    permission_classes = [AllowAny]
    parser_classes = [JSONParser]
    throttle_classes = [CartThrottle]


class CartView(CartBaseView):
    @extend_schema(tags=["Cart"], responses={200: OpenApiResponse(description="Cart summary")})
    def get(self, request):
        return Response(summarize(session_store(request)), status=status.HTTP_200_OK)


class CartItemsView(CartBaseView):
    @extend_schema(
        tags=["Cart"],
        request=AddCartItemInputSerializer,
        responses={
            200: OpenApiResponse(description="Item added (quantity may be clamped to stock)"),
            404: OpenApiResponse(description="Product not found"),
            409: OpenApiResponse(description="Nothing left in stock for this size"),
        },
    )
    def post(self, request):
        ser = AddCartItemInputSerializer(data=request.data)
        if not ser.is_valid():
            return _invalid(ser)

        product = (
            Product.objects.filter(slug=ser.validated_data["productSlug"], is_active=True)
            .select_related("category")
            .prefetch_related(
                "images",
                Prefetch("variants", queryset=ProductVariant.objects.order_by("created_at", "id")),
            )
            .first()
        )
        if product is None:
            return error_response(
                code="PRODUCT_NOT_FOUND",
                message="Product not found",
                http_status=status.HTTP_404_NOT_FOUND,
            )

        size = normalize_size(ser.validated_data.get("size"))
        variant = _pick_variant(product, size)
        if variant is not None and size == NO_SIZE and variant.size:
            size = variant.size

        store = session_store(request)
        existing = store.state.find(product.id, size)
        requested = ser.validated_data["quantity"]
        allowed = clamp_to_stock(variant, requested, existing.quantity if existing else 0)

        if allowed < 1:
            return error_response(
                code="OUT_OF_STOCK",
                message="No more stock available for this item",
                http_status=status.HTTP_409_CONFLICT,
            )

        try:
            store.add_item(snapshot_for(product, variant), allowed, size)
        except CartError as exc:
            return error_response(
                code="INVALID_CART_LINE", message=str(exc), http_status=status.HTTP_400_BAD_REQUEST
            )
        remember_drawer(request, store)

        payload = summarize(store)
        payload["added"] = allowed
        payload["clamped"] = allowed < requested
        return Response(payload, status=status.HTTP_200_OK)

    @extend_schema(tags=["Cart"], request=UpdateCartItemInputSerializer)
    def patch(self, request):
        ser = UpdateCartItemInputSerializer(data=request.data)
        if not ser.is_valid():
            return _invalid(ser)

        store = session_store(request)
        store.update_quantity(
            ser.validated_data["productId"],
            ser.validated_data.get("size"),
            ser.validated_data["quantity"],
        )
        return Response(summarize(store), status=status.HTTP_200_OK)

    @extend_schema(tags=["Cart"], request=RemoveCartItemInputSerializer)
    def delete(self, request):
        ser = RemoveCartItemInputSerializer(data=request.data)
        if not ser.is_valid():
            return _invalid(ser)

        store = session_store(request)
        store.remove_item(ser.validated_data["productId"], ser.validated_data.get("size"))
        return Response(summarize(store), status=status.HTTP_200_OK)


class CartClearView(CartBaseView):
    @extend_schema(tags=["Cart"], request=None)
    def post(self, request):
        store = session_store(request)
        store.clear_cart()
        return Response(summarize(store), status=status.HTTP_200_OK)


class CartDrawerView(CartBaseView):
    @extend_schema(tags=["Cart"], request=DrawerInputSerializer)
    def post(self, request):
        ser = DrawerInputSerializer(data=request.data)
        if not ser.is_valid():
            return _invalid(ser)

        store = session_store(request)
        {
            "open": store.open_cart,
            "close": store.close_cart,
            "toggle": store.toggle_cart,
        }[ser.validated_data["action"]]()
        remember_drawer(request, store)
        return Response(summarize(store), status=status.HTTP_200_OK)
