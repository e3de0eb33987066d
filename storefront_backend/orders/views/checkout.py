# orders/views/checkout.py
"""
STOREFRONT CHECKOUT

POST /api/checkout/

Rules:
- Signed-in customers only (401 with a friendly message otherwise)
- Creates a PENDING order; no payment capture
- Totals are recomputed server-side (client totals are only cross-checked)
- On success the session cart is emptied

Security hardening:
- Throttle (public_write) because it's a write endpoint (abuse target)
"""

from __future__ import annotations

import logging

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.parsers import JSONParser
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.throttling import UserRateThrottle
from rest_framework.views import APIView

from cart.services import session_store
from orders.serializers import CheckoutSerializer
from orders.services.exceptions import CheckoutError
from orders.services.order_materializer import materialize_order

logger = logging.getLogger(__name__)


class CheckoutWriteThrottle(UserRateThrottle):
    scope = "public_write"


def error_response(exc: CheckoutError) -> Response:
    return Response(exc.to_payload(), status=exc.status_code)


class CheckoutView(APIView):
    # Authentication is checked inside post() so anonymous callers get the
    # storefront's sign-in message instead of DRF's default 401 body.
    permission_classes = [AllowAny]
    parser_classes = [JSONParser]
    throttle_classes = [CheckoutWriteThrottle]

    @extend_schema(
        tags=["Checkout"],
        request=CheckoutSerializer,
        responses={
            201: OpenApiResponse(description="Order created"),
            400: OpenApiResponse(description="Missing fields / empty cart / totals mismatch"),
            401: OpenApiResponse(description="Not signed in"),
            409: OpenApiResponse(description="Product no longer available"),
            500: OpenApiResponse(description="Catalog misconfigured / persistence failure"),
            503: OpenApiResponse(description="Temporary failure, retry"),
        },
        description="Materialize the submitted cart into a PENDING order.",
    )
    def post(self, request, *args, **kwargs):
        if not request.user or not request.user.is_authenticated:
            return Response(
                {"error": "Please sign in to place an order"},
                status=status.HTTP_401_UNAUTHORIZED,
            )

        serializer = CheckoutSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {"error": "Missing required fields", "details": serializer.errors},
                status=status.HTTP_400_BAD_REQUEST,
            )

        try:
            result = materialize_order(serializer.to_checkout_request(request.user))
        except CheckoutError as exc:
            return error_response(exc)

        session_store(request).clear_cart()

        return Response(
            {
                "success": True,
                "order": {"id": str(result.id), "orderNumber": result.order_number},
            },
            status=status.HTTP_201_CREATED,
        )
