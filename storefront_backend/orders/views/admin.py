# orders/views/admin.py

"""
ADMIN ORDER MANAGEMENT

GET   /api/admin/orders/?search=&status=     paginated list + per-status counts
GET   /api/admin/orders/<id|order_number>/
PATCH /api/admin/orders/<id|order_number>/   {status?, notes?}

Only status + notes are editable; status moves go through order_lifecycle.
"""

import uuid

from django.db.models import Count, Prefetch, Q
from django.http import Http404
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import generics, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from orders.filters import AdminOrderFilter
from orders.models import Order, OrderItem
from orders.serializers import (
    AdminOrderListSerializer,
    AdminOrderSerializer,
    AdminOrderUpdateSerializer,
)
from orders.services.exceptions import CheckoutError
from orders.services.order_lifecycle import apply_admin_update
from users.permissions import IsAdmin


def status_counts() -> dict:
    """Global per-status counts (lower-case keys) + "all"."""
    aggregates = {"all": Count("id")}
    for value, _label in Order.STATUS_CHOICES:
        aggregates[value.lower()] = Count("id", filter=Q(status=value))
    return Order.objects.aggregate(**aggregates)


def _get_order(identifier: str) -> Order:
    qs = Order.objects.select_related("shipping_address", "user").prefetch_related(
        Prefetch("items", queryset=OrderItem.objects.select_related("variant__product"))
    )
    try:
        lookup = Q(pk=uuid.UUID(str(identifier)))
    except ValueError:
        lookup = Q(order_number=identifier)

    order = qs.filter(lookup).first()
    if order is None:
        raise Http404("Order not found")
    return order


class AdminOrderListView(generics.ListAPIView):
    permission_classes = [IsAuthenticated, IsAdmin]
    serializer_class = AdminOrderListSerializer
    filterset_class = AdminOrderFilter

    def get_queryset(self):
        return (
            Order.objects.select_related("user", "shipping_address")
            .prefetch_related("items")
            .order_by("-created_at")
        )

    @extend_schema(tags=["Admin"], responses={200: AdminOrderListSerializer(many=True)})
    def get(self, request, *args, **kwargs):
        response = super().get(request, *args, **kwargs)
        response.data["counts"] = status_counts()
        return response


class AdminOrderDetailView(APIView):
    permission_classes = [IsAuthenticated, IsAdmin]

    @extend_schema(tags=["Admin"], responses={200: AdminOrderSerializer})
    def get(self, request, identifier):
        order = _get_order(identifier)
        return Response({"order": AdminOrderSerializer(order).data})

    @extend_schema(
        tags=["Admin"],
        request=AdminOrderUpdateSerializer,
        responses={
            200: AdminOrderSerializer,
            400: OpenApiResponse(description="Invalid status / transition"),
            404: OpenApiResponse(description="Order not found"),
        },
    )
    def patch(self, request, identifier):
        order = _get_order(identifier)

        serializer = AdminOrderUpdateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {"error": "Invalid update", "details": serializer.errors},
                status=status.HTTP_400_BAD_REQUEST,
            )

        try:
            apply_admin_update(
                order=order,
                status=serializer.validated_data.get("status"),
                notes=serializer.validated_data.get("notes"),
            )
        except CheckoutError as exc:
            return Response(exc.to_payload(), status=exc.status_code)

        return Response({"order": AdminOrderSerializer(_get_order(str(order.pk))).data})
