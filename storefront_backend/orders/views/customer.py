# orders/views/customer.py

"""
CUSTOMER ORDER HISTORY

GET /api/orders/                  newest first
GET /api/orders/<order_number>/   one of the caller's own orders
"""

from django.db.models import Prefetch
from drf_spectacular.utils import extend_schema
from rest_framework import generics
from rest_framework.permissions import IsAuthenticated

from orders.models import Order, OrderItem
from orders.serializers import OrderSerializer


def _order_queryset():
    return (
        Order.objects.select_related("shipping_address", "user")
        .prefetch_related(
            Prefetch(
                "items",
                queryset=OrderItem.objects.select_related("variant__product").prefetch_related(
                    "variant__product__images"
                ),
            )
        )
        .order_by("-created_at")
    )


class MyOrderListView(generics.ListAPIView):
    permission_classes = [IsAuthenticated]
    serializer_class = OrderSerializer

    def get_queryset(self):
        return _order_queryset().filter(user=self.request.user)

    @extend_schema(tags=["Orders"], responses={200: OrderSerializer(many=True)})
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)


class MyOrderDetailView(generics.RetrieveAPIView):
    permission_classes = [IsAuthenticated]
    serializer_class = OrderSerializer
    lookup_field = "order_number"

    def get_queryset(self):
        return _order_queryset().filter(user=self.request.user)

    @extend_schema(tags=["Orders"], responses={200: OrderSerializer})
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)
