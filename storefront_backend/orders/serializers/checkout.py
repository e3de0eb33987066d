# orders/serializers/checkout.py

"""
CHECKOUT INPUT SERIALIZERS

Field names follow the storefront client (camelCase). The serializer only
checks shape; business validation + totals live in the order materializer.
"""

from decimal import Decimal

from rest_framework import serializers

from cart.state import NO_SIZE
from orders.services.order_materializer import (
    CheckoutRequest,
    ContactDetails,
    ShippingDetails,
    build_line,
)


class CheckoutItemSerializer(serializers.Serializer):
    productSlug = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    productName = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    size = serializers.CharField(max_length=64, required=False, allow_blank=True, default="")
    price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal("0"))
    quantity = serializers.IntegerField(min_value=1)

    def validate_size(self, value):
        value = (value or "").strip()
        return "" if value == NO_SIZE else value

    def validate(self, attrs):
        if not (attrs.get("productSlug") or "").strip() and not (attrs.get("productName") or "").strip():
            raise serializers.ValidationError("productSlug or productName is required")
        return attrs


class CheckoutSerializer(serializers.Serializer):
    email = serializers.EmailField()
    phone = serializers.CharField(max_length=40, required=False, allow_blank=True, default="")
    firstName = serializers.CharField(max_length=100)
    lastName = serializers.CharField(max_length=100)
    address = serializers.CharField(max_length=255)
    city = serializers.CharField(max_length=120)
    state = serializers.CharField(max_length=120)
    postalCode = serializers.CharField(max_length=20, required=False, allow_blank=True, default="")
    country = serializers.CharField(max_length=80, required=False, allow_blank=True, default="")

    items = CheckoutItemSerializer(many=True, allow_empty=True)

    subtotal = serializers.DecimalField(
        max_digits=12, decimal_places=2, required=False, allow_null=True
    )
    shippingCost = serializers.DecimalField(
        max_digits=12, decimal_places=2, required=False, allow_null=True
    )
    total = serializers.DecimalField(max_digits=12, decimal_places=2, required=False, allow_null=True)

    def to_checkout_request(self, user) -> CheckoutRequest:
        data = self.validated_data
        return CheckoutRequest(
            user=user,
            contact=ContactDetails(email=data["email"], phone=data.get("phone") or ""),
            shipping=ShippingDetails(
                first_name=data["firstName"],
                last_name=data["lastName"],
                street=data["address"],
                city=data["city"],
                state=data["state"],
                postal_code=data.get("postalCode") or "",
                country=data.get("country") or "",
            ),
            lines=[
                build_line(
                    product_slug=item.get("productSlug"),
                    product_name=item.get("productName"),
                    size=item.get("size"),
                    price=item["price"],
                    quantity=item["quantity"],
                )
                for item in data["items"]
            ],
            subtotal=data.get("subtotal"),
            shipping_cost=data.get("shippingCost"),
            total=data.get("total"),
        )
