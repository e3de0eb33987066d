# orders/serializers/order.py

from rest_framework import serializers

from orders.models import Address, Order, OrderItem


class AddressSerializer(serializers.ModelSerializer):
    firstName = serializers.CharField(source="first_name")
    lastName = serializers.CharField(source="last_name")
    postalCode = serializers.CharField(source="postal_code")

    class Meta:
        model = Address
        fields = [
            "firstName",
            "lastName",
            "phone",
            "street",
            "city",
            "state",
            "postalCode",
            "country",
        ]


class OrderItemSerializer(serializers.ModelSerializer):
    variantId = serializers.UUIDField(source="variant.id", read_only=True)
    sku = serializers.CharField(source="variant.sku", read_only=True)
    size = serializers.CharField(source="variant.size", read_only=True)
    color = serializers.CharField(source="variant.color", read_only=True)
    productName = serializers.CharField(source="variant.product.name", read_only=True)
    productSlug = serializers.CharField(source="variant.product.slug", read_only=True)
    image = serializers.SerializerMethodField()
    lineTotal = serializers.DecimalField(
        source="line_total", max_digits=12, decimal_places=2, read_only=True
    )

    class Meta:
        model = OrderItem
        fields = [
            "id",
            "variantId",
            "sku",
            "productName",
            "productSlug",
            "size",
            "color",
            "image",
            "quantity",
            "price",
            "lineTotal",
        ]

    def get_image(self, obj):
        image = obj.variant.product.primary_image
        return image.url if image else None


class OrderSerializer(serializers.ModelSerializer):
    """
    Read-only order shape for the customer's order history.
    """

    orderNumber = serializers.CharField(source="order_number", read_only=True)
    shippingCost = serializers.DecimalField(
        source="shipping_cost", max_digits=12, decimal_places=2, read_only=True
    )
    itemCount = serializers.IntegerField(source="item_count", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    shippingAddress = AddressSerializer(source="shipping_address", read_only=True)
    items = OrderItemSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "orderNumber",
            "status",
            "subtotal",
            "shippingCost",
            "tax",
            "total",
            "itemCount",
            "createdAt",
            "shippingAddress",
            "items",
        ]
        read_only_fields = fields


class AdminOrderSerializer(OrderSerializer):
    customer = serializers.SerializerMethodField()
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta(OrderSerializer.Meta):
        fields = OrderSerializer.Meta.fields + ["notes", "customer", "updatedAt"]
        read_only_fields = fields

    def get_customer(self, obj) -> dict:
        return {
            "id": str(obj.user_id),
            "name": obj.user.full_name or "Unknown",
            "email": obj.user.email,
        }


class AdminOrderListSerializer(serializers.ModelSerializer):
    orderNumber = serializers.CharField(source="order_number", read_only=True)
    customer = serializers.SerializerMethodField()
    items = serializers.SerializerMethodField()
    shippingCity = serializers.CharField(source="shipping_address.city", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Order
        fields = ["id", "orderNumber", "customer", "items", "total", "status", "createdAt", "shippingCity"]
        read_only_fields = fields

    def get_customer(self, obj) -> dict:
        return {"name": obj.user.full_name or "Unknown", "email": obj.user.email}

    def get_items(self, obj) -> int:
        return len(obj.items.all())


class AdminOrderUpdateSerializer(serializers.Serializer):
    status = serializers.CharField(required=False)
    notes = serializers.CharField(required=False, allow_blank=True)

    def validate_status(self, value):
        value = (value or "").strip().upper()
        valid = {choice for choice, _ in Order.STATUS_CHOICES}
        if value not in valid:
            raise serializers.ValidationError(
                f"status must be one of: {', '.join(sorted(valid))}"
            )
        return value
