# products/serializers/product.py

"""
PRODUCT SERIALIZERS

Purpose:
- Public storefront shapes (list card + detail page), camelCase like the
  storefront client expects.
- Admin read/write shapes, including nested variants and image URLs.

Rules:
- Public shapes only ever list available variants.
- Storefront price = lowest available variant price, else base_price.
- Variant/image writes go through products.services.inventory_guard so a
  variant with order history is archived, never deleted.
"""

from decimal import Decimal

from django.db import transaction
from rest_framework import serializers

from products.models import Category, Product, ProductVariant
from products.services.inventory_guard import replace_images, sync_variants


class VariantSerializer(serializers.ModelSerializer):
    compareAtPrice = serializers.DecimalField(
        source="compare_at_price",
        max_digits=12,
        decimal_places=2,
        required=False,
        allow_null=True,
    )
    stockQuantity = serializers.IntegerField(source="stock_quantity", min_value=0, default=0)
    isAvailable = serializers.BooleanField(source="is_available", default=True)
    id = serializers.UUIDField(required=False, allow_null=True)
    sku = serializers.CharField(required=False, allow_blank=True, max_length=128)
    price = serializers.DecimalField(
        max_digits=12, decimal_places=2, required=False, allow_null=True, min_value=Decimal("0")
    )

    class Meta:
        model = ProductVariant
        fields = [
            "id",
            "sku",
            "name",
            "size",
            "color",
            "price",
            "compareAtPrice",
            "stockQuantity",
            "isAvailable",
        ]
        read_only_fields = ["name"]
        # sku uniqueness is enforced by the DB; the guard edits in place
        validators = []


def _available_variants(product):
    return [v for v in product.variants.all() if v.is_available]


class PublicProductSerializer(serializers.ModelSerializer):
    price = serializers.SerializerMethodField()
    compareAtPrice = serializers.SerializerMethodField()
    image = serializers.SerializerMethodField()
    images = serializers.SerializerMethodField()
    category = serializers.CharField(source="category.name", read_only=True)
    categorySlug = serializers.CharField(source="category.slug", read_only=True)
    sizes = serializers.SerializerMethodField()
    inStock = serializers.SerializerMethodField()
    variants = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "slug",
            "description",
            "price",
            "compareAtPrice",
            "image",
            "images",
            "category",
            "categorySlug",
            "sizes",
            "inStock",
            "featured",
            "variants",
        ]

    def get_price(self, obj) -> str:
        variants = _available_variants(obj)
        if variants:
            return str(min(v.price for v in variants))
        return str(obj.base_price)

    def get_compareAtPrice(self, obj):
        for v in _available_variants(obj):
            if v.compare_at_price:
                return str(v.compare_at_price)
        return None

    def get_image(self, obj):
        image = obj.primary_image
        return image.url if image else None

    def get_images(self, obj) -> list:
        return [img.url for img in obj.images.all()]

    def get_sizes(self, obj) -> list:
        return obj.sizes

    def get_inStock(self, obj) -> bool:
        return any(v.is_sellable for v in obj.variants.all())

    def get_variants(self, obj) -> list:
        return VariantSerializer(_available_variants(obj), many=True).data


class AdminProductListSerializer(serializers.ModelSerializer):
    category = serializers.CharField(source="category.name", read_only=True)
    price = serializers.DecimalField(source="base_price", max_digits=12, decimal_places=2)
    stock = serializers.IntegerField(source="total_stock", read_only=True)
    sku = serializers.SerializerMethodField()
    status = serializers.SerializerMethodField()
    image = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = ["id", "name", "slug", "category", "price", "stock", "sku", "status", "image"]

    def get_sku(self, obj) -> str:
        first = next(iter(obj.variants.all()), None)
        return first.sku if first else ""

    def get_status(self, obj) -> str:
        return "active" if obj.is_active else "draft"

    def get_image(self, obj):
        image = obj.primary_image
        return image.url if image else None


class AdminProductSerializer(serializers.ModelSerializer):
    """
    Admin create / update.

    status: "active" | "draft" maps onto is_active.
    images: ordered list of URLs; the first one is primary.
    variants: full desired list (see inventory_guard.sync_variants).
    """

    basePrice = serializers.DecimalField(
        source="base_price", max_digits=12, decimal_places=2, min_value=Decimal("0")
    )
    categoryId = serializers.PrimaryKeyRelatedField(
        source="category", queryset=Category.objects.all()
    )
    categoryName = serializers.CharField(source="category.name", read_only=True)
    status = serializers.ChoiceField(choices=["active", "draft"], default="active", write_only=True)
    isActive = serializers.BooleanField(source="is_active", read_only=True)
    metaTitle = serializers.CharField(
        source="meta_title", required=False, allow_blank=True, max_length=255
    )
    metaDescription = serializers.CharField(
        source="meta_description", required=False, allow_blank=True
    )
    variants = VariantSerializer(many=True, required=False)
    images = serializers.ListField(
        child=serializers.URLField(max_length=500), required=False, write_only=True
    )
    imageUrls = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "slug",
            "description",
            "basePrice",
            "categoryId",
            "categoryName",
            "status",
            "isActive",
            "featured",
            "metaTitle",
            "metaDescription",
            "variants",
            "images",
            "imageUrls",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]

    def get_imageUrls(self, obj) -> list:
        return [img.url for img in obj.images.all()]

    def to_representation(self, instance):
        data = super().to_representation(instance)
        data["status"] = "active" if instance.is_active else "draft"
        return data

    def _split(self, validated_data):
        variants = validated_data.pop("variants", None)
        images = validated_data.pop("images", None)
        status = validated_data.pop("status", None)
        if status is not None:
            validated_data["is_active"] = status == "active"
        return variants, images

    @transaction.atomic
    def create(self, validated_data):
        variants, images = self._split(validated_data)
        product = Product.objects.create(**validated_data)
        sync_variants(product, variants or [])
        replace_images(product, images or [])
        return product

    @transaction.atomic
    def update(self, instance, validated_data):
        variants, images = self._split(validated_data)
        for name, value in validated_data.items():
            setattr(instance, name, value)
        instance.save()

        # Omitted lists mean "leave as is"
        if variants is not None:
            sync_variants(instance, variants)
        if images is not None:
            replace_images(instance, images)
        return instance
