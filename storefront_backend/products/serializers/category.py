# products/serializers/category.py

from rest_framework import serializers

from products.models import Category


class CategorySerializer(serializers.ModelSerializer):
    """
    Category serializer.

    Rules:
    - name is writable (so admins can create categories)
    - slug is derived from name when omitted
    - id + created_at are read-only
    """

    name = serializers.CharField(required=True, allow_blank=False, max_length=255)
    slug = serializers.SlugField(required=False, allow_blank=True, max_length=255)
    product_count = serializers.SerializerMethodField()

    class Meta:
        model = Category
        fields = ["id", "name", "slug", "description", "product_count", "created_at"]
        read_only_fields = ["id", "product_count", "created_at"]

    def validate_name(self, value: str):
        v = (value or "").strip()
        if not v:
            raise serializers.ValidationError("name cannot be blank")
        return v

    def get_product_count(self, obj) -> int:
        annotated = getattr(obj, "active_product_count", None)
        if annotated is not None:
            return int(annotated)
        return obj.products.filter(is_active=True).count()
