# cart/serializers.py

"""
CART API INPUT SERIALIZERS (Swagger + validation)
"""

from rest_framework import serializers


class AddCartItemInputSerializer(serializers.Serializer):
    productSlug = serializers.SlugField(max_length=255)
    size = serializers.CharField(max_length=64, required=False, allow_blank=True, allow_null=True)
    quantity = serializers.IntegerField(min_value=1, default=1)


class UpdateCartItemInputSerializer(serializers.Serializer):
    productId = serializers.CharField(max_length=64)
    size = serializers.CharField(max_length=64, required=False, allow_blank=True, allow_null=True)
    quantity = serializers.IntegerField()


class RemoveCartItemInputSerializer(serializers.Serializer):
    productId = serializers.CharField(max_length=64)
    size = serializers.CharField(max_length=64, required=False, allow_blank=True, allow_null=True)


class DrawerInputSerializer(serializers.Serializer):
    action = serializers.ChoiceField(choices=["open", "close", "toggle"])
