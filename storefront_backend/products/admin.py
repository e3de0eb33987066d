# products/admin.py
"""
=====================================================
PATH: products/admin.py
=====================================================

Admin rules (order-history safe):

- Variants and images are edited inline on the Product page.
- Deleting a product or variant from the Django admin goes through the
  inventory guard, exactly like the API: anything referenced by an order
  item is archived instead of deleted.
"""

from __future__ import annotations

from django.contrib import admin, messages

from products.models import Category, Product, ProductImage, ProductVariant
from products.services.inventory_guard import delete_product, delete_variant


# =====================================================
# CATEGORY
# =====================================================

@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "slug", "created_at")
    search_fields = ("name", "slug")
    ordering = ("name",)
    prepopulated_fields = {"slug": ("name",)}


# =====================================================
# INLINES
# =====================================================

class ProductVariantInline(admin.TabularInline):
    model = ProductVariant
    extra = 0
    can_delete = False
    show_change_link = True
    fields = (
        "sku",
        "size",
        "color",
        "price",
        "compare_at_price",
        "stock_quantity",
        "is_available",
    )


class ProductImageInline(admin.TabularInline):
    model = ProductImage
    extra = 1
    fields = ("url", "position", "is_primary")


# =====================================================
# PRODUCT
# =====================================================

@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = (
        "name",
        "slug",
        "category",
        "base_price",
        "total_stock",
        "featured",
        "is_active",
        "created_at",
    )
    list_filter = ("is_active", "featured", "category", "created_at")
    search_fields = ("name", "slug", "variants__sku")
    ordering = ("-created_at",)
    readonly_fields = ("created_at", "updated_at")
    prepopulated_fields = {"slug": ("name",)}

    inlines = [ProductVariantInline, ProductImageInline]

    def delete_model(self, request, obj):
        result = delete_product(obj)
        self.message_user(request, result.message, level=messages.INFO)

    def delete_queryset(self, request, queryset):
        for product in queryset:
            delete_product(product)


# =====================================================
# VARIANT
# =====================================================

@admin.register(ProductVariant)
class ProductVariantAdmin(admin.ModelAdmin):
    list_display = (
        "sku",
        "product",
        "size",
        "color",
        "price",
        "stock_quantity",
        "is_available",
    )
    list_filter = ("is_available", "size")
    search_fields = ("sku", "product__name", "product__slug")
    ordering = ("product__name", "created_at")

    def delete_model(self, request, obj):
        result = delete_variant(obj)
        self.message_user(request, result.message, level=messages.INFO)

    def delete_queryset(self, request, queryset):
        for variant in queryset:
            delete_variant(variant)
