# products/models/product.py

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models

from .category import Category


class Product(models.Model):
    """
    Canonical catalog entry.

    STOCK MODEL (IMPORTANT):
    - Product itself does NOT store stock or a sellable price
    - Stock + price live on ProductVariant (one row per size/color)
    - base_price is the listing price and the default for new variants

    is_active doubles as the active/draft flag. A product whose variants
    carry order history is deactivated instead of deleted.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    category = models.ForeignKey(
        Category,
        on_delete=models.PROTECT,
        related_name="products",
    )

    slug = models.SlugField(max_length=255, unique=True)
    name = models.CharField(max_length=255, db_index=True)
    description = models.TextField(blank=True, default="")

    base_price = models.DecimalField(max_digits=12, decimal_places=2)

    is_active = models.BooleanField(default=True)
    featured = models.BooleanField(default=False)

    meta_title = models.CharField(max_length=255, blank=True, default="")
    meta_description = models.TextField(blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["slug"], name="product_slug_idx"),
            models.Index(fields=["is_active", "created_at"], name="product_active_created_idx"),
        ]

    def __str__(self):
        return f"{self.name} ({self.slug})"

    def clean(self):
        if self.base_price is None or Decimal(self.base_price) < 0:
            raise ValidationError({"base_price": "base_price must be non-negative"})

    @property
    def primary_image(self):
        images = list(self.images.all())
        for image in images:
            if image.is_primary:
                return image
        return images[0] if images else None

    @property
    def total_stock(self) -> int:
        return sum(
            int(v.stock_quantity or 0) for v in self.variants.all() if v.is_available
        )

    @property
    def sizes(self) -> list[str]:
        seen = []
        for v in self.variants.all():
            if v.is_sellable and v.size and v.size not in seen:
                seen.append(v.size)
        return seen


class ProductImage(models.Model):
    """
    Ordered product image. No order history depends on images, so they are
    always hard-deleted.
    """

    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name="images",
    )

    url = models.URLField(max_length=500)
    position = models.PositiveIntegerField(default=0)
    is_primary = models.BooleanField(default=False)

    class Meta:
        ordering = ["position", "id"]

    def __str__(self):
        return f"{self.product.slug} #{self.position}"
