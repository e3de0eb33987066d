# products/models/variant.py

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models

from .product import Product


class ProductVariant(models.Model):
    """
    Sellable unit of a product (one size/color combination).

    RULES:
    - sku is globally unique
    - stock_quantity never goes negative
    - a variant that is unavailable or has zero stock is never selected at checkout
    - a variant referenced by an order item is never hard-deleted; it is
      archived (is_available=False, stock_quantity=0) instead
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name="variants",
    )

    sku = models.CharField(max_length=128, unique=True, db_index=True)
    name = models.CharField(max_length=255, blank=True, default="")

    size = models.CharField(max_length=64, blank=True, default="")
    color = models.CharField(max_length=64, blank=True, default="Default")

    price = models.DecimalField(max_digits=12, decimal_places=2)
    compare_at_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
    )

    stock_quantity = models.PositiveIntegerField(default=0)
    is_available = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(fields=["product", "size"], name="variant_product_size_idx"),
        ]

    def __str__(self):
        return f"{self.sku} ({self.size or 'One Size'})"

    def clean(self):
        if self.price is None or Decimal(self.price) < 0:
            raise ValidationError({"price": "price must be non-negative"})

    @property
    def is_sellable(self) -> bool:
        return bool(self.is_available) and int(self.stock_quantity or 0) > 0

    @property
    def is_archived(self) -> bool:
        return not self.is_available and int(self.stock_quantity or 0) == 0

    @property
    def has_order_history(self) -> bool:
        return self.order_items.exists()

    def archive(self):
        """
        One-way soft delete. Re-enabling is an explicit admin edit
        (is_available=True + positive stock).
        """
        self.is_available = False
        self.stock_quantity = 0
        self.save(update_fields=["is_available", "stock_quantity", "updated_at"])
