# orders/models/order_item.py

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models

from products.models import ProductVariant


class OrderItem(models.Model):
    """
    Line item of an Order.

    PRICE INTEGRITY:
    - `price` is the unit price the customer was shown (cart price at add time)
    - captured once at creation, never recomputed from the live variant price

    The variant FK is PROTECT: a variant with order history cannot be
    hard-deleted, only archived.
    """

    order = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="items",
    )

    variant = models.ForeignKey(
        ProductVariant,
        on_delete=models.PROTECT,
        related_name="order_items",
    )

    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    price = models.DecimalField(max_digits=12, decimal_places=2)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at", "id"]

    def clean(self):
        if self.quantity is None or int(self.quantity) <= 0:
            raise ValidationError("quantity must be >= 1")

        if self.price is None or Decimal(self.price) < Decimal("0.00"):
            raise ValidationError("price must be >= 0")

    def save(self, *args, **kwargs):
        if not self._state.adding:
            previous = OrderItem.objects.filter(pk=self.pk).first()
            if previous is not None and (
                previous.price != self.price
                or previous.quantity != self.quantity
                or previous.variant_id != self.variant_id
            ):
                raise ValidationError("OrderItem records are immutable")
        return super().save(*args, **kwargs)

    @property
    def line_total(self) -> Decimal:
        return (self.price or Decimal("0.00")) * Decimal(int(self.quantity or 0))

    def __str__(self):
        return f"{self.variant} x{self.quantity}"
