# products/services/inventory_guard.py

"""
======================================================
PATH: products/services/inventory_guard.py
======================================================
INVENTORY MUTATION GUARD

Purpose:
- Admin delete / edit paths for products and variants that NEVER break
  order history.

Rules:
- A variant referenced by any OrderItem is archived
  (is_available=False, stock_quantity=0), never hard-deleted.
- The OrderItem.variant FK is PROTECT; a ProtectedError from it (history
  written between the check and the delete) is treated as "archive".
- Images carry no history and are always hard-deleted.
- A product that kept any archived variant is deactivated, not deleted.
- There is no un-archive here; re-enabling is a normal admin edit.
"""

from __future__ import annotations

import enum
import logging
import time
from dataclasses import dataclass, field
from decimal import Decimal

from django.db import transaction
from django.db.models import ProtectedError

from products.models import Product, ProductImage, ProductVariant

logger = logging.getLogger(__name__)


class InventoryGuardError(Exception):
    """Raised when an inventory mutation request is malformed."""


class DeletionOutcome(str, enum.Enum):
    DELETED = "deleted"
    ARCHIVED = "archived"


@dataclass(frozen=True)
class VariantDeletionResult:
    variant_id: object
    outcome: DeletionOutcome

    @property
    def message(self) -> str:
        if self.outcome == DeletionOutcome.ARCHIVED:
            return "Variant archived because it has order history"
        return "Variant deleted"


@dataclass(frozen=True)
class ProductDeletionResult:
    product_id: object
    outcome: DeletionOutcome
    variants: list = field(default_factory=list)
    images_deleted: int = 0

    @property
    def archived_variants(self) -> int:
        return sum(1 for v in self.variants if v.outcome == DeletionOutcome.ARCHIVED)

    @property
    def message(self) -> str:
        if self.outcome == DeletionOutcome.ARCHIVED:
            return (
                "Product archived because it has order history "
                f"({self.archived_variants} variant(s) kept)"
            )
        return "Product deleted"


def _archive(variant: ProductVariant, *, reason: str) -> VariantDeletionResult:
    variant.archive()
    logger.info(
        "Variant archived instead of deleted",
        extra={"variant_id": str(variant.id), "sku": variant.sku, "reason": reason},
    )
    return VariantDeletionResult(variant_id=variant.id, outcome=DeletionOutcome.ARCHIVED)


def delete_variant(variant: ProductVariant) -> VariantDeletionResult:
    if variant.has_order_history:
        return _archive(variant, reason="order_history")

    variant_id = variant.id
    try:
        with transaction.atomic():
            variant.delete()
    except ProtectedError:
        return _archive(variant, reason="protected")

    return VariantDeletionResult(variant_id=variant_id, outcome=DeletionOutcome.DELETED)


@transaction.atomic
def delete_product(product: Product) -> ProductDeletionResult:
    product_id = product.id

    images_deleted, _ = ProductImage.objects.filter(product=product).delete()

    results = [delete_variant(v) for v in product.variants.order_by("created_at", "id")]

    if any(r.outcome == DeletionOutcome.ARCHIVED for r in results):
        product.is_active = False
        product.save(update_fields=["is_active", "updated_at"])
        logger.info(
            "Product deactivated instead of deleted",
            extra={"product_id": str(product_id), "slug": product.slug},
        )
        return ProductDeletionResult(
            product_id=product_id,
            outcome=DeletionOutcome.ARCHIVED,
            variants=results,
            images_deleted=images_deleted,
        )

    product.delete()
    return ProductDeletionResult(
        product_id=product_id,
        outcome=DeletionOutcome.DELETED,
        variants=results,
        images_deleted=images_deleted,
    )


def generate_sku(product_name: str, color: str, size: str, index: int = 0) -> str:
    prefix = "".join(w[:1].upper() for w in (product_name or "").split())[:3] or "JF"
    color_code = (color or "")[:2].upper() or "XX"
    size_code = (size or "OS").upper()
    stamp = format(int(time.time() * 1000), "x")[-4:].upper()
    return f"{prefix}-{color_code}-{size_code}-{stamp}{index}"


def _variant_fields(product: Product, data: dict) -> dict:
    price = data.get("price")
    if price in (None, "", 0, "0"):
        price = product.base_price

    stock = int(data.get("stock_quantity") or 0)
    if stock < 0:
        raise InventoryGuardError("stock_quantity must be >= 0")

    return {
        "size": (data.get("size") or "").strip(),
        "color": (data.get("color") or "").strip() or "Default",
        "price": Decimal(str(price)),
        "compare_at_price": data.get("compare_at_price"),
        "stock_quantity": stock,
        "is_available": bool(data.get("is_available", True)),
    }


@transaction.atomic
def sync_variants(product: Product, incoming) -> list[VariantDeletionResult]:
    """
    Reconcile a product's variants with the list submitted by the admin form.

    - existing variants missing from `incoming` go through delete_variant
    - listed existing variants are updated (re-enabled unless told otherwise)
    - entries without a known id are created, with a generated SKU if blank

    Returns the removal results so callers can report archived variants.
    """
    existing = {str(v.id): v for v in product.variants.all()}
    incoming = list(incoming or [])

    keep_ids = {str(d["id"]) for d in incoming if d.get("id") and str(d["id"]) in existing}

    removed = [delete_variant(v) for vid, v in existing.items() if vid not in keep_ids]

    for index, data in enumerate(incoming):
        fields = _variant_fields(product, data)
        sku = (data.get("sku") or "").strip()
        vid = str(data.get("id") or "")

        if vid in keep_ids:
            variant = existing[vid]
            for name, value in fields.items():
                setattr(variant, name, value)
            if sku:
                variant.sku = sku
            variant.save()
            continue

        ProductVariant.objects.create(
            product=product,
            name=f"{product.name} - {fields['color']} {fields['size']}".strip(),
            sku=sku or generate_sku(product.name, fields["color"], fields["size"], index),
            **fields,
        )

    return removed


@transaction.atomic
def replace_images(product: Product, urls) -> list[ProductImage]:
    """Images have no history: the submitted list replaces the old one wholesale."""
    ProductImage.objects.filter(product=product).delete()
    return [
        ProductImage.objects.create(
            product=product, url=url, position=index, is_primary=(index == 0)
        )
        for index, url in enumerate(urls or [])
    ]
