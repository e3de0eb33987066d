# products/services/catalog_resolver.py

"""
======================================================
PATH: products/services/catalog_resolver.py
======================================================
CATALOG RESOLVER

Purpose:
- Map a cart line (product slug + size) to a concrete ProductVariant that an
  OrderItem can reference.
- Never fail a checkout just because the catalog lags behind the storefront:
  missing variants / products are synthesized from the cart data.

Ladder (first match wins):
1. product by slug
2. sellable variant with the exact size            -> EXACT_MATCH
3. first sellable variant (creation order)          -> FIRST_VARIANT_FALLBACK
4. product has no variants at all                   -> FABRICATED_VARIANT
5. product has variants but none sellable           -> VariantUnavailableError
6. no product                                       -> FABRICATED_PRODUCT
   (no category configured                          -> CatalogConfigurationError)

Rules:
- The price recorded for a line is ALWAYS the cart price.
- Fabrication is an upsert on slug / sku, so resubmitted or concurrent
  checkouts for the same missing slug converge on one product + variant.
- Callers run this inside their own transaction; nothing here commits.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from decimal import Decimal

from django.conf import settings
from django.db.models import Prefetch
from django.utils.text import slugify

from orders.services.exceptions import (
    CatalogConfigurationError,
    VariantUnavailableError,
)
from products.models import Category, Product, ProductVariant

logger = logging.getLogger(__name__)

DEFAULT_SIZE = "One Size"
DEFAULT_SKU_TOKEN = "default"
DEFAULT_COLOR = "Default"


class ResolutionOutcome(str, enum.Enum):
    EXACT_MATCH = "exact_match"
    FIRST_VARIANT_FALLBACK = "first_variant_fallback"
    FABRICATED_VARIANT = "fabricated_variant"
    FABRICATED_PRODUCT = "fabricated_product"


@dataclass(frozen=True)
class CartLineInput:
    product_slug: str
    product_name: str
    size: str
    price: Decimal
    quantity: int


@dataclass(frozen=True)
class ResolvedLine:
    variant: ProductVariant
    quantity: int
    price: Decimal
    outcome: ResolutionOutcome

    @property
    def variant_id(self):
        return self.variant.id


def _fabricated_stock() -> int:
    config = getattr(settings, "CHECKOUT", None) or {}
    return int(config.get("FABRICATED_VARIANT_STOCK") or 100)


def fabricated_sku(slug: str, size: str | None) -> str:
    return f"{slug}_{(size or '').strip() or DEFAULT_SKU_TOKEN}".upper().replace("-", "_")


def first_category() -> Category:
    category = Category.objects.order_by("name").first()
    if category is None:
        raise CatalogConfigurationError(
            "No product category is configured; cannot create missing products. "
            "Create at least one category."
        )
    return category


def _load_product(slug: str) -> Product | None:
    return (
        Product.objects.filter(slug=slug)
        .prefetch_related(
            Prefetch("variants", queryset=ProductVariant.objects.order_by("created_at", "id"))
        )
        .first()
    )


def _fabricate_product(line: CartLineInput, slug: str) -> tuple[Product, bool]:
    category = first_category()
    product, created = Product.objects.get_or_create(
        slug=slug,
        defaults={
            "name": line.product_name or slug,
            "description": line.product_name or slug,
            "base_price": line.price,
            "category": category,
            "is_active": True,
        },
    )
    if created:
        logger.warning(
            "Fabricated product from cart line",
            extra={"slug": slug, "category": category.name},
        )
    return product, created


def _fabricate_variant(product: Product, line: CartLineInput) -> ProductVariant:
    sku = fabricated_sku(product.slug, line.size)
    size = (line.size or "").strip() or DEFAULT_SIZE

    variant, created = ProductVariant.objects.get_or_create(
        sku=sku,
        defaults={
            "product": product,
            "name": f"{product.name} - {size}",
            "size": size,
            "color": DEFAULT_COLOR,
            "price": line.price,
            "stock_quantity": _fabricated_stock(),
            "is_available": True,
        },
    )

    if variant.product_id != product.id:
        raise CatalogConfigurationError(
            f"SKU {sku} already belongs to another product; "
            f"cannot create a variant for '{product.slug}'."
        )

    if created:
        logger.warning(
            "Fabricated variant from cart line",
            extra={"slug": product.slug, "sku": sku, "size": size},
        )
    return variant


def resolve_line(line: CartLineInput) -> ResolvedLine:
    slug = (line.product_slug or "").strip() or slugify(line.product_name or "")
    price = Decimal(str(line.price))

    product = _load_product(slug)
    fabricated_product = False

    if product is None:
        product, fabricated_product = _fabricate_product(line, slug)
        if not fabricated_product:
            product = _load_product(slug)

    variants = [] if fabricated_product else list(product.variants.all())

    if not variants:
        variant = _fabricate_variant(product, line)
        outcome = (
            ResolutionOutcome.FABRICATED_PRODUCT
            if fabricated_product
            else ResolutionOutcome.FABRICATED_VARIANT
        )
        return ResolvedLine(variant=variant, quantity=line.quantity, price=price, outcome=outcome)

    sellable = [v for v in variants if v.is_sellable]
    if not sellable:
        raise VariantUnavailableError(
            f"'{product.name}' is no longer available in any size."
        )

    wanted = (line.size or "").strip()
    for variant in sellable:
        if wanted and variant.size == wanted:
            return ResolvedLine(
                variant=variant,
                quantity=line.quantity,
                price=price,
                outcome=ResolutionOutcome.EXACT_MATCH,
            )

    variant = sellable[0]
    logger.info(
        "Size not found, using first available variant",
        extra={"slug": slug, "requested_size": wanted, "sku": variant.sku},
    )
    return ResolvedLine(
        variant=variant,
        quantity=line.quantity,
        price=price,
        outcome=ResolutionOutcome.FIRST_VARIANT_FALLBACK,
    )


def resolve_lines(lines) -> list[ResolvedLine]:
    return [resolve_line(line) for line in lines]
