# products/tests/test_products.py

from decimal import Decimal

from django.db import IntegrityError
from django.test import TestCase

from products.models import Category, Product, ProductImage, ProductVariant


class ProductModelTests(TestCase):
    """
    Catalog model tests.

    GUARANTEES:
    - Slug and SKU uniqueness are enforced
    - Sellability is derived from availability + stock
    - Archiving is a one-way soft delete
    """

    def setUp(self):
        self.category = Category.objects.create(name="Caps")
        self.product = Product.objects.create(
            category=self.category,
            slug="classic-snapback",
            name="Classic Snapback",
            base_price=Decimal("12500.00"),
        )

    def test_category_slug_is_derived(self):
        self.assertEqual(self.category.slug, "caps")

    def test_slug_must_be_unique(self):
        with self.assertRaises(IntegrityError):
            Product.objects.create(
                category=self.category,
                slug="classic-snapback",
                name="Duplicate",
                base_price=Decimal("1.00"),
            )

    def test_sku_must_be_unique(self):
        ProductVariant.objects.create(
            product=self.product, sku="CS-BL-OS", size="One Size", price=Decimal("12500")
        )
        with self.assertRaises(IntegrityError):
            ProductVariant.objects.create(
                product=self.product, sku="CS-BL-OS", size="M", price=Decimal("12500")
            )

    def test_sellable_requires_availability_and_stock(self):
        variant = ProductVariant.objects.create(
            product=self.product, sku="CS-1", size="M", price=Decimal("1"), stock_quantity=0
        )
        self.assertFalse(variant.is_sellable)

        variant.stock_quantity = 3
        self.assertTrue(variant.is_sellable)

        variant.is_available = False
        self.assertFalse(variant.is_sellable)

    def test_archive_zeroes_stock_and_disables(self):
        variant = ProductVariant.objects.create(
            product=self.product, sku="CS-2", size="L", price=Decimal("1"), stock_quantity=9
        )

        variant.archive()
        variant.refresh_from_db()

        self.assertFalse(variant.is_available)
        self.assertEqual(variant.stock_quantity, 0)
        self.assertTrue(variant.is_archived)

    def test_primary_image_prefers_flagged_image(self):
        ProductImage.objects.create(product=self.product, url="https://img.test/a.jpg", position=0)
        primary = ProductImage.objects.create(
            product=self.product, url="https://img.test/b.jpg", position=1, is_primary=True
        )

        self.assertEqual(self.product.primary_image, primary)

    def test_sizes_lists_only_sellable_sizes(self):
        ProductVariant.objects.create(
            product=self.product, sku="S-1", size="S", price=Decimal("1"), stock_quantity=2
        )
        ProductVariant.objects.create(
            product=self.product, sku="M-1", size="M", price=Decimal("1"), stock_quantity=0
        )

        self.assertEqual(self.product.sizes, ["S"])
