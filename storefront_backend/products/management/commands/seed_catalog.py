from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from products.models import Category, Product, ProductImage, ProductVariant
from products.services.inventory_guard import generate_sku


class Command(BaseCommand):
    help = "Seed categories, products and size variants for local development"

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write(self.style.WARNING("Seeding catalog..."))

        # -------------------------------
        # CATEGORIES
        # -------------------------------
        categories = ["Caps", "Tees", "Hoodies", "Joggers"]

        category_objs = {}
        for name in categories:
            obj, _ = Category.objects.get_or_create(name=name)
            category_objs[name] = obj

        # -------------------------------
        # PRODUCTS + VARIANTS
        # -------------------------------
        products_data = [
            ("classic-snapback", "Classic Snapback", "Caps", 12500, ["One Size"]),
            ("essential-tee", "Essential Tee", "Tees", 9500, ["S", "M", "L", "XL"]),
            ("heavyweight-hoodie", "Heavyweight Hoodie", "Hoodies", 32000, ["M", "L", "XL"]),
            ("tapered-jogger", "Tapered Jogger", "Joggers", 21000, ["S", "M", "L"]),
        ]

        for slug, name, cat, price, sizes in products_data:
            product, created = Product.objects.get_or_create(
                slug=slug,
                defaults={
                    "name": name,
                    "description": name,
                    "category": category_objs[cat],
                    "base_price": Decimal(price),
                    "featured": cat == "Caps",
                },
            )
            if not created:
                continue

            for index, size in enumerate(sizes):
                ProductVariant.objects.create(
                    product=product,
                    name=f"{name} - Black {size}",
                    sku=generate_sku(name, "Black", size, index),
                    size=size,
                    color="Black",
                    price=Decimal(price),
                    stock_quantity=25,
                )

            ProductImage.objects.create(
                product=product,
                url=f"https://images.example.com/{slug}.jpg",
                position=0,
                is_primary=True,
            )

        self.stdout.write(self.style.SUCCESS("Catalog seeded successfully."))
