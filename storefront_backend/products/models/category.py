# products/models/category.py

import uuid

from django.db import models
from django.utils.text import slugify


class Category(models.Model):
    """
    Storefront category (caps, tees, outerwear...).

    Products are PROTECTed against category deletion; the checkout resolver
    also needs at least one category to attach fabricated products to.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=255, unique=True)
    slug = models.SlugField(max_length=255, unique=True, blank=True)
    description = models.TextField(blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "categories"

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = slugify(self.name)
        super().save(*args, **kwargs)

    def __str__(self):
        return self.name
