# products/filters.py

import django_filters
from django.db.models import Q

from products.models import Product


class PublicProductFilter(django_filters.FilterSet):
    """
    ?q=<text>&category=<slug>&featured=true
    """

    q = django_filters.CharFilter(method="filter_search")
    search = django_filters.CharFilter(method="filter_search")
    category = django_filters.CharFilter(method="filter_category")
    featured = django_filters.BooleanFilter(field_name="featured")

    class Meta:
        model = Product
        fields = ["q", "search", "category", "featured"]

    def filter_search(self, queryset, name, value):
        value = (value or "").strip()
        if not value:
            return queryset
        return queryset.filter(Q(name__icontains=value) | Q(description__icontains=value))

    def filter_category(self, queryset, name, value):
        value = (value or "").strip()
        if not value or value == "all":
            return queryset
        return queryset.filter(category__slug=value)


class AdminProductFilter(django_filters.FilterSet):
    """
    ?search=<name or slug>&status=active|draft|all
    """

    search = django_filters.CharFilter(method="filter_search")
    status = django_filters.CharFilter(method="filter_status")

    class Meta:
        model = Product
        fields = ["search", "status"]

    def filter_search(self, queryset, name, value):
        value = (value or "").strip()
        if not value:
            return queryset
        return queryset.filter(Q(name__icontains=value) | Q(slug__icontains=value))

    def filter_status(self, queryset, name, value):
        value = (value or "").strip().lower()
        if value == "active":
            return queryset.filter(is_active=True)
        if value == "draft":
            return queryset.filter(is_active=False)
        return queryset
