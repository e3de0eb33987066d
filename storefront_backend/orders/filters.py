# orders/filters.py

import django_filters
from django.db.models import Q

from orders.models import Order


class AdminOrderFilter(django_filters.FilterSet):
    """
    ?search=<order number, customer name or email>&status=<status|all>
    """

    search = django_filters.CharFilter(method="filter_search")
    status = django_filters.CharFilter(method="filter_status")

    class Meta:
        model = Order
        fields = ["search", "status"]

    def filter_search(self, queryset, name, value):
        value = (value or "").strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(order_number__icontains=value)
            | Q(user__email__icontains=value)
            | Q(user__first_name__icontains=value)
            | Q(user__last_name__icontains=value)
        )

    def filter_status(self, queryset, name, value):
        value = (value or "").strip().upper()
        if not value or value == "ALL":
            return queryset
        return queryset.filter(status=value)
