# orders/admin.py

from django import forms
from django.contrib import admin

from orders.models import Address, Order, OrderItem
from orders.services.order_lifecycle import can_transition


# ======================================================
# ORDER ADMIN
# ======================================================


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    can_delete = False
    readonly_fields = ("variant", "quantity", "price", "created_at")

    def has_add_permission(self, request, obj=None):
        return False


class OrderAdminForm(forms.ModelForm):
    class Meta:
        model = Order
        fields = "__all__"

    def clean_status(self):
        target = self.cleaned_data["status"]
        current = self.instance.status
        if not self.instance._state.adding and target != current:
            if not can_transition(from_status=current, to_status=target):
                raise forms.ValidationError(
                    f"Cannot move an order from {current} to {target}."
                )
        return target


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    form = OrderAdminForm
    list_display = (
        "order_number",
        "user",
        "status",
        "subtotal",
        "shipping_cost",
        "total",
        "created_at",
    )
    readonly_fields = (
        "order_number",
        "user",
        "shipping_address",
        "subtotal",
        "shipping_cost",
        "tax",
        "total",
        "created_at",
        "updated_at",
    )
    search_fields = ("order_number", "user__email")
    list_filter = ("status", "created_at")
    inlines = [OrderItemInline]


# ======================================================
# ADDRESS ADMIN
# ======================================================


@admin.register(Address)
class AddressAdmin(admin.ModelAdmin):
    list_display = ("first_name", "last_name", "city", "state", "country", "created_at")
    search_fields = ("first_name", "last_name", "city", "user__email")
    readonly_fields = ("created_at",)
