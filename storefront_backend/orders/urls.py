# orders/urls.py

"""
ORDERS URLS

Mounted under /api/:
    checkout/
    orders/                  orders/<order_number>/

Mounted under /api/admin/:
    dashboard/
    orders/                  orders/<id or order_number>/
"""

from django.urls import path

from orders.views import (
    AdminDashboardView,
    AdminOrderDetailView,
    AdminOrderListView,
    CheckoutView,
    MyOrderDetailView,
    MyOrderListView,
)

urlpatterns = [
    path("checkout/", CheckoutView.as_view(), name="checkout"),
    path("orders/", MyOrderListView.as_view(), name="order-list"),
    path("orders/<str:order_number>/", MyOrderDetailView.as_view(), name="order-detail"),
]

admin_urlpatterns = [
    path("dashboard/", AdminDashboardView.as_view(), name="admin-dashboard"),
    path("orders/", AdminOrderListView.as_view(), name="admin-order-list"),
    path("orders/<str:identifier>/", AdminOrderDetailView.as_view(), name="admin-order-detail"),
]
