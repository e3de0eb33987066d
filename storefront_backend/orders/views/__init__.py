from .admin import AdminOrderDetailView, AdminOrderListView
from .checkout import CheckoutView
from .dashboard import AdminDashboardView
from .customer import MyOrderDetailView, MyOrderListView

__all__ = [
    "AdminDashboardView",
    "AdminOrderDetailView",
    "AdminOrderListView",
    "CheckoutView",
    "MyOrderDetailView",
    "MyOrderListView",
]
