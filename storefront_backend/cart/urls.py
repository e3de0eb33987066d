# cart/urls.py

from django.urls import path

from cart.views import CartClearView, CartDrawerView, CartItemsView, CartView

urlpatterns = [
    path("", CartView.as_view(), name="cart"),
    path("items/", CartItemsView.as_view(), name="cart-items"),
    path("clear/", CartClearView.as_view(), name="cart-clear"),
    path("drawer/", CartDrawerView.as_view(), name="cart-drawer"),
]
