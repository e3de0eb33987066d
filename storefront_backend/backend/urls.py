# backend/urls.py
"""
PROJECT URLS

Everything API lives under /api/:

    storefront   products/  categories/  cart/             (anonymous)
    customer     checkout/  orders/  auth/me/              (JWT)
    back office  admin/products/  admin/variants/
                 admin/categories/  admin/orders/
                 admin/dashboard/                          (JWT + admin role)

/api/health/ probes the database; Django admin sits at ADMIN_PATH.
"""

from __future__ import annotations

from django.conf import settings
from django.contrib import admin
from django.db import connection
from django.db.utils import DatabaseError, OperationalError
from django.urls import include, path
from django.views.generic import RedirectView
from drf_spectacular.utils import OpenApiResponse, extend_schema
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from orders.urls import admin_urlpatterns as order_admin_urlpatterns
from products.urls import admin_urlpatterns as product_admin_urlpatterns
from products.urls import public_urlpatterns as product_public_urlpatterns

STOREFRONT_ROUTES = {
    "products": "/api/products/",
    "categories": "/api/categories/",
    "cart": "/api/cart/",
    "checkout": "/api/checkout/",
    "orders": "/api/orders/",
    "auth": "/api/auth/",
    "admin": "/api/admin/",
    "docs": "/api/docs/",
}


@extend_schema(responses={200: OpenApiResponse(description="Route map")})
@api_view(["GET"])
@permission_classes([AllowAny])
def api_root(request):
    return Response({"message": "JustFits Storefront API", "routes": STOREFRONT_ROUTES})


@extend_schema(
    responses={
        200: OpenApiResponse(description="App and database reachable"),
        503: OpenApiResponse(description="Database unreachable or erroring"),
    }
)
@api_view(["GET"])
@permission_classes([AllowAny])
def health_check(request):
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
    except OperationalError as exc:
        return Response({"status": "degraded", "db": "down", "error": str(exc)}, status=503)
    except DatabaseError as exc:
        return Response({"status": "degraded", "db": "error", "error": str(exc)}, status=503)
    return Response({"status": "ok", "db": "ok"})


ADMIN_PATH = settings.ADMIN_PATH if settings.ADMIN_PATH.endswith("/") else f"{settings.ADMIN_PATH}/"

api_urlpatterns = [
    path("", api_root, name="api-root"),
    path("health/", health_check, name="health-check"),
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    path("docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    path("auth/jwt/create/", TokenObtainPairView.as_view(), name="jwt-create"),
    path("auth/jwt/refresh/", TokenRefreshView.as_view(), name="jwt-refresh"),
    path("auth/", include("users.urls")),
    # storefront
    path("", include(product_public_urlpatterns)),
    path("cart/", include("cart.urls")),
    path("", include("orders.urls")),
    # back office
    path("admin/", include(product_admin_urlpatterns + order_admin_urlpatterns)),
]

urlpatterns = [
    path(ADMIN_PATH, admin.site.urls),
    path("", RedirectView.as_view(url="/api/docs/", permanent=False), name="root"),
    path("api/", include(api_urlpatterns)),
]
