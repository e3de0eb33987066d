# orders/views/dashboard.py

"""
GET /api/admin/dashboard/   order/catalog KPIs, recent orders, low stock, 6-month revenue
"""

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from orders.services.dashboard import get_dashboard
from users.permissions import IsAdmin


class AdminDashboardView(APIView):
    permission_classes = [IsAuthenticated, IsAdmin]

    @extend_schema(tags=["Admin"], responses={200: OpenApiResponse(description="Dashboard snapshot")})
    def get(self, request):
        return Response(get_dashboard())
