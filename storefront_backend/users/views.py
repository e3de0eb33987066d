# users/views.py
"""
STOREFRONT AUTH

POST  /api/auth/register/   customer sign-up (anon, throttled)
POST  /api/auth/login/      email + password -> JWT pair
GET   /api/auth/me/         profile + most recent shipping address (checkout prefill)
PATCH /api/auth/me/         edit first/last name
"""

from __future__ import annotations

import logging

from django.contrib.auth import get_user_model
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import generics, status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import RefreshToken

from orders.serializers import AddressSerializer

from .serializers import (
    LoginSerializer,
    ProfileUpdateSerializer,
    RegisterSerializer,
    UserSerializer,
)

logger = logging.getLogger(__name__)

User = get_user_model()


class AuthAnonThrottle(AnonRateThrottle):
    scope = "anon"


def _token_payload(user) -> dict:
    refresh = RefreshToken.for_user(user)
    return {
        "access": str(refresh.access_token),
        "refresh": str(refresh),
        "user": UserSerializer(user).data,
    }


class RegisterView(generics.GenericAPIView):
    serializer_class = RegisterSerializer
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [AuthAnonThrottle]

    @extend_schema(
        request=RegisterSerializer,
        responses={201: OpenApiResponse(description="JWT pair + new customer")},
        tags=["Auth"],
    )
    def post(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()

        logger.info("Customer registered", extra={"user_id": str(user.id)})

        # Sign-up also signs in.
        return Response(_token_payload(user), status=status.HTTP_201_CREATED)


class LoginView(generics.GenericAPIView):
    serializer_class = LoginSerializer
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [AuthAnonThrottle]

    @extend_schema(
        request=LoginSerializer,
        responses={
            200: OpenApiResponse(description="JWT pair + user"),
            400: OpenApiResponse(description="Invalid email or password"),
            403: OpenApiResponse(description="Account disabled"),
        },
        tags=["Auth"],
    )
    def post(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        email = serializer.validated_data["email"]
        password = serializer.validated_data["password"]

        user = User.objects.filter(email__iexact=email).first()
        if user is None or not user.check_password(password):
            return Response(
                {"error": "Invalid email or password"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        if not user.is_active:
            return Response(
                {"error": "User account is disabled"},
                status=status.HTTP_403_FORBIDDEN,
            )

        return Response(_token_payload(user), status=status.HTTP_200_OK)


class MeView(APIView):
    permission_classes = [IsAuthenticated]

    def _payload(self, user) -> dict:
        last_address = user.addresses.order_by("-created_at").first()
        return {
            "user": UserSerializer(user).data,
            "orderCount": user.orders.count(),
            "lastShippingAddress": AddressSerializer(last_address).data if last_address else None,
        }

    @extend_schema(responses={200: UserSerializer}, tags=["Auth"])
    def get(self, request):
        return Response(self._payload(request.user), status=status.HTTP_200_OK)

    @extend_schema(request=ProfileUpdateSerializer, responses={200: UserSerializer}, tags=["Auth"])
    def patch(self, request):
        serializer = ProfileUpdateSerializer(request.user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(self._payload(request.user), status=status.HTTP_200_OK)
