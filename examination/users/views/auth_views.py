"""
Examination Authentication Views

Views:
- RegisterView: Public self-registration
- ExamTokenObtainPairView: JWT login, tokens returned in the body and set as cookies
- LogoutView: Blacklists the refresh token and clears the cookies

Author: DSP Development Team
Version: 1.0.0
"""

import logging

from django.conf import settings
from rest_framework import generics, status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.views import TokenObtainPairView

from backend.custom_auth import ACCESS_TOKEN_COOKIE
from ...services.store import entity_store
from ..serializers import RegisterSerializer, UserSerializer

logger = logging.getLogger(__name__)

REFRESH_TOKEN_COOKIE = "refresh_token"


def _lifetime_seconds(key: str) -> int:
    return int(settings.SIMPLE_JWT[key].total_seconds())


class RegisterView(generics.CreateAPIView):
    """
    Public registration endpoint.

    Request Body Example (JSON):
    {
        "username": "johndoe",
        "name": "John Doe",
        "email": "johndoe@example.com",
        "password": "S3cure-Pa55word"
    }
    """

    serializer_class = RegisterSerializer
    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request: Request, *args, **kwargs) -> Response:
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = entity_store.create_user(**serializer.validated_data)
        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)


class ExamTokenObtainPairView(TokenObtainPairView):
    """
    SimpleJWT login that additionally stores both tokens in HTTP-only cookies,
    so browser clients do not have to keep them in JavaScript.
    """

    def post(self, request, *args, **kwargs):
        response = super().post(request, *args, **kwargs)
        if response.status_code == status.HTTP_200_OK:
            access = response.data.get("access")
            refresh = response.data.get("refresh")
            if access:
                response.set_cookie(
                    ACCESS_TOKEN_COOKIE,
                    access,
                    httponly=True,
                    secure=not settings.DEBUG,
                    samesite="Lax",
                    max_age=_lifetime_seconds("ACCESS_TOKEN_LIFETIME"),
                )
            if refresh:
                response.set_cookie(
                    REFRESH_TOKEN_COOKIE,
                    refresh,
                    httponly=True,
                    secure=not settings.DEBUG,
                    samesite="Lax",
                    max_age=_lifetime_seconds("REFRESH_TOKEN_LIFETIME"),
                )
        return response


class LogoutView(APIView):
    """
    Blacklist the refresh token (cookie or ``refresh`` in the body) and
    delete both token cookies.
    """

    permission_classes = [IsAuthenticated]

    def post(self, request: Request) -> Response:
        refresh_token = request.COOKIES.get(REFRESH_TOKEN_COOKIE) or request.data.get("refresh")
        if refresh_token:
            try:
                RefreshToken(refresh_token).blacklist()
            except TokenError as e:
                logger.warning(f"Logout mit ungültigem Refresh-Token von Benutzer {request.user.pk}: {e}")

        response = Response({"detail": "Successfully logged out."}, status=status.HTTP_205_RESET_CONTENT)
        response.delete_cookie(REFRESH_TOKEN_COOKIE)
        response.delete_cookie(ACCESS_TOKEN_COOKIE)
        return response
