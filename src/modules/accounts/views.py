"""Account API views.

Session-based sign-up / login / logout for the site, plus the admin
user list.  API clients can use the JWT token endpoints instead.
"""

from __future__ import annotations

from django.contrib.auth import login, logout
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework.viewsets import GenericViewSet

from modules.accounts.dtos import RegisterUserDTO
from modules.accounts.exceptions import (
    CannotDeleteAdmin,
    InvalidCredentials,
    UserAlreadyExists,
    UserNotFound,
)
from modules.accounts.models import User
from modules.accounts.repositories.django_repository import UserDjangoRepository
from modules.accounts.serializers import LoginSerializer, RegisterSerializer, UserSerializer
from modules.accounts.services import AccountService
from modules.core.pagination import AdminPagination
from modules.core.permissions import IsAdmin


def _build_service() -> AccountService:
    return AccountService(repository=UserDjangoRepository())


class RegisterView(APIView):
    """POST /api/v1/auth/register/: creates the account and logs it in."""

    permission_classes = [AllowAny]
    throttle_scope = "auth"

    def post(self, request: Request) -> Response:
        payload = RegisterSerializer(data=request.data)
        payload.is_valid(raise_exception=True)

        try:
            dto = RegisterUserDTO(**payload.validated_data)
        except (PydanticValidationError, ValueError) as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            user = _build_service().register(dto)
        except UserAlreadyExists as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_409_CONFLICT)

        login(request._request, user, backend="modules.accounts.backends.EmailOrPhoneBackend")
        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)


class LoginView(APIView):
    """POST /api/v1/auth/login/ ``{"identifier", "password"}``"""

    permission_classes = [AllowAny]
    throttle_scope = "auth"

    def post(self, request: Request) -> Response:
        payload = LoginSerializer(data=request.data)
        payload.is_valid(raise_exception=True)

        try:
            user = _build_service().authenticate(
                request._request,
                payload.validated_data["identifier"],
                payload.validated_data["password"],
            )
        except InvalidCredentials as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_401_UNAUTHORIZED)

        login(request._request, user)
        return Response(UserSerializer(user).data)


class LogoutView(APIView):
    """POST /api/v1/auth/logout/"""

    permission_classes = [AllowAny]

    def post(self, request: Request) -> Response:
        logout(request._request)
        return Response(status=status.HTTP_204_NO_CONTENT)


class MeView(APIView):
    """GET /api/v1/auth/me/"""

    permission_classes = [IsAuthenticated]

    def get(self, request: Request) -> Response:
        return Response(UserSerializer(request.user).data)


class AdminUserViewSet(GenericViewSet):
    """GET/DELETE /api/v1/admin/users/"""

    permission_classes = [IsAdmin]
    queryset = User.objects.all()
    serializer_class = UserSerializer
    pagination_class = AdminPagination

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = _build_service()

    def get_queryset(self):
        return self._service.list_users()

    def list(self, request: Request) -> Response:
        page = self.paginate_queryset(self.get_queryset())
        return self.get_paginated_response(UserSerializer(page, many=True).data)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        try:
            self._service.delete_user(pk)
        except UserNotFound:
            return Response({"detail": "User not found."}, status=status.HTTP_404_NOT_FOUND)
        except CannotDeleteAdmin as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(status=status.HTTP_204_NO_CONTENT)
