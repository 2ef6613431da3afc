import logging

from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.views import TokenRefreshView

from core_backend.base import BaseViewSet
from .models import User
from .permissions import IsManagerOrHigher, CanEditUserDetails
from .serializers import (
    UserSerializer,
    UserUpdateSerializer,
    RegisterSerializer,
    LoginSerializer,
    VersionedTokenRefreshSerializer,
)
from .services import UserService

logger = logging.getLogger(__name__)


def auth_payload(user):
    return {
        "user": UserSerializer(user, context={"view_mode": "detail"}).data,
        **UserService.generate_tokens_for_user(user),
    }


class RegisterView(APIView):
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    def post(self, request, *args, **kwargs):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = UserService.register(**serializer.validated_data)
        return Response(auth_payload(user), status=status.HTTP_201_CREATED)


class LoginView(APIView):
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    def post(self, request, *args, **kwargs):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = UserService.login(**serializer.validated_data)
        return Response(auth_payload(user), status=status.HTTP_200_OK)


class CheckStatusView(APIView):
    """Returns the current user together with a freshly issued token pair."""

    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        return Response(auth_payload(request.user))


class LogoutView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, *args, **kwargs):
        UserService.logout(request.user)
        return Response(
            {"detail": f"User {request.user.name} session closed"},
            status=status.HTTP_200_OK,
        )


class VersionedTokenRefreshView(TokenRefreshView):
    """
    Refresh endpoint that refuses refresh tokens issued before the last logout.
    """

    serializer_class = VersionedTokenRefreshSerializer


class UserViewSet(BaseViewSet):
    """
    Staff account management for admins and managers.

    DELETE deactivates the account instead of removing the row so orders
    keep pointing at the staff member who created them.
    """

    queryset = User.objects.all()
    serializer_class = UserSerializer
    permission_classes = [permissions.IsAuthenticated, IsManagerOrHigher, CanEditUserDetails]
    http_method_names = ["get", "patch", "delete", "head", "options"]

    search_fields = ["email", "name"]
    filterset_fields = ["role", "is_active"]
    ordering_fields = ["email", "name", "role", "created_at"]
    ordering = ["name"]

    def get_serializer_class(self):
        if self.action == "partial_update":
            return UserUpdateSerializer
        return self.serializer_class

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop("partial", False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        logger.info(f"User {user.email} updated by {request.user.email}")
        return Response(UserSerializer(user, context=self.get_serializer_context()).data)

    def perform_destroy(self, instance):
        UserService.deactivate(instance)
