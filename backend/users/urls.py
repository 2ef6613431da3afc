from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import (
    UserViewSet,
    RegisterView,
    LoginView,
    CheckStatusView,
    LogoutView,
    VersionedTokenRefreshView,
)

router = DefaultRouter()
router.register(r"users", UserViewSet, basename="user")

urlpatterns = [
    # Auth
    path("auth/register/", RegisterView.as_view(), name="auth-register"),
    path("auth/login/", LoginView.as_view(), name="auth-login"),
    path("auth/check-status/", CheckStatusView.as_view(), name="auth-check-status"),
    path("auth/logout/", LogoutView.as_view(), name="auth-logout"),
    path("auth/token/refresh/", VersionedTokenRefreshView.as_view(), name="token-refresh"),
    # User management
    path("", include(router.urls)),
]
