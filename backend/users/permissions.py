from rest_framework import permissions
from .models import User


class IsAdmin(permissions.BasePermission):
    def has_permission(self, request, view):
        return bool(
            request.user
            and request.user.is_authenticated
            and request.user.role == User.Role.ADMIN
        )


class IsManagerOrHigher(permissions.BasePermission):
    def has_permission(self, request, view):
        return bool(
            request.user
            and request.user.is_authenticated
            and request.user.role in [User.Role.ADMIN, User.Role.MANAGER]
        )


class CanEditUserDetails(permissions.BasePermission):
    """
    Admins can edit anyone; managers can edit waiters and cashiers.
    """

    def has_object_permission(self, request, view, obj):
        if request.user.role == User.Role.ADMIN:
            return True

        if request.user.role == User.Role.MANAGER and obj.role in [
            User.Role.WAITER,
            User.Role.CASHIER,
        ]:
            return True

        return False
