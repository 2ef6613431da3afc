from rest_framework.permissions import BasePermission, SAFE_METHODS
from users.permissions import IsManagerOrHigher


class ReadOnlyOrManager(BasePermission):
    """
    Any authenticated user may read; only managers and above may write.
    Used for the menu and table registries.
    """

    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False

        if request.method in SAFE_METHODS:
            return True

        return IsManagerOrHigher().has_permission(request, view)
