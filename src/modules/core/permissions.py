from rest_framework.permissions import BasePermission


class IsAdmin(BasePermission):
    """Grants access to staff accounts only (the back-office)."""

    message = "Admin access required."

    def has_permission(self, request, view) -> bool:
        user = request.user
        return bool(user and user.is_authenticated and user.is_staff)
