from rest_framework.permissions import BasePermission
from .models import Role


class IsAdmin(BasePermission):
    """
    Store admins only (role=ADMIN). Blocked accounts are refused.
    """
    message = "Admin access required."

    def has_permission(self, request, view):
        user = request.user
        return bool(
            user and
            user.is_authenticated and
            user.role == Role.ADMIN and
            not user.is_blocked
        )


class IsCustomer(BasePermission):
    def has_permission(self, request, view):
        return (
            request.user.is_authenticated and
            request.user.role == Role.USER
        )
