import logging
from django.contrib.auth import authenticate
from django.db import transaction, DatabaseError
from rest_framework.exceptions import AuthenticationFailed, PermissionDenied
from rest_framework_simplejwt.tokens import RefreshToken

from apps.utils.exceptions import Conflict
from .models import User, Role, AdminActivityLog

logger = logging.getLogger(__name__)


def client_ip(request):
    forwarded = request.META.get("HTTP_X_FORWARDED_FOR")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.META.get("REMOTE_ADDR")


def log_admin_action(request, action: str, details: str = None, user=None):
    """
    Best-effort audit write. Never raises: a failed audit row must not undo
    the admin operation it describes.
    """
    user = user or getattr(request, "user", None)
    if user is None or not user.is_authenticated:
        logger.warning("Attempted to log admin action '%s' without an authenticated user.", action)
        return None

    try:
        with transaction.atomic():
            return AdminActivityLog.objects.create(
                admin_user=user,
                admin_user_name=user.name or "Unknown Admin",
                action=action,
                details=details,
                ip_address=client_ip(request),
            )
    except DatabaseError:
        logger.exception("Failed to create admin activity log for action '%s'", action)
        return None


class AuthService:

    @staticmethod
    @transaction.atomic
    def register(name: str, email: str, password: str) -> User:
        email = User.objects.normalize_email(email)
        if User.objects.filter(email__iexact=email).exists():
            raise Conflict("Email already in use")

        user = User.objects.create_user(email=email, password=password, name=name)
        logger.info("Registered user %s", user.id)
        return user

    @staticmethod
    def login(request, email: str, password: str) -> dict:
        """
        Verifies credentials and issues a JWT pair carrying the user's role.
        """
        user = authenticate(request, email=email, password=password)
        if user is None:
            raise AuthenticationFailed("Invalid credentials")

        if user.is_blocked:
            raise PermissionDenied("Your account has been blocked.")

        refresh = RefreshToken.for_user(user)
        refresh["role"] = user.role

        if user.role == Role.ADMIN:
            log_admin_action(request, "Admin Logged In", user=user)

        return {
            "token": str(refresh.access_token),
            "refresh": str(refresh),
            "user": user,
        }
