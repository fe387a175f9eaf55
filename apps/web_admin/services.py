import logging

from django.db import transaction
from django.db.models import Count

from apps.accounts.models import User, Role
from apps.accounts.services import log_admin_action
from apps.catalog.models import Product
from apps.orders.models import Order, OrderStatus
from .models import SiteSettings, GLOBAL_SETTINGS_KEY

logger = logging.getLogger(__name__)

RECENT_ORDER_NOTIFICATIONS = 5
NEW_USER_NOTIFICATIONS = 3


class SiteSettingsService:

    @staticmethod
    def get():
        return SiteSettings.objects.filter(singleton=GLOBAL_SETTINGS_KEY).first()

    @staticmethod
    @transaction.atomic
    def upsert(request, serializer_class, data: dict) -> SiteSettings:
        instance = SiteSettings.objects.select_for_update().filter(singleton=GLOBAL_SETTINGS_KEY).first()
        serializer = serializer_class(instance, data=data, partial=instance is not None)
        serializer.is_valid(raise_exception=True)
        settings_row = serializer.save(singleton=GLOBAL_SETTINGS_KEY)

        log_admin_action(request, "Updated site settings")
        return settings_row


class AnalyticsService:

    @staticmethod
    def wishlist_counts():
        """Products on at least one wishlist, most wished first."""
        return (
            Product.objects
            .annotate(wishlist_count=Count('wishlisted_by'))
            .filter(wishlist_count__gt=0)
            .prefetch_related('variants')
            .order_by('-wishlist_count', 'name')
        )

    @staticmethod
    def notifications() -> list:
        """
        Recent unprocessed orders and fresh sign-ups, newest first.
        """
        notifications = []

        recent_orders = Order.objects.filter(status=OrderStatus.PROCESSING).order_by('-created_at')[:RECENT_ORDER_NOTIFICATIONS]
        for order in recent_orders:
            notifications.append({
                "id": f"order_{order.id}",
                "title": "New Order Received",
                "message": f"Order #{str(order.id)[-6:]} for ₹{order.total_amount:.2f} needs processing.",
                "type": "order",
                "seen": False,
                "timestamp": order.created_at,
                "link": {"page": "adminDashboard", "data": {"section": "orders_all"}},
            })

        new_users = User.objects.filter(role=Role.USER).order_by('-date_joined')[:NEW_USER_NOTIFICATIONS]
        for user in new_users:
            notifications.append({
                "id": f"user_{user.id}",
                "title": "New User Registered",
                "message": f"{user.name} has just signed up.",
                "type": "user",
                "seen": False,
                "timestamp": user.date_joined,
                "link": {"page": "adminDashboard", "data": {"section": "customers_all"}},
            })

        notifications.sort(key=lambda n: n["timestamp"], reverse=True)
        return notifications
