import logging
from decimal import Decimal

from django.db import transaction
from django.db.models import Count, Sum, Max, DecimalField, Value
from django.db.models.functions import Coalesce
from rest_framework.exceptions import NotFound

from apps.accounts.models import User, Role
from apps.accounts.services import log_admin_action

logger = logging.getLogger(__name__)


class CustomerService:

    @staticmethod
    def customers_with_stats():
        """
        Shoppers, newest first, annotated with order count, lifetime spend
        and the date of their latest order.
        """
        return (
            User.objects
            .filter(role=Role.USER)
            .annotate(
                total_orders=Count('orders', distinct=True),
                total_spent=Coalesce(
                    Sum('orders__total_amount'),
                    Value(Decimal('0.00')),
                    output_field=DecimalField(max_digits=14, decimal_places=2),
                ),
                last_order_date=Max('orders__created_at'),
            )
            .order_by('-date_joined')
        )

    @staticmethod
    @transaction.atomic
    def toggle_block(request, user_id) -> User:
        user = User.objects.select_for_update().filter(pk=user_id, role=Role.USER).first()
        if user is None:
            raise NotFound("User not found.")

        user.is_blocked = not user.is_blocked
        user.save(update_fields=['is_blocked'])

        log_admin_action(
            request,
            f"Toggled block status for user {user.name}",
            f"New status: {'Blocked' if user.is_blocked else 'Active'}",
        )
        logger.info("Customer %s block status set to %s", user.id, user.is_blocked)
        return user
