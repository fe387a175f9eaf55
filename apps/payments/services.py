import logging
from decimal import Decimal, ROUND_HALF_UP

import razorpay
from django.conf import settings
from django.db import transaction

from apps.accounts.services import log_admin_action
from apps.utils.exceptions import ServiceUnavailable
from apps.utils.utils import epoch_millis
from .gateway import gateway_cache
from .models import Integration, PaymentGateway

logger = logging.getLogger(__name__)

GATEWAY_UNAVAILABLE = (
    "Payment service is currently unavailable. "
    "Please check and enable Razorpay in Integrations with correct keys."
)
KEY_ID_MISSING = "Razorpay Key ID is not configured."
GATEWAY_AUTH_FAILED = (
    "Razorpay authentication failed. "
    "Please check your Key ID and Key Secret in Admin Panel > Settings > Integrations."
)

DEFAULT_INTEGRATIONS = [
    {"name": "Facebook Pixel", "category": "Marketing"},
    {"name": "Razorpay", "category": "Payments"},
    {"name": "Shiprocket", "category": "Shipping"},
    {"name": "Mailchimp", "category": "Marketing"},
]

DEFAULT_GATEWAYS = [
    {"name": "Razorpay", "enabled": False},
    {"name": "Cash on Delivery", "enabled": True},
]


def to_minor_units(amount) -> int:
    """
    Major currency units to the processor's integer minor units, half-up.
    """
    value = Decimal(str(amount)) * 100
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _is_auth_failure(exc) -> bool:
    # The SDK carries no HTTP status on its errors, only the processor message
    return isinstance(exc, razorpay.errors.BadRequestError) and "Authentication failed" in str(exc)


class PaymentService:

    @staticmethod
    def create_gateway_order(total_amount) -> dict:
        """
        Opens an order with the processor for the checkout total and returns
        what the storefront needs to launch the payment widget.
        """
        snapshot = gateway_cache.get()
        if snapshot is None:
            raise ServiceUnavailable(GATEWAY_UNAVAILABLE)
        if not snapshot.key_id:
            raise ServiceUnavailable(KEY_ID_MISSING)

        options = {
            "amount": to_minor_units(total_amount),
            "currency": settings.PAYMENT_CURRENCY,
            "receipt": f"receipt_order_{epoch_millis()}",
        }

        try:
            gateway_order = snapshot.client.order.create(options)
        except Exception as exc:
            if _is_auth_failure(exc):
                logger.error("Razorpay rejected the configured credentials: %s", exc)
                raise ServiceUnavailable(GATEWAY_AUTH_FAILED)
            logger.exception("Razorpay order creation failed")
            raise

        logger.info(
            "Created gateway order %s for %s minor units",
            gateway_order["id"], options["amount"],
            extra={"order_id": gateway_order["id"]},
        )
        return {"orderId": gateway_order["id"], "keyId": snapshot.key_id}


class IntegrationService:

    @staticmethod
    def list_integrations():
        for defaults in DEFAULT_INTEGRATIONS:
            Integration.objects.get_or_create(
                name=defaults["name"],
                defaults={"category": defaults["category"], "enabled": False, "settings": {}},
            )
        return Integration.objects.all()

    @staticmethod
    @transaction.atomic
    def update_integration(request, serializer) -> Integration:
        integration = serializer.save()
        log_admin_action(request, "Updated integration", f"Name: {integration.name}")

        if integration.name == gateway_cache.integration_name:
            transaction.on_commit(gateway_cache.invalidate)
        return integration

    @staticmethod
    def list_gateways():
        for defaults in DEFAULT_GATEWAYS:
            PaymentGateway.objects.get_or_create(
                name=defaults["name"],
                defaults={"enabled": defaults["enabled"], "settings": {}},
            )
        return PaymentGateway.objects.all()
