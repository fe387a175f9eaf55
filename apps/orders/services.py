import logging

from django.db import transaction

from apps.accounts.services import log_admin_action
from apps.catalog.models import ProductVariant
from apps.utils.exceptions import BusinessLogicException
from .models import Order, OrderItem, PaymentStatus
from .tasks import record_purchase_activity

logger = logging.getLogger(__name__)

COD = "cod"


class OrderService:

    @staticmethod
    def place_order(user, order_data: dict, guest_details: dict = None) -> Order:
        """
        Persists an order with its items as one unit.

        Item prices and attributes come from the stored variant, not the
        client payload. The public activity entry is dispatched only after
        the order commits.
        """
        guest_details = guest_details or {}
        items = order_data["items"]

        with transaction.atomic():
            variant_ids = [item["selected_variant"]["id"] for item in items]
            variants = ProductVariant.objects.in_bulk(variant_ids)

            order_items = []
            for item in items:
                variant = variants.get(item["selected_variant"]["id"])
                if variant is None or variant.product_id != item["id"]:
                    raise BusinessLogicException(
                        f"Item {item['name']} is no longer available.",
                        code="variant_unavailable",
                    )
                order_items.append(OrderItem(
                    product_id=variant.product_id,
                    variant=variant,
                    quantity=item["quantity"],
                    price_at_purchase=variant.price,
                    variant_snapshot=variant.attributes or {},
                ))

            payment_type = order_data["payment_type"]
            order = Order.objects.create(
                user=user,
                customer_name=order_data.get("customer_name") or guest_details.get("name") or (user.name if user else ""),
                guest_email="" if user else guest_details.get("email", ""),
                guest_phone="" if user else guest_details.get("phone", ""),
                total_amount=order_data["total_amount"],
                shipping_address=order_data["shipping_address"],
                payment_type=payment_type,
                # TODO: move non-COD orders to Pending once payment.captured webhooks are handled
                payment_status=PaymentStatus.PENDING if payment_type == COD else PaymentStatus.SUCCESS,
                delivery_type=order_data.get("delivery_type", ""),
                delivery_charge=order_data.get("delivery_charge", 0),
                applied_coupon_code=order_data.get("applied_coupon_code"),
                discount_amount=order_data.get("discount_amount", 0),
            )

            for order_item in order_items:
                order_item.order = order
            OrderItem.objects.bulk_create(order_items)

            city = order_data["shipping_address"].get("city")
            first_item = items[0]["name"]
            transaction.on_commit(
                lambda: record_purchase_activity.delay(city, first_item),
                robust=True,
            )

        logger.info(
            "Order %s placed with %d items (%s)", order.id, len(order_items), payment_type,
            extra={"order_id": str(order.id), "user_id": str(user.id) if user else None},
        )
        return order

    @staticmethod
    @transaction.atomic
    def update_status(request, order: Order, new_status: str) -> Order:
        order.status = new_status
        order.save(update_fields=["status", "updated_at"])
        log_admin_action(request, "Updated order status", f"Order ID: {order.id}, New Status: {new_status}")
        return order
