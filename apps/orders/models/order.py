from django.db import models
from django.conf import settings
from apps.utils.models import TimestampedModel

__all__ = ["Order", "OrderStatus", "PaymentStatus"]


class OrderStatus(models.TextChoices):
    PROCESSING = "Processing", "Processing"
    SHIPPED = "Shipped", "Shipped"
    DELIVERED = "Delivered", "Delivered"
    CANCELLED = "Cancelled", "Cancelled"
    RETURNED = "Returned", "Returned"


class PaymentStatus(models.TextChoices):
    PENDING = "Pending", "Pending"
    SUCCESS = "Success", "Success"
    FAILED = "Failed", "Failed"
    REFUNDED = "Refunded", "Refunded"


class Order(TimestampedModel):
    # Null for guest checkouts
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='orders',
    )
    customer_name = models.CharField(max_length=255, blank=True)
    guest_email = models.EmailField(blank=True)
    guest_phone = models.CharField(max_length=20, blank=True)

    total_amount = models.DecimalField(max_digits=12, decimal_places=2)
    status = models.CharField(max_length=20, choices=OrderStatus.choices, default=OrderStatus.PROCESSING, db_index=True)

    # Snapshot of the address at checkout time
    shipping_address = models.JSONField(default=dict)

    payment_type = models.CharField(max_length=30)
    payment_status = models.CharField(max_length=20, choices=PaymentStatus.choices, default=PaymentStatus.PENDING)
    delivery_type = models.CharField(max_length=30, blank=True)
    delivery_charge = models.DecimalField(max_digits=10, decimal_places=2, default=0)

    applied_coupon_code = models.CharField(max_length=50, blank=True, null=True)
    discount_amount = models.DecimalField(max_digits=10, decimal_places=2, default=0)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.id} [{self.status}]"
