import uuid
from django.db import models
from apps.utils.models import TimestampedModel


class ShippingZone(TimestampedModel):
    name = models.CharField(max_length=100)
    # Country/state/pincode labels covered by the zone
    regions = models.JSONField(default=list, blank=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name


class RateCondition(models.TextChoices):
    NONE = "none", "Always"
    MIN_ORDER_VALUE = "min_order_value", "Minimum order value"
    MAX_WEIGHT = "max_weight", "Maximum weight"


class ShippingRate(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    zone = models.ForeignKey(ShippingZone, on_delete=models.CASCADE, related_name="rates")
    name = models.CharField(max_length=100)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    condition = models.CharField(max_length=20, choices=RateCondition.choices, default=RateCondition.NONE)
    condition_value = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)

    class Meta:
        ordering = ["price"]

    def __str__(self):
        return f"{self.zone.name}: {self.name}"


class ShippingProvider(TimestampedModel):
    name = models.CharField(max_length=100, unique=True)
    enabled = models.BooleanField(default=False)
    tracking_url = models.URLField(blank=True)
    settings = models.JSONField(default=dict, blank=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name
