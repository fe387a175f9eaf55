from django.db import models
from apps.utils.models import TimestampedModel


class Integration(TimestampedModel):
    """
    Third-party integration config (payments, shipping, marketing).
    `settings` is an opaque blob; Razorpay keeps `apiKey` and `apiSecret` in it.
    """
    name = models.CharField(max_length=100, unique=True)
    category = models.CharField(max_length=50, blank=True)
    enabled = models.BooleanField(default=False)
    settings = models.JSONField(default=dict, blank=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return f"{self.name} ({'on' if self.enabled else 'off'})"


class PaymentGateway(TimestampedModel):
    name = models.CharField(max_length=100, unique=True)
    enabled = models.BooleanField(default=False)
    settings = models.JSONField(default=dict, blank=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name
