from django.db import models
from apps.utils.models import TimestampedModel

GLOBAL_SETTINGS_KEY = "global_settings"


class SiteSettings(TimestampedModel):
    """
    Storefront-wide settings. Exactly one row, keyed by `singleton`.
    """
    singleton = models.CharField(max_length=50, unique=True, default=GLOBAL_SETTINGS_KEY, editable=False)
    store_name = models.CharField(max_length=255, blank=True)
    logo_url = models.URLField(blank=True, null=True)
    contact_email = models.EmailField(blank=True)
    contact_phone = models.CharField(max_length=20, blank=True)
    currency = models.CharField(max_length=3, default="INR")
    announcement = models.CharField(max_length=500, blank=True)
    social_links = models.JSONField(default=dict, blank=True)
    # Free-form theme/SEO/footer blocks edited by the admin panel
    extra = models.JSONField(default=dict, blank=True)

    class Meta:
        verbose_name_plural = "Site settings"

    def __str__(self):
        return self.store_name or self.singleton


class CampaignStatus(models.TextChoices):
    DRAFT = "Draft", "Draft"
    ACTIVE = "Active", "Active"
    COMPLETED = "Completed", "Completed"


class MarketingCampaign(TimestampedModel):
    name = models.CharField(max_length=255)
    channel = models.CharField(max_length=50, blank=True)
    status = models.CharField(max_length=20, choices=CampaignStatus.choices, default=CampaignStatus.DRAFT)
    budget = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    starts_at = models.DateTimeField(null=True, blank=True)
    ends_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return self.name
