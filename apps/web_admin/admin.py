from django.contrib import admin
from .models import SiteSettings, MarketingCampaign


@admin.register(SiteSettings)
class SiteSettingsAdmin(admin.ModelAdmin):
    list_display = ('store_name', 'contact_email', 'updated_at')

    def has_add_permission(self, request):
        return not SiteSettings.objects.exists()


@admin.register(MarketingCampaign)
class MarketingCampaignAdmin(admin.ModelAdmin):
    list_display = ('name', 'channel', 'status', 'budget', 'starts_at', 'ends_at')
    list_filter = ('status', 'channel')
