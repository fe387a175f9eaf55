from rest_framework import serializers

from apps.catalog.serializers import ProductSerializer
from .models import SiteSettings, MarketingCampaign


class SiteSettingsSerializer(serializers.ModelSerializer):
    class Meta:
        model = SiteSettings
        fields = [
            'id', 'store_name', 'logo_url', 'contact_email', 'contact_phone',
            'currency', 'announcement', 'social_links', 'extra', 'updated_at',
        ]
        read_only_fields = ['id', 'updated_at']


class MarketingCampaignSerializer(serializers.ModelSerializer):
    class Meta:
        model = MarketingCampaign
        fields = ['id', 'name', 'channel', 'status', 'budget', 'starts_at', 'ends_at', 'created_at']


class WishlistAnalyticsSerializer(serializers.Serializer):
    product = ProductSerializer(source='*')
    count = serializers.IntegerField(source='wishlist_count')
