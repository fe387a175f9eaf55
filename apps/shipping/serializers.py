from rest_framework import serializers
from .models import ShippingZone, ShippingRate, ShippingProvider, RateCondition


class ShippingRateSerializer(serializers.ModelSerializer):
    class Meta:
        model = ShippingRate
        fields = ['id', 'name', 'price', 'condition', 'condition_value']
        read_only_fields = ['id']

    def validate(self, attrs):
        condition = attrs.get('condition', RateCondition.NONE)
        if condition != RateCondition.NONE and attrs.get('condition_value') is None:
            raise serializers.ValidationError({'condition_value': 'Required for conditional rates.'})
        return attrs


class ShippingZoneSerializer(serializers.ModelSerializer):
    rates = ShippingRateSerializer(many=True, required=False)

    class Meta:
        model = ShippingZone
        fields = ['id', 'name', 'regions', 'rates', 'created_at', 'updated_at']
        read_only_fields = ['id', 'created_at', 'updated_at']


class ShippingProviderSerializer(serializers.ModelSerializer):
    class Meta:
        model = ShippingProvider
        fields = ['id', 'name', 'enabled', 'tracking_url', 'settings', 'updated_at']
        read_only_fields = ['id', 'name', 'updated_at']
