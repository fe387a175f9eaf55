from rest_framework import serializers
from .models import Integration, PaymentGateway


class CreateGatewayOrderSerializer(serializers.Serializer):
    totalAmount = serializers.DecimalField(
        source="total_amount",
        max_digits=None,
        decimal_places=None,
        required=False,
        allow_null=True,
    )

    def validate(self, attrs):
        amount = attrs.get("total_amount")
        if amount is None or amount <= 0:
            raise serializers.ValidationError({"totalAmount": "Total amount is required"})
        return attrs


class IntegrationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Integration
        fields = ["id", "name", "category", "enabled", "settings", "created_at", "updated_at"]
        read_only_fields = ["id", "name", "created_at", "updated_at"]

    def validate_settings(self, value):
        if not isinstance(value, dict):
            raise serializers.ValidationError("Settings must be an object.")
        return value


class PaymentGatewaySerializer(serializers.ModelSerializer):
    class Meta:
        model = PaymentGateway
        fields = ["id", "name", "enabled", "settings", "created_at", "updated_at"]
        read_only_fields = ["id", "name", "created_at", "updated_at"]
