from rest_framework import serializers
from apps.accounts.models import User


class CustomerSerializer(serializers.ModelSerializer):
    total_orders = serializers.IntegerField(read_only=True)
    total_spent = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)
    last_order_date = serializers.DateTimeField(read_only=True, allow_null=True)

    class Meta:
        model = User
        fields = [
            'id', 'name', 'email', 'phone', 'date_joined',
            'total_orders', 'total_spent', 'last_order_date',
            'profile_picture_url', 'is_blocked',
        ]
        read_only_fields = fields
