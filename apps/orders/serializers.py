from rest_framework import serializers

from apps.utils.validators import validate_phone
from .models import Order, OrderItem, OrderStatus, Coupon, ActivityLog


# Checkout payload (camelCase wire format used by the storefront)

class SelectedVariantSerializer(serializers.Serializer):
    id = serializers.UUIDField()


class CheckoutItemSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    name = serializers.CharField(max_length=255)
    quantity = serializers.IntegerField(min_value=1)
    selectedVariant = SelectedVariantSerializer(source="selected_variant")


class CheckoutOrderSerializer(serializers.Serializer):
    items = CheckoutItemSerializer(many=True, allow_empty=False)
    totalAmount = serializers.DecimalField(source="total_amount", max_digits=12, decimal_places=2, min_value=0)
    shippingAddress = serializers.DictField(source="shipping_address")
    paymentType = serializers.CharField(source="payment_type", max_length=30)
    deliveryType = serializers.CharField(source="delivery_type", max_length=30, required=False, allow_blank=True, default="")
    deliveryCharge = serializers.DecimalField(
        source="delivery_charge", max_digits=10, decimal_places=2, required=False, default=0
    )
    appliedCouponCode = serializers.CharField(
        source="applied_coupon_code", max_length=50, required=False, allow_null=True, allow_blank=True
    )
    discountAmount = serializers.DecimalField(
        source="discount_amount", max_digits=10, decimal_places=2, required=False, default=0
    )
    customerName = serializers.CharField(source="customer_name", max_length=255, required=False, allow_blank=True, default="")

    def validate_shippingAddress(self, value):
        if not value.get("city"):
            raise serializers.ValidationError("City is required.")
        return value


class GuestDetailsSerializer(serializers.Serializer):
    email = serializers.EmailField()
    name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    phone = serializers.CharField(required=False, allow_blank=True, validators=[validate_phone])


class PlaceOrderSerializer(serializers.Serializer):
    order = CheckoutOrderSerializer()
    guestDetails = GuestDetailsSerializer(source="guest_details", required=False, allow_null=True)


# Responses / admin

class OrderItemSerializer(serializers.ModelSerializer):
    product_name = serializers.CharField(source='product.name', read_only=True)

    class Meta:
        model = OrderItem
        fields = [
            'id', 'product', 'product_name', 'variant', 'quantity',
            'price_at_purchase', 'variant_snapshot', 'subtotal',
        ]


class OrderSerializer(serializers.ModelSerializer):
    items = OrderItemSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            'id', 'user', 'customer_name', 'guest_email', 'guest_phone',
            'total_amount', 'status', 'payment_type', 'payment_status',
            'delivery_type', 'delivery_charge', 'applied_coupon_code',
            'discount_amount', 'shipping_address', 'created_at', 'items',
        ]


class AdminOrderSerializer(OrderSerializer):
    user_name = serializers.SerializerMethodField()
    user_email = serializers.SerializerMethodField()

    class Meta(OrderSerializer.Meta):
        fields = OrderSerializer.Meta.fields + ['user_name', 'user_email']

    def get_user_name(self, obj):
        return obj.user.name if obj.user else None

    def get_user_email(self, obj):
        return obj.user.email if obj.user else obj.guest_email or None


class OrderStatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=OrderStatus.choices)


class CouponSerializer(serializers.ModelSerializer):
    class Meta:
        model = Coupon
        fields = [
            'id', 'code', 'discount_type', 'value', 'min_purchase',
            'expires_at', 'is_active', 'created_at',
        ]
        read_only_fields = ['id', 'created_at']

    def validate_value(self, value):
        if value <= 0:
            raise serializers.ValidationError("Discount value must be positive.")
        return value


class ActivityLogSerializer(serializers.ModelSerializer):
    class Meta:
        model = ActivityLog
        fields = ['id', 'message', 'created_at']
