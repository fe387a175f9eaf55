from django.contrib import admin
from .models import Order, OrderItem, Coupon, ActivityLog


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = ('product', 'variant', 'quantity', 'price_at_purchase', 'variant_snapshot')

    def has_add_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ('id', 'customer_name', 'total_amount', 'status', 'payment_type', 'payment_status', 'created_at')
    list_filter = ('status', 'payment_status', 'payment_type', 'created_at')
    search_fields = ('id', 'customer_name', 'guest_email', 'user__email')
    readonly_fields = ('created_at', 'updated_at', 'shipping_address')
    inlines = [OrderItemInline]


@admin.register(Coupon)
class CouponAdmin(admin.ModelAdmin):
    list_display = ('code', 'discount_type', 'value', 'is_active', 'expires_at')
    list_filter = ('discount_type', 'is_active')
    search_fields = ('code',)


@admin.register(ActivityLog)
class ActivityLogAdmin(admin.ModelAdmin):
    list_display = ('message', 'created_at')
