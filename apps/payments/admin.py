from django.contrib import admin
from .models import Integration, PaymentGateway


@admin.register(Integration)
class IntegrationAdmin(admin.ModelAdmin):
    list_display = ('name', 'category', 'enabled', 'updated_at')
    list_filter = ('category', 'enabled')
    search_fields = ('name',)


@admin.register(PaymentGateway)
class PaymentGatewayAdmin(admin.ModelAdmin):
    list_display = ('name', 'enabled', 'updated_at')
    list_filter = ('enabled',)
