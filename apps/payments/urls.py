from django.urls import path
from .views import (
    IntegrationListView,
    IntegrationDetailView,
    PaymentGatewayListView,
    PaymentGatewayDetailView,
)

urlpatterns = [
    path('integrations/', IntegrationListView.as_view(), name='admin-integrations'),
    path('integrations/<uuid:pk>/', IntegrationDetailView.as_view(), name='admin-integration-detail'),
    path('payment-gateways/', PaymentGatewayListView.as_view(), name='admin-payment-gateways'),
    path('payment-gateways/<uuid:pk>/', PaymentGatewayDetailView.as_view(), name='admin-payment-gateway-detail'),
]
