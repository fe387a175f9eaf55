from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import ShippingZoneViewSet, ShippingProviderListView, ShippingProviderDetailView

router = DefaultRouter()
router.register(r'shipping/zones', ShippingZoneViewSet, basename='admin-shipping-zones')

urlpatterns = [
    path('shipping/providers/', ShippingProviderListView.as_view(), name='admin-shipping-providers'),
    path('shipping/providers/<uuid:pk>/', ShippingProviderDetailView.as_view(), name='admin-shipping-provider-detail'),
    path('', include(router.urls)),
]
