from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import AdminOrderViewSet, CouponViewSet

router = DefaultRouter()
router.register(r'orders', AdminOrderViewSet, basename='admin-orders')
router.register(r'coupons', CouponViewSet, basename='admin-coupons')

urlpatterns = [
    path('', include(router.urls)),
]
