from rest_framework.views import APIView
from rest_framework.response import Response

from apps.accounts.models import User, Role
from apps.accounts.permissions import IsAdmin
from apps.accounts.serializers import AdminUserSerializer
from apps.customers.serializers import CustomerSerializer
from apps.customers.services import CustomerService
from apps.media_library.models import MediaFile
from apps.media_library.serializers import MediaFileSerializer
from apps.orders.models import Order, Coupon
from apps.orders.serializers import AdminOrderSerializer, CouponSerializer
from .models import MarketingCampaign
from .serializers import SiteSettingsSerializer, MarketingCampaignSerializer, WishlistAnalyticsSerializer
from .services import SiteSettingsService, AnalyticsService


class SiteSettingsView(APIView):
    """
    GET/PUT /api/v1/admin/site-settings/
    GET returns null until the settings row is first saved.
    """
    permission_classes = [IsAdmin]

    def get(self, request):
        instance = SiteSettingsService.get()
        return Response(SiteSettingsSerializer(instance).data if instance else None)

    def put(self, request):
        instance = SiteSettingsService.upsert(request, SiteSettingsSerializer, request.data)
        return Response(SiteSettingsSerializer(instance).data)


class DashboardView(APIView):
    """
    Everything the admin panel loads on first paint, in one round trip.
    """
    permission_classes = [IsAdmin]

    def get(self, request):
        orders = Order.objects.select_related('user').prefetch_related('items__product').order_by('-created_at')
        site_settings = SiteSettingsService.get()

        return Response({
            "orders": AdminOrderSerializer(orders, many=True).data,
            "customers": CustomerSerializer(CustomerService.customers_with_stats(), many=True).data,
            "coupons": CouponSerializer(Coupon.objects.all(), many=True).data,
            "admin_users": AdminUserSerializer(User.objects.filter(role=Role.ADMIN), many=True).data,
            "media_library": MediaFileSerializer(MediaFile.objects.all(), many=True).data,
            "marketing_campaigns": MarketingCampaignSerializer(MarketingCampaign.objects.all(), many=True).data,
            "site_settings": SiteSettingsSerializer(site_settings).data if site_settings else None,
        })


class NotificationsView(APIView):
    permission_classes = [IsAdmin]

    def get(self, request):
        return Response(AnalyticsService.notifications())


class WishlistAnalyticsView(APIView):
    permission_classes = [IsAdmin]

    def get(self, request):
        products = AnalyticsService.wishlist_counts()
        return Response(WishlistAnalyticsSerializer(products, many=True).data)
