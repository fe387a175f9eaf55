from django.conf import settings
from rest_framework import generics, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotAuthenticated
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.accounts.permissions import IsAdmin
from apps.accounts.services import log_admin_action
from .models import Order, Coupon, ActivityLog
from .serializers import (
    PlaceOrderSerializer,
    OrderSerializer,
    AdminOrderSerializer,
    OrderStatusUpdateSerializer,
    CouponSerializer,
    ActivityLogSerializer,
)
from .services import OrderService


def _guest_email(data):
    guest = data.get("guestDetails") if hasattr(data, "get") else None
    return guest.get("email") if isinstance(guest, dict) else None


class PlaceOrderView(APIView):
    """
    Checkout step 2: persist the order.
    Signed-in customers or guests with contact details only.
    """
    permission_classes = [AllowAny]

    def post(self, request):
        user = request.user if request.user.is_authenticated else None
        if user is None and not _guest_email(request.data):
            raise NotAuthenticated("Authentication is required to place an order.")

        serializer = PlaceOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order = OrderService.place_order(
            user=user,
            order_data=serializer.validated_data["order"],
            guest_details=serializer.validated_data.get("guest_details"),
        )
        return Response(
            {"success": True, "order": OrderSerializer(order).data},
            status=status.HTTP_201_CREATED,
        )


class ActivityFeedView(generics.ListAPIView):
    serializer_class = ActivityLogSerializer
    permission_classes = [AllowAny]

    def get_queryset(self):
        return ActivityLog.objects.all()[:settings.ACTIVITY_FEED_SIZE]


class AdminOrderViewSet(viewsets.ReadOnlyModelViewSet):
    """
    /api/v1/admin/orders/ newest first, filterable by ?status=.
    """
    serializer_class = AdminOrderSerializer
    permission_classes = [IsAdmin]
    filterset_fields = ['status', 'payment_status']

    def get_queryset(self):
        return (
            Order.objects
            .select_related('user')
            .prefetch_related('items__product')
            .order_by('-created_at')
        )

    @action(detail=True, methods=['patch'], url_path='status')
    def update_status(self, request, pk=None):
        order = self.get_object()
        serializer = OrderStatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order = OrderService.update_status(request, order, serializer.validated_data['status'])
        return Response(self.get_serializer(order).data)


class CouponViewSet(viewsets.ModelViewSet):
    serializer_class = CouponSerializer
    permission_classes = [IsAdmin]
    queryset = Coupon.objects.all()

    def perform_create(self, serializer):
        coupon = serializer.save()
        log_admin_action(self.request, "Created coupon", f"Code: {coupon.code}")

    def perform_update(self, serializer):
        coupon = serializer.save()
        log_admin_action(self.request, "Updated coupon", f"Code: {coupon.code}")

    def perform_destroy(self, instance):
        code = instance.code
        instance.delete()
        log_admin_action(self.request, "Deleted coupon", f"Code: {code}")
