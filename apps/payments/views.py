from rest_framework import generics, status
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import AllowAny

from apps.accounts.permissions import IsAdmin
from .models import Integration, PaymentGateway
from .serializers import (
    CreateGatewayOrderSerializer,
    IntegrationSerializer,
    PaymentGatewaySerializer,
)
from .services import PaymentService, IntegrationService


class CreateGatewayOrderView(APIView):
    """
    Checkout step 1: open a Razorpay order for the cart total.
    Public so guests can check out.
    """
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = CreateGatewayOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        data = PaymentService.create_gateway_order(serializer.validated_data["total_amount"])
        return Response(data, status=status.HTTP_200_OK)


class IntegrationListView(generics.ListAPIView):
    serializer_class = IntegrationSerializer
    permission_classes = [IsAdmin]

    def get_queryset(self):
        return IntegrationService.list_integrations()


class IntegrationDetailView(generics.UpdateAPIView):
    serializer_class = IntegrationSerializer
    permission_classes = [IsAdmin]
    queryset = Integration.objects.all()

    def perform_update(self, serializer):
        IntegrationService.update_integration(self.request, serializer)


class PaymentGatewayListView(generics.ListAPIView):
    serializer_class = PaymentGatewaySerializer
    permission_classes = [IsAdmin]

    def get_queryset(self):
        return IntegrationService.list_gateways()


class PaymentGatewayDetailView(generics.UpdateAPIView):
    serializer_class = PaymentGatewaySerializer
    permission_classes = [IsAdmin]
    queryset = PaymentGateway.objects.all()
