from rest_framework import generics
from rest_framework.views import APIView
from rest_framework.response import Response

from apps.accounts.permissions import IsAdmin
from .serializers import CustomerSerializer
from .services import CustomerService


class CustomerListView(generics.ListAPIView):
    """
    GET /api/v1/admin/customers/
    """
    serializer_class = CustomerSerializer
    permission_classes = [IsAdmin]

    def get_queryset(self):
        return CustomerService.customers_with_stats()


class ToggleCustomerBlockView(APIView):
    """
    POST /api/v1/admin/customers/{id}/toggle-block/
    """
    permission_classes = [IsAdmin]

    def post(self, request, pk):
        user = CustomerService.toggle_block(request, pk)
        customer = CustomerService.customers_with_stats().get(pk=user.pk)
        return Response(CustomerSerializer(customer).data)
