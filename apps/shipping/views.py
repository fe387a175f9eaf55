from rest_framework import viewsets, generics, status
from rest_framework.response import Response

from apps.accounts.permissions import IsAdmin
from .models import ShippingZone, ShippingProvider
from .serializers import ShippingZoneSerializer, ShippingProviderSerializer
from .services import ShippingService


class ShippingZoneViewSet(viewsets.ModelViewSet):
    serializer_class = ShippingZoneSerializer
    permission_classes = [IsAdmin]
    queryset = ShippingZone.objects.prefetch_related('rates')

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        zone = ShippingService.create_zone(dict(serializer.validated_data))
        return Response(self.get_serializer(zone).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        zone = self.get_object()
        serializer = self.get_serializer(zone, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        zone = ShippingService.update_zone(zone, dict(serializer.validated_data))
        return Response(self.get_serializer(ShippingZone.objects.prefetch_related('rates').get(pk=zone.pk)).data)


class ShippingProviderListView(generics.ListAPIView):
    serializer_class = ShippingProviderSerializer
    permission_classes = [IsAdmin]
    queryset = ShippingProvider.objects.all()


class ShippingProviderDetailView(generics.UpdateAPIView):
    serializer_class = ShippingProviderSerializer
    permission_classes = [IsAdmin]
    queryset = ShippingProvider.objects.all()
