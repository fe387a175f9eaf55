import logging
from django.db import transaction

from .models import ShippingZone, ShippingRate

logger = logging.getLogger(__name__)


class ShippingService:

    @staticmethod
    @transaction.atomic
    def create_zone(data: dict) -> ShippingZone:
        rates = data.pop('rates', None) or []
        zone = ShippingZone.objects.create(**data)
        ShippingRate.objects.bulk_create([ShippingRate(zone=zone, **rate) for rate in rates])
        logger.info("Created shipping zone %s with %d rates", zone.id, len(rates))
        return zone

    @staticmethod
    @transaction.atomic
    def update_zone(zone: ShippingZone, data: dict) -> ShippingZone:
        """
        Updates zone fields; a supplied `rates` list replaces the zone's rates.
        """
        rates = data.pop('rates', None)
        for field, value in data.items():
            setattr(zone, field, value)
        zone.save()

        if rates is not None:
            zone.rates.all().delete()
            ShippingRate.objects.bulk_create([ShippingRate(zone=zone, **rate) for rate in rates])
        return zone
