from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from .models import ShippingZone, ShippingRate, ShippingProvider

User = get_user_model()


class ShippingAdminTests(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.client.force_authenticate(
            User.objects.create_admin(email="ops@shop.test", password="0ps!Admin", name="Ops")
        )

    def test_create_zone_with_rates(self):
        response = self.client.post(reverse("admin-shipping-zones-list"), {
            "name": "Metro",
            "regions": ["Mumbai", "Delhi"],
            "rates": [
                {"name": "Standard", "price": "49.00"},
                {"name": "Free over 999", "price": "0.00", "condition": "min_order_value", "condition_value": "999.00"},
            ],
        }, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(len(response.data["rates"]), 2)
        zone = ShippingZone.objects.get()
        self.assertEqual(zone.rates.count(), 2)

    def test_conditional_rate_needs_value(self):
        response = self.client.post(reverse("admin-shipping-zones-list"), {
            "name": "Rural",
            "rates": [{"name": "Bulk", "price": "99.00", "condition": "max_weight"}],
        }, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(ShippingZone.objects.exists())

    def test_update_replaces_rates_and_delete_cascades(self):
        zone = ShippingZone.objects.create(name="Metro")
        ShippingRate.objects.create(zone=zone, name="Old", price=Decimal("80.00"))
        url = reverse("admin-shipping-zones-detail", kwargs={"pk": zone.pk})

        response = self.client.patch(url, {"rates": [{"name": "Express", "price": "120.00"}]}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([r["name"] for r in response.data["rates"]], ["Express"])

        response = self.client.patch(url, {"name": "Metro+"}, format="json")
        self.assertEqual(response.data["name"], "Metro+")
        self.assertEqual(zone.rates.count(), 1)

        self.client.delete(url)
        self.assertFalse(ShippingRate.objects.exists())

    def test_providers_list_and_update(self):
        provider = ShippingProvider.objects.create(name="Shiprocket")

        response = self.client.get(reverse("admin-shipping-providers"))
        self.assertEqual([p["name"] for p in response.data], ["Shiprocket"])

        url = reverse("admin-shipping-provider-detail", kwargs={"pk": provider.pk})
        response = self.client.patch(url, {"enabled": True}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        provider.refresh_from_db()
        self.assertTrue(provider.enabled)
