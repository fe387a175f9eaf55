import threading
import time
from decimal import Decimal
from unittest.mock import MagicMock, patch

import razorpay
from django.contrib.auth import get_user_model
from django.db import DatabaseError
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from apps.accounts.models import AdminActivityLog
from .gateway import GatewayClient, GatewayClientCache, gateway_cache
from .models import Integration, PaymentGateway
from .services import GATEWAY_UNAVAILABLE, GATEWAY_AUTH_FAILED, KEY_ID_MISSING, to_minor_units

User = get_user_model()


class FakeClock:
    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


def enable_razorpay(**settings_blob):
    blob = {"apiKey": "rzp_test_key", "apiSecret": "rzp_test_secret"}
    blob.update(settings_blob)
    return Integration.objects.create(name="Razorpay", category="Payments", enabled=True, settings=blob)


class GatewayClientCacheTests(TestCase):

    def setUp(self):
        self.clock = FakeClock()
        self.cache = GatewayClientCache(integration_name="Razorpay", ttl=60, clock=self.clock)

    def test_fresh_snapshot_served_without_queries(self):
        enable_razorpay()

        with self.assertNumQueries(1):
            first = self.cache.get()
        self.assertEqual(first.key_id, "rzp_test_key")

        self.clock.advance(59)
        with self.assertNumQueries(0):
            second = self.cache.get()
        self.assertIs(first, second)

    def test_stale_snapshot_is_rebuilt(self):
        integration = enable_razorpay()
        first = self.cache.get()

        integration.settings = {"apiKey": "rzp_live_key", "apiSecret": "rzp_live_secret"}
        integration.save()
        self.clock.advance(60)

        with self.assertNumQueries(1):
            second = self.cache.get()
        self.assertIsNot(first, second)
        self.assertEqual(second.key_id, "rzp_live_key")
        self.assertEqual(second.built_at, self.clock.now)

    def test_missing_or_disabled_integration_yields_none(self):
        self.assertIsNone(self.cache.get())

        integration = enable_razorpay()
        integration.enabled = False
        integration.save()
        self.assertIsNone(self.cache.get())

    def test_incomplete_keys_yield_none(self):
        enable_razorpay(apiSecret="")
        self.assertIsNone(self.cache.get())

    def test_disabling_clears_previous_snapshot_once_stale(self):
        integration = enable_razorpay()
        self.assertIsNotNone(self.cache.get())

        Integration.objects.filter(pk=integration.pk).update(enabled=False)
        self.clock.advance(61)
        self.assertIsNone(self.cache.get())

    def test_invalidate_forces_reload(self):
        enable_razorpay()
        self.cache.get()
        self.cache.invalidate()

        with self.assertNumQueries(1):
            self.assertIsNotNone(self.cache.get())

    def test_lookup_failure_is_recorded(self):
        error = DatabaseError("connection refused")
        with patch.object(Integration.objects, "filter", side_effect=error):
            self.assertIsNone(self.cache.get())
        self.assertIs(self.cache.last_error, error)

        enable_razorpay()
        self.assertIsNotNone(self.cache.get())
        self.assertIsNone(self.cache.last_error)

    def test_concurrent_callers_share_one_rebuild(self):
        loads = []

        def slow_load():
            loads.append(1)
            time.sleep(0.05)
            return "rzp_test_key", "rzp_test_secret"

        results = []
        with patch.object(self.cache, "_load_credentials", side_effect=slow_load):
            threads = [threading.Thread(target=lambda: results.append(self.cache.get())) for _ in range(8)]
            for thread in threads:
                thread.start()
            for thread in threads:
                thread.join()

        self.assertEqual(len(loads), 1)
        self.assertEqual(len(results), 8)
        self.assertTrue(all(snapshot is results[0] for snapshot in results))


class MinorUnitsTests(TestCase):

    def test_rounds_half_up(self):
        self.assertEqual(to_minor_units(Decimal("499.00")), 49900)
        self.assertEqual(to_minor_units(19.999), 2000)
        self.assertEqual(to_minor_units("0.005"), 1)
        self.assertEqual(to_minor_units(Decimal("10.994")), 1099)


class CheckoutPaymentCreateTests(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.url = reverse("checkout-payment-create")
        self.razorpay_client = MagicMock()
        self.razorpay_client.order.create.return_value = {"id": "order_Nx01", "amount": 2000}

    def _patch_cache(self, snapshot):
        cache = MagicMock()
        cache.get.return_value = snapshot
        return patch("apps.payments.services.gateway_cache", cache)

    def _snapshot(self, key_id="rzp_test_key"):
        return GatewayClient(client=self.razorpay_client, key_id=key_id, built_at=0.0)

    def test_creates_gateway_order(self):
        with self._patch_cache(self._snapshot()):
            response = self.client.post(self.url, {"totalAmount": 19.999}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {"orderId": "order_Nx01", "keyId": "rzp_test_key"})

        options = self.razorpay_client.order.create.call_args[0][0]
        self.assertEqual(options["amount"], 2000)
        self.assertEqual(options["currency"], "INR")
        self.assertTrue(options["receipt"].startswith("receipt_order_"))

    def test_total_amount_required(self):
        for body in ({}, {"totalAmount": 0}, {"totalAmount": -5}):
            with self._patch_cache(self._snapshot()):
                response = self.client.post(self.url, body, format="json")
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
            self.assertIn("totalAmount", response.data)
        self.razorpay_client.order.create.assert_not_called()

    def test_unconfigured_gateway(self):
        with self._patch_cache(None):
            response = self.client.post(self.url, {"totalAmount": 100}, format="json")
        self.assertEqual(response.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
        self.assertEqual(response.data["detail"], GATEWAY_UNAVAILABLE)

    def test_missing_key_id(self):
        with self._patch_cache(self._snapshot(key_id="")):
            response = self.client.post(self.url, {"totalAmount": 100}, format="json")
        self.assertEqual(response.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
        self.assertEqual(response.data["detail"], KEY_ID_MISSING)

    def test_rejected_credentials(self):
        self.razorpay_client.order.create.side_effect = razorpay.errors.BadRequestError("Authentication failed")
        with self._patch_cache(self._snapshot()):
            response = self.client.post(self.url, {"totalAmount": 100}, format="json")
        self.assertEqual(response.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
        self.assertEqual(response.data["detail"], GATEWAY_AUTH_FAILED)

    def test_other_bad_requests_are_not_credential_failures(self):
        self.razorpay_client.order.create.side_effect = razorpay.errors.BadRequestError("amount exceeds maximum amount allowed")
        with self._patch_cache(self._snapshot()):
            response = self.client.post(self.url, {"totalAmount": 100}, format="json")
        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)

    def test_other_processor_errors_are_server_errors(self):
        self.razorpay_client.order.create.side_effect = razorpay.errors.ServerError("upstream down")
        with self._patch_cache(self._snapshot()):
            response = self.client.post(self.url, {"totalAmount": 100}, format="json")
        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data["error"], "Internal Server Error")

    def test_end_to_end_with_stored_integration(self):
        enable_razorpay()
        gateway_cache.invalidate()
        self.addCleanup(gateway_cache.invalidate)

        with patch("apps.payments.gateway.razorpay.Client", return_value=self.razorpay_client) as client_cls:
            response = self.client.post(self.url, {"totalAmount": "250.50"}, format="json")

        client_cls.assert_called_once_with(auth=("rzp_test_key", "rzp_test_secret"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(self.razorpay_client.order.create.call_args[0][0]["amount"], 25050)


class IntegrationAdminTests(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.admin = User.objects.create_admin(email="ops@shop.test", password="0ps!Admin", name="Ops")
        self.client.force_authenticate(self.admin)

    def test_list_seeds_defaults_once(self):
        url = reverse("admin-integrations")
        self.client.get(url)
        response = self.client.get(url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        names = sorted(item["name"] for item in response.data)
        self.assertEqual(names, ["Facebook Pixel", "Mailchimp", "Razorpay", "Shiprocket"])
        self.assertFalse(any(item["enabled"] for item in response.data))

    def test_update_is_audited_and_invalidates_cache(self):
        integration = Integration.objects.create(name="Razorpay", category="Payments")
        url = reverse("admin-integration-detail", kwargs={"pk": integration.pk})

        with patch.object(gateway_cache, "invalidate") as invalidate:
            with self.captureOnCommitCallbacks(execute=True):
                response = self.client.patch(url, {
                    "enabled": True,
                    "settings": {"apiKey": "rzp_k", "apiSecret": "rzp_s"},
                }, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        invalidate.assert_called_once_with()
        integration.refresh_from_db()
        self.assertTrue(integration.enabled)
        self.assertTrue(AdminActivityLog.objects.filter(action="Updated integration", details="Name: Razorpay").exists())

    def test_customer_forbidden(self):
        shopper = User.objects.create_user(email="s@shop.test", password="Sh0p!per", name="S")
        self.client.force_authenticate(shopper)
        self.assertEqual(self.client.get(reverse("admin-integrations")).status_code, status.HTTP_403_FORBIDDEN)


class PaymentGatewayAdminTests(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.client.force_authenticate(
            User.objects.create_admin(email="ops@shop.test", password="0ps!Admin", name="Ops")
        )

    def test_defaults_and_update(self):
        response = self.client.get(reverse("admin-payment-gateways"))
        enabled = {item["name"]: item["enabled"] for item in response.data}
        self.assertEqual(enabled, {"Cash on Delivery": True, "Razorpay": False})

        cod = PaymentGateway.objects.get(name="Cash on Delivery")
        url = reverse("admin-payment-gateway-detail", kwargs={"pk": cod.pk})
        response = self.client.patch(url, {"enabled": False}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        cod.refresh_from_db()
        self.assertFalse(cod.enabled)
