import uuid
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from apps.accounts.models import AdminActivityLog
from apps.orders.models import Order

User = get_user_model()


class CustomerAdminTests(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.admin = User.objects.create_admin(email="ops@shop.test", password="0ps!Admin", name="Ops")
        self.client.force_authenticate(self.admin)

        self.buyer = User.objects.create_user(email="buyer@shop.test", password="Buy3r!pass", name="Buyer")
        self.browser = User.objects.create_user(email="browser@shop.test", password="Br0wse!pass", name="Browser")
        for amount in ("250.00", "749.50"):
            Order.objects.create(user=self.buyer, total_amount=Decimal(amount), payment_type="cod")

    def test_list_excludes_admins_and_reports_stats(self):
        response = self.client.get(reverse("admin-customers"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        rows = {row["email"]: row for row in response.data}
        self.assertEqual(set(rows), {"buyer@shop.test", "browser@shop.test"})

        self.assertEqual(rows["buyer@shop.test"]["total_orders"], 2)
        self.assertEqual(Decimal(rows["buyer@shop.test"]["total_spent"]), Decimal("999.50"))
        self.assertIsNotNone(rows["buyer@shop.test"]["last_order_date"])

        self.assertEqual(rows["browser@shop.test"]["total_orders"], 0)
        self.assertEqual(Decimal(rows["browser@shop.test"]["total_spent"]), Decimal("0"))
        self.assertIsNone(rows["browser@shop.test"]["last_order_date"])

    def test_toggle_block_round_trip(self):
        url = reverse("admin-customer-toggle-block", kwargs={"pk": self.buyer.pk})

        response = self.client.post(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data["is_blocked"])

        response = self.client.post(url)
        self.assertFalse(response.data["is_blocked"])

        details = list(AdminActivityLog.objects.order_by("created_at").values_list("details", flat=True))
        self.assertEqual(details, ["New status: Blocked", "New status: Active"])

    def test_toggle_unknown_user(self):
        url = reverse("admin-customer-toggle-block", kwargs={"pk": uuid.uuid4()})
        response = self.client.post(url)
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
