from datetime import timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient

from apps.accounts.models import AdminActivityLog
from apps.catalog.models import Product
from apps.orders.models import Order, OrderStatus
from .models import SiteSettings

User = get_user_model()


class WebAdminTestCase(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.admin = User.objects.create_admin(email="ops@shop.test", password="0ps!Admin", name="Ops")
        self.client.force_authenticate(self.admin)


class SiteSettingsTests(WebAdminTestCase):

    def test_get_before_first_save(self):
        response = self.client.get(reverse("admin-site-settings"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIsNone(response.data)

    def test_upsert_keeps_single_row(self):
        url = reverse("admin-site-settings")

        response = self.client.put(url, {"store_name": "Shopfront", "contact_email": "hi@shop.test"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        response = self.client.put(url, {"announcement": "Free shipping this week"}, format="json")
        self.assertEqual(response.data["store_name"], "Shopfront")
        self.assertEqual(response.data["announcement"], "Free shipping this week")

        self.assertEqual(SiteSettings.objects.count(), 1)
        self.assertEqual(AdminActivityLog.objects.filter(action="Updated site settings").count(), 2)


class DashboardTests(WebAdminTestCase):

    def test_aggregate_sections(self):
        buyer = User.objects.create_user(email="b@shop.test", password="Buy3r!pass", name="Bina")
        Order.objects.create(user=buyer, total_amount=Decimal("120.00"), payment_type="cod")

        response = self.client.get(reverse("admin-dashboard"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            set(response.data),
            {"orders", "customers", "coupons", "admin_users", "media_library", "marketing_campaigns", "site_settings"},
        )
        self.assertEqual(response.data["orders"][0]["user_name"], "Bina")
        self.assertEqual(response.data["customers"][0]["total_orders"], 1)
        self.assertEqual([u["email"] for u in response.data["admin_users"]], ["ops@shop.test"])


class NotificationTests(WebAdminTestCase):

    def test_recent_orders_and_signups_newest_first(self):
        for i in range(7):
            Order.objects.create(total_amount=Decimal("10.00") * (i + 1), payment_type="cod", customer_name=f"G{i}")
        Order.objects.create(total_amount=Decimal("99.00"), payment_type="cod", status=OrderStatus.DELIVERED)

        old = User.objects.create_user(email="old@shop.test", password="0ld!Pass1", name="Old")
        User.objects.filter(pk=old.pk).update(date_joined=timezone.now() - timedelta(days=30))
        for i in range(4):
            User.objects.create_user(email=f"u{i}@shop.test", password="N3w!Pass1", name=f"User {i}")

        data = self.client.get(reverse("admin-notifications")).data

        orders = [n for n in data if n["type"] == "order"]
        users = [n for n in data if n["type"] == "user"]
        self.assertEqual(len(orders), 5)
        self.assertEqual(len(users), 3)
        self.assertNotIn("Old has just signed up.", [n["message"] for n in users])
        self.assertTrue(orders[0]["message"].endswith("needs processing."))

        timestamps = [n["timestamp"] for n in data]
        self.assertEqual(timestamps, sorted(timestamps, reverse=True))


class WishlistAnalyticsTests(WebAdminTestCase):

    def test_most_wished_first(self):
        scarf = Product.objects.create(name="Scarf", sku="SC", price=1, mrp=2, category_name="Acc")
        mug = Product.objects.create(name="Mug", sku="MG", price=1, mrp=2, category_name="Home")
        Product.objects.create(name="Unloved", sku="UN", price=1, mrp=2, category_name="Home")

        for i in range(3):
            shopper = User.objects.create_user(email=f"w{i}@shop.test", password="W1sh!list", name=f"W{i}")
            shopper.wishlist.add(mug)
            if i == 0:
                shopper.wishlist.add(scarf)

        data = self.client.get(reverse("admin-wishlist-analytics")).data

        self.assertEqual([(row["product"]["name"], row["count"]) for row in data], [("Mug", 3), ("Scarf", 1)])
