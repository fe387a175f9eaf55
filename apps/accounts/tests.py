from unittest.mock import patch

from django.db import DatabaseError, transaction
from django.test import TestCase, RequestFactory
from django.urls import reverse
from rest_framework.test import APIClient
from rest_framework import status
from rest_framework_simplejwt.tokens import AccessToken

from apps.accounts.models import User, Role, AdminActivityLog
from apps.accounts.services import log_admin_action

STRONG_PASSWORD = "Str0ng!Pass"


class RegisterTests(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.url = reverse("auth-register")

    def test_register_creates_customer(self):
        response = self.client.post(self.url, {
            "name": "Meera", "email": "meera@shop.test", "password": STRONG_PASSWORD,
        }, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["message"], "User registered successfully")

        user = User.objects.get(email="meera@shop.test")
        self.assertEqual(user.role, Role.USER)
        self.assertTrue(user.check_password(STRONG_PASSWORD))

    def test_weak_password_lists_unmet_rules(self):
        response = self.client.post(self.url, {
            "name": "Meera", "email": "meera@shop.test", "password": "short",
        }, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("Must be at least 8 characters long.", response.data["password"])
        self.assertFalse(User.objects.exists())

    def test_invalid_email_rejected(self):
        response = self.client.post(self.url, {
            "name": "Meera", "email": "not-an-email", "password": STRONG_PASSWORD,
        }, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("email", response.data)

    def test_duplicate_email_conflict(self):
        User.objects.create_user(email="meera@shop.test", password=STRONG_PASSWORD, name="Meera")

        response = self.client.post(self.url, {
            "name": "Other", "email": "MEERA@shop.test", "password": STRONG_PASSWORD,
        }, format="json")

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(User.objects.count(), 1)


class LoginTests(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.url = reverse("auth-login")
        self.user = User.objects.create_user(email="kiran@shop.test", password=STRONG_PASSWORD, name="Kiran")

    def test_login_returns_token_with_role_claim(self):
        response = self.client.post(self.url, {"email": "kiran@shop.test", "password": STRONG_PASSWORD}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn("refresh", response.data)
        self.assertEqual(response.data["user"]["email"], "kiran@shop.test")

        token = AccessToken(response.data["token"])
        self.assertEqual(token["role"], Role.USER)

        me = self.client.get(reverse("auth-me"), HTTP_AUTHORIZATION=f"Bearer {response.data['token']}")
        self.assertEqual(me.status_code, status.HTTP_200_OK)
        self.assertEqual(me.data["name"], "Kiran")

    def test_wrong_password(self):
        response = self.client.post(self.url, {"email": "kiran@shop.test", "password": "Wr0ng!Pass"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_blocked_user_cannot_login(self):
        self.user.is_blocked = True
        self.user.save()

        response = self.client.post(self.url, {"email": "kiran@shop.test", "password": STRONG_PASSWORD}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_login_is_audited(self):
        admin = User.objects.create_admin(email="boss@shop.test", password=STRONG_PASSWORD, name="Boss")

        response = self.client.post(self.url, {"email": "boss@shop.test", "password": STRONG_PASSWORD}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        log = AdminActivityLog.objects.get()
        self.assertEqual(log.admin_user, admin)
        self.assertEqual(log.action, "Admin Logged In")


class AdminAuditTests(TestCase):

    def setUp(self):
        self.factory = RequestFactory()
        self.admin = User.objects.create_admin(email="boss@shop.test", password=STRONG_PASSWORD, name="Boss")

    def test_missing_user_is_skipped(self):
        request = self.factory.post("/")
        self.assertIsNone(log_admin_action(request, "Deleted product"))
        self.assertFalse(AdminActivityLog.objects.exists())

    def test_records_forwarded_ip(self):
        request = self.factory.post("/", HTTP_X_FORWARDED_FOR="203.0.113.9, 10.0.0.1")
        request.user = self.admin

        log = log_admin_action(request, "Updated settings", "Store name")

        self.assertEqual(log.ip_address, "203.0.113.9")
        self.assertEqual(log.admin_user_name, "Boss")

    def test_database_error_does_not_propagate(self):
        request = self.factory.post("/")
        request.user = self.admin

        with patch.object(AdminActivityLog.objects, "create", side_effect=DatabaseError("down")):
            self.assertIsNone(log_admin_action(request, "Updated settings"))

    def test_failed_write_leaves_outer_transaction_usable(self):
        request = self.factory.post("/")
        request.user = self.admin

        with patch.object(AdminActivityLog, "_do_insert", side_effect=DatabaseError("insert failed")):
            with transaction.atomic():
                self.assertIsNone(log_admin_action(request, "Updated order status"))
                self.assertFalse(transaction.get_connection().needs_rollback)
                self.admin.name = "Boss Renamed"
                self.admin.save(update_fields=["name"])

        self.admin.refresh_from_db()
        self.assertEqual(self.admin.name, "Boss Renamed")
        self.assertFalse(AdminActivityLog.objects.exists())


class AdminUserManagementTests(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.admin = User.objects.create_admin(email="boss@shop.test", password=STRONG_PASSWORD, name="Boss")
        self.client.force_authenticate(self.admin)
        self.list_url = reverse("admin-users-list")

    def test_customer_cannot_manage_admins(self):
        shopper = User.objects.create_user(email="shopper@shop.test", password=STRONG_PASSWORD, name="Shopper")
        self.client.force_authenticate(shopper)
        self.assertEqual(self.client.get(self.list_url).status_code, status.HTTP_403_FORBIDDEN)

    def test_create_update_delete_admin(self):
        response = self.client.post(self.list_url, {
            "name": "Deputy", "email": "deputy@shop.test", "password": STRONG_PASSWORD,
        }, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertNotIn("password", response.data)

        deputy = User.objects.get(email="deputy@shop.test")
        self.assertEqual(deputy.role, Role.ADMIN)

        detail_url = reverse("admin-users-detail", kwargs={"pk": deputy.pk})
        response = self.client.patch(detail_url, {"name": "Deputy Lead"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        response = self.client.delete(detail_url)
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)

        actions = list(AdminActivityLog.objects.order_by("created_at").values_list("action", flat=True))
        self.assertEqual(actions, ["Created admin user", "Updated admin user", "Deleted admin user"])

    def test_password_required_on_create(self):
        response = self.client.post(self.list_url, {"name": "Deputy", "email": "deputy@shop.test"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("password", response.data)

    def test_duplicate_email_conflict(self):
        response = self.client.post(self.list_url, {
            "name": "Clone", "email": "boss@shop.test", "password": STRONG_PASSWORD,
        }, format="json")
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

    def test_activity_log_listing(self):
        AdminActivityLog.objects.create(admin_user=self.admin, admin_user_name="Boss", action="Exported orders")
        response = self.client.get(reverse("admin-activity-logs"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data[0]["action"], "Exported orders")
