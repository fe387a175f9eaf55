from decimal import Decimal
from unittest.mock import patch

from django.contrib.auth import get_user_model
from django.test import TestCase, TransactionTestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from apps.accounts.models import AdminActivityLog
from apps.catalog.models import Product, ProductVariant, PublishStatus
from .models import Order, OrderItem, OrderStatus, PaymentStatus, ActivityLog, Coupon
from .tasks import record_purchase_activity

User = get_user_model()


class OrderPlacementTests(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.url = reverse("place-order")
        self.customer = User.objects.create_user(email="asha@shop.test", password="Ash4!pass", name="Asha")

        self.product = Product.objects.create(
            name="Linen Shirt", sku="SHIRT", price=Decimal("1499.00"), mrp=Decimal("1999.00"),
            category_name="Apparel", publish_status=PublishStatus.PUBLISHED,
        )
        self.medium = ProductVariant.objects.create(
            product=self.product, sku="SHIRT-M", price=Decimal("1499.00"), attributes={"Size": "M"},
        )
        self.large = ProductVariant.objects.create(
            product=self.product, sku="SHIRT-L", price=Decimal("1599.00"), attributes={"Size": "L"},
        )

    def _payload(self, payment_type="razorpay", **extra):
        payload = {
            "order": {
                "items": [
                    {"id": str(self.product.id), "name": "Linen Shirt", "quantity": 2,
                     "selectedVariant": {"id": str(self.medium.id), "price": "1.00"}},
                    {"id": str(self.product.id), "name": "Linen Shirt", "quantity": 1,
                     "selectedVariant": {"id": str(self.large.id)}},
                ],
                "totalAmount": "4597.00",
                "shippingAddress": {"line1": "12 MG Road", "city": "Pune", "pincode": "411001"},
                "paymentType": payment_type,
                "deliveryType": "standard",
            },
        }
        payload.update(extra)
        return payload

    def test_anonymous_without_guest_details_rejected(self):
        response = self.client.post(self.url, self._payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data["detail"], "Authentication is required to place an order.")
        self.assertFalse(Order.objects.exists())
        self.assertFalse(OrderItem.objects.exists())

    def test_authenticated_order_snapshots_variants(self):
        self.client.force_authenticate(self.customer)

        with self.captureOnCommitCallbacks(execute=True):
            response = self.client.post(self.url, self._payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertTrue(response.data["success"])

        order = Order.objects.get()
        self.assertEqual(order.user, self.customer)
        self.assertEqual(order.status, OrderStatus.PROCESSING)
        self.assertEqual(order.payment_status, PaymentStatus.SUCCESS)
        self.assertEqual(order.items.count(), 2)

        medium_item = order.items.get(variant=self.medium)
        self.assertEqual(medium_item.price_at_purchase, Decimal("1499.00"))
        self.assertEqual(medium_item.variant_snapshot, {"Size": "M"})

        # Later catalog edits leave the order untouched
        self.medium.price = Decimal("999.00")
        self.medium.attributes = {"Size": "M", "Fit": "Slim"}
        self.medium.save()
        medium_item.refresh_from_db()
        self.assertEqual(medium_item.price_at_purchase, Decimal("1499.00"))
        self.assertEqual(medium_item.variant_snapshot, {"Size": "M"})

        self.assertEqual(
            ActivityLog.objects.get().message,
            'Someone in Pune just purchased a "Linen Shirt".',
        )

    def test_guest_cod_order(self):
        payload = self._payload(
            payment_type="cod",
            guestDetails={"email": "guest@mail.test", "name": "Guest Buyer", "phone": "+919812345678"},
        )
        response = self.client.post(self.url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        order = Order.objects.get()
        self.assertIsNone(order.user)
        self.assertEqual(order.guest_email, "guest@mail.test")
        self.assertEqual(order.customer_name, "Guest Buyer")
        self.assertEqual(order.payment_status, PaymentStatus.PENDING)

    def test_empty_items_rejected(self):
        self.client.force_authenticate(self.customer)
        payload = self._payload()
        payload["order"]["items"] = []

        response = self.client.post(self.url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Order.objects.exists())

    def test_variant_of_another_product_rejected(self):
        other = Product.objects.create(
            name="Mug", sku="MUG", price=Decimal("299.00"), mrp=Decimal("399.00"), category_name="Home",
        )
        self.client.force_authenticate(self.customer)
        payload = self._payload()
        payload["order"]["items"][0]["id"] = str(other.id)

        response = self.client.post(self.url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["code"], "variant_unavailable")
        self.assertFalse(Order.objects.exists())

    def test_feed_failure_does_not_fail_order(self):
        self.client.force_authenticate(self.customer)

        with patch.object(ActivityLog.objects, "create", side_effect=RuntimeError("feed down")):
            with self.captureOnCommitCallbacks(execute=True):
                response = self.client.post(self.url, self._payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Order.objects.count(), 1)
        self.assertFalse(ActivityLog.objects.exists())

    def test_broker_failure_does_not_fail_order(self):
        self.client.force_authenticate(self.customer)

        with patch.object(record_purchase_activity, "delay", side_effect=ConnectionError("broker down")):
            with self.captureOnCommitCallbacks(execute=True):
                response = self.client.post(self.url, self._payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Order.objects.count(), 1)


class OrderCommitTests(TransactionTestCase):

    def setUp(self):
        self.client = APIClient()
        self.customer = User.objects.create_user(email="ravi@shop.test", password="Rav1!pass", name="Ravi")
        self.product = Product.objects.create(
            name="Cotton Tote", sku="TOTE", price=Decimal("499.00"), mrp=Decimal("599.00"),
            category_name="Bags", publish_status=PublishStatus.PUBLISHED,
        )
        self.variant = ProductVariant.objects.create(
            product=self.product, sku="TOTE-STD", price=Decimal("499.00"), attributes={"Colour": "Natural"},
        )

    def test_broker_outage_after_commit_returns_created(self):
        self.client.force_authenticate(self.customer)
        payload = {
            "order": {
                "items": [{"id": str(self.product.id), "name": "Cotton Tote", "quantity": 1,
                           "selectedVariant": {"id": str(self.variant.id)}}],
                "totalAmount": "499.00",
                "shippingAddress": {"line1": "4 Park Street", "city": "Kolkata", "pincode": "700016"},
                "paymentType": "cod",
            },
        }

        with patch.object(record_purchase_activity, "delay", side_effect=ConnectionError("broker down")) as delay:
            response = self.client.post(reverse("place-order"), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Order.objects.count(), 1)
        delay.assert_called_once_with("Kolkata", "Cotton Tote")


class ActivityFeedTests(TestCase):

    def test_latest_entries_only(self):
        for i in range(12):
            ActivityLog.objects.create(message=f"entry {i}")

        response = APIClient().get(reverse("activity-feed"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 10)

    def test_task_message_format(self):
        self.assertEqual(
            record_purchase_activity("Mumbai", "Clay Mug"),
            'Someone in Mumbai just purchased a "Clay Mug".',
        )


class AdminOrderTests(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.admin = User.objects.create_admin(email="ops@shop.test", password="0ps!Admin", name="Ops")
        self.client.force_authenticate(self.admin)
        self.customer = User.objects.create_user(email="asha@shop.test", password="Ash4!pass", name="Asha")
        self.order = Order.objects.create(
            user=self.customer, total_amount=Decimal("500.00"), payment_type="cod",
            shipping_address={"city": "Delhi"},
        )
        Order.objects.create(
            customer_name="Guest", guest_email="g@mail.test", total_amount=Decimal("80.00"),
            payment_type="razorpay", status=OrderStatus.DELIVERED,
        )

    def test_list_with_customer_details_and_filter(self):
        response = self.client.get(reverse("admin-orders-list"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 2)

        response = self.client.get(reverse("admin-orders-list"), {"status": OrderStatus.PROCESSING})
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]["user_name"], "Asha")
        self.assertEqual(response.data[0]["user_email"], "asha@shop.test")

    def test_status_update_is_validated_and_audited(self):
        url = reverse("admin-orders-update-status", kwargs={"pk": self.order.pk})

        response = self.client.patch(url, {"status": "Teleported"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        response = self.client.patch(url, {"status": OrderStatus.SHIPPED}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.order.refresh_from_db()
        self.assertEqual(self.order.status, OrderStatus.SHIPPED)
        self.assertTrue(AdminActivityLog.objects.filter(action="Updated order status").exists())

    def test_coupon_crud_is_audited(self):
        response = self.client.post(reverse("admin-coupons-list"), {
            "code": "SAVE10", "discount_type": "percentage", "value": "10.00",
        }, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

        coupon = Coupon.objects.get(code="SAVE10")
        detail = reverse("admin-coupons-detail", kwargs={"pk": coupon.pk})
        self.client.patch(detail, {"is_active": False}, format="json")
        self.client.delete(detail)

        self.assertFalse(Coupon.objects.exists())
        actions = set(AdminActivityLog.objects.values_list("action", flat=True))
        self.assertEqual(actions, {"Created coupon", "Updated coupon", "Deleted coupon"})

    def test_coupon_value_must_be_positive(self):
        response = self.client.post(reverse("admin-coupons-list"), {"code": "FREE", "value": "0"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
