from datetime import timedelta

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient

from apps.accounts.models import AdminActivityLog
from .models import SupportTicket, TicketStatus, ChatSession, ChatMessage, ChatSender, Faq, Testimonial

User = get_user_model()


class AdminSupportTests(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.client.force_authenticate(
            User.objects.create_admin(email="ops@shop.test", password="0ps!Admin", name="Ops")
        )
        self.customer = User.objects.create_user(email="c@shop.test", password="Cust0m!er", name="Chitra")

    def test_ticket_update_is_audited(self):
        ticket = SupportTicket.objects.create(
            user=self.customer, subject="Late delivery",
            messages=[{"sender": "user", "text": "Where is my order?"}],
        )
        url = reverse("admin-support-tickets-detail", kwargs={"pk": ticket.pk})

        response = self.client.patch(url, {
            "status": TicketStatus.CLOSED,
            "messages": ticket.messages + [{"sender": "admin", "text": "Delivered today."}],
        }, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        ticket.refresh_from_db()
        self.assertEqual(ticket.status, TicketStatus.CLOSED)
        self.assertEqual(len(ticket.messages), 2)
        self.assertTrue(AdminActivityLog.objects.filter(action="Updated support ticket").exists())

    def test_chat_sessions_show_latest_message(self):
        older = ChatSession.objects.create(user=self.customer)
        newer = ChatSession.objects.create(guest_name="Visitor")
        ChatSession.objects.filter(pk=older.pk).update(last_updated=timezone.now() - timedelta(hours=1))
        ChatMessage.objects.create(session=older, sender=ChatSender.USER, text="Hi")
        ChatMessage.objects.create(session=older, sender=ChatSender.USER, text="Anyone there?")

        response = self.client.get(reverse("admin-chats-list"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([row["id"] for row in response.data], [str(newer.id), str(older.id)])
        self.assertEqual(response.data[1]["last_message"], "Anyone there?")
        self.assertEqual(response.data[1]["user_name"], "Chitra")
        self.assertIsNone(response.data[0]["last_message"])

    def test_admin_reply_bumps_session(self):
        session = ChatSession.objects.create(user=self.customer)
        ChatSession.objects.filter(pk=session.pk).update(last_updated=timezone.now() - timedelta(days=1))
        ChatMessage.objects.create(session=session, sender=ChatSender.USER, text="Need help")
        url = reverse("admin-chats-messages", kwargs={"pk": session.pk})

        response = self.client.post(url, {"text": "Happy to help!"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["sender"], ChatSender.ADMIN)

        session.refresh_from_db()
        self.assertGreater(session.last_updated, timezone.now() - timedelta(minutes=1))

        transcript = self.client.get(url).data
        self.assertEqual([m["text"] for m in transcript], ["Need help", "Happy to help!"])

    def test_faqs_ordered_and_public(self):
        self.client.post(reverse("admin-faqs-list"), {"question": "Returns?", "answer": "30 days", "order": 2}, format="json")
        self.client.post(reverse("admin-faqs-list"), {"question": "Shipping?", "answer": "3-5 days", "order": 1}, format="json")

        response = APIClient().get(reverse("faq-list"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([f["question"] for f in response.data], ["Shipping?", "Returns?"])

    def test_testimonial_rating_bounds(self):
        response = self.client.post(reverse("admin-testimonials-list"), {
            "author": "Neha", "quote": "Lovely fabric", "rating": 6,
        }, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        response = self.client.post(reverse("admin-testimonials-list"), {
            "author": "Neha", "quote": "Lovely fabric", "rating": 5,
        }, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Testimonial.objects.count(), 1)
        self.assertEqual(len(APIClient().get(reverse("testimonial-list")).data), 1)

    def test_public_cannot_edit_faqs(self):
        response = APIClient().post(reverse("admin-faqs-list"), {"question": "x", "answer": "y"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertFalse(Faq.objects.exists())
