import uuid
from django.db import models
from django.conf import settings
from apps.utils.models import TimestampedModel


class TicketStatus(models.TextChoices):
    OPEN = "Open", "Open"
    IN_PROGRESS = "In Progress", "In Progress"
    CLOSED = "Closed", "Closed"


class SupportTicket(TimestampedModel):
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='support_tickets',
    )
    subject = models.CharField(max_length=255)
    status = models.CharField(max_length=20, choices=TicketStatus.choices, default=TicketStatus.OPEN, db_index=True)
    # [{"sender": "user"|"admin", "text": "...", "timestamp": "..."}]
    messages = models.JSONField(default=list, blank=True)

    class Meta:
        ordering = ['-updated_at']

    def __str__(self):
        return f"{self.subject} [{self.status}]"


class ChatSession(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='chat_sessions',
    )
    guest_name = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    last_updated = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ['-last_updated']

    def __str__(self):
        return f"Chat {self.id}"


class ChatSender(models.TextChoices):
    USER = "user", "User"
    ADMIN = "admin", "Admin"


class ChatMessage(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    session = models.ForeignKey(ChatSession, on_delete=models.CASCADE, related_name='messages')
    sender = models.CharField(max_length=10, choices=ChatSender.choices)
    text = models.TextField()
    timestamp = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ['timestamp']


class Faq(models.Model):
    question = models.CharField(max_length=500)
    answer = models.TextField()
    order = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ['order', 'id']

    def __str__(self):
        return self.question


class Testimonial(models.Model):
    author = models.CharField(max_length=255)
    role = models.CharField(max_length=255, blank=True)
    quote = models.TextField()
    rating = models.PositiveSmallIntegerField(default=5)
    avatar_url = models.URLField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-id']

    def __str__(self):
        return self.author
