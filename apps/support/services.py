import logging
from django.db import transaction
from django.db.models import OuterRef, Subquery
from django.utils import timezone

from .models import ChatSession, ChatMessage, ChatSender

logger = logging.getLogger(__name__)


class ChatService:

    @staticmethod
    def sessions_with_last_message():
        latest = ChatMessage.objects.filter(session=OuterRef('pk')).order_by('-timestamp')
        return (
            ChatSession.objects
            .select_related('user')
            .annotate(last_message=Subquery(latest.values('text')[:1]))
            .order_by('-last_updated')
        )

    @staticmethod
    @transaction.atomic
    def send_admin_message(session: ChatSession, text: str) -> ChatMessage:
        message = ChatMessage.objects.create(session=session, sender=ChatSender.ADMIN, text=text)
        ChatSession.objects.filter(pk=session.pk).update(last_updated=timezone.now())
        logger.info("Admin replied in chat session %s", session.id)
        return message
