from rest_framework import generics, mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from apps.accounts.permissions import IsAdmin
from apps.accounts.services import log_admin_action
from .models import SupportTicket, Faq, Testimonial
from .serializers import (
    SupportTicketSerializer,
    ChatSessionSerializer,
    ChatMessageSerializer,
    FaqSerializer,
    TestimonialSerializer,
)
from .services import ChatService


# Storefront

class PublicFaqListView(generics.ListAPIView):
    serializer_class = FaqSerializer
    permission_classes = [AllowAny]
    queryset = Faq.objects.all()


class PublicTestimonialListView(generics.ListAPIView):
    serializer_class = TestimonialSerializer
    permission_classes = [AllowAny]
    queryset = Testimonial.objects.all()


# Admin panel

class SupportTicketViewSet(mixins.ListModelMixin,
                           mixins.RetrieveModelMixin,
                           mixins.UpdateModelMixin,
                           viewsets.GenericViewSet):
    serializer_class = SupportTicketSerializer
    permission_classes = [IsAdmin]
    queryset = SupportTicket.objects.select_related('user')
    filterset_fields = ['status']

    def perform_update(self, serializer):
        ticket = serializer.save()
        log_admin_action(self.request, "Updated support ticket", f"Ticket ID: {ticket.id}, Status: {ticket.status}")


class ChatSessionViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = ChatSessionSerializer
    permission_classes = [IsAdmin]

    def get_queryset(self):
        return ChatService.sessions_with_last_message()

    @action(detail=True, methods=['get', 'post'])
    def messages(self, request, pk=None):
        session = self.get_object()

        if request.method == 'POST':
            serializer = ChatMessageSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            message = ChatService.send_admin_message(session, serializer.validated_data['text'])
            return Response(ChatMessageSerializer(message).data, status=status.HTTP_201_CREATED)

        return Response(ChatMessageSerializer(session.messages.all(), many=True).data)


class FaqViewSet(viewsets.ModelViewSet):
    serializer_class = FaqSerializer
    permission_classes = [IsAdmin]
    queryset = Faq.objects.all()


class TestimonialViewSet(viewsets.ModelViewSet):
    serializer_class = TestimonialSerializer
    permission_classes = [IsAdmin]
    queryset = Testimonial.objects.all()
