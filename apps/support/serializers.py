from rest_framework import serializers
from .models import SupportTicket, ChatSession, ChatMessage, Faq, Testimonial, ChatSender


class SupportTicketSerializer(serializers.ModelSerializer):
    user_name = serializers.CharField(source='user.name', read_only=True, allow_null=True)

    class Meta:
        model = SupportTicket
        fields = ['id', 'user', 'user_name', 'subject', 'status', 'messages', 'created_at', 'updated_at']
        read_only_fields = ['id', 'user', 'subject', 'created_at', 'updated_at']

    def validate_messages(self, value):
        if not isinstance(value, list) or not all(isinstance(m, dict) and m.get('text') for m in value):
            raise serializers.ValidationError("Messages must be a list of objects with text.")
        return value


class ChatMessageSerializer(serializers.ModelSerializer):
    class Meta:
        model = ChatMessage
        fields = ['id', 'session', 'sender', 'text', 'timestamp']
        read_only_fields = ['id', 'session', 'sender', 'timestamp']


class ChatSessionSerializer(serializers.ModelSerializer):
    user_name = serializers.SerializerMethodField()
    last_message = serializers.CharField(read_only=True, allow_null=True)

    class Meta:
        model = ChatSession
        fields = ['id', 'user', 'user_name', 'guest_name', 'last_message', 'created_at', 'last_updated']

    def get_user_name(self, obj):
        return obj.user.name if obj.user else obj.guest_name


class FaqSerializer(serializers.ModelSerializer):
    class Meta:
        model = Faq
        fields = ['id', 'question', 'answer', 'order']


class TestimonialSerializer(serializers.ModelSerializer):
    class Meta:
        model = Testimonial
        fields = ['id', 'author', 'role', 'quote', 'rating', 'avatar_url', 'created_at']
        read_only_fields = ['id', 'created_at']

    def validate_rating(self, value):
        if not 1 <= value <= 5:
            raise serializers.ValidationError("Rating must be between 1 and 5.")
        return value
