from django.contrib import admin
from .models import SupportTicket, ChatSession, ChatMessage, Faq, Testimonial


@admin.register(SupportTicket)
class SupportTicketAdmin(admin.ModelAdmin):
    list_display = ('subject', 'user', 'status', 'updated_at')
    list_filter = ('status',)
    search_fields = ('subject', 'user__email')


class ChatMessageInline(admin.TabularInline):
    model = ChatMessage
    extra = 0
    readonly_fields = ('sender', 'text', 'timestamp')


@admin.register(ChatSession)
class ChatSessionAdmin(admin.ModelAdmin):
    list_display = ('id', 'user', 'guest_name', 'last_updated')
    inlines = [ChatMessageInline]


admin.site.register(Faq)
admin.site.register(Testimonial)
