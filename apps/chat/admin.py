# ==========================================
# apps/chat/admin.py
# ==========================================

from django.contrib import admin
from apps.chat.models import ChatMessage, MessageRead


@admin.register(ChatMessage)
class ChatMessageAdmin(admin.ModelAdmin):
    """Admin interface for Chat Messages."""
    
    list_display = ['bill', 'sender', 'type', 'payment_amount', 'payment_status', 'created_at']
    list_filter = ['type', 'payment_status', 'created_at']
    search_fields = ['bill__title', 'sender__username', 'content']
    readonly_fields = ['created_at', 'verified_at']
    date_hierarchy = 'created_at'
    ordering = ['-created_at']
    
    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('bill', 'sender')


@admin.register(MessageRead)
class MessageReadAdmin(admin.ModelAdmin):
    list_display = ['message', 'user', 'read_at']
    readonly_fields = ['read_at']
