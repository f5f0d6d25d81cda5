# ==========================================
# apps/notifications/models.py
# ==========================================

from django.db import models
import uuid


class NotificationType:
    BILL_INVITE = 'bill_invite'
    BILL_FINALIZED = 'bill_finalized'
    DUE_REMINDER_PREFIX = 'bill_due_reminder_'


class Notification(models.Model):
    """In-app notification for a single user."""
    
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='notifications')
    type = models.CharField(max_length=50)
    title = models.CharField(max_length=200)
    body = models.TextField(blank=True)
    
    # Free-form payload, e.g. {"bill_id": "...", "target": "/bill/..."}
    data = models.JSONField(default=dict, blank=True)
    is_read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    
    class Meta:
        db_table = 'notifications'
        indexes = [
            models.Index(fields=['user', 'is_read'], name='notif_user_read_idx'),
            models.Index(fields=['user', 'created_at'], name='notif_user_created_idx'),
            models.Index(fields=['type'], name='notif_type_idx'),
        ]
        ordering = ['-created_at']
    
    def __str__(self):
        return f"{self.type} -> {self.user.get_display_name()}"
