# ==========================================
# apps/chat/models.py
# ==========================================

from django.db import models
import uuid


class MessageType(models.TextChoices):
    TEXT = 'text', 'Text'
    IMAGE = 'image', 'Image'
    PAYMENT_SLIP = 'payment_slip', 'Payment slip'
    SYSTEM = 'system', 'System'


class SlipStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    VERIFIED = 'verified', 'Verified'
    REJECTED = 'rejected', 'Rejected'


class ChatMessage(models.Model):
    """Message in a bill's chat. System messages have no sender."""
    
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    bill = models.ForeignKey('bills.Bill', on_delete=models.CASCADE, related_name='messages')
    sender = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='chat_messages'
    )
    type = models.CharField(max_length=20, choices=MessageType.choices, default=MessageType.TEXT)
    content = models.TextField(blank=True)
    image_url = models.URLField(max_length=500, blank=True)
    
    # Payment slip fields
    is_payment_slip = models.BooleanField(default=False)
    payment_amount = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    payment_status = models.CharField(
        max_length=10,
        choices=SlipStatus.choices,
        null=True,
        blank=True
    )
    verified_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='verified_slips'
    )
    verified_at = models.DateTimeField(null=True, blank=True)
    
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    
    class Meta:
        db_table = 'chat_messages'
        indexes = [
            models.Index(fields=['bill', 'created_at'], name='chat_bill_created_idx'),
        ]
        ordering = ['created_at']
    
    def __str__(self):
        return f"[{self.type}] {self.content[:40]}"


class MessageRead(models.Model):
    """Read receipt."""
    
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    message = models.ForeignKey(ChatMessage, on_delete=models.CASCADE, related_name='reads')
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='message_reads')
    read_at = models.DateTimeField(auto_now_add=True)
    
    class Meta:
        db_table = 'message_reads'
        unique_together = [['message', 'user']]
