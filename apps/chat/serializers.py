from rest_framework import serializers
from apps.accounts.serializers import UserMinimalSerializer
from .models import ChatMessage, MessageType, SlipStatus


# =============================================================================
# Input Serializers
# =============================================================================

class MessageFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for listing messages.

    Query Parameters:
        after (datetime): Only messages created after this moment
    """

    after = serializers.DateTimeField(required=False)


class SendMessageSerializer(serializers.Serializer):
    """Validate input for posting a chat message."""

    content = serializers.CharField(required=False, allow_blank=True, default='', max_length=2000)
    type = serializers.ChoiceField(
        choices=[MessageType.TEXT, MessageType.IMAGE, MessageType.PAYMENT_SLIP],
        default=MessageType.TEXT
    )
    image_url = serializers.URLField(required=False, allow_blank=True, default='', max_length=500)
    payment_amount = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        required=False,
        allow_null=True
    )


class VerifyPaymentSerializer(serializers.Serializer):
    """Host decision on a payment slip."""

    status = serializers.ChoiceField(choices=[SlipStatus.VERIFIED, SlipStatus.REJECTED])


# =============================================================================
# Output Serializers
# =============================================================================

class ChatMessageSerializer(serializers.ModelSerializer):
    """Serializer for chat messages."""
    
    sender = UserMinimalSerializer(read_only=True, allow_null=True)
    read_by = serializers.SerializerMethodField()
    
    class Meta:
        model = ChatMessage
        fields = [
            'id',
            'bill',
            'sender',
            'type',
            'content',
            'image_url',
            'is_payment_slip',
            'payment_amount',
            'payment_status',
            'verified_at',
            'read_by',
            'created_at',
        ]
        read_only_fields = fields
    
    def get_read_by(self, obj):
        """User ids with a read receipt."""
        return [str(read.user_id) for read in obj.reads.all()]
