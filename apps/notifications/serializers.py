from rest_framework import serializers
from .models import Notification


class NotificationSerializer(serializers.ModelSerializer):
    """Serializer for notifications."""
    
    class Meta:
        model = Notification
        fields = ['id', 'type', 'title', 'body', 'data', 'is_read', 'created_at']
        read_only_fields = fields


class NotificationFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for the notification list.

    Query Parameters:
        unread (bool): Only unread notifications
    """

    unread = serializers.BooleanField(required=False, default=False)
