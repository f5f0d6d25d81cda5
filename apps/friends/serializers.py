from rest_framework import serializers
from apps.accounts.serializers import UserMinimalSerializer
from .models import FriendRequest, Friendship


class FriendRequestSerializer(serializers.ModelSerializer):
    """Friend request with both users expanded."""
    
    from_user = UserMinimalSerializer(read_only=True)
    to_user = UserMinimalSerializer(read_only=True)
    
    class Meta:
        model = FriendRequest
        fields = ['id', 'from_user', 'to_user', 'status', 'created_at', 'updated_at']
        read_only_fields = fields


class SendFriendRequestSerializer(serializers.Serializer):
    """Input for sending a friend request by username."""
    
    username = serializers.CharField(max_length=50)

    def validate_username(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Username is required')
        return value


class FriendSerializer(serializers.ModelSerializer):
    """A friend, flattened from the Friendship row."""
    
    friend = UserMinimalSerializer(read_only=True)
    
    class Meta:
        model = Friendship
        fields = ['id', 'friend', 'created_at']
        read_only_fields = fields


class FriendFilterSerializer(serializers.Serializer):
    """Query params for the friend list."""
    
    search = serializers.CharField(required=False, allow_blank=True, max_length=100)
