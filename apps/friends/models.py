# ==========================================
# apps/friends/models.py
# ==========================================

from django.db import models
import uuid


class FriendRequestStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    ACCEPTED = 'accepted', 'Accepted'
    DECLINED = 'declined', 'Declined'


class FriendRequest(models.Model):
    """Request from one user to another to become friends."""
    
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    from_user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='sent_friend_requests')
    to_user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='received_friend_requests')
    status = models.CharField(
        max_length=20,
        choices=FriendRequestStatus.choices,
        default=FriendRequestStatus.PENDING
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    
    class Meta:
        db_table = 'friend_requests'
        unique_together = [['from_user', 'to_user']]
        indexes = [
            models.Index(fields=['to_user', 'status'], name='friend_req_to_status_idx'),
            models.Index(fields=['from_user', 'status'], name='friend_req_from_status_idx'),
        ]
        ordering = ['-created_at']
    
    def __str__(self):
        return f"{self.from_user.get_display_name()} -> {self.to_user.get_display_name()} ({self.status})"


class Friendship(models.Model):
    """
    Directed friendship row.

    Accepted requests create one row per direction, so a user's friends
    are always ``Friendship.objects.filter(user=user)``.
    """
    
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='friendships')
    friend = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='friend_of')
    created_at = models.DateTimeField(auto_now_add=True)
    
    class Meta:
        db_table = 'friends'
        unique_together = [['user', 'friend']]
        indexes = [
            models.Index(fields=['user', 'created_at'], name='friends_user_created_idx'),
        ]
        ordering = ['-created_at']
    
    def __str__(self):
        return f"{self.user.get_display_name()} & {self.friend.get_display_name()}"

    @classmethod
    def are_friends(cls, user_a, user_b):
        return cls.objects.filter(user=user_a, friend=user_b).exists()
