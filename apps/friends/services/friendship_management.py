"""
Friendship management service.

Friend lists and removal of friendships.
"""

import logging
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import Q, QuerySet

from apps.accounts.models import User
from apps.friends.models import FriendRequest, FriendRequestStatus, Friendship

from .exceptions import NotFriendsError

logger = logging.getLogger(__name__)


def list_friends(*, user: User, search: Optional[str] = None) -> QuerySet[Friendship]:
    """
    Get the user's friends.

    Args:
        user: Whose friends to list
        search: Optional case-insensitive fragment of the friend's name,
            username or email

    Returns:
        QuerySet of Friendship rows owned by ``user`` with ``friend`` loaded
    """
    friendships = (
        Friendship.objects
        .filter(user=user, friend__is_active=True)
        .select_related('friend')
    )

    if search:
        friendships = friendships.filter(
            Q(friend__name__icontains=search) |
            Q(friend__username__icontains=search) |
            Q(friend__email__icontains=search)
        )

    return friendships


def get_friend_ids(*, user: User) -> set:
    """Ids of everyone the user is friends with."""
    return set(
        Friendship.objects
        .filter(user=user)
        .values_list('friend_id', flat=True)
    )


@transaction.atomic
def remove_friend(*, user: User, friend_id: UUID) -> None:
    """
    Remove a friendship in both directions.

    The accepted request between the two users is deleted too, so either
    of them can send a fresh request later.

    Raises:
        NotFriendsError: If the users are not friends
    """
    deleted, _ = Friendship.objects.filter(
        Q(user=user, friend_id=friend_id) |
        Q(user_id=friend_id, friend=user)
    ).delete()

    if not deleted:
        raise NotFriendsError("You are not friends with this user")

    FriendRequest.objects.filter(
        Q(from_user=user, to_user_id=friend_id) |
        Q(from_user_id=friend_id, to_user=user),
        status=FriendRequestStatus.ACCEPTED,
    ).delete()

    logger.info("Friendship removed: %s <-> %s", user.id, friend_id)
