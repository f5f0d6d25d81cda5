"""
Friend request service.

Handles sending and answering friend requests with row-level locking so
two users answering at the same time cannot create duplicate friendships.
"""

import logging
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.friends.models import FriendRequest, FriendRequestStatus, Friendship

from .exceptions import (
    UserNotFoundError,
    SelfFriendRequestError,
    AlreadyFriendsError,
    DuplicateFriendRequestError,
    FriendRequestNotFoundError,
    InvalidRequestStateError,
)

logger = logging.getLogger(__name__)


@transaction.atomic
def send_friend_request(*, from_user: User, username: str) -> FriendRequest:
    """
    Send a friend request to the user with the given username.

    A request that was previously declined is reopened instead of
    creating a second row.

    Args:
        from_user: User sending the request
        username: Target username (case-insensitive)

    Returns:
        The pending FriendRequest

    Raises:
        UserNotFoundError: If no active user has that username
        SelfFriendRequestError: If the target is the sender
        AlreadyFriendsError: If the users are already friends
        DuplicateFriendRequestError: If a pending request exists in either direction
    """
    try:
        to_user = User.objects.get(
            username=username.strip().lower(),
            is_active=True,
        )
    except User.DoesNotExist:
        raise UserNotFoundError("User not found")

    if to_user == from_user:
        raise SelfFriendRequestError("Cannot send friend request to yourself")

    if Friendship.are_friends(from_user, to_user):
        raise AlreadyFriendsError("Already friends with this user")

    if FriendRequest.objects.filter(
        from_user=to_user,
        to_user=from_user,
        status=FriendRequestStatus.PENDING
    ).exists():
        raise DuplicateFriendRequestError(
            f"{to_user.get_display_name()} has already sent you a friend request"
        )

    existing = (
        FriendRequest.objects
        .select_for_update()
        .filter(from_user=from_user, to_user=to_user)
        .first()
    )

    if existing is None:
        friend_request = FriendRequest.objects.create(
            from_user=from_user,
            to_user=to_user,
        )
    elif existing.status == FriendRequestStatus.PENDING:
        raise DuplicateFriendRequestError("Friend request already sent")
    else:
        # Declined (or stale accepted) requests are reopened
        existing.status = FriendRequestStatus.PENDING
        existing.save(update_fields=['status', 'updated_at'])
        friend_request = existing

    logger.info("Friend request %s: %s -> %s", friend_request.id, from_user.id, to_user.id)
    return friend_request


def _lock_pending_request(request_id: UUID) -> FriendRequest:
    try:
        friend_request = (
            FriendRequest.objects
            .select_for_update(of=('self',))
            .select_related('from_user', 'to_user')
            .get(id=request_id)
        )
    except FriendRequest.DoesNotExist:
        raise FriendRequestNotFoundError(f"Friend request {request_id} not found")
    return friend_request


@transaction.atomic
def accept_friend_request(*, request_id: UUID, user: User) -> FriendRequest:
    """
    Accept a friend request addressed to ``user``.

    Creates the friendship in both directions.

    Raises:
        FriendRequestNotFoundError: If the request doesn't exist or isn't addressed to user
        InvalidRequestStateError: If the request is not pending
    """
    friend_request = _lock_pending_request(request_id)

    if friend_request.to_user_id != user.id:
        raise FriendRequestNotFoundError(f"Friend request {request_id} not found")

    if friend_request.status != FriendRequestStatus.PENDING:
        raise InvalidRequestStateError(
            f"Friend request is already {friend_request.status}"
        )

    friend_request.status = FriendRequestStatus.ACCEPTED
    friend_request.save(update_fields=['status', 'updated_at'])

    Friendship.objects.get_or_create(user=friend_request.from_user, friend=friend_request.to_user)
    Friendship.objects.get_or_create(user=friend_request.to_user, friend=friend_request.from_user)

    logger.info("Friend request %s accepted", friend_request.id)
    return friend_request


@transaction.atomic
def decline_friend_request(*, request_id: UUID, user: User) -> FriendRequest:
    """
    Decline a friend request addressed to ``user``.

    Raises:
        FriendRequestNotFoundError: If the request doesn't exist or isn't addressed to user
        InvalidRequestStateError: If the request is not pending
    """
    friend_request = _lock_pending_request(request_id)

    if friend_request.to_user_id != user.id:
        raise FriendRequestNotFoundError(f"Friend request {request_id} not found")

    if friend_request.status != FriendRequestStatus.PENDING:
        raise InvalidRequestStateError(
            f"Friend request is already {friend_request.status}"
        )

    friend_request.status = FriendRequestStatus.DECLINED
    friend_request.save(update_fields=['status', 'updated_at'])

    logger.info("Friend request %s declined", friend_request.id)
    return friend_request


@transaction.atomic
def cancel_friend_request(*, request_id: UUID, user: User) -> None:
    """
    Withdraw a pending request sent by ``user``.

    Raises:
        FriendRequestNotFoundError: If the request doesn't exist or wasn't sent by user
        InvalidRequestStateError: If the request is not pending
    """
    friend_request = _lock_pending_request(request_id)

    if friend_request.from_user_id != user.id:
        raise FriendRequestNotFoundError(f"Friend request {request_id} not found")

    if friend_request.status != FriendRequestStatus.PENDING:
        raise InvalidRequestStateError(
            f"Friend request is already {friend_request.status}"
        )

    friend_request.delete()


def list_incoming_requests(*, user: User) -> QuerySet[FriendRequest]:
    """Pending requests addressed to the user."""
    return (
        FriendRequest.objects
        .filter(to_user=user, status=FriendRequestStatus.PENDING)
        .select_related('from_user', 'to_user')
    )


def list_outgoing_requests(*, user: User) -> QuerySet[FriendRequest]:
    """Pending requests sent by the user."""
    return (
        FriendRequest.objects
        .filter(from_user=user, status=FriendRequestStatus.PENDING)
        .select_related('from_user', 'to_user')
    )
