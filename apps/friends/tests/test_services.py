"""
Service layer unit tests for friends app.

Tests cover:
- Request lifecycle (send, accept, decline, cancel)
- Friendship symmetry
- Business logic validation
"""

import pytest
from uuid import uuid4

from apps.friends.models import FriendRequest, FriendRequestStatus, Friendship
from apps.friends.services import (
    send_friend_request,
    accept_friend_request,
    decline_friend_request,
    cancel_friend_request,
    list_incoming_requests,
    list_outgoing_requests,
    list_friends,
    get_friend_ids,
    remove_friend,
)
from apps.friends.services.exceptions import (
    UserNotFoundError,
    SelfFriendRequestError,
    AlreadyFriendsError,
    DuplicateFriendRequestError,
    FriendRequestNotFoundError,
    InvalidRequestStateError,
    NotFriendsError,
)


# =============================================================================
# Friend Request Service Tests
# =============================================================================

@pytest.mark.django_db
class TestSendFriendRequest:
    """Tests for send_friend_request."""

    def test_send_request_success(self, user, other_user):
        friend_request = send_friend_request(from_user=user, username='bob')

        assert friend_request.from_user == user
        assert friend_request.to_user == other_user
        assert friend_request.status == FriendRequestStatus.PENDING

    def test_username_is_case_insensitive(self, user, other_user):
        friend_request = send_friend_request(from_user=user, username='  BoB ')
        assert friend_request.to_user == other_user

    def test_unknown_username(self, user):
        with pytest.raises(UserNotFoundError):
            send_friend_request(from_user=user, username='nobody')

    def test_inactive_user_not_found(self, user, other_user):
        other_user.is_active = False
        other_user.save()

        with pytest.raises(UserNotFoundError):
            send_friend_request(from_user=user, username='bob')

    def test_cannot_request_self(self, user):
        with pytest.raises(SelfFriendRequestError):
            send_friend_request(from_user=user, username='alice')

    def test_already_friends(self, user, friendship):
        with pytest.raises(AlreadyFriendsError):
            send_friend_request(from_user=user, username='bob')

    def test_duplicate_pending_request(self, user, pending_request):
        with pytest.raises(DuplicateFriendRequestError):
            send_friend_request(from_user=user, username='bob')

    def test_reverse_pending_request(self, other_user, pending_request):
        """Target already asked us; we must answer instead of sending."""
        with pytest.raises(DuplicateFriendRequestError):
            send_friend_request(from_user=other_user, username='alice')

    def test_declined_request_is_reopened(self, user, pending_request):
        pending_request.status = FriendRequestStatus.DECLINED
        pending_request.save()

        friend_request = send_friend_request(from_user=user, username='bob')

        assert friend_request.id == pending_request.id
        assert friend_request.status == FriendRequestStatus.PENDING
        assert FriendRequest.objects.count() == 1


@pytest.mark.django_db
class TestAnswerFriendRequest:
    """Tests for accept/decline/cancel."""

    def test_accept_creates_both_directions(self, user, other_user, pending_request):
        accept_friend_request(request_id=pending_request.id, user=other_user)

        pending_request.refresh_from_db()
        assert pending_request.status == FriendRequestStatus.ACCEPTED
        assert Friendship.are_friends(user, other_user)
        assert Friendship.are_friends(other_user, user)

    def test_sender_cannot_accept(self, user, pending_request):
        with pytest.raises(FriendRequestNotFoundError):
            accept_friend_request(request_id=pending_request.id, user=user)

    def test_accept_missing_request(self, other_user):
        with pytest.raises(FriendRequestNotFoundError):
            accept_friend_request(request_id=uuid4(), user=other_user)

    def test_accept_twice(self, other_user, pending_request):
        accept_friend_request(request_id=pending_request.id, user=other_user)

        with pytest.raises(InvalidRequestStateError):
            accept_friend_request(request_id=pending_request.id, user=other_user)

    def test_decline(self, user, other_user, pending_request):
        decline_friend_request(request_id=pending_request.id, user=other_user)

        pending_request.refresh_from_db()
        assert pending_request.status == FriendRequestStatus.DECLINED
        assert not Friendship.are_friends(user, other_user)

    def test_recipient_cannot_decline_accepted(self, other_user, pending_request):
        accept_friend_request(request_id=pending_request.id, user=other_user)

        with pytest.raises(InvalidRequestStateError):
            decline_friend_request(request_id=pending_request.id, user=other_user)

    def test_cancel_by_sender(self, user, pending_request):
        cancel_friend_request(request_id=pending_request.id, user=user)
        assert not FriendRequest.objects.filter(id=pending_request.id).exists()

    def test_recipient_cannot_cancel(self, other_user, pending_request):
        with pytest.raises(FriendRequestNotFoundError):
            cancel_friend_request(request_id=pending_request.id, user=other_user)

    def test_request_lists(self, user, other_user, third_user, pending_request):
        FriendRequest.objects.create(from_user=third_user, to_user=user)

        assert [r.to_user for r in list_outgoing_requests(user=user)] == [other_user]
        assert [r.from_user for r in list_incoming_requests(user=user)] == [third_user]
        assert list(list_incoming_requests(user=other_user)) == [pending_request]


# =============================================================================
# Friendship Management Service Tests
# =============================================================================

@pytest.mark.django_db
class TestFriendshipManagement:
    """Tests for friendship_management.py service functions."""

    def test_list_friends(self, user, other_user, friendship):
        friends = [f.friend for f in list_friends(user=user)]
        assert friends == [other_user]

    def test_list_friends_search_by_name(self, user, friendship):
        assert list_friends(user=user, search='builder').count() == 1
        assert list_friends(user=user, search='zzz').count() == 0

    def test_list_friends_search_by_email(self, user, friendship):
        assert list_friends(user=user, search='BOB@EXAMPLE').count() == 1

    def test_get_friend_ids(self, user, other_user, friendship):
        assert get_friend_ids(user=user) == {other_user.id}

    def test_remove_friend(self, user, other_user, friendship):
        remove_friend(user=user, friend_id=other_user.id)

        assert not Friendship.are_friends(user, other_user)
        assert not Friendship.are_friends(other_user, user)
        assert not FriendRequest.objects.filter(
            status=FriendRequestStatus.ACCEPTED
        ).exists()

    def test_can_request_again_after_removal(self, user, other_user, friendship):
        remove_friend(user=other_user, friend_id=user.id)

        friend_request = send_friend_request(from_user=user, username='bob')
        assert friend_request.status == FriendRequestStatus.PENDING

    def test_remove_non_friend(self, user, other_user):
        with pytest.raises(NotFriendsError):
            remove_friend(user=user, friend_id=other_user.id)
