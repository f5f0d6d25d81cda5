"""
Friends app services layer.

Services contain business logic and orchestrate operations across models.
All state-changing operations use transactions and row-level locking.
"""

from .exceptions import (
    FriendsServiceError,
    UserNotFoundError,
    SelfFriendRequestError,
    AlreadyFriendsError,
    DuplicateFriendRequestError,
    FriendRequestNotFoundError,
    InvalidRequestStateError,
    NotFriendsError,
)

from .friend_requests import (
    send_friend_request,
    accept_friend_request,
    decline_friend_request,
    cancel_friend_request,
    list_incoming_requests,
    list_outgoing_requests,
)

from .friendship_management import (
    list_friends,
    get_friend_ids,
    remove_friend,
)


__all__ = [
    # Exceptions
    'FriendsServiceError',
    'UserNotFoundError',
    'SelfFriendRequestError',
    'AlreadyFriendsError',
    'DuplicateFriendRequestError',
    'FriendRequestNotFoundError',
    'InvalidRequestStateError',
    'NotFriendsError',

    # Friend requests
    'send_friend_request',
    'accept_friend_request',
    'decline_friend_request',
    'cancel_friend_request',
    'list_incoming_requests',
    'list_outgoing_requests',

    # Friendships
    'list_friends',
    'get_friend_ids',
    'remove_friend',
]
