"""
Domain-specific exceptions for friends app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class FriendsServiceError(Exception):
    """Base exception for all friends service errors."""
    pass


class UserNotFoundError(FriendsServiceError):
    """Raised when the target username does not exist."""
    pass


class SelfFriendRequestError(FriendsServiceError):
    """Raised when a user sends a friend request to themselves."""
    pass


class AlreadyFriendsError(FriendsServiceError):
    """Raised when the users are already friends."""
    pass


class DuplicateFriendRequestError(FriendsServiceError):
    """Raised when a pending request already exists between the users."""
    pass


class FriendRequestNotFoundError(FriendsServiceError):
    """Raised when a friend request does not exist or is not visible."""
    pass


class InvalidRequestStateError(FriendsServiceError):
    """Raised when acting on a request that is no longer pending."""
    pass


class NotFriendsError(FriendsServiceError):
    """Raised when removing someone who is not a friend."""
    pass
