"""
Custom exceptions for notifications services.
"""


class NotificationsServiceError(Exception):
    """Base exception for notifications service errors."""
    pass


class NotificationNotFoundError(NotificationsServiceError):
    """Raised when a notification doesn't exist or belongs to someone else."""
    pass
