"""
Notification service.

Creating, listing and marking in-app notifications.
"""

import logging
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.notifications.models import Notification

from .exceptions import NotificationNotFoundError

logger = logging.getLogger(__name__)


def create_notification(
    *,
    user: User,
    type: str,
    title: str,
    body: str = "",
    data: Optional[dict] = None
) -> Notification:
    """
    Create a notification for one user.

    Args:
        user: Recipient
        type: Notification type, e.g. 'bill_finalized'
        title: Short headline
        body: Message text
        data: JSON payload for the client (bill_id, target route, ...)

    Returns:
        Created Notification
    """
    notification = Notification.objects.create(
        user=user,
        type=type,
        title=title,
        body=body,
        data=data or {}
    )
    logger.debug("Notification %s (%s) created for %s", notification.id, type, user.id)
    return notification


def list_notifications(*, user: User, unread_only: bool = False) -> QuerySet[Notification]:
    """Notifications for the user, newest first."""
    notifications = Notification.objects.filter(user=user)
    if unread_only:
        notifications = notifications.filter(is_read=False)
    return notifications


def get_unread_count(*, user: User) -> int:
    return Notification.objects.filter(user=user, is_read=False).count()


def _get_own_notification(notification_id: UUID, user: User) -> Notification:
    try:
        return Notification.objects.get(id=notification_id, user=user)
    except Notification.DoesNotExist:
        raise NotificationNotFoundError(f"Notification {notification_id} not found")


def mark_notification_read(*, notification_id: UUID, user: User) -> Notification:
    """
    Mark one notification as read. Marking twice is a no-op.

    Raises:
        NotificationNotFoundError: If the notification doesn't belong to user
    """
    notification = _get_own_notification(notification_id, user)
    if not notification.is_read:
        notification.is_read = True
        notification.save(update_fields=['is_read'])
    return notification


@transaction.atomic
def mark_all_read(*, user: User) -> int:
    """Mark every unread notification of the user as read. Returns the count."""
    return Notification.objects.filter(user=user, is_read=False).update(is_read=True)


def delete_notification(*, notification_id: UUID, user: User) -> None:
    """
    Delete one of the user's notifications.

    Raises:
        NotificationNotFoundError: If the notification doesn't belong to user
    """
    _get_own_notification(notification_id, user).delete()
