"""
Notifications app services layer.
"""

from .exceptions import (
    NotificationsServiceError,
    NotificationNotFoundError,
)

from .notification_service import (
    create_notification,
    list_notifications,
    get_unread_count,
    mark_notification_read,
    mark_all_read,
    delete_notification,
)

from .due_reminders import (
    ReminderRunResult,
    reminder_stage,
    send_due_date_reminders,
)


__all__ = [
    # Exceptions
    'NotificationsServiceError',
    'NotificationNotFoundError',

    # Notifications
    'create_notification',
    'list_notifications',
    'get_unread_count',
    'mark_notification_read',
    'mark_all_read',
    'delete_notification',

    # Reminders
    'ReminderRunResult',
    'reminder_stage',
    'send_due_date_reminders',
]
