"""
Chat app services layer.

Services contain business logic and orchestrate operations across models.
"""

from .exceptions import (
    ChatServiceError,
    BillNotFoundError,
    NotBillParticipantError,
    NotBillHostError,
    MessageNotFoundError,
    InvalidMessageError,
    PaymentAlreadyProcessedError,
)

from .messaging import (
    get_bill_for_member,
    send_message,
    post_system_message,
    get_messages_for_bill,
    mark_as_read,
    mark_bill_read,
    get_unread_count,
)

from .payment_verification import (
    verify_payment_slip,
)


__all__ = [
    # Exceptions
    'ChatServiceError',
    'BillNotFoundError',
    'NotBillParticipantError',
    'NotBillHostError',
    'MessageNotFoundError',
    'InvalidMessageError',
    'PaymentAlreadyProcessedError',

    # Messaging
    'get_bill_for_member',
    'send_message',
    'post_system_message',
    'get_messages_for_bill',
    'mark_as_read',
    'mark_bill_read',
    'get_unread_count',

    # Payments
    'verify_payment_slip',
]
