"""
Chat messaging service.

Sending, listing and read tracking for bill chats. Listing accepts an
``after`` timestamp so polling clients only fetch what is new.
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.bills.models import Bill, BillStatus
from apps.chat.models import ChatMessage, MessageRead, MessageType, SlipStatus

from .exceptions import (
    BillNotFoundError,
    NotBillParticipantError,
    MessageNotFoundError,
    InvalidMessageError,
)

logger = logging.getLogger(__name__)

USER_MESSAGE_TYPES = (MessageType.TEXT, MessageType.IMAGE, MessageType.PAYMENT_SLIP)


def get_bill_for_member(bill_id: UUID, user: User) -> Bill:
    """
    Load a bill the user takes part in (as host or participant).

    Raises:
        BillNotFoundError: If bill doesn't exist
        NotBillParticipantError: If user is not part of the bill
    """
    try:
        bill = Bill.objects.get(id=bill_id)
    except Bill.DoesNotExist:
        raise BillNotFoundError(f"Bill {bill_id} not found")

    if not (bill.is_host(user) or bill.has_participant(user)):
        raise NotBillParticipantError("You are not a participant of this bill")

    return bill


@transaction.atomic
def send_message(
    *,
    bill_id: UUID,
    user: User,
    content: str = "",
    type: str = MessageType.TEXT,
    image_url: str = "",
    payment_amount: Optional[Decimal] = None
) -> ChatMessage:
    """
    Post a message to a bill chat.

    Payment slips start out ``pending`` and wait for the host. The sender
    has read their own message.

    Raises:
        BillNotFoundError: If bill doesn't exist
        NotBillParticipantError: If user is not part of the bill
        InvalidMessageError: If the content doesn't fit the message type, or a
            payment slip is sent outside the pay stage
    """
    bill = get_bill_for_member(bill_id, user)

    if type not in USER_MESSAGE_TYPES:
        raise InvalidMessageError(f"Cannot send messages of type '{type}'")

    content = (content or "").strip()

    if type == MessageType.TEXT and not content:
        raise InvalidMessageError("Message cannot be empty")

    if type == MessageType.IMAGE and not image_url:
        raise InvalidMessageError("Image messages need an image_url")

    is_payment_slip = type == MessageType.PAYMENT_SLIP
    if is_payment_slip:
        if bill.status != BillStatus.PAY:
            raise InvalidMessageError("Payment slips can only be sent while the bill is in the pay stage")
        if payment_amount is None or payment_amount <= 0:
            raise InvalidMessageError("Payment slips need a positive payment_amount")
        content = content or "Payment slip attached"
    else:
        payment_amount = None

    message = ChatMessage.objects.create(
        bill=bill,
        sender=user,
        type=type,
        content=content,
        image_url=image_url or "",
        is_payment_slip=is_payment_slip,
        payment_amount=payment_amount,
        payment_status=SlipStatus.PENDING if is_payment_slip else None,
    )
    MessageRead.objects.create(message=message, user=user)

    if is_payment_slip:
        logger.info("Payment slip %s posted to bill %s by %s", message.id, bill.id, user.id)

    return message


def post_system_message(*, bill: Bill, content: str) -> ChatMessage:
    """Post a message without sender, e.g. 'Bill finalized'."""
    return ChatMessage.objects.create(
        bill=bill,
        sender=None,
        type=MessageType.SYSTEM,
        content=content,
    )


def get_messages_for_bill(
    *,
    bill_id: UUID,
    user: User,
    after: Optional[datetime] = None
) -> QuerySet[ChatMessage]:
    """
    Messages of a bill in chronological order.

    Args:
        bill_id: Bill ID
        user: Requesting user (must be part of the bill)
        after: Only return messages created after this moment

    Raises:
        BillNotFoundError: If bill doesn't exist
        NotBillParticipantError: If user is not part of the bill
    """
    bill = get_bill_for_member(bill_id, user)

    messages = (
        ChatMessage.objects
        .filter(bill=bill)
        .select_related('sender')
        .prefetch_related('reads')
        .order_by('created_at')
    )
    if after is not None:
        messages = messages.filter(created_at__gt=after)

    return messages


def mark_as_read(*, message_id: UUID, user: User) -> ChatMessage:
    """
    Record that the user has read a message. Idempotent.

    Raises:
        MessageNotFoundError: If message doesn't exist or user can't see it
    """
    try:
        message = ChatMessage.objects.select_related('bill').get(id=message_id)
    except ChatMessage.DoesNotExist:
        raise MessageNotFoundError(f"Message {message_id} not found")

    bill = message.bill
    if not (bill.is_host(user) or bill.has_participant(user)):
        raise MessageNotFoundError(f"Message {message_id} not found")

    MessageRead.objects.get_or_create(message=message, user=user)
    return message


@transaction.atomic
def mark_bill_read(*, bill_id: UUID, user: User) -> int:
    """
    Mark every message in the bill chat as read.

    Returns:
        Number of messages newly marked
    """
    bill = get_bill_for_member(bill_id, user)

    unread = (
        ChatMessage.objects
        .filter(bill=bill)
        .exclude(reads__user=user)
    )
    receipts = [MessageRead(message=message, user=user) for message in unread]
    MessageRead.objects.bulk_create(receipts, ignore_conflicts=True)

    return len(receipts)


def get_unread_count(*, bill_id: UUID, user: User) -> int:
    """Number of messages in the bill without the user's read receipt."""
    bill = get_bill_for_member(bill_id, user)

    return (
        ChatMessage.objects
        .filter(bill=bill)
        .exclude(reads__user=user)
        .count()
    )
