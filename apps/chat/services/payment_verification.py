"""
Payment slip verification.

The bill host answers each payment slip exactly once. Verifying a slip
also marks the sender's participation as verified.
"""

import logging
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

from apps.accounts.models import User
from apps.bills.models import BillParticipant, BillStatus, ParticipantPaymentStatus
from apps.chat.models import ChatMessage, SlipStatus

from .exceptions import (
    MessageNotFoundError,
    NotBillHostError,
    InvalidMessageError,
    PaymentAlreadyProcessedError,
)
from .messaging import post_system_message

logger = logging.getLogger(__name__)


def locked_messages() -> QuerySet[ChatMessage]:
    """
    Messages with their bill and sender, row-locked.

    Only the message row is locked: ``sender`` is nullable, so it is joined
    with an outer join, and PostgreSQL refuses FOR UPDATE on that side.
    """
    return (
        ChatMessage.objects
        .select_for_update(of=('self',))
        .select_related('bill', 'sender')
    )


@transaction.atomic
def verify_payment_slip(*, message_id: UUID, user: User, status: str) -> ChatMessage:
    """
    Verify or reject a pending payment slip.

    Uses select_for_update() so concurrent answers for the same slip are
    serialized and only the first one wins.

    Args:
        message_id: Payment slip message ID
        user: Must be the bill host
        status: 'verified' or 'rejected'

    Returns:
        Updated ChatMessage

    Raises:
        MessageNotFoundError: If message doesn't exist
        InvalidMessageError: If message is not a payment slip, status is
            invalid, or the bill is not in the pay stage
        NotBillHostError: If user is not the bill host
        PaymentAlreadyProcessedError: If the slip was already answered
    """
    if status not in (SlipStatus.VERIFIED, SlipStatus.REJECTED):
        raise InvalidMessageError(f"Invalid verification status '{status}'")

    try:
        message = locked_messages().get(id=message_id)
    except ChatMessage.DoesNotExist:
        raise MessageNotFoundError(f"Message {message_id} not found")

    if not message.is_payment_slip:
        raise InvalidMessageError("Message is not a payment slip")

    if not message.bill.is_host(user):
        raise NotBillHostError("Only the bill host can verify payments")

    if message.bill.status != BillStatus.PAY:
        raise InvalidMessageError("Payments can only be verified while the bill is in the pay stage")

    if message.payment_status != SlipStatus.PENDING:
        raise PaymentAlreadyProcessedError(
            f"Payment slip is already {message.payment_status}"
        )

    message.payment_status = status
    message.verified_by = user
    message.verified_at = timezone.now()
    message.save(update_fields=['payment_status', 'verified_by', 'verified_at'])

    sender_name = message.sender.get_display_name() if message.sender else "a deleted user"

    if status == SlipStatus.VERIFIED:
        if message.sender_id:
            BillParticipant.objects.filter(
                bill=message.bill,
                user_id=message.sender_id
            ).update(payment_status=ParticipantPaymentStatus.VERIFIED)
        post_system_message(
            bill=message.bill,
            content=f"✅ Payment of {message.payment_amount:.2f} from {sender_name} was verified",
        )
    else:
        post_system_message(
            bill=message.bill,
            content=f"❌ Payment of {message.payment_amount:.2f} from {sender_name} was rejected",
        )

    logger.info("Payment slip %s %s by %s", message.id, status, user.id)
    return message
