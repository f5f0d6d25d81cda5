"""
Bill lifecycle service.

    select --finalize--> pay --close--> closed

Finalizing freezes selections and tells every participant what they owe.
During ``pay`` participants report payments and the host verifies them.
Status moves are forward only.
"""

import logging
from typing import List
from uuid import UUID

from django.db import transaction

from apps.accounts.models import User
from apps.bills.models import Bill, BillParticipant, BillStatus, ParticipantPaymentStatus
from apps.bills.exceptions import (
    NotParticipantError,
    InvalidStatusTransitionError,
    SelectionsIncompleteError,
    InvalidPaymentStateError,
)
from apps.chat.services import post_system_message
from apps.notifications.models import NotificationType
from apps.notifications.services import create_notification

from .bill_management import bill_queryset, get_bill_detail, get_bill_for_update, require_host
from .cost_allocation import UserCost, ItemSnapshot, calculate_user_costs, format_currency, unclaimed_items
from .snapshots import load_bill_snapshot

logger = logging.getLogger(__name__)


@transaction.atomic
def finalize_bill(*, bill_id: UUID, user: User) -> Bill:
    """
    Move a bill from select to pay.

    Every participant must have submitted. Posts a system message and
    sends each non-host participant a ``bill_finalized`` notification with
    their share. The host's own participation is marked verified since
    they don't pay themselves.

    Raises:
        BillNotFoundError: If bill doesn't exist
        InsufficientPermissionsError: If user is not the host
        InvalidStatusTransitionError: If the bill is not in select
        SelectionsIncompleteError: If someone hasn't submitted yet
    """
    bill = get_bill_for_update(bill_id)
    require_host(bill, user)

    if bill.status != BillStatus.SELECT:
        raise InvalidStatusTransitionError(f"Cannot finalize a bill in status '{bill.status}'.")

    if bill.participants.filter(has_submitted=False).exists():
        raise SelectionsIncompleteError()

    bill.status = BillStatus.PAY
    bill.save(update_fields=['status', 'updated_at'])

    BillParticipant.objects.filter(bill=bill, user=user).update(
        payment_status=ParticipantPaymentStatus.VERIFIED
    )

    costs = calculate_user_costs(load_bill_snapshot(bill_queryset().get(id=bill.id)))

    post_system_message(
        bill=bill,
        content="💰 Bill finalized! Everyone can now see what they owe.",
    )

    participants = {str(p.user_id): p.user for p in bill.participants.select_related('user')}
    for cost in costs:
        if cost.user_id == str(user.id):
            continue
        create_notification(
            user=participants[cost.user_id],
            type=NotificationType.BILL_FINALIZED,
            title="💰 Bill Finalized!",
            body=f"'{bill.title}' has been finalized. Your share is {format_currency(cost.total)}.",
            data={
                'bill_id': str(bill.id),
                'bill_title': bill.title,
                'amount': cost.total,
                'target': f"/bill/{bill.id}",
            },
        )

    logger.info("Bill %s finalized by %s", bill.id, user.id)
    return bill


@transaction.atomic
def close_bill(*, bill_id: UUID, user: User) -> Bill:
    """
    Move a bill from pay to closed.

    Raises:
        BillNotFoundError: If bill doesn't exist
        InsufficientPermissionsError: If user is not the host
        InvalidStatusTransitionError: If the bill is not in pay
    """
    bill = get_bill_for_update(bill_id)
    require_host(bill, user)

    if bill.status != BillStatus.PAY:
        raise InvalidStatusTransitionError(f"Cannot close a bill in status '{bill.status}'.")

    bill.status = BillStatus.CLOSED
    bill.save(update_fields=['status', 'updated_at'])

    post_system_message(bill=bill, content="✅ Bill closed. Thanks everyone!")

    logger.info("Bill %s closed by %s", bill.id, user.id)
    return bill


def update_bill_status(*, bill_id: UUID, user: User, status: str) -> Bill:
    """
    Advance the bill to ``status``.

    Only ``select -> pay`` and ``pay -> closed`` are allowed; they run the
    same checks as finalize_bill and close_bill.

    Raises:
        InvalidStatusTransitionError: For any other move
    """
    bill = get_bill_detail(bill_id=bill_id, user=user)
    require_host(bill, user)

    if not bill.can_transition_to(status):
        raise InvalidStatusTransitionError(
            f"Cannot move bill from '{bill.status}' to '{status}'."
        )

    if status == BillStatus.PAY:
        return finalize_bill(bill_id=bill_id, user=user)
    return close_bill(bill_id=bill_id, user=user)


def _lock_bill_participant(bill: Bill, user_id: UUID) -> BillParticipant:
    try:
        return BillParticipant.objects.select_for_update().get(bill=bill, user_id=user_id)
    except BillParticipant.DoesNotExist:
        raise NotParticipantError()


@transaction.atomic
def mark_payment_sent(*, bill_id: UUID, user: User) -> BillParticipant:
    """
    Participant reports that they paid their share.

    Raises:
        BillNotFoundError: If bill doesn't exist
        NotParticipantError: If user is not a participant
        InvalidStatusTransitionError: If the bill is not in pay
        InvalidPaymentStateError: If the payment was already reported
    """
    bill = get_bill_for_update(bill_id)
    participant = _lock_bill_participant(bill, user.id)

    if bill.status != BillStatus.PAY:
        raise InvalidStatusTransitionError("Payments can only be made while the bill is in the pay stage.")

    if participant.payment_status != ParticipantPaymentStatus.UNPAID:
        raise InvalidPaymentStateError(f"Payment is already {participant.payment_status}.")

    participant.payment_status = ParticipantPaymentStatus.PAID
    participant.save(update_fields=['payment_status', 'updated_at'])

    logger.info("User %s marked payment sent for bill %s", user.id, bill.id)
    return participant


@transaction.atomic
def verify_participant_payment(*, bill_id: UUID, user: User, participant_user_id: UUID) -> dict:
    """
    Host confirms a participant's payment.

    Returns:
        {'participant': BillParticipant, 'all_verified': bool} where
        all_verified is True once every non-host participant is verified

    Raises:
        BillNotFoundError: If bill doesn't exist
        InsufficientPermissionsError: If user is not the host
        NotParticipantError: If participant_user_id is not on the bill
        InvalidStatusTransitionError: If the bill is not in pay
        InvalidPaymentStateError: If already verified
    """
    bill = get_bill_for_update(bill_id)
    require_host(bill, user)

    if bill.status != BillStatus.PAY:
        raise InvalidStatusTransitionError("Payments can only be verified while the bill is in the pay stage.")

    participant = _lock_bill_participant(bill, participant_user_id)

    if participant.payment_status == ParticipantPaymentStatus.VERIFIED:
        raise InvalidPaymentStateError("Payment is already verified.")

    participant.payment_status = ParticipantPaymentStatus.VERIFIED
    participant.save(update_fields=['payment_status', 'updated_at'])

    all_verified = not (
        bill.participants
        .exclude(user_id=bill.created_by_id)
        .exclude(payment_status=ParticipantPaymentStatus.VERIFIED)
        .exists()
    )

    logger.info(
        "Payment of %s verified on bill %s (all verified: %s)",
        participant_user_id, bill.id, all_verified
    )
    return {'participant': participant, 'all_verified': all_verified}


def get_user_costs(*, bill_id: UUID, user: User) -> List[UserCost]:
    """Cost allocation for a bill visible to the user."""
    bill = get_bill_detail(bill_id=bill_id, user=user)
    return calculate_user_costs(load_bill_snapshot(bill))


def get_unclaimed_items(*, bill_id: UUID, user: User) -> List[ItemSnapshot]:
    """Items on the bill that nobody selected."""
    bill = get_bill_detail(bill_id=bill_id, user=user)
    return unclaimed_items(load_bill_snapshot(bill))
