"""
Item selection service.

Participants claim the items they consumed, then submit. Submitted
selections are final.
"""

import logging
from uuid import UUID

from django.db import transaction

from apps.accounts.models import User
from apps.bills.models import Bill, BillItem, BillItemSelection, BillParticipant, BillStatus
from apps.bills.exceptions import (
    BillNotFoundError,
    ItemNotFoundError,
    NotParticipantError,
    InvalidStatusTransitionError,
    SelectionsAlreadySubmittedError,
)

logger = logging.getLogger(__name__)


def _lock_participant(bill: Bill, user: User) -> BillParticipant:
    try:
        return BillParticipant.objects.select_for_update().get(bill=bill, user=user)
    except BillParticipant.DoesNotExist:
        raise NotParticipantError()


@transaction.atomic
def toggle_item_selection(*, item_id: UUID, user: User, selected: bool) -> bool:
    """
    Select or deselect an item for the user.

    Selecting twice or deselecting an unselected item changes nothing.

    Args:
        item_id: Bill item ID
        user: Participant choosing the item
        selected: Desired state

    Returns:
        The selection state after the call

    Raises:
        ItemNotFoundError: If item doesn't exist
        NotParticipantError: If user is not a participant of the item's bill
        InvalidStatusTransitionError: If the bill left the select stage
        SelectionsAlreadySubmittedError: If the user already submitted
    """
    try:
        item = BillItem.objects.select_related('bill').get(id=item_id)
    except BillItem.DoesNotExist:
        raise ItemNotFoundError(f"Item {item_id} not found")

    participant = _lock_participant(item.bill, user)

    if item.bill.status != BillStatus.SELECT:
        raise InvalidStatusTransitionError("Selections are closed for this bill.")

    if participant.has_submitted:
        raise SelectionsAlreadySubmittedError()

    if selected:
        BillItemSelection.objects.get_or_create(item=item, user=user)
    else:
        BillItemSelection.objects.filter(item=item, user=user).delete()

    return selected


@transaction.atomic
def submit_selections(*, bill_id: UUID, user: User) -> BillParticipant:
    """
    Lock in the user's selections.

    Raises:
        BillNotFoundError: If bill doesn't exist
        NotParticipantError: If user is not a participant
        InvalidStatusTransitionError: If the bill left the select stage
        SelectionsAlreadySubmittedError: If the user already submitted
    """
    try:
        bill = Bill.objects.get(id=bill_id)
    except Bill.DoesNotExist:
        raise BillNotFoundError(f"Bill {bill_id} not found")

    participant = _lock_participant(bill, user)

    if bill.status != BillStatus.SELECT:
        raise InvalidStatusTransitionError("Selections are closed for this bill.")

    if participant.has_submitted:
        raise SelectionsAlreadySubmittedError()

    participant.has_submitted = True
    participant.save(update_fields=['has_submitted', 'updated_at'])

    logger.info("User %s submitted selections for bill %s", user.id, bill.id)
    return participant
