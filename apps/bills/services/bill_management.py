"""
Bill management service.

Creating, listing, reading, updating and deleting bills.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional
from uuid import UUID

from django.db import transaction
from django.db.models import Q, QuerySet

from apps.accounts.models import User
from apps.bills.models import Bill, BillItem, BillParticipant, BillStatus
from apps.bills.exceptions import (
    BillNotFoundError,
    NotParticipantError,
    InsufficientPermissionsError,
    InvalidStatusTransitionError,
    InvalidParticipantsError,
)
from apps.friends.services import get_friend_ids
from apps.notifications.models import NotificationType
from apps.notifications.services import create_notification

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = (
    'title',
    'description',
    'total_amount',
    'due_date',
    'tag',
    'bank_name',
    'account_name',
    'account_number',
)


def bill_queryset() -> QuerySet[Bill]:
    """Bills with everything the detail and cost views read."""
    return (
        Bill.objects
        .select_related('created_by')
        .prefetch_related('participants__user', 'items__selections')
    )


def get_bill_for_update(bill_id: UUID) -> Bill:
    """Lock and return a bill."""
    try:
        return Bill.objects.select_for_update().get(id=bill_id)
    except Bill.DoesNotExist:
        raise BillNotFoundError(f"Bill {bill_id} not found")


def require_host(bill: Bill, user: User) -> None:
    if not bill.is_host(user):
        raise InsufficientPermissionsError()


@transaction.atomic
def create_bill(
    *,
    created_by: User,
    title: str,
    total_amount: Decimal,
    bank_name: str,
    account_name: str,
    account_number: str,
    items: List[dict],
    participant_ids: Iterable[UUID] = (),
    description: str = "",
    due_date: Optional[date] = None,
    tag: str = ""
) -> Bill:
    """
    Create a bill with its items and participants.

    The creator always becomes the first participant. Everyone else must
    be a friend of the creator; duplicates are ignored.

    Args:
        created_by: Host of the bill
        title: Bill title
        total_amount: Total shown on the bill
        bank_name: Bank for payments
        account_name: Account holder
        account_number: Account number
        items: List of {'name', 'price', 'quantity'} dicts (quantity defaults to 1)
        participant_ids: Invited users
        description: Optional description
        due_date: Optional due date
        tag: Optional tag for grouping

    Returns:
        Created Bill instance

    Raises:
        InvalidParticipantsError: If an invited user is not a friend of the host
    """
    invited = []
    for participant_id in participant_ids:
        if participant_id != created_by.id and participant_id not in invited:
            invited.append(participant_id)

    friend_ids = get_friend_ids(user=created_by)
    strangers = [str(pid) for pid in invited if pid not in friend_ids]
    if strangers:
        raise InvalidParticipantsError(
            f"You can only invite friends to a bill: {', '.join(strangers)}"
        )

    bill = Bill.objects.create(
        created_by=created_by,
        title=title,
        description=description,
        total_amount=total_amount,
        due_date=due_date,
        tag=tag or "",
        bank_name=bank_name,
        account_name=account_name,
        account_number=account_number,
    )

    BillParticipant.objects.bulk_create([
        BillParticipant(bill=bill, user_id=user_id, position=position)
        for position, user_id in enumerate([created_by.id, *invited])
    ])

    BillItem.objects.bulk_create([
        BillItem(
            bill=bill,
            name=item['name'],
            price=item['price'],
            quantity=item.get('quantity') or 1,
            position=position,
        )
        for position, item in enumerate(items)
    ])

    inviter_name = created_by.get_display_name()
    for user in User.objects.filter(id__in=invited):
        create_notification(
            user=user,
            type=NotificationType.BILL_INVITE,
            title="You receive an invitation 🎉",
            body=f"{inviter_name} invites you to {bill.title} bill",
            data={
                'bill_id': str(bill.id),
                'bill_title': bill.title,
                'inviter_id': str(created_by.id),
                'target': f"/bill/{bill.id}",
            },
        )

    logger.info(
        "Bill %s created by %s with %s participants and %s items",
        bill.id, created_by.id, len(invited) + 1, len(items)
    )
    return bill


def list_bills_for_user(
    *,
    user: User,
    status: Optional[str] = None,
    tag: Optional[str] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
    search: Optional[str] = None
) -> QuerySet[Bill]:
    """
    Bills the user hosts or participates in, newest first.

    Args:
        user: Requesting user
        status: Only bills in this status
        tag: Only bills with this tag (case-insensitive)
        date_from: Created on or after this date
        date_to: Created on or before this date
        search: Case-insensitive fragment of the title
    """
    bills = bill_queryset().filter(
        Q(created_by=user) | Q(participants__user=user)
    ).distinct()

    if status:
        bills = bills.filter(status=status)
    if tag:
        bills = bills.filter(tag__iexact=tag)
    if date_from:
        bills = bills.filter(created_at__date__gte=date_from)
    if date_to:
        bills = bills.filter(created_at__date__lte=date_to)
    if search:
        bills = bills.filter(title__icontains=search)

    return bills.order_by('-created_at')


def get_bill_detail(*, bill_id: UUID, user: User) -> Bill:
    """
    Get a bill visible to the user.

    Raises:
        BillNotFoundError: If bill doesn't exist
        NotParticipantError: If user is neither host nor participant
    """
    try:
        bill = bill_queryset().get(id=bill_id)
    except Bill.DoesNotExist:
        raise BillNotFoundError(f"Bill {bill_id} not found")

    if not bill.is_host(user) and not any(
        p.user_id == user.id for p in bill.participants.all()
    ):
        raise NotParticipantError()

    return bill


@transaction.atomic
def update_bill(*, bill_id: UUID, user: User, **fields) -> Bill:
    """
    Update bill details (host only, while selections are open).

    Only the keys in UPDATABLE_FIELDS are applied; anything else is ignored.

    Raises:
        BillNotFoundError: If bill doesn't exist
        InsufficientPermissionsError: If user is not the host
        InvalidStatusTransitionError: If the bill left the select stage
    """
    bill = get_bill_for_update(bill_id)
    require_host(bill, user)

    if bill.status != BillStatus.SELECT:
        raise InvalidStatusTransitionError("Bills can only be edited while in the select stage.")

    changed = []
    for name in UPDATABLE_FIELDS:
        if name in fields:
            value = fields[name]
            if name == 'tag' and value is None:
                value = ""
            setattr(bill, name, value)
            changed.append(name)

    if changed:
        bill.save(update_fields=[*changed, 'updated_at'])

    return bill


@transaction.atomic
def delete_bill(*, bill_id: UUID, user: User) -> None:
    """
    Delete a bill and everything attached to it (host only).

    Raises:
        BillNotFoundError: If bill doesn't exist
        InsufficientPermissionsError: If user is not the host
    """
    bill = get_bill_for_update(bill_id)
    require_host(bill, user)

    bill.delete()
    logger.info("Bill %s deleted by %s", bill_id, user.id)
