"""
Due-date reminder service.

Runs once a day (see the ``send_due_reminders`` management command) and
nudges participants of bills that are due tomorrow, today or were due
yesterday. Each reminder stage is sent at most once per user and bill.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import List

from django.db import transaction

from apps.bills.models import Bill, BillStatus, ParticipantPaymentStatus
from apps.notifications.models import Notification, NotificationType

from .notification_service import create_notification

logger = logging.getLogger(__name__)


UPCOMING_1_DAY = 'upcoming_1_day'
DUE_TODAY = 'due_today'
OVERDUE_1_DAY = 'overdue_1_day'

TIMING_TEXT = {
    UPCOMING_1_DAY: 'tomorrow',
    DUE_TODAY: 'today',
    OVERDUE_1_DAY: 'yesterday and is now overdue',
}

SELECT_TITLE = "🧾 Bill Reminder: Submit Your Selections!"
SELECT_BODY = "⏰ Hey {username}! Your selections for '{bill_title}' are due {timing}. Please submit them!"
PAY_TITLE = "💰 Bill Reminder: Payment Due!"
PAY_BODY = "⏰ Hey {username}! Your payment for '{bill_title}' is due {timing}. Please make your payment!"


@dataclass
class ReminderRunResult:
    date: date
    processed_bills: int = 0
    notifications_sent: int = 0
    # (user_id, bill_id, stage) for every reminder sent or, in a dry run, due
    reminders: List[tuple] = field(default_factory=list)


def reminder_stage(due_date: date, today: date):
    """Return the reminder stage for a due date, or None when no reminder is due."""
    if due_date == today + timedelta(days=1):
        return UPCOMING_1_DAY
    if due_date == today:
        return DUE_TODAY
    if due_date == today - timedelta(days=1):
        return OVERDUE_1_DAY
    return None


def _participants_to_remind(bill: Bill):
    participants = bill.participants.select_related('user')
    if bill.status == BillStatus.SELECT:
        return participants.filter(has_submitted=False)
    if bill.status == BillStatus.PAY:
        return participants.filter(payment_status=ParticipantPaymentStatus.UNPAID)
    return participants.none()


def _already_reminded(user_id, bill: Bill, stage: str) -> bool:
    return Notification.objects.filter(
        user_id=user_id,
        type=f"{NotificationType.DUE_REMINDER_PREFIX}{stage}",
        data__bill_id=str(bill.id),
    ).exists()


@transaction.atomic
def send_due_date_reminders(*, today: date, dry_run: bool = False) -> ReminderRunResult:
    """
    Create due-date reminder notifications.

    Bills in ``select`` remind participants who haven't submitted their
    selections. Bills in ``pay`` remind participants who haven't paid.
    Closed bills are skipped.

    Args:
        today: Reference date
        dry_run: Compute reminders without creating notifications

    Returns:
        ReminderRunResult with counts and the reminders sent
    """
    result = ReminderRunResult(date=today)

    bills = Bill.objects.exclude(status=BillStatus.CLOSED).filter(
        due_date__in=[today - timedelta(days=1), today, today + timedelta(days=1)]
    )

    logger.info("Processing due date reminders for %s", today.isoformat())

    for bill in bills:
        result.processed_bills += 1
        stage = reminder_stage(bill.due_date, today)

        if bill.status == BillStatus.SELECT:
            title, body_template = SELECT_TITLE, SELECT_BODY
        else:
            title, body_template = PAY_TITLE, PAY_BODY

        for participant in _participants_to_remind(bill):
            if _already_reminded(participant.user_id, bill, stage):
                logger.debug(
                    "Reminder %s already sent to %s for bill %s",
                    stage, participant.user_id, bill.id
                )
                continue

            result.reminders.append((participant.user_id, bill.id, stage))
            if dry_run:
                continue

            create_notification(
                user=participant.user,
                type=f"{NotificationType.DUE_REMINDER_PREFIX}{stage}",
                title=title,
                body=body_template.format(
                    username=participant.user.name or 'there',
                    bill_title=bill.title,
                    timing=TIMING_TEXT[stage],
                ),
                data={
                    'bill_id': str(bill.id),
                    'bill_title': bill.title,
                    'reminder_stage': stage,
                    'bill_status': bill.status,
                    'due_date': bill.due_date.isoformat(),
                    'target': f"/bill/{bill.id}",
                },
            )
            result.notifications_sent += 1

    logger.info(
        "Due date reminders done: %s bills, %s notifications",
        result.processed_bills, result.notifications_sent
    )
    return result
