"""
Balances Service
================

Aggregates what a user owes and is owed across their bills.

Only bills in the ``pay`` stage carry money: selections are still open in
``select`` and everything is settled in ``closed``. Bill counts, however,
cover every status.

Sign convention for friend balances: a positive amount means the friend
owes the user, a negative amount means the user owes the friend.

Example:
    Getting the dashboard numbers::

        from apps.summary.services import user_summary

        summary = user_summary(user=request.user)
        print(f"Net: {summary['net_balance']:.2f}")
"""

import logging
from datetime import date
from typing import Dict, Optional

from django.db.models import Q

from apps.accounts.models import User
from apps.bills.models import BillStatus
from apps.bills.services import bill_queryset, calculate_user_costs, load_bill_snapshot

from .exceptions import InvalidDateRangeError

logger = logging.getLogger(__name__)


def user_summary(
    *,
    user: User,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
    tag: Optional[str] = None
) -> Dict:
    """
    Calculate the financial summary for a user.

    Args:
        user: User to summarize
        date_from: Only bills created on or after this date
        date_to: Only bills created on or before this date
        tag: Only bills with this tag (case-insensitive)

    Returns:
        dict: A dictionary containing:
            - total_to_pay (float): The user's shares on bills hosted by others.
            - total_to_collect (float): Other participants' shares on bills
              the user hosts.
            - net_balance (float): ``total_to_collect - total_to_pay``.
            - bills_as_host (int): Bills the user hosts, any status.
            - bills_as_member (int): Bills the user joined but doesn't host.
            - friend_balances (list): One entry per counterpart with
              ``user_id``, ``user_name``, ``avatar`` and ``net_amount``,
              largest absolute amount first.

    Raises:
        InvalidDateRangeError: If date_from is after date_to
    """
    if date_from and date_to and date_from > date_to:
        raise InvalidDateRangeError("date_from must be on or before date_to")

    bills = bill_queryset().filter(
        Q(created_by=user) | Q(participants__user=user)
    ).distinct()

    if tag:
        bills = bills.filter(tag__iexact=tag)
    if date_from:
        bills = bills.filter(created_at__date__gte=date_from)
    if date_to:
        bills = bills.filter(created_at__date__lte=date_to)

    user_id = str(user.id)
    total_to_pay = 0.0
    total_to_collect = 0.0
    bills_as_host = 0
    bills_as_member = 0
    balances = {}

    for bill in bills:
        is_host = bill.created_by_id == user.id

        if is_host:
            bills_as_host += 1
        else:
            bills_as_member += 1

        if bill.status != BillStatus.PAY:
            continue

        users_by_id = {str(p.user_id): p.user for p in bill.participants.all()}
        costs = calculate_user_costs(load_bill_snapshot(bill))

        if is_host:
            for cost in costs:
                if cost.user_id == user_id:
                    continue
                total_to_collect += cost.total
                _add_balance(balances, users_by_id[cost.user_id], cost.total)
        else:
            own = next((cost for cost in costs if cost.user_id == user_id), None)
            if own is None:
                continue
            total_to_pay += own.total
            _add_balance(balances, bill.created_by, -own.total)

    friend_balances = sorted(
        (entry for entry in balances.values() if entry['net_amount'] != 0),
        key=lambda entry: abs(entry['net_amount']),
        reverse=True,
    )

    logger.debug(
        "Summary for %s: %d hosted, %d joined, %d balances",
        user.id, bills_as_host, bills_as_member, len(friend_balances),
    )

    return {
        'total_to_pay': total_to_pay,
        'total_to_collect': total_to_collect,
        'net_balance': total_to_collect - total_to_pay,
        'bills_as_host': bills_as_host,
        'bills_as_member': bills_as_member,
        'friend_balances': friend_balances,
    }


def _add_balance(balances: Dict, counterpart: User, amount: float) -> None:
    entry = balances.setdefault(str(counterpart.id), {
        'user_id': str(counterpart.id),
        'user_name': counterpart.get_display_name(),
        'avatar': counterpart.avatar or '',
        'net_amount': 0.0,
    })
    entry['net_amount'] += amount
