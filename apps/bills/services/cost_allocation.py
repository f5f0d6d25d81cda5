"""
Bill cost allocation.
=====================

Splits every item's line total evenly among the users who selected it and
sums the shares per participant.

The calculation works on plain snapshot objects so it can run without a
database::

    bill = BillSnapshot(
        id='b1',
        participants=[ParticipantSnapshot('u1', 'Ana'), ParticipantSnapshot('u2', 'Ben')],
        items=[ItemSnapshot('i1', 'Pizza', 12.0, 1, ('u1', 'u2'))],
    )
    costs = calculate_user_costs(bill)
    # [UserCost('u1', 'Ana', [...], 6.0), UserCost('u2', 'Ben', [...], 6.0)]

Amounts are floats and are never rounded here; use ``format_currency`` for
display. Items nobody selected are left out of every total, see
``unclaimed_items``.
"""

from dataclasses import dataclass, field, replace
from typing import List, Tuple


@dataclass(frozen=True)
class ItemSnapshot:
    id: str
    name: str
    price: float
    quantity: int
    selected_by: Tuple[str, ...] = ()

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


@dataclass(frozen=True)
class ParticipantSnapshot:
    id: str
    name: str


@dataclass(frozen=True)
class BillSnapshot:
    id: str
    participants: List[ParticipantSnapshot] = field(default_factory=list)
    items: List[ItemSnapshot] = field(default_factory=list)


@dataclass
class UserCost:
    """
    What one participant owes.

    ``items`` holds copies of the selected items whose ``price`` is the
    participant's split amount for the whole line.
    """
    user_id: str
    user_name: str
    items: List[ItemSnapshot] = field(default_factory=list)
    total: float = 0.0


def calculate_user_costs(bill: BillSnapshot) -> List[UserCost]:
    """
    Calculate each participant's share of the bill.

    For every participant, in participant order, walk the items in item
    order. When the participant selected an item, they owe
    ``price * quantity / len(selected_by)`` of it.

    Args:
        bill: Snapshot with participants and items (with selector sets)

    Returns:
        One UserCost per participant, including participants who
        selected nothing (total 0)
    """
    user_costs = []

    for participant in bill.participants:
        user_items = []
        user_total = 0.0

        for item in bill.items:
            if participant.id not in item.selected_by:
                continue
            split_amount = item.line_total / len(item.selected_by)
            user_items.append(replace(item, price=split_amount))
            user_total += split_amount

        user_costs.append(UserCost(
            user_id=participant.id,
            user_name=participant.name,
            items=user_items,
            total=user_total,
        ))

    return user_costs


def unclaimed_items(bill: BillSnapshot) -> List[ItemSnapshot]:
    """Items no one selected. Their cost is not assigned to anybody."""
    return [item for item in bill.items if not item.selected_by]


def format_currency(amount: float) -> str:
    """Format an amount with two decimals, e.g. ``12.5`` -> ``'12.50'``."""
    return f"{amount:.2f}"
