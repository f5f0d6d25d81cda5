"""Build cost allocation snapshots from stored bills."""

from apps.bills.models import Bill

from .cost_allocation import BillSnapshot, ItemSnapshot, ParticipantSnapshot


def load_bill_snapshot(bill: Bill) -> BillSnapshot:
    """
    Convert a bill and its rows into a BillSnapshot.

    Works best with ``participants__user`` and ``items__selections``
    prefetched. Ids are stringified; prices become floats.
    """
    participants = [
        ParticipantSnapshot(
            id=str(participant.user_id),
            name=participant.user.get_display_name(),
        )
        for participant in bill.participants.all()
    ]

    items = [
        ItemSnapshot(
            id=str(item.id),
            name=item.name,
            price=float(item.price),
            quantity=item.quantity,
            selected_by=tuple(str(selection.user_id) for selection in item.selections.all()),
        )
        for item in bill.items.all()
    ]

    return BillSnapshot(id=str(bill.id), participants=participants, items=items)
