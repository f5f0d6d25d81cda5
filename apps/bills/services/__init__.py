"""
Bills app services layer.

Services contain business logic and orchestrate operations across models.
Status changes lock the bill row so concurrent requests are serialized.
"""

from .cost_allocation import (
    BillSnapshot,
    ItemSnapshot,
    ParticipantSnapshot,
    UserCost,
    calculate_user_costs,
    unclaimed_items,
    format_currency,
)

from .snapshots import load_bill_snapshot

from .bill_management import (
    bill_queryset,
    create_bill,
    list_bills_for_user,
    get_bill_detail,
    update_bill,
    delete_bill,
)

from .selections import (
    toggle_item_selection,
    submit_selections,
)

from .lifecycle import (
    finalize_bill,
    close_bill,
    update_bill_status,
    mark_payment_sent,
    verify_participant_payment,
    get_user_costs,
    get_unclaimed_items,
)


__all__ = [
    # Cost allocation
    'BillSnapshot',
    'ItemSnapshot',
    'ParticipantSnapshot',
    'UserCost',
    'calculate_user_costs',
    'unclaimed_items',
    'format_currency',
    'load_bill_snapshot',

    # Bill management
    'bill_queryset',
    'create_bill',
    'list_bills_for_user',
    'get_bill_detail',
    'update_bill',
    'delete_bill',

    # Selections
    'toggle_item_selection',
    'submit_selections',

    # Lifecycle
    'finalize_bill',
    'close_bill',
    'update_bill_status',
    'mark_payment_sent',
    'verify_participant_payment',
    'get_user_costs',
    'get_unclaimed_items',
]
