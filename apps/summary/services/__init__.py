"""
Summary app services layer.

Read-only aggregation over bills; nothing here writes to the database.
"""

from .exceptions import SummaryServiceError, InvalidDateRangeError
from .balances import user_summary


__all__ = [
    'SummaryServiceError',
    'InvalidDateRangeError',
    'user_summary',
]
