"""
Domain exceptions for summary app.

Exception Hierarchy:
    SummaryServiceError (base)
    └── InvalidDateRangeError
"""


class SummaryServiceError(Exception):
    """
    Base exception for all summary service errors.

    Views catch it and return ``{'error': str(e)}`` with status 400.
    """

    pass


class InvalidDateRangeError(SummaryServiceError):
    """
    Raised when date_from is after date_to.

    Example:
        raise InvalidDateRangeError("date_from must be on or before date_to")
    """

    pass
