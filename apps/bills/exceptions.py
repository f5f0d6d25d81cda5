"""
Domain exceptions for bills app.

Service-level failures derive from BillServiceError and are mapped to
responses by the views. Failures that are HTTP-shaped by nature are
APIException subclasses and reach the client through DRF directly.
"""
from rest_framework.exceptions import APIException


class BillServiceError(Exception):
    """Base exception for bill service errors."""
    pass


class InvalidParticipantsError(BillServiceError):
    """Raised when invited participants are not friends of the host."""
    pass


class BillNotFoundError(APIException):
    """Bill not found."""
    status_code = 404
    default_detail = 'Bill not found.'
    default_code = 'bill_not_found'


class ItemNotFoundError(APIException):
    """Bill item not found."""
    status_code = 404
    default_detail = 'Bill item not found.'
    default_code = 'item_not_found'


class NotParticipantError(APIException):
    """User is not part of the bill."""
    status_code = 403
    default_detail = 'You are not a participant of this bill.'
    default_code = 'not_participant'


class InsufficientPermissionsError(APIException):
    """User doesn't have permission for operation."""
    status_code = 403
    default_detail = 'Only the bill host can perform this action.'
    default_code = 'insufficient_permissions'


class InvalidStatusTransitionError(APIException):
    """Bill is not in a status that allows the operation."""
    status_code = 400
    default_detail = 'Invalid status transition for bill.'
    default_code = 'invalid_status_transition'


class SelectionsAlreadySubmittedError(APIException):
    """Participant already locked in their selections."""
    status_code = 400
    default_detail = 'Selections have already been submitted.'
    default_code = 'selections_already_submitted'


class SelectionsIncompleteError(APIException):
    """Not every participant has submitted yet."""
    status_code = 400
    default_detail = 'All participants must submit their selections first.'
    default_code = 'selections_incomplete'


class InvalidPaymentStateError(APIException):
    """Participant payment status doesn't allow the operation."""
    status_code = 400
    default_detail = 'Invalid payment state for participant.'
    default_code = 'invalid_payment_state'
