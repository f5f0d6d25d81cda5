"""
Custom exceptions for chat services.
"""


class ChatServiceError(Exception):
    """Base exception for chat service errors."""
    pass


class BillNotFoundError(ChatServiceError):
    """Raised when the bill doesn't exist."""
    pass


class NotBillParticipantError(ChatServiceError):
    """Raised when the user is not part of the bill."""
    pass


class NotBillHostError(ChatServiceError):
    """Raised when a host-only action is attempted by someone else."""
    pass


class MessageNotFoundError(ChatServiceError):
    """Raised when a message doesn't exist or isn't visible to the user."""
    pass


class InvalidMessageError(ChatServiceError):
    """Raised when message content doesn't fit its type."""
    pass


class PaymentAlreadyProcessedError(ChatServiceError):
    """Raised when a payment slip was already verified or rejected."""
    pass
