"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    UserRegistrationError,
    InvalidCredentialsError,
    InactiveAccountError,
    UserNotFoundError,
    PasswordConfirmationError,
)
from .user_registration import register_user, normalize_username
from .user_authentication import authenticate_user
from .account_management import delete_user_account
from .user_search import search_users

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'UserRegistrationError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    'UserNotFoundError',
    'PasswordConfirmationError',
    # Services
    'register_user',
    'normalize_username',
    'authenticate_user',
    'delete_user_account',
    'search_users',
]
