"""
Email + password login.

Tokens are issued by the view; this module only decides whether the
credentials belong to an account that may sign in.
"""

import logging

from django.db import transaction
from django.contrib.auth import get_user_model
from django.utils import timezone

from .exceptions import InvalidCredentialsError, InactiveAccountError

User = get_user_model()

logger = logging.getLogger(__name__)


@transaction.atomic
def authenticate_user(*, email: str, password: str) -> User:
    """
    Check a login attempt and stamp ``last_login``.

    The email is matched without regard to case or surrounding spaces.
    Unknown emails and wrong passwords raise the same error so the
    response doesn't reveal which accounts exist. Anonymized accounts
    carry a placeholder email and can never match.

    Raises:
        InvalidCredentialsError: Unknown email or wrong password
        InactiveAccountError: The account was deactivated
    """
    lookup = (email or "").strip()

    try:
        user = User.objects.select_for_update().get(email__iexact=lookup)
    except User.DoesNotExist:
        raise InvalidCredentialsError("Invalid email or password")

    if not user.check_password(password):
        logger.info("Failed login for user %s", user.id)
        raise InvalidCredentialsError("Invalid email or password")

    if not user.is_active:
        raise InactiveAccountError("This account has been deactivated")

    user.last_login = timezone.now()
    user.save(update_fields=['last_login'])

    return user
