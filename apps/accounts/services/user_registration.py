"""User registration service."""

import logging

from django.db import transaction, IntegrityError
from django.contrib.auth import get_user_model

from .exceptions import UserRegistrationError

User = get_user_model()

logger = logging.getLogger(__name__)

MIN_USERNAME_LENGTH = 3


def normalize_username(username: str) -> str:
    """Usernames are stored trimmed and lowercase."""
    return username.strip().lower()


@transaction.atomic
def register_user(
    *,
    email: str,
    username: str,
    password: str,
    name: str = ""
) -> User:
    """
    Register a new user.

    Args:
        email: User's email address (login identifier)
        username: Public handle used for friend requests
        password: User's password (will be hashed)
        name: Optional display name

    Returns:
        Created User instance

    Raises:
        UserRegistrationError: If email or username is taken or invalid
    """
    username = normalize_username(username)

    if len(username) < MIN_USERNAME_LENGTH:
        raise UserRegistrationError(
            f"Username must be at least {MIN_USERNAME_LENGTH} characters"
        )

    if User.objects.filter(email__iexact=email).exists():
        raise UserRegistrationError("An account with this email already exists")

    if User.objects.filter(username=username).exists():
        raise UserRegistrationError("Username is already taken")

    try:
        user = User.objects.create_user(
            email=email,
            username=username,
            password=password,
            name=name
        )
    except IntegrityError as e:
        raise UserRegistrationError(f"Registration failed: {str(e)}")

    logger.info("Registered user %s (%s)", user.id, username)
    return user
