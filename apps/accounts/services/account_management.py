"""Account management service."""

import logging
from uuid import UUID

from django.db import transaction
from django.db.models import Q
from django.contrib.auth import get_user_model

from .exceptions import PasswordConfirmationError, UserNotFoundError

User = get_user_model()

logger = logging.getLogger(__name__)


@transaction.atomic
def delete_user_account(*, user_id: UUID, password: str) -> None:
    """
    Delete an account after password confirmation.

    The user row is anonymized rather than removed so chat history in
    other people's bills keeps a sender. Friendships, friend requests and
    bills hosted by the user are deleted.

    Args:
        user_id: User's ID
        password: User's password for confirmation

    Raises:
        UserNotFoundError: If user doesn't exist
        PasswordConfirmationError: If password is incorrect
    """
    from apps.bills.models import Bill, BillItemSelection, BillParticipant
    from apps.friends.models import FriendRequest, Friendship

    try:
        user = (
            User.objects
            .select_for_update()
            .get(id=user_id)
        )
    except User.DoesNotExist:
        raise UserNotFoundError(f"User with ID {user_id} not found")

    # Verify password
    if not user.check_password(password):
        raise PasswordConfirmationError("Invalid password")

    Friendship.objects.filter(Q(user=user) | Q(friend=user)).delete()
    FriendRequest.objects.filter(Q(from_user=user) | Q(to_user=user)).delete()
    hosted, _ = Bill.objects.filter(created_by=user).delete()
    BillItemSelection.objects.filter(user=user).delete()
    BillParticipant.objects.filter(user=user).delete()

    user.anonymize()
    logger.info("Deleted account %s (%s hosted bill rows removed)", user_id, hosted)
