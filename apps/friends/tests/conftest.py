import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.friends.models import FriendRequest, FriendRequestStatus, Friendship


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Create and return the acting user."""
    return User.objects.create_user(
        email='alice@example.com',
        username='alice',
        password='TestPass123!',
        name='Alice',
    )


@pytest.fixture
def other_user(db):
    """Create and return a second user."""
    return User.objects.create_user(
        email='bob@example.com',
        username='bob',
        password='TestPass123!',
        name='Bob Builder',
    )


@pytest.fixture
def third_user(db):
    """Create and return a third user."""
    return User.objects.create_user(
        email='carol@example.com',
        username='carol',
        password='TestPass123!',
        name='Carol',
    )


@pytest.fixture
def authenticated_client(api_client, user):
    """Return API client authenticated as user."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def other_client(other_user):
    """Return API client authenticated as other_user."""
    client = APIClient()
    refresh = RefreshToken.for_user(other_user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def pending_request(user, other_user):
    """Pending request from user to other_user."""
    return FriendRequest.objects.create(from_user=user, to_user=other_user)


@pytest.fixture
def friendship(user, other_user):
    """user and other_user are friends."""
    FriendRequest.objects.create(
        from_user=user,
        to_user=other_user,
        status=FriendRequestStatus.ACCEPTED
    )
    Friendship.objects.create(user=user, friend=other_user)
    return Friendship.objects.create(user=other_user, friend=user)
