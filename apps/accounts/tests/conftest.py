import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Create and return a test user."""
    return User.objects.create_user(
        email='testuser@example.com',
        username='testuser',
        password='TestPass123!',
        name='Test User',
    )


@pytest.fixture
def user_inactive(db):
    """Create and return an inactive user."""
    return User.objects.create_user(
        email='inactive@example.com',
        username='inactive',
        password='TestPass123!',
        name='Inactive User',
        is_active=False,
    )


@pytest.fixture
def other_user(db):
    """Create and return another test user."""
    return User.objects.create_user(
        email='other@example.com',
        username='johnsmith',
        password='TestPass123!',
        name='John Smith',
    )


@pytest.fixture
def authenticated_client(api_client, user):
    """Return API client authenticated as user."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def refresh_token(user):
    """Return a valid refresh token string for user."""
    return str(RefreshToken.for_user(user))
