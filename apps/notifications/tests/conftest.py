import pytest
from datetime import date
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.bills.models import Bill, BillParticipant, BillStatus
from apps.notifications.services import create_notification


REMINDER_DAY = date(2025, 3, 10)


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    return User.objects.create_user(
        email='nora@example.com',
        username='nora',
        password='TestPass123!',
        name='Nora',
    )


@pytest.fixture
def other_user(db):
    return User.objects.create_user(
        email='otto@example.com',
        username='otto',
        password='TestPass123!',
        name='',
    )


@pytest.fixture
def authenticated_client(api_client, user):
    """Return API client authenticated as user."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def notification(user):
    return create_notification(
        user=user,
        type='bill_invite',
        title='You receive an invitation 🎉',
        body='Hannah invites you to Dinner bill',
        data={'bill_id': 'abc'},
    )


@pytest.fixture
def make_bill(user, other_user):
    """
    Factory for bills hosted by user with other_user as participant.

    Returns the bill; both users are participants.
    """
    def _make(status=BillStatus.SELECT, due_date=REMINDER_DAY, title='Dinner'):
        bill = Bill.objects.create(
            title=title,
            total_amount=Decimal('40.00'),
            created_by=user,
            status=status,
            due_date=due_date,
            bank_name='Test Bank',
            account_name='Nora',
            account_number='123-456',
        )
        BillParticipant.objects.create(bill=bill, user=user, position=0)
        BillParticipant.objects.create(bill=bill, user=other_user, position=1)
        return bill

    return _make
