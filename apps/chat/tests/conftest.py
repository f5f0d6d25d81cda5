import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.bills.models import Bill, BillParticipant, BillStatus
from apps.chat.services import send_message


def client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def host(db):
    return User.objects.create_user(
        email='host@example.com',
        username='host',
        password='TestPass123!',
        name='Hannah Host',
    )


@pytest.fixture
def member(db):
    return User.objects.create_user(
        email='member@example.com',
        username='member',
        password='TestPass123!',
        name='Max Member',
    )


@pytest.fixture
def outsider(db):
    return User.objects.create_user(
        email='outsider@example.com',
        username='outsider',
        password='TestPass123!',
        name='Oscar Outsider',
    )


@pytest.fixture
def host_client(host):
    return client_for(host)


@pytest.fixture
def member_client(member):
    return client_for(member)


@pytest.fixture
def outsider_client(outsider):
    return client_for(outsider)


@pytest.fixture
def bill(host, member):
    """A bill in the pay stage shared by host and member."""
    bill = Bill.objects.create(
        title='Road Trip',
        total_amount=Decimal('90.00'),
        created_by=host,
        status=BillStatus.PAY,
        bank_name='Test Bank',
        account_name='Hannah Host',
        account_number='123-456',
    )
    BillParticipant.objects.create(bill=bill, user=host, position=0)
    BillParticipant.objects.create(bill=bill, user=member, position=1)
    return bill


@pytest.fixture
def payment_slip(bill, member):
    """A pending payment slip sent by member."""
    return send_message(
        bill_id=bill.id,
        user=member,
        type='payment_slip',
        image_url='https://example.com/slip.png',
        payment_amount=Decimal('45.00'),
    )
