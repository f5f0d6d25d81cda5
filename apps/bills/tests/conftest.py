import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.friends.models import Friendship
from apps.bills.models import BillItem
from apps.bills.services import create_bill, toggle_item_selection, submit_selections, finalize_bill


def make_friends(user, friend):
    Friendship.objects.create(user=user, friend=friend)
    Friendship.objects.create(user=friend, friend=user)


def client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


# =============================================================================
# Users
# =============================================================================

@pytest.fixture
def host(db):
    """Create the user who hosts bills."""
    return User.objects.create_user(
        email='host@example.com',
        username='host',
        password='TestPass123!',
        name='Hannah Host',
    )


@pytest.fixture
def alice(db, host):
    """A friend of the host."""
    user = User.objects.create_user(
        email='alice@example.com',
        username='alice',
        password='TestPass123!',
        name='Alice',
    )
    make_friends(host, user)
    return user


@pytest.fixture
def bob(db, host):
    """Another friend of the host."""
    user = User.objects.create_user(
        email='bob@example.com',
        username='bob',
        password='TestPass123!',
        name='Bob',
    )
    make_friends(host, user)
    return user


@pytest.fixture
def outsider(db):
    """A user with no relation to the host."""
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
def alice_client(alice):
    return client_for(alice)


@pytest.fixture
def bob_client(bob):
    return client_for(bob)


@pytest.fixture
def outsider_client(outsider):
    return client_for(outsider)


# =============================================================================
# Bills
# =============================================================================

@pytest.fixture
def bill(host, alice, bob):
    """
    A bill in the select stage hosted by host with alice and bob.

    Items: Pizza 12.00 x1, Beer 3.00 x2, Salad 8.00 x1.
    """
    return create_bill(
        created_by=host,
        title='Friday Dinner',
        total_amount=Decimal('26.00'),
        bank_name='Test Bank',
        account_name='Hannah Host',
        account_number='123-456',
        items=[
            {'name': 'Pizza', 'price': Decimal('12.00'), 'quantity': 1},
            {'name': 'Beer', 'price': Decimal('3.00'), 'quantity': 2},
            {'name': 'Salad', 'price': Decimal('8.00')},
        ],
        participant_ids=[alice.id, bob.id],
        tag='dinner',
    )


@pytest.fixture
def items(bill):
    """Bill items keyed by name."""
    return {item.name: item for item in BillItem.objects.filter(bill=bill)}


@pytest.fixture
def submitted_bill(bill, items, host, alice, bob):
    """
    Everyone has submitted.

    Pizza is shared by host and alice, Beer belongs to bob, Salad is
    unclaimed. Shares: host 6.00, alice 6.00, bob 6.00.
    """
    toggle_item_selection(item_id=items['Pizza'].id, user=host, selected=True)
    toggle_item_selection(item_id=items['Pizza'].id, user=alice, selected=True)
    toggle_item_selection(item_id=items['Beer'].id, user=bob, selected=True)
    for user in (host, alice, bob):
        submit_selections(bill_id=bill.id, user=user)
    return bill


@pytest.fixture
def pay_bill(submitted_bill, host):
    """The submitted bill, finalized into the pay stage."""
    return finalize_bill(bill_id=submitted_bill.id, user=host)
