import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.friends.models import Friendship
from apps.bills.services import create_bill, toggle_item_selection, submit_selections, finalize_bill


def make_user(username, name):
    return User.objects.create_user(
        email=f'{username}@example.com',
        username=username,
        password='TestPass123!',
        name=name,
    )


def make_friends(user, friend):
    Friendship.objects.create(user=user, friend=friend)
    Friendship.objects.create(user=friend, friend=user)


def run_bill(host, title, items, selections, participants, tag=''):
    """
    Create a bill, apply selections ({item name: [users]}), submit for
    everyone and finalize it.
    """
    bill = create_bill(
        created_by=host,
        title=title,
        total_amount=sum(Decimal(price) * qty for _, price, qty in items),
        bank_name='Test Bank',
        account_name=host.name,
        account_number='123-456',
        items=[{'name': name, 'price': Decimal(price), 'quantity': qty} for name, price, qty in items],
        participant_ids=[user.id for user in participants],
        tag=tag,
    )
    by_name = {item.name: item for item in bill.items.all()}
    for item_name, users in selections.items():
        for user in users:
            toggle_item_selection(item_id=by_name[item_name].id, user=user, selected=True)
    for user in [host, *participants]:
        submit_selections(bill_id=bill.id, user=user)
    return finalize_bill(bill_id=bill.id, user=host)


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def host(db):
    return make_user('host', 'Hannah Host')


@pytest.fixture
def alice(db, host):
    user = make_user('alice', 'Alice')
    make_friends(host, user)
    return user


@pytest.fixture
def bob(db, host):
    user = make_user('bob', 'Bob')
    make_friends(host, user)
    return user


@pytest.fixture
def authenticated_client(api_client, host):
    """Return API client authenticated as host."""
    refresh = RefreshToken.for_user(host)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def dinner(host, alice, bob):
    """
    Hosted by host, in pay.

    Pizza 12.00 split by host and alice, Beer 3.00 x2 for bob. Alice owes
    6.00 and bob owes 6.00.
    """
    return run_bill(
        host,
        'Dinner',
        items=[('Pizza', '12.00', 1), ('Beer', '3.00', 2)],
        selections={'Pizza': [host, alice], 'Beer': [bob]},
        participants=[alice, bob],
        tag='food',
    )


@pytest.fixture
def taxi(host, alice):
    """Hosted by alice, in pay. Host owes alice 10.00."""
    return run_bill(
        alice,
        'Taxi',
        items=[('Ride', '20.00', 1)],
        selections={'Ride': [host, alice]},
        participants=[host],
        tag='travel',
    )


@pytest.fixture
def lunch(host, alice):
    """Hosted by alice, in pay. Host owes alice 6.00, evening out the dinner."""
    return run_bill(
        alice,
        'Lunch',
        items=[('Curry', '12.00', 1)],
        selections={'Curry': [host, alice]},
        participants=[host],
    )


@pytest.fixture
def open_bill(host, bob):
    """Hosted by host, still in select. Counted but carries no money."""
    return create_bill(
        created_by=host,
        title='Groceries',
        total_amount=Decimal('50.00'),
        bank_name='Test Bank',
        account_name='Hannah Host',
        account_number='123-456',
        items=[{'name': 'Everything', 'price': Decimal('50.00')}],
        participant_ids=[bob.id],
    )
