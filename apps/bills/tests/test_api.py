import pytest
from datetime import timedelta
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from apps.bills.models import Bill, BillStatus, ParticipantPaymentStatus
from apps.bills.services import create_bill, submit_selections


def bill_payload(**overrides):
    payload = {
        'title': 'Team Lunch',
        'bank_name': 'Test Bank',
        'account_name': 'Hannah Host',
        'account_number': '123-456',
        'items': [
            {'name': 'Burger', 'price': '9.50', 'quantity': 2},
            {'name': 'Fries', 'price': '3.00'},
        ],
    }
    payload.update(overrides)
    return payload


# =============================================================================
# CRUD
# =============================================================================

@pytest.mark.django_db
class TestBillList:
    """Tests for GET /api/bills/"""

    def test_list_returns_my_bills(self, alice_client, bill):
        url = reverse('bills:bill-list')
        response = alice_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert [b['id'] for b in response.data['results']] == [str(bill.id)]
        assert response.data['results'][0]['participant_count'] == 3

    def test_list_excludes_other_bills(self, outsider_client, bill):
        url = reverse('bills:bill-list')
        response = outsider_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['results'] == []

    def test_list_filter_by_status(self, host_client, bill):
        url = reverse('bills:bill-list')
        response = host_client.get(url, {'status': 'pay'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['results'] == []

    def test_list_invalid_date_range(self, host_client):
        url = reverse('bills:bill-list')
        response = host_client.get(url, {'date_from': '2025-02-01', 'date_to': '2025-01-01'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_list_unauthenticated(self, api_client):
        url = reverse('bills:bill-list')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestBillCreate:
    """Tests for POST /api/bills/"""

    def test_create_bill(self, host_client, host, alice):
        url = reverse('bills:bill-list')
        response = host_client.post(url, bill_payload(participant_ids=[str(alice.id)]), format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['status'] == BillStatus.SELECT
        assert response.data['is_host'] is True
        assert response.data['total_amount'] == '22.00'
        assert response.data['bank_details']['account_number'] == '123-456'
        assert [p['user']['id'] for p in response.data['participants']] == [str(host.id), str(alice.id)]
        assert [i['name'] for i in response.data['items']] == ['Burger', 'Fries']

    def test_create_with_explicit_total(self, host_client):
        url = reverse('bills:bill-list')
        response = host_client.post(url, bill_payload(total_amount='25.00'), format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['total_amount'] == '25.00'

    def test_create_requires_items(self, host_client):
        url = reverse('bills:bill-list')
        response = host_client.post(url, bill_payload(items=[]), format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'items' in response.data

    def test_create_requires_title(self, host_client):
        url = reverse('bills:bill-list')
        response = host_client.post(url, bill_payload(title='   '), format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'title' in response.data

    def test_create_rejects_past_due_date(self, host_client):
        url = reverse('bills:bill-list')
        yesterday = timezone.localdate() - timedelta(days=1)
        response = host_client.post(url, bill_payload(due_date=str(yesterday)), format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'due_date' in response.data

    def test_create_rejects_non_friend(self, host_client, outsider):
        url = reverse('bills:bill-list')
        response = host_client.post(url, bill_payload(participant_ids=[str(outsider.id)]), format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'error' in response.data
        assert not Bill.objects.exists()


@pytest.mark.django_db
class TestBillDetail:
    """Tests for GET/PATCH/DELETE /api/bills/{id}/"""

    def test_participant_can_view(self, bob_client, bill):
        url = reverse('bills:bill-detail', kwargs={'pk': bill.id})
        response = bob_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['is_host'] is False
        assert len(response.data['items']) == 3

    def test_outsider_gets_404(self, outsider_client, bill):
        url = reverse('bills:bill-detail', kwargs={'pk': bill.id})
        response = outsider_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_host_can_edit(self, host_client, bill):
        url = reverse('bills:bill-detail', kwargs={'pk': bill.id})
        response = host_client.patch(url, {'title': 'Renamed'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['title'] == 'Renamed'

    def test_participant_cannot_edit(self, alice_client, bill):
        url = reverse('bills:bill-detail', kwargs={'pk': bill.id})
        response = alice_client.patch(url, {'title': 'Renamed'}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_host_can_delete(self, host_client, bill):
        url = reverse('bills:bill-detail', kwargs={'pk': bill.id})
        response = host_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Bill.objects.filter(id=bill.id).exists()

    def test_participant_cannot_delete(self, alice_client, bill):
        url = reverse('bills:bill-detail', kwargs={'pk': bill.id})
        response = alice_client.delete(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_list_filters_ignored_on_detail(self, bob_client, bill):
        url = reverse('bills:bill-detail', kwargs={'pk': bill.id})

        assert bob_client.get(url, {'status': 'closed'}).status_code == status.HTTP_200_OK
        assert bob_client.get(url, {'date_from': 'bad'}).status_code == status.HTTP_200_OK

    def test_malformed_id_gets_404(self, host_client):
        response = host_client.post(f'/api/bills/{"-" * 36}/finalize/')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_uppercase_id_resolves(self, bob_client, bill):
        response = bob_client.get(f'/api/bills/{str(bill.id).upper()}/')

        assert response.status_code == status.HTTP_200_OK


# =============================================================================
# Selections
# =============================================================================

@pytest.mark.django_db
class TestSelectItem:
    """Tests for POST /api/bills/{id}/select_item/"""

    def test_select_item(self, alice_client, bill, items, alice):
        url = reverse('bills:bill-select-item', kwargs={'pk': bill.id})
        response = alice_client.post(url, {'item_id': str(items['Pizza'].id), 'selected': True}, format='json')

        assert response.status_code == status.HTTP_200_OK
        pizza = next(i for i in response.data['items'] if i['name'] == 'Pizza')
        assert pizza['selected_by'] == [str(alice.id)]

    def test_item_from_another_bill(self, alice_client, bill, host):
        other = create_bill(
            created_by=host,
            title='Other',
            total_amount='5.00',
            bank_name='Test Bank',
            account_name='Hannah Host',
            account_number='123-456',
            items=[{'name': 'Tea', 'price': '5.00'}],
        )
        url = reverse('bills:bill-select-item', kwargs={'pk': bill.id})
        response = alice_client.post(
            url, {'item_id': str(other.items.get().id), 'selected': True}, format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_select_after_submit(self, alice_client, bill, items, alice):
        submit_selections(bill_id=bill.id, user=alice)
        url = reverse('bills:bill-select-item', kwargs={'pk': bill.id})
        response = alice_client.post(url, {'item_id': str(items['Pizza'].id), 'selected': True}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_submit(self, alice_client, bill):
        url = reverse('bills:bill-submit', kwargs={'pk': bill.id})
        response = alice_client.post(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['has_submitted'] is True


# =============================================================================
# Lifecycle
# =============================================================================

@pytest.mark.django_db
class TestLifecycle:
    """Tests for finalize, status and close actions."""

    def test_finalize(self, host_client, submitted_bill):
        url = reverse('bills:bill-finalize', kwargs={'pk': submitted_bill.id})
        response = host_client.post(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == BillStatus.PAY

    def test_finalize_incomplete(self, host_client, bill):
        url = reverse('bills:bill-finalize', kwargs={'pk': bill.id})
        response = host_client.post(url)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'detail' in response.data

    def test_finalize_not_host(self, alice_client, submitted_bill):
        url = reverse('bills:bill-finalize', kwargs={'pk': submitted_bill.id})
        response = alice_client.post(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_change_status(self, host_client, submitted_bill):
        url = reverse('bills:bill-change-status', kwargs={'pk': submitted_bill.id})
        response = host_client.post(url, {'status': 'pay'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == BillStatus.PAY

    def test_change_status_skip_rejected(self, host_client, bill):
        url = reverse('bills:bill-change-status', kwargs={'pk': bill.id})
        response = host_client.post(url, {'status': 'closed'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_close(self, host_client, pay_bill):
        url = reverse('bills:bill-close', kwargs={'pk': pay_bill.id})
        response = host_client.post(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == BillStatus.CLOSED


# =============================================================================
# Payments and costs
# =============================================================================

@pytest.mark.django_db
class TestPayments:

    def test_mark_paid(self, alice_client, pay_bill):
        url = reverse('bills:bill-mark-paid', kwargs={'pk': pay_bill.id})
        response = alice_client.post(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['payment_status'] == ParticipantPaymentStatus.PAID

    def test_verify_payment(self, host_client, pay_bill, alice):
        url = reverse('bills:bill-verify-payment', kwargs={'pk': pay_bill.id})
        response = host_client.post(url, {'user_id': str(alice.id)}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['participant']['payment_status'] == ParticipantPaymentStatus.VERIFIED
        assert response.data['all_verified'] is False

    def test_verify_payment_not_host(self, bob_client, pay_bill, alice):
        url = reverse('bills:bill-verify-payment', kwargs={'pk': pay_bill.id})
        response = bob_client.post(url, {'user_id': str(alice.id)}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_costs(self, bob_client, submitted_bill, bob):
        url = reverse('bills:bill-costs', kwargs={'pk': submitted_bill.id})
        response = bob_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 3
        bob_cost = next(c for c in response.data if c['user_id'] == str(bob.id))
        assert bob_cost['total'] == 6.0
        assert bob_cost['total_display'] == '6.00'
        assert bob_cost['items'][0]['name'] == 'Beer'

    def test_costs_outsider(self, outsider_client, submitted_bill):
        url = reverse('bills:bill-costs', kwargs={'pk': submitted_bill.id})
        response = outsider_client.get(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_unclaimed(self, host_client, submitted_bill):
        url = reverse('bills:bill-unclaimed', kwargs={'pk': submitted_bill.id})
        response = host_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert [item['name'] for item in response.data] == ['Salad']
