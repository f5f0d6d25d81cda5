import uuid
import pytest
from django.urls import reverse
from rest_framework import status
from apps.notifications.models import Notification
from apps.notifications.services import create_notification


@pytest.mark.django_db
class TestNotificationList:
    """Tests for GET /api/notifications/"""

    def test_list(self, authenticated_client, notification):
        url = reverse('notifications:notification-list')
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1
        result = response.data['results'][0]
        assert result['id'] == str(notification.id)
        assert result['data'] == {'bill_id': 'abc'}
        assert result['is_read'] is False

    def test_list_unread_only(self, authenticated_client, user, notification):
        read = create_notification(user=user, type='b', title='Old news')
        Notification.objects.filter(id=read.id).update(is_read=True)

        url = reverse('notifications:notification-list')
        response = authenticated_client.get(url, {'unread': 'true'})

        assert [n['id'] for n in response.data['results']] == [str(notification.id)]

    def test_list_only_own(self, authenticated_client, other_user):
        create_notification(user=other_user, type='b', title='Not yours')

        url = reverse('notifications:notification-list')
        response = authenticated_client.get(url)

        assert response.data['count'] == 0

    def test_unauthenticated(self, api_client):
        url = reverse('notifications:notification-list')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestNotificationActions:

    def test_unread_count(self, authenticated_client, notification):
        url = reverse('notifications:unread-count')
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['unread_count'] == 1

    def test_mark_read(self, authenticated_client, notification):
        url = reverse('notifications:mark-read', kwargs={'notification_id': notification.id})
        response = authenticated_client.post(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['is_read'] is True

    def test_mark_read_not_found(self, authenticated_client):
        url = reverse('notifications:mark-read', kwargs={'notification_id': uuid.uuid4()})
        response = authenticated_client.post(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert 'error' in response.data

    def test_read_all(self, authenticated_client, user, notification):
        create_notification(user=user, type='b', title='Another')

        url = reverse('notifications:read-all')
        response = authenticated_client.post(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['updated'] == 2

    def test_delete(self, authenticated_client, notification):
        url = reverse('notifications:notification-delete', kwargs={'notification_id': notification.id})
        response = authenticated_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Notification.objects.filter(id=notification.id).exists()
