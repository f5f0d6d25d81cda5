import pytest
from django.urls import reverse
from rest_framework import status
from apps.friends.models import FriendRequest, FriendRequestStatus, Friendship


# =============================================================================
# Friend List Tests
# =============================================================================

@pytest.mark.django_db
class TestFriendList:
    """Tests for GET /api/friends/"""

    def test_list_friends(self, authenticated_client, friendship, other_user):
        url = reverse('friends:friend-list')
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 1
        assert response.data[0]['friend']['username'] == other_user.username

    def test_search_friends(self, authenticated_client, friendship):
        url = reverse('friends:friend-list')
        response = authenticated_client.get(url, {'search': 'nomatch'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data == []

    def test_list_unauthenticated(self, api_client):
        url = reverse('friends:friend-list')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestRemoveFriend:
    """Tests for DELETE /api/friends/{friend_id}/"""

    def test_remove_friend(self, authenticated_client, friendship, user, other_user):
        url = reverse('friends:friend-remove', kwargs={'friend_id': other_user.id})
        response = authenticated_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Friendship.are_friends(user, other_user)

    def test_remove_stranger(self, authenticated_client, third_user):
        url = reverse('friends:friend-remove', kwargs={'friend_id': third_user.id})
        response = authenticated_client.delete(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert 'error' in response.data


# =============================================================================
# Friend Request Tests
# =============================================================================

@pytest.mark.django_db
class TestSendRequest:
    """Tests for POST /api/friends/requests/"""

    def test_send_request(self, authenticated_client, other_user):
        url = reverse('friends:request-send')
        response = authenticated_client.post(url, {'username': 'Bob'})

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['to_user']['id'] == str(other_user.id)
        assert response.data['status'] == 'pending'

    def test_send_to_unknown_user(self, authenticated_client):
        url = reverse('friends:request-send')
        response = authenticated_client.post(url, {'username': 'ghost'})

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_send_to_self(self, authenticated_client, user):
        url = reverse('friends:request-send')
        response = authenticated_client.post(url, {'username': user.username})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'error' in response.data

    def test_send_duplicate(self, authenticated_client, pending_request):
        url = reverse('friends:request-send')
        response = authenticated_client.post(url, {'username': 'bob'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_missing_username(self, authenticated_client):
        url = reverse('friends:request-send')
        response = authenticated_client.post(url, {})

        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestRequestLists:
    """Tests for incoming/outgoing request lists."""

    def test_incoming(self, other_client, pending_request):
        url = reverse('friends:request-incoming')
        response = other_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 1
        assert response.data[0]['id'] == str(pending_request.id)

    def test_outgoing(self, authenticated_client, pending_request):
        url = reverse('friends:request-outgoing')
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 1


@pytest.mark.django_db
class TestAnswerRequest:
    """Tests for accept/decline/cancel endpoints."""

    def test_accept(self, other_client, pending_request, user, other_user):
        url = reverse('friends:request-accept', kwargs={'request_id': pending_request.id})
        response = other_client.post(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'accepted'
        assert Friendship.are_friends(user, other_user)

    def test_sender_cannot_accept(self, authenticated_client, pending_request):
        url = reverse('friends:request-accept', kwargs={'request_id': pending_request.id})
        response = authenticated_client.post(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_decline(self, other_client, pending_request):
        url = reverse('friends:request-decline', kwargs={'request_id': pending_request.id})
        response = other_client.post(url)

        assert response.status_code == status.HTTP_200_OK
        pending_request.refresh_from_db()
        assert pending_request.status == FriendRequestStatus.DECLINED

    def test_decline_already_declined(self, other_client, pending_request):
        pending_request.status = FriendRequestStatus.DECLINED
        pending_request.save()

        url = reverse('friends:request-decline', kwargs={'request_id': pending_request.id})
        response = other_client.post(url)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_cancel(self, authenticated_client, pending_request):
        url = reverse('friends:request-cancel', kwargs={'request_id': pending_request.id})
        response = authenticated_client.post(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not FriendRequest.objects.filter(id=pending_request.id).exists()
