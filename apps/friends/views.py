from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from .serializers import (
    FriendRequestSerializer,
    SendFriendRequestSerializer,
    FriendSerializer,
    FriendFilterSerializer,
)
from .services import (
    send_friend_request as send_friend_request_service,
    accept_friend_request as accept_friend_request_service,
    decline_friend_request as decline_friend_request_service,
    cancel_friend_request as cancel_friend_request_service,
    list_incoming_requests,
    list_outgoing_requests,
    list_friends,
    remove_friend as remove_friend_service,
    # Exceptions
    UserNotFoundError,
    SelfFriendRequestError,
    AlreadyFriendsError,
    DuplicateFriendRequestError,
    FriendRequestNotFoundError,
    InvalidRequestStateError,
    NotFriendsError,
)


# =============================================================================
# Friends
# =============================================================================

@extend_schema(
    parameters=[
        OpenApiParameter(name='search', type=str, description='Filter by name, username or email'),
    ],
    responses={200: FriendSerializer(many=True)},
    tags=['friends'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def friend_list(request):
    """List the current user's friends."""
    filter_serializer = FriendFilterSerializer(data=request.query_params)
    filter_serializer.is_valid(raise_exception=True)

    friendships = list_friends(
        user=request.user,
        search=filter_serializer.validated_data.get('search') or None
    )
    serializer = FriendSerializer(friendships, many=True)
    return Response(serializer.data)


@extend_schema(
    responses={204: None, 404: None},
    tags=['friends'],
)
@api_view(['DELETE'])
@permission_classes([IsAuthenticated])
def remove_friend(request, friend_id):
    """Remove a friend (both directions)."""
    try:
        remove_friend_service(user=request.user, friend_id=friend_id)
    except NotFriendsError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    return Response(status=status.HTTP_204_NO_CONTENT)


# =============================================================================
# Friend requests
# =============================================================================

@extend_schema(
    responses={200: FriendRequestSerializer(many=True)},
    tags=['friends'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def incoming_requests(request):
    """Pending requests sent to the current user."""
    serializer = FriendRequestSerializer(list_incoming_requests(user=request.user), many=True)
    return Response(serializer.data)


@extend_schema(
    responses={200: FriendRequestSerializer(many=True)},
    tags=['friends'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def outgoing_requests(request):
    """Pending requests sent by the current user."""
    serializer = FriendRequestSerializer(list_outgoing_requests(user=request.user), many=True)
    return Response(serializer.data)


@extend_schema(
    request=SendFriendRequestSerializer,
    responses={201: FriendRequestSerializer},
    tags=['friends'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def send_request(request):
    """Send a friend request by username."""
    serializer = SendFriendRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        friend_request = send_friend_request_service(
            from_user=request.user,
            username=serializer.validated_data['username']
        )
    except UserNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except (SelfFriendRequestError, AlreadyFriendsError, DuplicateFriendRequestError) as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(
        FriendRequestSerializer(friend_request).data,
        status=status.HTTP_201_CREATED
    )


@extend_schema(
    request=None,
    responses={200: FriendRequestSerializer},
    tags=['friends'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def accept_request(request, request_id):
    """Accept an incoming friend request."""
    try:
        friend_request = accept_friend_request_service(request_id=request_id, user=request.user)
    except FriendRequestNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except InvalidRequestStateError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(FriendRequestSerializer(friend_request).data)


@extend_schema(
    request=None,
    responses={200: FriendRequestSerializer},
    tags=['friends'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def decline_request(request, request_id):
    """Decline an incoming friend request."""
    try:
        friend_request = decline_friend_request_service(request_id=request_id, user=request.user)
    except FriendRequestNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except InvalidRequestStateError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(FriendRequestSerializer(friend_request).data)


@extend_schema(
    request=None,
    responses={204: None},
    tags=['friends'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def cancel_request(request, request_id):
    """Withdraw an outgoing friend request."""
    try:
        cancel_friend_request_service(request_id=request_id, user=request.user)
    except FriendRequestNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except InvalidRequestStateError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(status=status.HTTP_204_NO_CONTENT)
