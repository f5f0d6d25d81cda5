from rest_framework import status, serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter

from .serializers import NotificationSerializer, NotificationFilterSerializer
from .services import (
    list_notifications,
    get_unread_count,
    mark_notification_read,
    mark_all_read,
    delete_notification,
    NotificationNotFoundError,
)


class NotificationPagination(PageNumberPagination):
    """Custom pagination for notifications."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class UnreadCountResponseSerializer(serializers.Serializer):
    unread_count = serializers.IntegerField()


class MarkAllReadResponseSerializer(serializers.Serializer):
    updated = serializers.IntegerField()


@extend_schema(
    parameters=[OpenApiParameter('unread', bool, description='Only unread notifications')],
    responses={200: NotificationSerializer(many=True)},
    tags=['notifications'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def notification_list(request):
    """List the current user's notifications, newest first."""
    params = NotificationFilterSerializer(data=request.query_params)
    params.is_valid(raise_exception=True)

    notifications = list_notifications(
        user=request.user,
        unread_only=params.validated_data['unread']
    )

    paginator = NotificationPagination()
    page = paginator.paginate_queryset(notifications, request)
    serializer = NotificationSerializer(page, many=True)
    return paginator.get_paginated_response(serializer.data)


@extend_schema(
    responses={200: UnreadCountResponseSerializer},
    tags=['notifications'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def unread_count(request):
    """Number of unread notifications (for the bell badge)."""
    return Response({'unread_count': get_unread_count(user=request.user)})


@extend_schema(
    request=None,
    responses={200: NotificationSerializer},
    tags=['notifications'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def mark_read(request, notification_id):
    """Mark one notification as read."""
    try:
        notification = mark_notification_read(
            notification_id=notification_id,
            user=request.user
        )
    except NotificationNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    return Response(NotificationSerializer(notification).data)


@extend_schema(
    request=None,
    responses={200: MarkAllReadResponseSerializer},
    tags=['notifications'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def read_all(request):
    """Mark all notifications as read."""
    updated = mark_all_read(user=request.user)
    return Response({'updated': updated})


@extend_schema(
    responses={204: None},
    tags=['notifications'],
)
@api_view(['DELETE'])
@permission_classes([IsAuthenticated])
def remove(request, notification_id):
    """Delete a notification."""
    try:
        delete_notification(notification_id=notification_id, user=request.user)
    except NotificationNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    return Response(status=status.HTTP_204_NO_CONTENT)
