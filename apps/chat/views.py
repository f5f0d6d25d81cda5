from django.conf import settings
from rest_framework import status, serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from .serializers import (
    ChatMessageSerializer,
    MessageFilterSerializer,
    SendMessageSerializer,
    VerifyPaymentSerializer,
)
from .services import (
    send_message,
    get_messages_for_bill,
    mark_as_read,
    mark_bill_read,
    get_unread_count,
    verify_payment_slip,
    # Exceptions
    BillNotFoundError,
    NotBillParticipantError,
    NotBillHostError,
    MessageNotFoundError,
    InvalidMessageError,
    PaymentAlreadyProcessedError,
)


# Response serializers for API documentation
class MessageListResponseSerializer(serializers.Serializer):
    messages = ChatMessageSerializer(many=True)
    count = serializers.IntegerField()
    poll_interval_seconds = serializers.IntegerField()


class UnreadCountResponseSerializer(serializers.Serializer):
    unread_count = serializers.IntegerField()


class MarkedReadResponseSerializer(serializers.Serializer):
    marked = serializers.IntegerField()


def _error(e, code):
    return Response({'error': str(e)}, status=code)


@extend_schema(
    methods=['GET'],
    parameters=[OpenApiParameter('after', str, description='ISO timestamp; only newer messages are returned')],
    responses={200: MessageListResponseSerializer},
    description="List bill chat messages. Poll with `after` set to the newest message seen.",
    tags=['chat'],
)
@extend_schema(
    methods=['POST'],
    request=SendMessageSerializer,
    responses={201: ChatMessageSerializer},
    description="Post a text, image or payment slip message.",
    tags=['chat'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def bill_messages(request, bill_id):
    """List or send messages in a bill chat."""
    try:
        if request.method == 'POST':
            serializer = SendMessageSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            message = send_message(
                bill_id=bill_id,
                user=request.user,
                **serializer.validated_data
            )
            return Response(
                ChatMessageSerializer(message).data,
                status=status.HTTP_201_CREATED
            )

        params = MessageFilterSerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        messages = get_messages_for_bill(
            bill_id=bill_id,
            user=request.user,
            after=params.validated_data.get('after')
        )
    except BillNotFoundError as e:
        return _error(e, status.HTTP_404_NOT_FOUND)
    except NotBillParticipantError as e:
        return _error(e, status.HTTP_403_FORBIDDEN)
    except InvalidMessageError as e:
        return _error(e, status.HTTP_400_BAD_REQUEST)

    data = ChatMessageSerializer(messages, many=True).data
    return Response({
        'messages': data,
        'count': len(data),
        'poll_interval_seconds': settings.CHAT_POLL_INTERVAL_SECONDS,
    })


@extend_schema(
    request=None,
    responses={200: MarkedReadResponseSerializer},
    tags=['chat'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def bill_read(request, bill_id):
    """Mark every message in the bill chat as read."""
    try:
        marked = mark_bill_read(bill_id=bill_id, user=request.user)
    except BillNotFoundError as e:
        return _error(e, status.HTTP_404_NOT_FOUND)
    except NotBillParticipantError as e:
        return _error(e, status.HTTP_403_FORBIDDEN)

    return Response({'marked': marked})


@extend_schema(
    responses={200: UnreadCountResponseSerializer},
    tags=['chat'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def bill_unread_count(request, bill_id):
    """Number of unread messages in the bill chat."""
    try:
        count = get_unread_count(bill_id=bill_id, user=request.user)
    except BillNotFoundError as e:
        return _error(e, status.HTTP_404_NOT_FOUND)
    except NotBillParticipantError as e:
        return _error(e, status.HTTP_403_FORBIDDEN)

    return Response({'unread_count': count})


@extend_schema(
    request=None,
    responses={200: ChatMessageSerializer},
    tags=['chat'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def message_read(request, message_id):
    """Mark a single message as read."""
    try:
        message = mark_as_read(message_id=message_id, user=request.user)
    except MessageNotFoundError as e:
        return _error(e, status.HTTP_404_NOT_FOUND)

    return Response(ChatMessageSerializer(message).data)


@extend_schema(
    request=VerifyPaymentSerializer,
    responses={200: ChatMessageSerializer},
    description="Host verifies or rejects a pending payment slip. Each slip can be answered once.",
    tags=['chat'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def verify_payment(request, message_id):
    """Verify or reject a payment slip."""
    serializer = VerifyPaymentSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        message = verify_payment_slip(
            message_id=message_id,
            user=request.user,
            status=serializer.validated_data['status']
        )
    except MessageNotFoundError as e:
        return _error(e, status.HTTP_404_NOT_FOUND)
    except NotBillHostError as e:
        return _error(e, status.HTTP_403_FORBIDDEN)
    except (InvalidMessageError, PaymentAlreadyProcessedError) as e:
        return _error(e, status.HTTP_400_BAD_REQUEST)

    return Response(ChatMessageSerializer(message).data)
