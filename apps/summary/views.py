from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework import status
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from .serializers import SummaryFilterSerializer, UserSummarySerializer, ErrorSerializer
from .services import user_summary, SummaryServiceError


@extend_schema(
    parameters=[
        OpenApiParameter('date_from', OpenApiTypes.DATE, description='Start date (YYYY-MM-DD)'),
        OpenApiParameter('date_to', OpenApiTypes.DATE, description='End date (YYYY-MM-DD)'),
        OpenApiParameter('tag', OpenApiTypes.STR, description='Bill tag'),
    ],
    responses={
        200: UserSummarySerializer,
        400: ErrorSerializer,
    },
    description="Get what the current user owes and is owed across bills in the pay stage.",
    tags=['summary'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def my_summary(request):
    """Get the current user's financial summary - thin HTTP handler."""
    query_serializer = SummaryFilterSerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    try:
        data = user_summary(
            user=request.user,
            date_from=params.get('date_from'),
            date_to=params.get('date_to'),
            tag=params.get('tag'),
        )
    except SummaryServiceError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(UserSummarySerializer(data).data)
