from rest_framework import status, generics, serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken
from drf_spectacular.utils import extend_schema, OpenApiParameter
from .models import User
from .serializers import (
    UserRegistrationSerializer,
    UserLoginSerializer,
    UserSerializer,
    UserSearchSerializer,
    UserSearchResultSerializer,
)
from .services import (
    register_user,
    authenticate_user,
    delete_user_account,
    search_users,
    UserRegistrationError,
    InvalidCredentialsError,
    InactiveAccountError,
    PasswordConfirmationError,
)


# Response serializers for API documentation
class TokensResponseSerializer(serializers.Serializer):
    refresh = serializers.CharField()
    access = serializers.CharField()


class AuthResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    user = UserSerializer()
    tokens = TokensResponseSerializer()


class MessageResponseSerializer(serializers.Serializer):
    message = serializers.CharField()


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()


class LogoutRequestSerializer(serializers.Serializer):
    refresh = serializers.CharField(help_text="Refresh token to invalidate", required=False)


class DeleteAccountRequestSerializer(serializers.Serializer):
    password = serializers.CharField(help_text="Current password for confirmation")
    confirm = serializers.BooleanField(help_text="Must be true to confirm deletion")


def _tokens_for(user):
    refresh = RefreshToken.for_user(user)
    return {
        'refresh': str(refresh),
        'access': str(refresh.access_token),
    }


@extend_schema(
    request=UserRegistrationSerializer,
    responses={
        201: AuthResponseSerializer,
        400: ErrorResponseSerializer,
    },
    description="Register a new user account and receive JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def register(request):
    """Register a new user account."""
    serializer = UserRegistrationSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    data = serializer.validated_data.copy()
    data.pop('password_confirm', None)

    try:
        user = register_user(**data)
    except UserRegistrationError as e:
        return Response(
            {'error': str(e)},
            status=status.HTTP_400_BAD_REQUEST
        )

    return Response({
        'message': 'Registration successful',
        'user': UserSerializer(user).data,
        'tokens': _tokens_for(user),
    }, status=status.HTTP_201_CREATED)


@extend_schema(
    request=UserLoginSerializer,
    responses={
        200: AuthResponseSerializer,
        400: ErrorResponseSerializer,
        401: ErrorResponseSerializer,
        403: ErrorResponseSerializer,
    },
    description="Authenticate with email and password to receive JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def login(request):
    """Login with email and password."""
    serializer = UserLoginSerializer(data=request.data)
    
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    
    try:
        user = authenticate_user(
            email=serializer.validated_data['email'],
            password=serializer.validated_data['password'],
        )
    except InvalidCredentialsError:
        return Response({
            'error': 'Invalid credentials'
        }, status=status.HTTP_401_UNAUTHORIZED)
    except InactiveAccountError as e:
        return Response({
            'error': str(e)
        }, status=status.HTTP_403_FORBIDDEN)
    
    return Response({
        'message': 'Login successful',
        'user': UserSerializer(user).data,
        'tokens': _tokens_for(user),
    })


@extend_schema(
    request=LogoutRequestSerializer,
    responses={
        200: MessageResponseSerializer,
        400: ErrorResponseSerializer,
    },
    description="Logout. The refresh token, if given, must be valid.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def logout(request):
    """Logout and validate the refresh token."""
    refresh_token = request.data.get('refresh')
    if refresh_token:
        try:
            RefreshToken(refresh_token)
        except TokenError:
            return Response({
                'error': 'Invalid token'
            }, status=status.HTTP_400_BAD_REQUEST)
    
    return Response({
        'message': 'Logout successful'
    })


@extend_schema(
    responses={200: UserSerializer},
    description="Get the current authenticated user's profile.",
    tags=['auth'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_current_user(request):
    """Get current authenticated user profile."""
    return Response(UserSerializer(request.user).data)


@extend_schema(
    request=UserSerializer,
    responses={
        200: UserSerializer,
        400: ErrorResponseSerializer,
    },
    description="Update the current user's profile (name, username, avatar).",
    tags=['auth'],
)
@api_view(['PATCH'])
@permission_classes([IsAuthenticated])
def update_profile(request):
    """Update user profile."""
    user = request.user
    serializer = UserSerializer(user, data=request.data, partial=True)
    
    if serializer.is_valid():
        serializer.save()
        return Response(serializer.data)
    
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@extend_schema(
    request=DeleteAccountRequestSerializer,
    responses={
        204: None,
        400: ErrorResponseSerializer,
        401: ErrorResponseSerializer,
    },
    description="Delete the account. Removes friendships and hosted bills, anonymizes the user.",
    tags=['auth'],
)
@api_view(['DELETE'])
@permission_classes([IsAuthenticated])
def delete_account(request):
    """Delete the current account after password confirmation."""
    password = request.data.get('password', '')
    confirm = request.data.get('confirm')
    
    if not confirm:
        return Response({
            'error': 'Confirmation required'
        }, status=status.HTTP_400_BAD_REQUEST)
    
    try:
        delete_user_account(user_id=request.user.id, password=password)
    except PasswordConfirmationError:
        return Response({
            'error': 'Invalid password'
        }, status=status.HTTP_401_UNAUTHORIZED)
    
    return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(
    parameters=[OpenApiParameter('q', str, description='Username or name to look for')],
    responses={200: UserSearchResultSerializer(many=True)},
    description="Search users by username or name, tolerating typos.",
    tags=['auth'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def search(request):
    """Search users to send friend requests to."""
    params = UserSearchSerializer(data=request.query_params)
    params.is_valid(raise_exception=True)

    matches = search_users(query=params.validated_data['q'], exclude_user=request.user)
    results = [
        {'user': user, 'score': score, 'match_type': match_type}
        for user, score, match_type in matches
    ]
    return Response(UserSearchResultSerializer(results, many=True).data)


class UserDetailView(generics.RetrieveAPIView):
    """
    Get user profile by ID.
    
    GET /api/auth/users/{id}/
    """
    queryset = User.objects.filter(is_active=True, deleted_at__isnull=True)
    serializer_class = UserSerializer
    permission_classes = [IsAuthenticated]
