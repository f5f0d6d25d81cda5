from rest_framework import serializers
from django.contrib.auth.password_validation import validate_password
from .models import User
from .services.user_registration import MIN_USERNAME_LENGTH, normalize_username


class UserSerializer(serializers.ModelSerializer):
    """Basic user serializer for profile display."""
    
    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'username',
            'name',
            'avatar',
            'created_at',
            'last_login',
        ]
        read_only_fields = ['id', 'email', 'created_at', 'last_login']

    def validate_username(self, value):
        """Keep usernames lowercase and unique."""
        value = normalize_username(value)
        if len(value) < MIN_USERNAME_LENGTH:
            raise serializers.ValidationError(
                f'Username must be at least {MIN_USERNAME_LENGTH} characters'
            )
        taken = User.objects.filter(username=value)
        if self.instance is not None:
            taken = taken.exclude(id=self.instance.id)
        if taken.exists():
            raise serializers.ValidationError('Username is already taken')
        return value


class UserMinimalSerializer(serializers.ModelSerializer):
    """Minimal user info for nested serialization."""
    
    display_name = serializers.SerializerMethodField()
    
    class Meta:
        model = User
        fields = ['id', 'username', 'name', 'email', 'avatar', 'display_name']
        read_only_fields = fields
    
    def get_display_name(self, obj):
        return obj.get_display_name()


class UserRegistrationSerializer(serializers.Serializer):
    """Validate registration input."""
    
    email = serializers.EmailField(required=True)
    username = serializers.CharField(required=True, max_length=50)
    name = serializers.CharField(required=False, allow_blank=True, max_length=100, default='')
    password = serializers.CharField(
        write_only=True,
        required=True,
        validators=[validate_password],
        style={'input_type': 'password'}
    )
    password_confirm = serializers.CharField(
        write_only=True,
        required=True,
        style={'input_type': 'password'}
    )
    
    def validate(self, attrs):
        """Validate password confirmation."""
        if attrs['password'] != attrs['password_confirm']:
            raise serializers.ValidationError({
                'password_confirm': 'Passwords do not match'
            })
        return attrs


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login."""
    
    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )


class UserSearchSerializer(serializers.Serializer):
    """Validate query parameters for user search."""

    q = serializers.CharField(required=True, min_length=1, max_length=100)


class UserSearchResultSerializer(serializers.Serializer):
    """One user search hit."""

    user = UserMinimalSerializer()
    score = serializers.IntegerField()
    match_type = serializers.CharField()
