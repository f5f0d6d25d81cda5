from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.db import models
from django.utils import timezone
import uuid


class UserManager(BaseUserManager):
    """Custom user manager for email-based authentication."""
    
    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError('Email is required')
        
        email = self.normalize_email(email)
        username = extra_fields.pop('username', '') or email.split('@')[0]
        user = self.model(email=email, username=username.lower(), **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user
    
    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        
        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True')
        
        return self.create_user(email, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    """Custom user model with email authentication and a public username."""
    
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True, max_length=255, db_index=True)
    username = models.CharField(max_length=50, unique=True, db_index=True)
    name = models.CharField(max_length=100, blank=True)
    avatar = models.URLField(max_length=500, blank=True)
    
    # Permissions
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)
    
    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    last_login = models.DateTimeField(null=True, blank=True)
    
    # Set when the account is deleted (anonymized)
    deleted_at = models.DateTimeField(null=True, blank=True)
    
    objects = UserManager()
    
    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []
    
    class Meta:
        db_table = 'users'
        indexes = [
            models.Index(fields=['email'], name='users_email_idx'),
            models.Index(fields=['username'], name='users_username_idx'),
            models.Index(fields=['created_at'], name='users_created_idx'),
        ]
    
    def __str__(self):
        return self.email
    
    def get_display_name(self):
        """Return name or username."""
        return self.name or self.username
    
    def anonymize(self):
        """Strip personal data and deactivate the account."""
        self.email = f"deleted_{self.id}@anonymized.local"
        self.username = f"deleted_{self.id.hex[:12]}"
        self.name = "Deleted User"
        self.avatar = ''
        self.is_active = False
        self.deleted_at = timezone.now()
        self.set_unusable_password()
        self.save()
