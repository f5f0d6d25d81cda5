# ==========================================
# apps/accounts/admin.py
# ==========================================

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html
from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Custom admin interface for User model.

    Provides:
    - User listing with key fields
    - Filtering by status
    - Search by email, username and name
    - Anonymization action for deletion requests
    """

    list_display = [
        'email',
        'username',
        'name',
        'is_active_badge',
        'created_at',
        'last_login',
    ]

    list_filter = [
        'is_active',
        'is_staff',
        'is_superuser',
        'created_at',
    ]

    search_fields = [
        'email',
        'username',
        'name',
    ]

    ordering = ['-created_at']
    date_hierarchy = 'created_at'

    fieldsets = (
        ('Basic Information', {
            'fields': ('email', 'username', 'name', 'avatar', 'password')
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'last_login', 'deleted_at'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        ('Create User', {
            'classes': ('wide',),
            'fields': ('email', 'username', 'name', 'password1', 'password2'),
        }),
    )

    readonly_fields = [
        'created_at',
        'last_login',
        'deleted_at',
    ]

    filter_horizontal = ['groups', 'user_permissions']

    def is_active_badge(self, obj):
        """Display active status as colored badge."""
        if obj.is_active:
            return format_html(
                '<span style="background: #10B981; color: white; padding: 3px 8px; '
                'border-radius: 10px; font-size: 11px;">Active</span>'
            )
        return format_html(
            '<span style="background: #B85C5C; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">Inactive</span>'
        )
    is_active_badge.short_description = 'Status'
    is_active_badge.admin_order_field = 'is_active'

    actions = ['anonymize_users']

    @admin.action(description='Anonymize selected users (IRREVERSIBLE)')
    def anonymize_users(self, request, queryset):
        """Anonymize selected users, skipping staff."""
        safe_queryset = queryset.filter(is_superuser=False, is_staff=False)
        count = 0
        for user in safe_queryset:
            user.anonymize()
            count += 1

        skipped = queryset.count() - count
        msg = f'Anonymized {count} user(s).'
        if skipped:
            msg += f' Skipped {skipped} staff/superuser(s).'
        self.message_user(request, msg)
