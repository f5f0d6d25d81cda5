# ==========================================
# apps/bills/admin.py
# ==========================================

from django.contrib import admin
from django.utils.html import format_html
from .models import Bill, BillParticipant, BillItem, BillItemSelection, BillStatus, ParticipantPaymentStatus


STATUS_COLORS = {
    BillStatus.SELECT: ('#F59E0B', 'white'),
    BillStatus.PAY: ('#3B82F6', 'white'),
    BillStatus.CLOSED: ('#10B981', 'white'),
}

PAYMENT_COLORS = {
    ParticipantPaymentStatus.UNPAID: ('#E5C49A', '#2C1810'),
    ParticipantPaymentStatus.PAID: ('#3B82F6', 'white'),
    ParticipantPaymentStatus.VERIFIED: ('#6B8E5E', 'white'),
}


def _badge(bg, fg, label):
    return format_html(
        '<span style="background: {}; color: {}; padding: 3px 8px; '
        'border-radius: 10px; font-size: 11px;">{}</span>',
        bg, fg, label
    )


class BillParticipantInline(admin.TabularInline):
    """Inline admin for participants within a bill."""
    model = BillParticipant
    extra = 0
    fields = ['user', 'has_submitted', 'payment_badge', 'joined_at']
    readonly_fields = ['payment_badge', 'joined_at']

    def payment_badge(self, obj):
        """Display payment status as colored badge."""
        bg, fg = PAYMENT_COLORS.get(obj.payment_status, ('#ccc', '#666'))
        return _badge(bg, fg, obj.get_payment_status_display())
    payment_badge.short_description = 'Payment'


class BillItemInline(admin.TabularInline):
    """Inline admin for items within a bill."""
    model = BillItem
    extra = 0
    fields = ['name', 'price', 'quantity', 'position']


@admin.register(Bill)
class BillAdmin(admin.ModelAdmin):
    """Admin interface for Bills."""

    list_display = [
        'title',
        'created_by',
        'total_amount',
        'status_badge',
        'due_date',
        'tag',
        'created_at',
    ]
    list_filter = ['status', 'due_date', 'created_at']
    search_fields = ['title', 'tag', 'created_by__email', 'created_by__username']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [BillParticipantInline, BillItemInline]
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    fieldsets = (
        ('Basic Information', {
            'fields': ('title', 'description', 'created_by', 'status', 'due_date', 'tag')
        }),
        ('Amounts', {
            'fields': ('total_amount',)
        }),
        ('Bank Details', {
            'fields': ('bank_name', 'account_name', 'account_number')
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def status_badge(self, obj):
        """Display bill status as colored badge."""
        bg, fg = STATUS_COLORS.get(obj.status, ('#ccc', '#666'))
        return _badge(bg, fg, obj.get_status_display())
    status_badge.short_description = 'Status'

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('created_by')


@admin.register(BillItemSelection)
class BillItemSelectionAdmin(admin.ModelAdmin):
    """Admin interface for item selections."""

    list_display = ['item', 'user', 'created_at']
    search_fields = ['item__name', 'item__bill__title', 'user__username']
    readonly_fields = ['created_at']

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('item', 'item__bill', 'user')
