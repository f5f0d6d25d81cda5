from decimal import Decimal
from django.utils import timezone
from rest_framework import serializers
from apps.accounts.serializers import UserMinimalSerializer
from .models import Bill, BillItem, BillParticipant, BillStatus
from .services.cost_allocation import format_currency


# =============================================================================
# Input Serializers
# =============================================================================

class BillFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for bill filtering.

    Query Parameters:
        status (str): Filter by bill status
        tag (str): Filter by tag
        date_from (date): Bills created from this date
        date_to (date): Bills created up to this date
        search (str): Title contains
    """

    status = serializers.ChoiceField(choices=BillStatus.choices, required=False)
    tag = serializers.CharField(required=False, max_length=50)
    date_from = serializers.DateField(required=False)
    date_to = serializers.DateField(required=False)
    search = serializers.CharField(required=False, max_length=200)

    def validate(self, attrs):
        """Validate date range."""
        date_from = attrs.get('date_from')
        date_to = attrs.get('date_to')

        if date_from and date_to:
            if date_from > date_to:
                raise serializers.ValidationError({
                    'date_to': 'End date must be after start date'
                })

        return attrs


class BillItemInputSerializer(serializers.Serializer):
    """One item on a new bill. ``price`` is per unit."""

    name = serializers.CharField(max_length=200)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal('0.00'))
    quantity = serializers.IntegerField(min_value=1, default=1)


class BillCreateSerializer(serializers.Serializer):
    """
    Validate input for creating a bill.

    ``total_amount`` defaults to the sum of the item lines.
    """

    title = serializers.CharField(max_length=200)
    description = serializers.CharField(required=False, allow_blank=True, default='')
    total_amount = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=Decimal('0.00'),
        required=False
    )
    due_date = serializers.DateField(required=False, allow_null=True)
    tag = serializers.CharField(required=False, allow_blank=True, max_length=50, default='')
    bank_name = serializers.CharField(max_length=100)
    account_name = serializers.CharField(max_length=100)
    account_number = serializers.CharField(max_length=50)
    items = BillItemInputSerializer(many=True)
    participant_ids = serializers.ListField(
        child=serializers.UUIDField(),
        required=False,
        default=list,
        help_text="Friends to invite. The creator is always added."
    )

    def validate_title(self, value):
        if not value.strip():
            raise serializers.ValidationError('Please enter a bill title')
        return value.strip()

    def validate_items(self, value):
        if not value:
            raise serializers.ValidationError('Please add at least one item')
        return value

    def validate_due_date(self, value):
        if value and value < timezone.localdate():
            raise serializers.ValidationError('Due date must be today or in the future')
        return value

    def validate(self, attrs):
        if 'total_amount' not in attrs:
            attrs['total_amount'] = sum(
                (item['price'] * item['quantity'] for item in attrs['items']),
                Decimal('0.00')
            )
        return attrs


class BillUpdateSerializer(serializers.Serializer):
    """Partial update of bill details."""

    title = serializers.CharField(max_length=200, required=False)
    description = serializers.CharField(required=False, allow_blank=True)
    total_amount = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=Decimal('0.00'),
        required=False
    )
    due_date = serializers.DateField(required=False, allow_null=True)
    tag = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=50)
    bank_name = serializers.CharField(max_length=100, required=False)
    account_name = serializers.CharField(max_length=100, required=False)
    account_number = serializers.CharField(max_length=50, required=False)


class UpdateStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=BillStatus.choices)


class SelectItemSerializer(serializers.Serializer):
    """Select or deselect one item."""

    item_id = serializers.UUIDField()
    selected = serializers.BooleanField()


class VerifyParticipantPaymentSerializer(serializers.Serializer):
    user_id = serializers.UUIDField()


# =============================================================================
# Output Serializers
# =============================================================================

class BillParticipantSerializer(serializers.ModelSerializer):
    """Participant with their progress."""
    
    user = UserMinimalSerializer(read_only=True)
    
    class Meta:
        model = BillParticipant
        fields = ['user', 'has_submitted', 'payment_status', 'joined_at']
        read_only_fields = fields


class BillItemSerializer(serializers.ModelSerializer):
    """Item with the ids of users who selected it."""
    
    selected_by = serializers.SerializerMethodField()
    
    class Meta:
        model = BillItem
        fields = ['id', 'name', 'price', 'quantity', 'line_total', 'selected_by']
        read_only_fields = fields
    
    def get_selected_by(self, obj):
        return [str(selection.user_id) for selection in obj.selections.all()]


class BillSerializer(serializers.ModelSerializer):
    """Full bill with participants and items."""
    
    created_by = UserMinimalSerializer(read_only=True)
    participants = BillParticipantSerializer(many=True, read_only=True)
    items = BillItemSerializer(many=True, read_only=True)
    bank_details = serializers.SerializerMethodField()
    is_host = serializers.SerializerMethodField()
    
    class Meta:
        model = Bill
        fields = [
            'id',
            'title',
            'description',
            'total_amount',
            'status',
            'due_date',
            'tag',
            'created_by',
            'is_host',
            'bank_details',
            'participants',
            'items',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields
    
    def get_bank_details(self, obj):
        return {
            'bank_name': obj.bank_name,
            'account_name': obj.account_name,
            'account_number': obj.account_number,
        }
    
    def get_is_host(self, obj):
        request = self.context.get('request')
        if request and request.user.is_authenticated:
            return obj.created_by_id == request.user.id
        return False


class BillListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list views."""
    
    created_by = UserMinimalSerializer(read_only=True)
    participant_count = serializers.SerializerMethodField()
    
    class Meta:
        model = Bill
        fields = [
            'id',
            'title',
            'total_amount',
            'status',
            'due_date',
            'tag',
            'created_by',
            'participant_count',
            'created_at',
        ]
        read_only_fields = fields
    
    def get_participant_count(self, obj):
        return len(obj.participants.all())


class ItemShareSerializer(serializers.Serializer):
    """An item as it appears in someone's cost breakdown."""

    id = serializers.CharField()
    name = serializers.CharField()
    price = serializers.FloatField(help_text="This participant's share of the item line")
    quantity = serializers.IntegerField()


class UserCostSerializer(serializers.Serializer):
    """Cost breakdown for one participant."""

    user_id = serializers.CharField()
    user_name = serializers.CharField()
    items = ItemShareSerializer(many=True)
    total = serializers.FloatField()
    total_display = serializers.SerializerMethodField()

    def get_total_display(self, obj):
        return format_currency(obj.total)


class ParticipantPaymentSerializer(serializers.Serializer):
    """Result of a payment verification."""

    participant = BillParticipantSerializer()
    all_verified = serializers.BooleanField()
