from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid


class BillStatus(models.TextChoices):
    SELECT = 'select', 'Select'
    PAY = 'pay', 'Pay'
    CLOSED = 'closed', 'Closed'


class ParticipantPaymentStatus(models.TextChoices):
    UNPAID = 'unpaid', 'Unpaid'
    PAID = 'paid', 'Paid'
    VERIFIED = 'verified', 'Verified'


class Bill(models.Model):
    """Shared bill hosted by ``created_by``."""
    
    # Allowed forward moves of the lifecycle
    TRANSITIONS = {
        BillStatus.SELECT: BillStatus.PAY,
        BillStatus.PAY: BillStatus.CLOSED,
    }
    
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    total_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    
    # Host
    created_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='hosted_bills'
    )
    
    status = models.CharField(
        max_length=10,
        choices=BillStatus.choices,
        default=BillStatus.SELECT
    )
    due_date = models.DateField(null=True, blank=True)
    tag = models.CharField(max_length=50, blank=True)
    
    # Where participants send their money
    bank_name = models.CharField(max_length=100)
    account_name = models.CharField(max_length=100)
    account_number = models.CharField(max_length=50)
    
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    
    class Meta:
        db_table = 'bills'
        indexes = [
            models.Index(fields=['created_by', 'created_at'], name='bills_host_created_idx'),
            models.Index(fields=['status', 'due_date'], name='bills_status_due_idx'),
            models.Index(fields=['tag'], name='bills_tag_idx'),
        ]
        ordering = ['-created_at']
    
    def __str__(self):
        return f"{self.title} ({self.status})"
    
    def is_host(self, user):
        return self.created_by_id == user.id
    
    def has_participant(self, user):
        return self.participants.filter(user=user).exists()
    
    def can_transition_to(self, status):
        return self.TRANSITIONS.get(self.status) == status


class BillParticipant(models.Model):
    """Membership of a user in a bill."""
    
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    bill = models.ForeignKey(Bill, on_delete=models.CASCADE, related_name='participants')
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='bill_participations')
    
    # Insertion order; the host is always 0
    position = models.PositiveSmallIntegerField(default=0)
    has_submitted = models.BooleanField(default=False)
    payment_status = models.CharField(
        max_length=10,
        choices=ParticipantPaymentStatus.choices,
        default=ParticipantPaymentStatus.UNPAID
    )
    joined_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    
    class Meta:
        db_table = 'bill_participants'
        unique_together = [['bill', 'user']]
        indexes = [
            models.Index(fields=['user', 'payment_status'], name='bill_part_user_status_idx'),
        ]
        ordering = ['position', 'joined_at']
    
    def __str__(self):
        return f"{self.user.get_display_name()} in {self.bill.title}"


class BillItem(models.Model):
    """Line item on a bill. ``price`` is per unit."""
    
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    bill = models.ForeignKey(Bill, on_delete=models.CASCADE, related_name='items')
    name = models.CharField(max_length=200)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    quantity = models.PositiveIntegerField(default=1)
    position = models.PositiveSmallIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    
    class Meta:
        db_table = 'bill_items'
        ordering = ['position', 'created_at']
    
    def __str__(self):
        return f"{self.name} x{self.quantity}"
    
    @property
    def line_total(self):
        return self.price * self.quantity


class BillItemSelection(models.Model):
    """A user claiming a share of an item."""
    
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    item = models.ForeignKey(BillItem, on_delete=models.CASCADE, related_name='selections')
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='item_selections')
    created_at = models.DateTimeField(auto_now_add=True)
    
    class Meta:
        db_table = 'bill_item_selections'
        unique_together = [['item', 'user']]
        ordering = ['created_at']
    
    def __str__(self):
        return f"{self.user.get_display_name()} -> {self.item.name}"
