# Generated manually for the bills app

import uuid
from decimal import Decimal
from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Bill',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('title', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True)),
                ('total_amount', models.DecimalField(decimal_places=2, max_digits=12, validators=[MinValueValidator(Decimal('0.00'))])),
                ('status', models.CharField(choices=[('select', 'Select'), ('pay', 'Pay'), ('closed', 'Closed')], default='select', max_length=10)),
                ('due_date', models.DateField(blank=True, null=True)),
                ('tag', models.CharField(blank=True, max_length=50)),
                ('bank_name', models.CharField(max_length=100)),
                ('account_name', models.CharField(max_length=100)),
                ('account_number', models.CharField(max_length=50)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('created_by', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='hosted_bills', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'bills',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['created_by', 'created_at'], name='bills_host_created_idx'),
                    models.Index(fields=['status', 'due_date'], name='bills_status_due_idx'),
                    models.Index(fields=['tag'], name='bills_tag_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='BillItem',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=200)),
                ('price', models.DecimalField(decimal_places=2, max_digits=10)),
                ('quantity', models.PositiveIntegerField(default=1)),
                ('position', models.PositiveSmallIntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('bill', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='items', to='bills.bill')),
            ],
            options={
                'db_table': 'bill_items',
                'ordering': ['position', 'created_at'],
            },
        ),
        migrations.CreateModel(
            name='BillParticipant',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('position', models.PositiveSmallIntegerField(default=0)),
                ('has_submitted', models.BooleanField(default=False)),
                ('payment_status', models.CharField(choices=[('unpaid', 'Unpaid'), ('paid', 'Paid'), ('verified', 'Verified')], default='unpaid', max_length=10)),
                ('joined_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('bill', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='participants', to='bills.bill')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='bill_participations', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'bill_participants',
                'ordering': ['position', 'joined_at'],
                'indexes': [
                    models.Index(fields=['user', 'payment_status'], name='bill_part_user_status_idx'),
                ],
                'unique_together': {('bill', 'user')},
            },
        ),
        migrations.CreateModel(
            name='BillItemSelection',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('item', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='selections', to='bills.billitem')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='item_selections', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'bill_item_selections',
                'ordering': ['created_at'],
                'unique_together': {('item', 'user')},
            },
        ),
    ]
