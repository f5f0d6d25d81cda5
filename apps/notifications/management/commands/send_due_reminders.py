"""
Management command to send due-date reminders.

Meant to run once a day from cron or a scheduler.

Usage:
    python manage.py send_due_reminders
    python manage.py send_due_reminders --date 2025-03-01 --dry-run
"""

from datetime import date

from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from apps.notifications.services import send_due_date_reminders


class Command(BaseCommand):
    help = 'Create reminder notifications for bills due tomorrow, today or yesterday'

    def add_arguments(self, parser):
        parser.add_argument(
            '--date',
            help='Reference date (YYYY-MM-DD), defaults to today',
        )
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would be sent without creating notifications',
        )

    def handle(self, *args, **options):
        dry_run = options['dry_run']

        if options['date']:
            try:
                today = date.fromisoformat(options['date'])
            except ValueError:
                raise CommandError(f"Invalid date: {options['date']}")
        else:
            today = timezone.localdate()

        result = send_due_date_reminders(today=today, dry_run=dry_run)

        if not result.reminders:
            self.stdout.write(
                self.style.SUCCESS(f'No reminders due for {today.isoformat()}.')
            )
            return

        self.stdout.write(f'\nReminders for {today.isoformat()}:\n')
        for user_id, bill_id, stage in result.reminders:
            self.stdout.write(f'  - {stage} | bill {bill_id} | user {user_id}')

        if dry_run:
            self.stdout.write(
                self.style.WARNING(f'\n--dry-run mode: {len(result.reminders)} reminder(s) not sent.')
            )
            return

        self.stdout.write(
            self.style.SUCCESS(
                f'\n✓ Sent {result.notifications_sent} reminder(s) across {result.processed_bills} bill(s).'
            )
        )
