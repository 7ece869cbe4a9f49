"""
Django management command to flag pending payments whose due date has passed
"""
from django.core.management.base import BaseCommand
from django.utils import timezone

from hoh.payments.models import Payment


class Command(BaseCommand):
    help = 'Mark pending payments past their due date as overdue'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Only report how many payments would be updated',
        )

    def handle(self, *args, **options):
        queryset = Payment.objects.filter(
            status='pending',
            paid_date__isnull=True,
            due_date__lt=timezone.localdate(),
        )
        count = queryset.count()

        if options.get('dry_run'):
            self.stdout.write(f"{count} pending payment(s) are past their due date")
            return

        updated = queryset.update(status='overdue', updated_at=timezone.now())
        self.stdout.write(self.style.SUCCESS(f"Marked {updated} payment(s) as overdue"))
