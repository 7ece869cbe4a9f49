from django.db import models
from django.utils import timezone

from hoh.core.models import User, SERVICE_TYPE_CHOICES
from hoh.projects.models import Project


class Payment(models.Model):
    """Customer payment against a project milestone"""
    STATUS_CHOICES = [
        ('pending', 'Pending'),
        ('partially_paid', 'Partially Paid'),
        ('paid', 'Paid'),
        ('overdue', 'Overdue'),
    ]

    METHOD_CHOICES = [
        ('cash', 'Cash'),
        ('bank_transfer', 'Bank Transfer'),
        ('cheque', 'Cheque'),
        ('upi', 'UPI'),
        ('card', 'Card'),
        ('other', 'Other'),
    ]

    MILESTONE_CHOICES = [
        ('advance', 'Advance'),
        ('stage_1', 'Stage 1'),
        ('stage_2', 'Stage 2'),
        ('stage_3', 'Stage 3'),
        ('final', 'Final'),
        ('other', 'Other'),
    ]

    payment_id = models.CharField(max_length=20, unique=True, editable=False)
    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name='payments')
    customer = models.ForeignKey(User, on_delete=models.PROTECT, related_name='payments')
    service_type = models.CharField(max_length=20, choices=SERVICE_TYPE_CHOICES, default='interior')
    amount = models.DecimalField(max_digits=14, decimal_places=2)
    due_date = models.DateField()
    paid_date = models.DateTimeField(null=True, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='pending')
    payment_method = models.CharField(max_length=20, choices=METHOD_CHOICES, default='bank_transfer')
    milestone = models.CharField(max_length=20, choices=MILESTONE_CHOICES)
    description = models.TextField(blank=True)
    transaction_id = models.CharField(max_length=100, blank=True)
    notes = models.TextField(blank=True)
    collected_by = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True, related_name='collected_payments')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.payment_id} - {self.amount}"

    def save(self, *args, **kwargs):
        if not self.payment_id:
            from hoh.core.utils import next_sequential_id
            self.payment_id = next_sequential_id(Payment, 'payment_id', 'PAY', 6)
        if self.status == 'pending':
            if self.paid_date:
                self.status = 'paid'
            elif self.due_date and self.due_date < timezone.localdate():
                self.status = 'overdue'
        super().save(*args, **kwargs)

    class Meta:
        db_table = 'payments'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status'], name='payments_status_idx'),
            models.Index(fields=['due_date'], name='payments_due_date_idx'),
            models.Index(fields=['service_type'], name='payments_service_type_idx'),
        ]
