from django.db import models
from django.utils import timezone

from hoh.core.models import User, SERVICE_TYPE_CHOICES


class Lead(models.Model):
    """Enquiry captured by a public form or cost calculator"""
    LEAD_TYPE_CHOICES = [
        ('general', 'General'),
        ('cost_estimate', 'Cost Estimate'),
    ]

    STATUS_CHOICES = [
        ('new', 'New'),
        ('rnr', 'Ringing No Response'),
        ('qualified', 'Qualified'),
        ('lost', 'Lost'),
        ('non_prospect', 'Non Prospect'),
        ('not_reachable', 'Not Reachable'),
        ('low_budget', 'Low Budget'),
        ('non_serviceable_area', 'Non Serviceable Area'),
        ('future_prospect', 'Future Prospect'),
    ]

    name = models.CharField(max_length=200)
    email = models.EmailField()
    phone = models.CharField(max_length=30, blank=True)
    city = models.CharField(max_length=100, blank=True)
    carpet_area = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    bhk = models.CharField(max_length=10, blank=True)
    package = models.CharField(max_length=50, blank=True)
    estimated_cost = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)
    service_type = models.CharField(max_length=20, choices=SERVICE_TYPE_CHOICES, default='interior')
    lead_type = models.CharField(max_length=20, choices=LEAD_TYPE_CHOICES, default='general')
    status = models.CharField(max_length=30, choices=STATUS_CHOICES, default='new')
    source = models.CharField(max_length=50, default='website')
    # Calculator answers
    budget_range = models.CharField(max_length=100, blank=True)
    start_timeline = models.CharField(max_length=100, blank=True)
    work_type = models.CharField(max_length=20, blank=True)
    selected_spaces = models.JSONField(default=list, blank=True)
    project_type = models.CharField(max_length=20, blank=True)
    plot_area = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    floors = models.CharField(max_length=10, blank=True)
    notes = models.TextField(blank=True)
    date = models.DateTimeField(default=timezone.now)
    last_modified_by = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True, related_name='modified_leads')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.name} <{self.email}>"

    def save(self, *args, **kwargs):
        if self.email:
            self.email = self.email.strip().lower()
        super().save(*args, **kwargs)

    def add_history(self, action, description, user=None, changes=None):
        return LeadHistory.objects.create(
            lead=self,
            action=action,
            description=description,
            changed_by=user if user and user.is_authenticated else None,
            changed_by_name=(user.full_name or user.email) if user and user.is_authenticated else 'System',
            changes=changes or {},
        )

    class Meta:
        db_table = 'leads'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status'], name='leads_status_idx'),
            models.Index(fields=['service_type'], name='leads_service_type_idx'),
            models.Index(fields=['-created_at'], name='leads_created_at_idx'),
        ]


class LeadHistory(models.Model):
    """Change trail for a lead"""
    ACTION_CHOICES = [
        ('created', 'Created'),
        ('updated', 'Updated'),
        ('status_changed', 'Status Changed'),
        ('note_added', 'Note Added'),
    ]

    lead = models.ForeignKey(Lead, on_delete=models.CASCADE, related_name='history')
    action = models.CharField(max_length=20, choices=ACTION_CHOICES)
    description = models.TextField()
    changed_by = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True, related_name='lead_changes')
    changed_by_name = models.CharField(max_length=200, blank=True)
    changes = models.JSONField(default=dict, blank=True)
    timestamp = models.DateTimeField(default=timezone.now)

    def __str__(self):
        return f"{self.lead_id}: {self.description}"

    class Meta:
        db_table = 'lead_history'
        ordering = ['-timestamp']
