from django.db import models
from django.utils import timezone

from hoh.core.models import User, SERVICE_TYPE_CHOICES
from hoh.staff.models import Employee


class Project(models.Model):
    """Customer project tracked from enquiry to handover"""
    PROJECT_TYPE_CHOICES = [
        ('residential', 'Residential'),
        ('commercial', 'Commercial'),
        ('office', 'Office'),
        ('hospitality', 'Hospitality'),
        ('industrial', 'Industrial'),
        ('landscape', 'Landscape'),
        ('full_home', 'Full Home'),
        ('modular_kitchen', 'Modular Kitchen'),
        ('interior_design', 'Interior Design'),
    ]

    STATUS_CHOICES = [
        ('inquiry', 'Inquiry'),
        ('design_done', 'Design Done'),
        ('budget_approved', 'Budget Approved'),
        ('stage1_fee_paid', 'Stage 1 Fee Paid'),
        ('material_procurement_done', 'Material Procurement Done'),
        ('factory_production_started', 'Factory Production Started'),
        ('factory_production_completed', 'Factory Production Completed'),
        ('dispatched', 'Dispatched'),
        ('delivered', 'Delivered'),
        ('onsite_execution_started', 'Onsite Execution Started'),
        ('onsite_execution_completed', 'Onsite Execution Completed'),
        ('handover_move_in', 'Handover / Move In'),
        ('on_hold', 'On Hold'),
        ('cancelled', 'Cancelled'),
    ]

    # Statuses that no longer count as active work
    CLOSED_STATUSES = ('cancelled', 'handover_move_in')

    project_id = models.CharField(max_length=20, unique=True, editable=False)
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    customer = models.ForeignKey(User, on_delete=models.PROTECT, related_name='projects')
    assigned_designer = models.ForeignKey(Employee, on_delete=models.SET_NULL, null=True, blank=True, related_name='designer_projects')
    assigned_crm = models.ForeignKey(Employee, on_delete=models.SET_NULL, null=True, blank=True, related_name='crm_projects')
    service_type = models.CharField(max_length=20, choices=SERVICE_TYPE_CHOICES, default='interior')
    project_type = models.CharField(max_length=30, choices=PROJECT_TYPE_CHOICES)
    room_types = models.JSONField(default=list, blank=True)
    carpet_area = models.DecimalField(max_digits=10, decimal_places=2)
    budget_estimated = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)
    budget_actual = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)
    budget_currency = models.CharField(max_length=3, default='INR')
    address = models.CharField(max_length=255, blank=True)
    city = models.CharField(max_length=100, blank=True)
    state = models.CharField(max_length=100, blank=True)
    pincode = models.CharField(max_length=20, blank=True)
    start_date = models.DateField(null=True, blank=True)
    expected_end_date = models.DateField(null=True, blank=True)
    actual_end_date = models.DateField(null=True, blank=True)
    status = models.CharField(max_length=40, choices=STATUS_CHOICES, default='inquiry')
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.project_id} - {self.title}"

    def save(self, *args, **kwargs):
        if not self.project_id:
            from hoh.core.utils import next_sequential_id
            self.project_id = next_sequential_id(Project, 'project_id', 'PRJ', 6)
        super().save(*args, **kwargs)

    class Meta:
        db_table = 'projects'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status'], name='projects_status_idx'),
            models.Index(fields=['service_type'], name='projects_service_type_idx'),
        ]


class Milestone(models.Model):
    """Project stage, optionally tied to a share of the payment"""
    STATUS_CHOICES = [
        ('pending', 'Pending'),
        ('in_progress', 'In Progress'),
        ('completed', 'Completed'),
    ]

    PAYMENT_STATUS_CHOICES = [
        ('pending', 'Pending'),
        ('received', 'Received'),
    ]

    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name='milestones')
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='pending')
    due_date = models.DateField(null=True, blank=True)
    completed_date = models.DateField(null=True, blank=True)
    payment_percentage = models.DecimalField(max_digits=5, decimal_places=2, null=True, blank=True)
    payment_amount = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)
    payment_status = models.CharField(max_length=20, choices=PAYMENT_STATUS_CHOICES, default='pending')
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.project.project_id}: {self.name}"

    def save(self, *args, **kwargs):
        if self.status == 'completed' and not self.completed_date:
            self.completed_date = timezone.localdate()
        super().save(*args, **kwargs)

    class Meta:
        db_table = 'project_milestones'
        ordering = ['due_date', 'id']
