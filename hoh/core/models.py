from django.contrib.auth.models import AbstractUser
from django.db import models


SERVICE_TYPE_CHOICES = [
    ('interior', 'Interior'),
    ('construction', 'Construction'),
    ('renovation', 'Renovation'),
    ('on_demand', 'On Demand'),
]
SERVICE_TYPES = [value for value, _ in SERVICE_TYPE_CHOICES]


class User(AbstractUser):
    """Customer and back-office account. Logs in with email."""
    ROLE_CHOICES = [
        ('user', 'Customer'),
        ('super_admin', 'Super Admin'),
        ('admin', 'Admin'),
        ('interior_admin', 'Interior Admin'),
        ('construction_admin', 'Construction Admin'),
        ('renovation_admin', 'Renovation Admin'),
        ('on_demand_admin', 'On Demand Admin'),
        ('manager', 'Manager'),
        ('designer', 'Designer'),
        ('crm', 'CRM'),
    ]

    # Granted individually to non-admin staff; admin roles hold all of them
    ADMIN_PERMISSIONS = [
        'view_users', 'create_users', 'edit_users', 'delete_users',
        'view_employees', 'create_employees', 'edit_employees', 'delete_employees',
        'view_customers', 'create_customers', 'edit_customers', 'delete_customers',
        'view_projects', 'create_projects', 'edit_projects', 'delete_projects',
        'view_designs', 'create_designs', 'edit_designs', 'delete_designs', 'approve_designs',
        'view_dashboard', 'manage_roles', 'manage_permissions',
    ]

    full_name = models.CharField(max_length=200, blank=True)
    email = models.EmailField(unique=True)
    phone = models.CharField(max_length=20, blank=True, null=True)
    role = models.CharField(max_length=30, choices=ROLE_CHOICES, default='user')
    service_type = models.CharField(max_length=20, choices=SERVICE_TYPE_CHOICES, default='interior')
    verticals = models.JSONField(default=list, blank=True)
    admin_permissions = models.JSONField(default=list, blank=True)
    customer_id = models.CharField(max_length=20, unique=True, blank=True, null=True)
    street = models.CharField(max_length=255, blank=True)
    city = models.CharField(max_length=100, blank=True)
    state = models.CharField(max_length=100, blank=True)
    zip_code = models.CharField(max_length=20, blank=True)
    country = models.CharField(max_length=100, default='India')
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['username']

    def save(self, *args, **kwargs):
        if self.email:
            self.email = self.email.strip().lower()
        if not self.username:
            self.username = self.email
        if self.is_superuser and self.role == 'user':
            self.role = 'super_admin'
        if self.role == 'user' and not self.customer_id:
            from .utils import next_sequential_id
            self.customer_id = next_sequential_id(User, 'customer_id', 'CUS', 6, role='user')
        super().save(*args, **kwargs)

    def __str__(self):
        return self.full_name or self.email

    def get_accessible_verticals(self):
        """Service types this account may read and write."""
        from .access import get_user_service_types
        return get_user_service_types(self)

    def has_vertical_access(self, vertical):
        return vertical in self.get_accessible_verticals()

    class Meta:
        db_table = 'users'


class AuditLog(models.Model):
    """Audit log for admin operations"""
    ACTION_CHOICES = [
        ('create', 'Create'),
        ('update', 'Update'),
        ('delete', 'Delete'),
        ('status_change', 'Status Change'),
        ('assign', 'Assign'),
        ('password_change', 'Password Change'),
        ('payment_received', 'Payment Received'),
        ('quotation_sent', 'Quotation Sent'),
    ]

    user = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, related_name='audit_logs')
    action = models.CharField(max_length=50, choices=ACTION_CHOICES)
    model_name = models.CharField(max_length=100)
    object_id = models.CharField(max_length=100)
    object_name = models.CharField(max_length=255, blank=True, null=True, help_text="Human-readable name of the object (e.g., lead name, project title)")
    object_reference = models.CharField(max_length=255, blank=True, null=True, help_text="Reference identifier (e.g., project ID, payment ID, booking ID)")
    changes = models.JSONField(default=dict, blank=True)
    ip_address = models.GenericIPAddressField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'audit_logs'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['-created_at'], name='audit_logs_created_4d0a1e_idx'),
            models.Index(fields=['action'], name='audit_logs_action_8c5b7f_idx'),
            models.Index(fields=['model_name'], name='audit_logs_model_n_2e9c41_idx'),
            models.Index(fields=['object_reference'], name='audit_logs_object__7f3a92_idx'),
        ]
