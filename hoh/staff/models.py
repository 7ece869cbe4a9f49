from django.db import models
from django.utils import timezone

from hoh.core.models import SERVICE_TYPE_CHOICES


class Employee(models.Model):
    """Back-office staff member; the login account shares the email address"""
    ROLE_CHOICES = [
        ('designer', 'Designer'),
        ('crm', 'CRM'),
        ('manager', 'Manager'),
        ('sales', 'Sales'),
        ('support', 'Support'),
    ]

    DEPARTMENT_CHOICES = [
        ('design', 'Design'),
        ('sales', 'Sales'),
        ('support', 'Support'),
        ('management', 'Management'),
    ]

    STATUS_CHOICES = [
        ('active', 'Active'),
        ('inactive', 'Inactive'),
        ('on-leave', 'On Leave'),
    ]

    ROLE_DEPARTMENTS = {
        'designer': 'design',
        'crm': 'sales',
        'sales': 'sales',
        'support': 'support',
        'manager': 'management',
    }

    # User roles for the login account; sales and support staff work leads like CRMs
    LOGIN_ROLES = {
        'designer': 'designer',
        'crm': 'crm',
        'manager': 'manager',
        'sales': 'crm',
        'support': 'crm',
    }

    employee_id = models.CharField(max_length=50, unique=True)
    full_name = models.CharField(max_length=200)
    email = models.EmailField(unique=True)
    phone = models.CharField(max_length=20)
    role = models.CharField(max_length=20, choices=ROLE_CHOICES)
    department = models.CharField(max_length=20, choices=DEPARTMENT_CHOICES)
    service_type = models.CharField(max_length=20, choices=SERVICE_TYPE_CHOICES, default='interior')
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='active')
    joining_date = models.DateField(default=timezone.localdate)
    salary = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    street = models.CharField(max_length=255, blank=True)
    city = models.CharField(max_length=100, blank=True)
    state = models.CharField(max_length=100, blank=True)
    pincode = models.CharField(max_length=20, blank=True)
    country = models.CharField(max_length=100, default='India')
    specialization = models.CharField(max_length=200, blank=True)
    bio = models.TextField(blank=True)
    portfolio = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.full_name} ({self.employee_id})"

    def save(self, *args, **kwargs):
        if self.email:
            self.email = self.email.strip().lower()
        super().save(*args, **kwargs)

    @classmethod
    def department_for_role(cls, role):
        return cls.ROLE_DEPARTMENTS.get(role, 'design')

    class Meta:
        db_table = 'employees'
        ordering = ['-created_at']
