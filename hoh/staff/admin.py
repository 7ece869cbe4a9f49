from django.contrib import admin
from .models import Employee


@admin.register(Employee)
class EmployeeAdmin(admin.ModelAdmin):
    list_display = ['employee_id', 'full_name', 'email', 'role', 'department', 'service_type', 'status', 'joining_date']
    list_filter = ['role', 'department', 'service_type', 'status']
    search_fields = ['employee_id', 'full_name', 'email', 'phone']
    ordering = ['-created_at']
