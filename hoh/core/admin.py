from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models import User, AuditLog


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ['email', 'full_name', 'role', 'service_type', 'customer_id', 'is_active', 'date_joined']
    list_filter = ['role', 'service_type', 'is_active', 'is_superuser', 'date_joined']
    search_fields = ['email', 'full_name', 'phone', 'customer_id']
    ordering = ['email']
    fieldsets = BaseUserAdmin.fieldsets + (
        ('Business', {'fields': ('full_name', 'phone', 'role', 'service_type', 'verticals', 'admin_permissions', 'customer_id')}),
        ('Address', {'fields': ('street', 'city', 'state', 'zip_code', 'country')}),
    )
    add_fieldsets = BaseUserAdmin.add_fieldsets + (
        ('Business', {'fields': ('email', 'full_name', 'phone', 'role', 'service_type')}),
    )
    readonly_fields = ['customer_id']


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    list_display = ['user', 'action', 'model_name', 'object_id', 'object_reference', 'ip_address', 'created_at']
    list_filter = ['action', 'model_name', 'created_at']
    search_fields = ['user__email', 'model_name', 'object_id', 'object_reference']
    ordering = ['-created_at']
    readonly_fields = ['user', 'action', 'model_name', 'object_id', 'changes', 'ip_address', 'created_at']
