from django.contrib import admin
from .models import Lead, LeadHistory


class LeadHistoryInline(admin.TabularInline):
    model = LeadHistory
    extra = 0
    readonly_fields = ['action', 'description', 'changed_by', 'changed_by_name', 'changes', 'timestamp']


@admin.register(Lead)
class LeadAdmin(admin.ModelAdmin):
    list_display = ['name', 'email', 'phone', 'city', 'service_type', 'lead_type', 'status', 'estimated_cost', 'created_at']
    list_filter = ['service_type', 'lead_type', 'status', 'created_at']
    search_fields = ['name', 'email', 'phone', 'city']
    ordering = ['-created_at']
    inlines = [LeadHistoryInline]
