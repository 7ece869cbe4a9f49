from django.contrib import admin
from .models import Project, Milestone


class MilestoneInline(admin.TabularInline):
    model = Milestone
    extra = 0


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ['project_id', 'title', 'customer', 'service_type', 'project_type', 'status', 'created_at']
    list_filter = ['service_type', 'project_type', 'status']
    search_fields = ['project_id', 'title', 'customer__email', 'customer__full_name']
    readonly_fields = ['project_id']
    raw_id_fields = ['customer', 'assigned_designer', 'assigned_crm']
    inlines = [MilestoneInline]
