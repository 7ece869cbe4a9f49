from django.contrib import admin
from .models import Payment


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ['payment_id', 'project', 'customer', 'milestone', 'amount', 'status', 'due_date', 'paid_date']
    list_filter = ['status', 'milestone', 'payment_method', 'service_type']
    search_fields = ['payment_id', 'transaction_id', 'project__project_id', 'customer__email']
    readonly_fields = ['payment_id']
    raw_id_fields = ['project', 'customer', 'collected_by']
    date_hierarchy = 'due_date'
