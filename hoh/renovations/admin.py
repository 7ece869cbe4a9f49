from django.contrib import admin
from .models import RenovationService, RenovationBooking, BookingTimelineEntry


@admin.register(RenovationService)
class RenovationServiceAdmin(admin.ModelAdmin):
    list_display = ['service_id', 'title', 'category', 'pricing_type', 'base_price', 'popular', 'active', 'total_bookings']
    list_filter = ['category', 'pricing_type', 'popular', 'active']
    search_fields = ['service_id', 'title', 'description']
    readonly_fields = ['service_id', 'total_bookings']


class BookingTimelineEntryInline(admin.TabularInline):
    model = BookingTimelineEntry
    extra = 0
    readonly_fields = ['status', 'date', 'notes', 'updated_by']


@admin.register(RenovationBooking)
class RenovationBookingAdmin(admin.ModelAdmin):
    list_display = ['booking_id', 'service', 'customer_name', 'customer_phone', 'status', 'priority', 'created_at']
    list_filter = ['status', 'priority', 'property_type', 'source']
    search_fields = ['booking_id', 'customer_name', 'customer_email', 'customer_phone']
    readonly_fields = ['booking_id']
    raw_id_fields = ['service', 'assigned_to']
    inlines = [BookingTimelineEntryInline]
