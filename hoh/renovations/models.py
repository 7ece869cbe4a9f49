from django.db import models
from django.utils import timezone

from hoh.core.models import User


class RenovationService(models.Model):
    """Renovation package offered on the public site"""
    CATEGORY_CHOICES = [
        ('Kitchen Renovation', 'Kitchen Renovation'),
        ('Bathroom Renovation', 'Bathroom Renovation'),
        ('Living Room Renovation', 'Living Room Renovation'),
        ('Bedroom Renovation', 'Bedroom Renovation'),
        ('Full Home Renovation', 'Full Home Renovation'),
        ('Office Renovation', 'Office Renovation'),
        ('Exterior Renovation', 'Exterior Renovation'),
        ('Other', 'Other'),
    ]

    PRICING_TYPE_CHOICES = [
        ('fixed', 'Fixed'),
        ('per_sqft', 'Per Sq. Ft.'),
        ('custom', 'Custom'),
    ]

    DURATION_UNIT_CHOICES = [
        ('days', 'Days'),
        ('weeks', 'Weeks'),
        ('months', 'Months'),
    ]

    service_id = models.CharField(max_length=20, unique=True, editable=False)
    title = models.CharField(max_length=200)
    description = models.TextField()
    category = models.CharField(max_length=40, choices=CATEGORY_CHOICES)
    image_url = models.URLField(max_length=500)
    images = models.JSONField(default=list, blank=True)
    pricing_type = models.CharField(max_length=20, choices=PRICING_TYPE_CHOICES, default='custom')
    base_price = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    min_price = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    max_price = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    duration_min = models.PositiveIntegerField()
    duration_max = models.PositiveIntegerField()
    duration_unit = models.CharField(max_length=10, choices=DURATION_UNIT_CHOICES, default='days')
    features = models.JSONField(default=list, blank=True)
    included_services = models.JSONField(default=list, blank=True)
    excluded_services = models.JSONField(default=list, blank=True)
    popular = models.BooleanField(default=False)
    active = models.BooleanField(default=True)
    total_bookings = models.PositiveIntegerField(default=0)
    rating_average = models.DecimalField(max_digits=3, decimal_places=2, default=0)
    rating_count = models.PositiveIntegerField(default=0)
    created_by = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True, related_name='renovation_services_created')
    last_modified_by = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True, related_name='+')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.service_id} - {self.title}"

    def save(self, *args, **kwargs):
        if not self.service_id:
            from hoh.core.utils import next_sequential_id
            self.service_id = next_sequential_id(RenovationService, 'service_id', 'REN-SVC-', 4)
        super().save(*args, **kwargs)

    class Meta:
        db_table = 'renovation_services'
        ordering = ['-popular', '-total_bookings', '-created_at']
        indexes = [
            models.Index(fields=['category'], name='renov_svc_category_idx'),
            models.Index(fields=['active', 'popular'], name='renov_svc_active_pop_idx'),
        ]


class RenovationBooking(models.Model):
    """Customer request for a renovation service, worked through to completion"""
    PROPERTY_TYPE_CHOICES = [
        ('Residential', 'Residential'),
        ('Commercial', 'Commercial'),
        ('Industrial', 'Industrial'),
    ]

    AREA_UNIT_CHOICES = [
        ('sqft', 'Sq. Ft.'),
        ('sqm', 'Sq. M.'),
    ]

    CONDITION_CHOICES = [
        ('Excellent', 'Excellent'),
        ('Good', 'Good'),
        ('Average', 'Average'),
        ('Poor', 'Poor'),
        ('Very Poor', 'Very Poor'),
    ]

    URGENCY_CHOICES = [
        ('Immediate', 'Immediate'),
        ('Within 1 Month', 'Within 1 Month'),
        ('Within 3 Months', 'Within 3 Months'),
        ('Flexible', 'Flexible'),
    ]

    STATUS_CHOICES = [
        ('pending', 'Pending'),
        ('quote_requested', 'Quote Requested'),
        ('quote_sent', 'Quote Sent'),
        ('quote_approved', 'Quote Approved'),
        ('scheduled', 'Scheduled'),
        ('in_progress', 'In Progress'),
        ('inspection', 'Inspection'),
        ('completed', 'Completed'),
        ('cancelled', 'Cancelled'),
        ('on_hold', 'On Hold'),
    ]

    PRIORITY_CHOICES = [
        ('Low', 'Low'),
        ('Medium', 'Medium'),
        ('High', 'High'),
        ('Urgent', 'Urgent'),
    ]

    SOURCE_CHOICES = [
        ('Website', 'Website'),
        ('Mobile App', 'Mobile App'),
        ('Phone', 'Phone'),
        ('Walk-in', 'Walk-in'),
        ('Referral', 'Referral'),
        ('Other', 'Other'),
    ]

    booking_id = models.CharField(max_length=20, unique=True, editable=False)
    service = models.ForeignKey(RenovationService, on_delete=models.PROTECT, related_name='bookings')
    customer_name = models.CharField(max_length=200)
    customer_email = models.EmailField()
    customer_phone = models.CharField(max_length=20)
    street = models.CharField(max_length=255, blank=True)
    city = models.CharField(max_length=100, blank=True)
    state = models.CharField(max_length=100, blank=True)
    pincode = models.CharField(max_length=20, blank=True)
    property_type = models.CharField(max_length=20, choices=PROPERTY_TYPE_CHOICES)
    area = models.DecimalField(max_digits=10, decimal_places=2)
    area_unit = models.CharField(max_length=10, choices=AREA_UNIT_CHOICES, default='sqft')
    floors = models.PositiveIntegerField(null=True, blank=True)
    rooms = models.PositiveIntegerField(null=True, blank=True)
    current_condition = models.CharField(max_length=20, choices=CONDITION_CHOICES, blank=True)
    requirement_description = models.TextField()
    budget_min = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    budget_max = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    preferred_start_date = models.DateField(null=True, blank=True)
    urgency = models.CharField(max_length=20, choices=URGENCY_CHOICES, default='Flexible')
    specific_requirements = models.JSONField(default=list, blank=True)
    estimated_cost = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    quotation_amount = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    quotation_breakdown = models.JSONField(default=list, blank=True)
    quotation_valid_until = models.DateField(null=True, blank=True)
    quotation_notes = models.TextField(blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='pending')
    assigned_to = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True, related_name='assigned_renovation_bookings')
    scheduled_date = models.DateField(null=True, blank=True)
    completion_date = models.DateField(null=True, blank=True)
    actual_completion_date = models.DateTimeField(null=True, blank=True)
    notes = models.TextField(blank=True)
    internal_notes = models.TextField(blank=True)
    priority = models.CharField(max_length=10, choices=PRIORITY_CHOICES, default='Medium')
    source = models.CharField(max_length=20, choices=SOURCE_CHOICES, default='Website')
    created_by = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True, related_name='+')
    last_modified_by = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True, related_name='+')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.booking_id} - {self.customer_name}"

    @classmethod
    def from_db(cls, db, field_names, values):
        instance = super().from_db(db, field_names, values)
        instance._loaded_status = getattr(instance, 'status', None)
        return instance

    def save(self, *args, timeline_notes='', **kwargs):
        """Save the booking, appending a timeline entry when the status changed"""
        if not self.booking_id:
            from hoh.core.utils import next_sequential_id
            self.booking_id = next_sequential_id(RenovationBooking, 'booking_id', 'REN-BK-', 5)
        if self.customer_email:
            self.customer_email = self.customer_email.strip().lower()
        if self.status == 'completed' and not self.actual_completion_date:
            self.actual_completion_date = timezone.now()

        status_changed = self._state.adding or getattr(self, '_loaded_status', None) != self.status
        super().save(*args, **kwargs)

        if status_changed:
            self.timeline.create(
                status=self.status,
                notes=timeline_notes,
                updated_by=self.last_modified_by,
            )
            self._loaded_status = self.status

    class Meta:
        db_table = 'renovation_bookings'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status'], name='renov_bk_status_idx'),
            models.Index(fields=['priority'], name='renov_bk_priority_idx'),
        ]


class BookingTimelineEntry(models.Model):
    booking = models.ForeignKey(RenovationBooking, on_delete=models.CASCADE, related_name='timeline')
    status = models.CharField(max_length=20, choices=RenovationBooking.STATUS_CHOICES)
    date = models.DateTimeField(default=timezone.now)
    notes = models.TextField(blank=True)
    updated_by = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True, related_name='+')

    def __str__(self):
        return f"{self.booking.booking_id}: {self.status}"

    class Meta:
        db_table = 'renovation_booking_timeline'
        ordering = ['date', 'id']
