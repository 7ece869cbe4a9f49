from rest_framework import serializers

from hoh.core.access import BACK_OFFICE_ROLES
from hoh.core.models import User
from hoh.core.validators import is_valid_email, is_valid_phone
from .models import RenovationService, RenovationBooking, BookingTimelineEntry


class RenovationServiceSerializer(serializers.ModelSerializer):
    class Meta:
        model = RenovationService
        fields = ['id', 'service_id', 'title', 'description', 'category', 'image_url', 'images',
                  'pricing_type', 'base_price', 'min_price', 'max_price',
                  'duration_min', 'duration_max', 'duration_unit',
                  'features', 'included_services', 'excluded_services',
                  'popular', 'active', 'total_bookings', 'rating_average', 'rating_count',
                  'created_at', 'updated_at']
        read_only_fields = ['service_id', 'total_bookings', 'rating_average', 'rating_count',
                            'created_at', 'updated_at']

    def validate(self, attrs):
        def current(field):
            return attrs.get(field, getattr(self.instance, field, None))

        duration_min, duration_max = current('duration_min'), current('duration_max')
        if duration_min is not None and duration_max is not None and duration_max < duration_min:
            raise serializers.ValidationError({'duration_max': 'Maximum duration cannot be less than minimum duration'})
        min_price, max_price = current('min_price'), current('max_price')
        if min_price is not None and max_price is not None and max_price < min_price:
            raise serializers.ValidationError({'max_price': 'Maximum price cannot be less than minimum price'})
        return attrs


class ServiceSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = RenovationService
        fields = ['id', 'service_id', 'title', 'category', 'image_url', 'pricing_type', 'base_price']


class BookingTimelineEntrySerializer(serializers.ModelSerializer):
    updated_by_name = serializers.CharField(source='updated_by.full_name', read_only=True, default=None)

    class Meta:
        model = BookingTimelineEntry
        fields = ['status', 'date', 'notes', 'updated_by', 'updated_by_name']


class BookingCreateSerializer(serializers.ModelSerializer):
    """Public booking form; the service is resolved by the view"""

    class Meta:
        model = RenovationBooking
        fields = ['customer_name', 'customer_email', 'customer_phone',
                  'street', 'city', 'state', 'pincode',
                  'property_type', 'area', 'area_unit', 'floors', 'rooms', 'current_condition',
                  'requirement_description', 'budget_min', 'budget_max', 'preferred_start_date',
                  'urgency', 'specific_requirements', 'source']

    def validate_customer_email(self, value):
        if not is_valid_email(value):
            raise serializers.ValidationError('Invalid email format')
        return value.strip().lower()

    def validate_customer_phone(self, value):
        if not is_valid_phone(value):
            raise serializers.ValidationError('Please enter a valid phone number')
        return value.strip()

    def validate_area(self, value):
        if value <= 0:
            raise serializers.ValidationError('Area must be greater than 0')
        return value

    def validate(self, attrs):
        budget_min, budget_max = attrs.get('budget_min'), attrs.get('budget_max')
        if budget_min is not None and budget_max is not None and budget_max < budget_min:
            raise serializers.ValidationError({'budget_max': 'Maximum budget cannot be less than minimum budget'})
        return attrs


class BookingTrackSerializer(serializers.ModelSerializer):
    """Limited view of a booking for the customer tracking page"""
    service = ServiceSummarySerializer(read_only=True)
    timeline = BookingTimelineEntrySerializer(many=True, read_only=True)

    class Meta:
        model = RenovationBooking
        fields = ['booking_id', 'service', 'customer_name', 'status', 'scheduled_date',
                  'completion_date', 'actual_completion_date', 'quotation_amount',
                  'quotation_valid_until', 'timeline', 'created_at']


class RenovationBookingSerializer(serializers.ModelSerializer):
    service_detail = ServiceSummarySerializer(source='service', read_only=True)
    timeline = BookingTimelineEntrySerializer(many=True, read_only=True)
    assigned_to_name = serializers.CharField(source='assigned_to.full_name', read_only=True, default=None)

    class Meta:
        model = RenovationBooking
        fields = ['id', 'booking_id', 'service', 'service_detail',
                  'customer_name', 'customer_email', 'customer_phone',
                  'street', 'city', 'state', 'pincode',
                  'property_type', 'area', 'area_unit', 'floors', 'rooms', 'current_condition',
                  'requirement_description', 'budget_min', 'budget_max', 'preferred_start_date',
                  'urgency', 'specific_requirements', 'estimated_cost',
                  'quotation_amount', 'quotation_breakdown', 'quotation_valid_until', 'quotation_notes',
                  'status', 'assigned_to', 'assigned_to_name',
                  'scheduled_date', 'completion_date', 'actual_completion_date',
                  'notes', 'internal_notes', 'priority', 'source', 'timeline',
                  'created_at', 'updated_at']
        read_only_fields = ['booking_id', 'service', 'assigned_to', 'actual_completion_date',
                            'created_at', 'updated_at']

    def validate_customer_email(self, value):
        if not is_valid_email(value):
            raise serializers.ValidationError('Invalid email format')
        return value.strip().lower()

    def validate_estimated_cost(self, value):
        if value < 0:
            raise serializers.ValidationError('Estimated cost cannot be negative')
        return value


class BookingStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=RenovationBooking.STATUS_CHOICES)
    notes = serializers.CharField(required=False, allow_blank=True, default='')


class BookingAssignSerializer(serializers.Serializer):
    assigned_to = serializers.PrimaryKeyRelatedField(
        queryset=User.objects.filter(role__in=BACK_OFFICE_ROLES, is_active=True),
        allow_null=True,
        error_messages={'does_not_exist': 'Team member not found', 'incorrect_type': 'Team member not found'},
    )


class QuotationItemSerializer(serializers.Serializer):
    item = serializers.CharField(max_length=200)
    cost = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)


class QuotationSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    breakdown = QuotationItemSerializer(many=True, required=False, default=list)
    valid_until = serializers.DateField(required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, default='')
