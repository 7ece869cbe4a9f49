from rest_framework import serializers

from hoh.core.validators import validate_email_format
from .models import Lead, LeadHistory


class LeadHistorySerializer(serializers.ModelSerializer):
    class Meta:
        model = LeadHistory
        fields = ['id', 'action', 'description', 'changed_by', 'changed_by_name', 'changes', 'timestamp']


class LeadSerializer(serializers.ModelSerializer):
    history = LeadHistorySerializer(many=True, read_only=True)

    class Meta:
        model = Lead
        fields = ['id', 'name', 'email', 'phone', 'city', 'carpet_area', 'bhk', 'package',
                  'estimated_cost', 'service_type', 'lead_type', 'status', 'source',
                  'budget_range', 'start_timeline', 'work_type', 'selected_spaces',
                  'project_type', 'plot_area', 'floors', 'notes', 'date',
                  'last_modified_by', 'history', 'created_at', 'updated_at']
        read_only_fields = fields


class LeadListSerializer(serializers.ModelSerializer):
    class Meta:
        model = Lead
        fields = ['id', 'name', 'email', 'phone', 'city', 'carpet_area', 'bhk', 'package',
                  'estimated_cost', 'service_type', 'lead_type', 'status', 'date', 'created_at']


class _LeadAmountsMixin:
    def validate_email(self, value):
        return validate_email_format(value)

    def validate_carpet_area(self, value):
        if value is not None and value <= 0:
            raise serializers.ValidationError('Carpet area must be greater than 0')
        return value

    def validate_estimated_cost(self, value):
        if value is not None and value < 0:
            raise serializers.ValidationError('Estimated cost cannot be negative')
        return value


class LeadCreateSerializer(_LeadAmountsMixin, serializers.ModelSerializer):
    """Public lead capture: name and email are required, the rest is optional"""
    email = serializers.CharField()

    class Meta:
        model = Lead
        fields = ['id', 'name', 'email', 'phone', 'city', 'carpet_area', 'bhk', 'package',
                  'estimated_cost', 'service_type', 'lead_type', 'budget_range',
                  'start_timeline', 'notes', 'status', 'created_at']
        read_only_fields = ['id', 'status', 'created_at']
        extra_kwargs = {
            'name': {'error_messages': {'required': 'Name is required', 'blank': 'Name is required'}},
        }


class LeadUpdateSerializer(_LeadAmountsMixin, serializers.ModelSerializer):
    """Fields an admin may edit; every change is recorded in the lead history"""
    TRACKED_FIELDS = ['name', 'email', 'city', 'carpet_area', 'estimated_cost', 'status', 'notes']

    email = serializers.CharField(required=False)

    class Meta:
        model = Lead
        fields = ['name', 'email', 'city', 'carpet_area', 'estimated_cost', 'status', 'notes']
