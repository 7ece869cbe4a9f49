from rest_framework import serializers

from hoh.core.models import User, SERVICE_TYPES
from hoh.projects.models import Project
from .models import Payment


class PaymentSerializer(serializers.ModelSerializer):
    project = serializers.PrimaryKeyRelatedField(
        queryset=Project.objects.all(),
        error_messages={'does_not_exist': 'Project not found', 'incorrect_type': 'Project not found'},
    )
    customer = serializers.PrimaryKeyRelatedField(
        queryset=User.objects.filter(role='user'),
        error_messages={'does_not_exist': 'Customer not found', 'incorrect_type': 'Customer not found'},
    )
    service_type = serializers.ChoiceField(choices=SERVICE_TYPES, required=False)
    project_code = serializers.CharField(source='project.project_id', read_only=True)
    project_title = serializers.CharField(source='project.title', read_only=True)
    customer_name = serializers.CharField(source='customer.full_name', read_only=True)
    customer_email = serializers.EmailField(source='customer.email', read_only=True)
    collected_by_name = serializers.CharField(source='collected_by.full_name', read_only=True, default=None)

    class Meta:
        model = Payment
        fields = ['id', 'payment_id', 'project', 'project_code', 'project_title',
                  'customer', 'customer_name', 'customer_email', 'service_type',
                  'amount', 'due_date', 'paid_date', 'status', 'payment_method', 'milestone',
                  'description', 'transaction_id', 'notes', 'collected_by', 'collected_by_name',
                  'created_at', 'updated_at']
        read_only_fields = ['payment_id', 'collected_by', 'created_at', 'updated_at']

    def validate_amount(self, value):
        if value < 0:
            raise serializers.ValidationError('Amount cannot be negative')
        return value

    def validate(self, attrs):
        project = attrs.get('project')
        if project is None:
            return attrs
        if attrs.get('customer') is not None and attrs['customer'].pk != project.customer_id:
            raise serializers.ValidationError({'customer': 'Customer does not match the project customer'})
        return attrs


class PaymentUpdateSerializer(PaymentSerializer):
    """Partial update limited to the fields staff may change after creation"""
    project = serializers.PrimaryKeyRelatedField(read_only=True)
    customer = serializers.PrimaryKeyRelatedField(read_only=True)
    service_type = serializers.CharField(read_only=True)


class MarkPaidSerializer(serializers.Serializer):
    paid_date = serializers.DateTimeField(required=False)
    transaction_id = serializers.CharField(required=False, allow_blank=True, max_length=100)
    payment_method = serializers.ChoiceField(choices=Payment.METHOD_CHOICES, required=False)
    notes = serializers.CharField(required=False, allow_blank=True)
