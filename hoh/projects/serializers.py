from rest_framework import serializers

from hoh.core.models import User, SERVICE_TYPES
from hoh.staff.models import Employee
from .models import Project, Milestone


class ProjectCustomerSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ['id', 'customer_id', 'full_name', 'email', 'phone']


class AssignedEmployeeSerializer(serializers.ModelSerializer):
    class Meta:
        model = Employee
        fields = ['id', 'employee_id', 'full_name', 'email', 'phone', 'specialization']


class MilestoneSerializer(serializers.ModelSerializer):
    class Meta:
        model = Milestone
        fields = ['id', 'name', 'description', 'status', 'due_date', 'completed_date',
                  'payment_percentage', 'payment_amount', 'payment_status', 'created_at']
        read_only_fields = ['created_at']

    def validate_payment_percentage(self, value):
        if value is not None and not 0 <= value <= 100:
            raise serializers.ValidationError('Payment percentage must be between 0 and 100')
        return value


class ProjectSerializer(serializers.ModelSerializer):
    customer = serializers.PrimaryKeyRelatedField(
        queryset=User.objects.filter(role='user'),
        error_messages={'does_not_exist': 'Customer not found', 'incorrect_type': 'Customer not found'},
    )
    assigned_designer = serializers.PrimaryKeyRelatedField(
        queryset=Employee.objects.filter(role='designer'),
        required=False, allow_null=True,
        error_messages={'does_not_exist': 'Invalid designer ID', 'incorrect_type': 'Invalid designer ID'},
    )
    assigned_crm = serializers.PrimaryKeyRelatedField(
        queryset=Employee.objects.filter(role='crm'),
        required=False, allow_null=True,
        error_messages={'does_not_exist': 'Invalid CRM ID', 'incorrect_type': 'Invalid CRM ID'},
    )
    service_type = serializers.ChoiceField(choices=SERVICE_TYPES, required=False)
    customer_detail = ProjectCustomerSerializer(source='customer', read_only=True)
    designer_detail = AssignedEmployeeSerializer(source='assigned_designer', read_only=True)
    crm_detail = AssignedEmployeeSerializer(source='assigned_crm', read_only=True)
    milestones = MilestoneSerializer(many=True, read_only=True)

    class Meta:
        model = Project
        fields = ['id', 'project_id', 'title', 'description', 'customer', 'customer_detail',
                  'assigned_designer', 'designer_detail', 'assigned_crm', 'crm_detail',
                  'service_type', 'project_type', 'room_types', 'carpet_area',
                  'budget_estimated', 'budget_actual', 'budget_currency',
                  'address', 'city', 'state', 'pincode',
                  'start_date', 'expected_end_date', 'actual_end_date',
                  'status', 'notes', 'milestones', 'created_at', 'updated_at']
        read_only_fields = ['project_id', 'created_at', 'updated_at']

    def validate_carpet_area(self, value):
        if value <= 0:
            raise serializers.ValidationError('Carpet area must be greater than 0')
        return value

    def validate_room_types(self, value):
        if not isinstance(value, list):
            raise serializers.ValidationError('Room types must be a list')
        return value

    def validate(self, attrs):
        start = attrs.get('start_date', getattr(self.instance, 'start_date', None))
        expected_end = attrs.get('expected_end_date', getattr(self.instance, 'expected_end_date', None))
        if start and expected_end and expected_end < start:
            raise serializers.ValidationError({'expected_end_date': 'Expected end date cannot be before the start date'})
        return attrs


class ProjectListSerializer(serializers.ModelSerializer):
    customer = ProjectCustomerSerializer(read_only=True)
    assigned_designer = AssignedEmployeeSerializer(read_only=True)
    assigned_crm = AssignedEmployeeSerializer(read_only=True)

    class Meta:
        model = Project
        fields = ['id', 'project_id', 'title', 'customer', 'assigned_designer', 'assigned_crm',
                  'service_type', 'project_type', 'carpet_area', 'budget_estimated', 'status',
                  'expected_end_date', 'created_at']
