from rest_framework import serializers

from hoh.core.models import User, SERVICE_TYPES
from hoh.core.validators import validate_email_format
from .models import Employee

DEPARTMENTS = [value for value, _ in Employee.DEPARTMENT_CHOICES]


class EmployeeSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Employee
        fields = ['id', 'employee_id', 'full_name', 'email', 'phone', 'role', 'portfolio']


class EmployeeSerializer(serializers.ModelSerializer):
    email = serializers.CharField()
    department = serializers.CharField(required=False, allow_blank=True)
    service_type = serializers.ChoiceField(choices=SERVICE_TYPES, required=False)
    assigned_projects = serializers.SerializerMethodField()

    class Meta:
        model = Employee
        fields = ['id', 'employee_id', 'full_name', 'email', 'phone', 'role', 'department',
                  'service_type', 'status', 'joining_date', 'salary', 'street', 'city', 'state',
                  'pincode', 'country', 'specialization', 'bio', 'portfolio',
                  'assigned_projects', 'created_at', 'updated_at']
        read_only_fields = ['created_at', 'updated_at']

    def get_assigned_projects(self, obj):
        projects = list(obj.designer_projects.all()) + list(obj.crm_projects.all())
        return [
            {'id': p.id, 'project_id': p.project_id, 'title': p.title, 'status': p.status}
            for p in sorted(projects, key=lambda p: p.created_at, reverse=True)
        ]

    def validate_email(self, value):
        email = validate_email_format(value)
        duplicates = Employee.objects.filter(email=email)
        if self.instance is not None:
            duplicates = duplicates.exclude(pk=self.instance.pk)
        if duplicates.exists():
            raise serializers.ValidationError('Employee with this email already exists')
        if self.instance is not None and email != self.instance.email:
            if User.objects.filter(email=email).exists():
                raise serializers.ValidationError('User with this email already exists')
        return email

    def validate_portfolio(self, value):
        if not isinstance(value, list) or not all(isinstance(link, str) for link in value):
            raise serializers.ValidationError('Portfolio must be a list of links')
        return value

    def validate_salary(self, value):
        if value is not None and value < 0:
            raise serializers.ValidationError('Salary cannot be negative')
        return value

    def validate(self, attrs):
        role = attrs.get('role') or getattr(self.instance, 'role', None)
        if 'department' in attrs or self.instance is None:
            department = (attrs.get('department') or '').strip().lower()
            if department not in DEPARTMENTS:
                department = Employee.department_for_role(role)
            attrs['department'] = department
        return attrs


class EmployeeCreateSerializer(EmployeeSerializer):
    password = serializers.CharField(write_only=True, min_length=6, error_messages={
        'required': 'Password is required and must be at least 6 characters',
        'blank': 'Password is required and must be at least 6 characters',
        'min_length': 'Password is required and must be at least 6 characters',
    })

    class Meta(EmployeeSerializer.Meta):
        fields = EmployeeSerializer.Meta.fields + ['password']

    def validate_email(self, value):
        email = super().validate_email(value)
        if User.objects.filter(email=email).exists():
            raise serializers.ValidationError('User with this email already exists')
        return email

    def create(self, validated_data):
        validated_data.pop('password', None)
        return super().create(validated_data)


class EmployeePasswordSerializer(serializers.Serializer):
    new_password = serializers.CharField(min_length=6, error_messages={
        'required': 'Password must be at least 6 characters',
        'min_length': 'Password must be at least 6 characters',
    })
