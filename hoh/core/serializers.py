from rest_framework import serializers

from .models import User, AuditLog, SERVICE_TYPES
from .validators import SIGNUP_PHONE_REGEX, validate_email_format


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ['id', 'username', 'email', 'full_name', 'phone', 'role', 'service_type',
                  'verticals', 'admin_permissions', 'customer_id', 'street', 'city', 'state',
                  'zip_code', 'country', 'is_active', 'last_login', 'created_at', 'updated_at']
        read_only_fields = ['username', 'customer_id', 'last_login', 'created_at', 'updated_at']

    def validate_verticals(self, value):
        invalid = [v for v in value if v not in SERVICE_TYPES]
        if invalid:
            raise serializers.ValidationError(f"Invalid service types: {', '.join(invalid)}")
        return value

    def validate_admin_permissions(self, value):
        invalid = [p for p in value if p not in User.ADMIN_PERMISSIONS]
        if invalid:
            raise serializers.ValidationError(f"Invalid permissions: {', '.join(invalid)}")
        return value


class SignupSerializer(serializers.ModelSerializer):
    name = serializers.CharField(source='full_name', max_length=200)
    email = serializers.CharField()
    password = serializers.CharField(write_only=True, min_length=6)

    class Meta:
        model = User
        fields = ['name', 'email', 'phone', 'password']
        extra_kwargs = {'phone': {'required': True, 'allow_blank': False}}

    def validate_email(self, value):
        email = validate_email_format(value)
        if User.objects.filter(email=email).exists():
            raise serializers.ValidationError('User already exists with this email')
        return email

    def validate_phone(self, value):
        if not SIGNUP_PHONE_REGEX.match(value or ''):
            raise serializers.ValidationError('Please provide a valid phone number')
        return value

    def create(self, validated_data):
        password = validated_data.pop('password')
        user = User(role='user', **validated_data)
        user.set_password(password)
        user.save()
        return user


class ProfileSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ['full_name', 'phone', 'street', 'city', 'state', 'zip_code', 'country']


class ChangePasswordSerializer(serializers.Serializer):
    current_password = serializers.CharField()
    new_password = serializers.CharField(min_length=6)

    def validate_current_password(self, value):
        if not self.context['user'].check_password(value):
            raise serializers.ValidationError('Current password is incorrect')
        return value


class CustomerSerializer(serializers.ModelSerializer):
    """Customer accounts (role ``user``) managed from the admin panel"""
    email = serializers.CharField()
    password = serializers.CharField(write_only=True, required=False, min_length=6)

    class Meta:
        model = User
        fields = ['id', 'customer_id', 'full_name', 'email', 'phone', 'password', 'service_type',
                  'street', 'city', 'state', 'zip_code', 'country', 'is_active',
                  'created_at', 'updated_at']
        read_only_fields = ['customer_id', 'created_at', 'updated_at']

    def validate_email(self, value):
        email = validate_email_format(value)
        duplicates = User.objects.filter(email=email)
        if self.instance is not None:
            duplicates = duplicates.exclude(pk=self.instance.pk)
        if duplicates.exists():
            raise serializers.ValidationError('User already exists with this email')
        return email

    def create(self, validated_data):
        password = validated_data.pop('password', None)
        user = User(role='user', **validated_data)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.save()
        return user

    def update(self, instance, validated_data):
        password = validated_data.pop('password', None)
        instance = super().update(instance, validated_data)
        if password:
            instance.set_password(password)
            instance.save(update_fields=['password'])
        return instance


class UserSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ['id', 'full_name', 'email', 'role']


class AuditLogSerializer(serializers.ModelSerializer):
    user = UserSummarySerializer(read_only=True)

    class Meta:
        model = AuditLog
        fields = ['id', 'user', 'action', 'model_name', 'object_id', 'object_name',
                  'object_reference', 'changes', 'ip_address', 'created_at']


STAFF_ROLE_CHOICES = [choice for choice in User.ROLE_CHOICES if choice[0] != 'user']


class StaffUserSerializer(UserSerializer):
    """Back-office login accounts managed from the admin panel"""
    email = serializers.CharField()
    role = serializers.ChoiceField(choices=STAFF_ROLE_CHOICES)
    password = serializers.CharField(write_only=True, required=False, min_length=6, error_messages={
        'min_length': 'Password must be at least 6 characters',
    })

    class Meta(UserSerializer.Meta):
        fields = UserSerializer.Meta.fields + ['password']

    def validate_email(self, value):
        email = validate_email_format(value)
        duplicates = User.objects.filter(email=email)
        if self.instance is not None:
            duplicates = duplicates.exclude(pk=self.instance.pk)
        if duplicates.exists():
            raise serializers.ValidationError('User with this email already exists')
        return email

    def validate(self, attrs):
        if self.instance is None and not attrs.get('password'):
            raise serializers.ValidationError({'password': 'Password is required'})
        return attrs

    def create(self, validated_data):
        password = validated_data.pop('password')
        user = User(**validated_data)
        user.set_password(password)
        user.save()
        return user

    def update(self, instance, validated_data):
        # Passwords change through the dedicated endpoint only
        validated_data.pop('password', None)
        return super().update(instance, validated_data)


class UserPermissionsSerializer(serializers.Serializer):
    admin_permissions = serializers.ListField(child=serializers.CharField(), error_messages={
        'not_a_list': 'Permissions must be an array',
    })

    def validate_admin_permissions(self, value):
        invalid = [p for p in value if p not in User.ADMIN_PERMISSIONS]
        if invalid:
            raise serializers.ValidationError(f"Invalid permissions: {', '.join(invalid)}")
        return value


class SetPasswordSerializer(serializers.Serializer):
    new_password = serializers.CharField(min_length=6, error_messages={
        'required': 'New password is required',
        'min_length': 'Password must be at least 6 characters',
    })
