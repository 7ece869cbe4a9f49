from rest_framework import serializers

from hoh.core.validators import validate_email_format, validate_mobile_number
from .pricing import (
    PACKAGE_PRICES, PACKAGE_DESCRIPTIONS, INTERIOR_BHK_OPTIONS, SIZE_OPTIONS, INTERIOR_RATES,
    WORK_TYPES, SPACE_ALLOCATION, PROJECT_TYPES, FLOOR_MULTIPLIERS,
)

PACKAGE_BHK_OPTIONS = list(PACKAGE_PRICES)
PACKAGE_OPTIONS = list(PACKAGE_DESCRIPTIONS)


def _required(message):
    return {'required': message, 'blank': message, 'null': message}


class PackageEstimateSerializer(serializers.Serializer):
    """The BHK x package cost-estimate form"""
    bhk = serializers.ChoiceField(choices=PACKAGE_BHK_OPTIONS, error_messages={
        **_required('Please select BHK configuration'),
        'invalid_choice': 'Please select BHK configuration',
    })
    package = serializers.ChoiceField(choices=PACKAGE_OPTIONS, error_messages={
        **_required('Please select a package'),
        'invalid_choice': 'Please select a package',
    })
    name = serializers.CharField(max_length=200, error_messages=_required('Name is required'))
    email = serializers.CharField(error_messages=_required('Email is required'))
    phone = serializers.CharField(max_length=30, error_messages=_required('Phone number is required'))

    def validate_email(self, value):
        return validate_email_format(value)

    def validate_phone(self, value):
        return validate_mobile_number(value)

    def validate(self, attrs):
        if attrs['package'] not in PACKAGE_PRICES[attrs['bhk']]:
            raise serializers.ValidationError({
                'package': f"{attrs['package']} package is not available for {attrs['bhk']}"
            })
        return attrs


class InteriorEstimateSerializer(serializers.Serializer):
    work_type = serializers.ChoiceField(choices=WORK_TYPES, default='full')
    bhk = serializers.ChoiceField(choices=INTERIOR_BHK_OPTIONS)
    size = serializers.ChoiceField(choices=SIZE_OPTIONS)
    custom_carpet_area = serializers.DecimalField(max_digits=10, decimal_places=2, required=False, allow_null=True)
    selected_spaces = serializers.ListField(
        child=serializers.ChoiceField(choices=list(SPACE_ALLOCATION)), required=False, default=list
    )
    category = serializers.ChoiceField(choices=list(INTERIOR_RATES))


class ConstructionEstimateSerializer(serializers.Serializer):
    project_type = serializers.ChoiceField(choices=PROJECT_TYPES)
    plot_area = serializers.DecimalField(max_digits=10, decimal_places=2)
    floors = serializers.ChoiceField(choices=list(FLOOR_MULTIPLIERS))
    category = serializers.CharField()


class WizardRequestSerializer(serializers.Serializer):
    ACTIONS = ['next', 'back', 'reset', 'toggle_space']

    step = serializers.IntegerField(min_value=1, default=1)
    action = serializers.ChoiceField(choices=ACTIONS, default='next')
    data = serializers.DictField(required=False, default=dict)
    space = serializers.CharField(required=False, allow_blank=True)
    remove = serializers.BooleanField(required=False, default=False)
