"""Contact-field validation shared by lead capture forms"""
import re

from rest_framework import serializers

EMAIL_REGEX = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
# Calculator forms accept digits, spaces, hyphens and a leading +
PHONE_REGEX = re.compile(r'^[0-9+\s-]{10,}$')
MOBILE_REGEX = re.compile(r'^[0-9]{10}$')
SIGNUP_PHONE_REGEX = re.compile(r'^\d{10,11}$')


def normalize_phone(value):
    """Strip spaces, hyphens, parentheses and plus signs"""
    return re.sub(r'[\s\-\(\)\+]', '', value or '')


def is_valid_email(value):
    return bool(value and EMAIL_REGEX.match(value.strip()))


def is_valid_phone(value):
    return bool(value and PHONE_REGEX.match(value.strip()))


def is_valid_mobile_number(value):
    return bool(MOBILE_REGEX.match(normalize_phone(value)))


def validate_email_format(value):
    if not is_valid_email(value):
        raise serializers.ValidationError('Invalid email format')
    return value.strip().lower()


def validate_mobile_number(value):
    if not is_valid_mobile_number(value):
        raise serializers.ValidationError('Please enter a valid 10-digit phone number')
    return value
