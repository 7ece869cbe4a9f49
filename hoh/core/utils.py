"""Utility functions for audit logging and human-readable record IDs"""
import datetime
import logging
from decimal import Decimal

from .models import AuditLog

logger = logging.getLogger(__name__)


def get_client_ip(request):
    """Extract client IP address from request"""
    if not request or not hasattr(request, 'META'):
        return None
    x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
    if x_forwarded_for:
        ip = x_forwarded_for.split(',')[0].strip()
    else:
        ip = request.META.get('REMOTE_ADDR')
    return ip or None


def next_sequential_id(model, field, prefix, width, **scope):
    """
    Generate the next ``<prefix><zero-padded number>`` identifier for a model.

    Numbering continues from the row count; numbers already taken (after
    deletions) are skipped.
    """
    number = model.objects.filter(**scope).count() + 1
    candidate = f'{prefix}{number:0{width}d}'
    while model.objects.filter(**{field: candidate}).exists():
        number += 1
        candidate = f'{prefix}{number:0{width}d}'
    return candidate


def create_audit_log(request=None, action=None, model_name=None, object_id=None,
                     changes=None, user=None, object_name=None, object_reference=None):
    """
    Create an audit log entry

    Args:
        request: Django request object (for user and IP) - optional if user is provided
        action: Action type (create, update, delete, status_change, ...)
        model_name: Name of the model being acted upon
        object_id: ID of the object (as string)
        changes: Dictionary of changes made
        user: Optional user override (defaults to request.user if request provided)
        object_name: Human-readable name of the object
        object_reference: Reference identifier (e.g., project ID, booking ID)
    """
    try:
        audit_user = user
        if audit_user is None and request is not None and hasattr(request, 'user'):
            audit_user = request.user

        if not action or not model_name or not object_id:
            logger.warning(f"Audit log creation skipped: missing required fields (action={action}, model_name={model_name}, object_id={object_id})")
            return None

        return AuditLog.objects.create(
            user=audit_user if audit_user and audit_user.is_authenticated else None,
            action=action,
            model_name=model_name,
            object_id=str(object_id),
            object_name=object_name,
            object_reference=object_reference,
            changes=changes or {},
            ip_address=get_client_ip(request) if request else None,
        )
    except Exception as e:
        # Don't fail the main operation if audit logging fails
        logger.error(f"Failed to create audit log: {str(e)}")
        return None


def jsonable(value):
    """Convert model field values (Decimal, dates) into JSON-safe values for change logs"""
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    if hasattr(value, 'pk'):
        return value.pk
    return value
