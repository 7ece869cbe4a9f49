"""
Role and service-type (vertical) access rules.

Every admin list and stats query is narrowed with
``get_service_type_filter`` so that vertical admins and staff only ever
see their own line of business.
"""
from .exceptions import ServiceTypeAccessDenied
from .models import SERVICE_TYPES

ADMIN_ROLES = (
    'super_admin',
    'admin',
    'interior_admin',
    'construction_admin',
    'renovation_admin',
    'on_demand_admin',
)

VERTICAL_ADMIN_ROLES = {
    'interior_admin': 'interior',
    'construction_admin': 'construction',
    'renovation_admin': 'renovation',
    'on_demand_admin': 'on_demand',
}

BACK_OFFICE_ROLES = ADMIN_ROLES + ('manager', 'designer', 'crm')

COLLECTIONS_ROLES = ADMIN_ROLES + ('manager', 'crm')

DEFAULT_SERVICE_TYPE = 'interior'


def is_admin_role(user):
    return bool(user and user.is_authenticated and user.role in ADMIN_ROLES)


def is_staff_role(user):
    return bool(user and user.is_authenticated and user.role in BACK_OFFICE_ROLES)


def get_user_service_types(user):
    """Return the list of service types the user can access."""
    if user.role == 'super_admin':
        return list(SERVICE_TYPES)
    if user.role in VERTICAL_ADMIN_ROLES:
        return [VERTICAL_ADMIN_ROLES[user.role]]
    verticals = [v for v in (user.verticals or []) if v in SERVICE_TYPES]
    if verticals:
        return verticals
    if user.service_type in SERVICE_TYPES:
        return [user.service_type]
    return [DEFAULT_SERVICE_TYPE]


def has_service_type_access(user, service_type):
    return service_type in get_user_service_types(user)


def get_service_type_filter(user, requested=None):
    """
    Build queryset lookups restricting results to the user's verticals.

    Args:
        user: authenticated user
        requested: optional ``service_type`` from the query string

    Returns:
        dict usable as ``queryset.filter(**lookups)``; empty for a super
        admin who did not narrow the view.

    Raises:
        ServiceTypeAccessDenied: the requested vertical is not accessible.
    """
    allowed = get_user_service_types(user)
    requested = (requested or '').strip()

    if requested in SERVICE_TYPES:
        if requested not in allowed:
            raise ServiceTypeAccessDenied(requested)
        return {'service_type': requested}

    if user.role == 'super_admin':
        return {}
    if len(allowed) == 1:
        return {'service_type': allowed[0]}
    return {'service_type__in': allowed}


def default_service_type(user):
    """Service type stamped on records an admin creates without choosing one."""
    if user.role in VERTICAL_ADMIN_ROLES:
        return VERTICAL_ADMIN_ROLES[user.role]
    if user.service_type in SERVICE_TYPES:
        return user.service_type
    return DEFAULT_SERVICE_TYPE


def has_admin_permission(user, permission):
    """Admin roles hold every permission; other staff need it granted explicitly."""
    if is_admin_role(user):
        return True
    return bool(user and user.is_authenticated and permission in (user.admin_permissions or []))
