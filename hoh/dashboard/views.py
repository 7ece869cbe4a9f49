"""
Admin dashboard summary endpoints.

Every count is narrowed to the verticals the requesting admin may see.
"""
from operator import itemgetter

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from hoh.core.access import get_service_type_filter, get_user_service_types
from hoh.core.models import User
from hoh.core.permissions import IsAdminRole
from hoh.leads.models import Lead
from hoh.projects.models import Project
from hoh.staff.models import Employee

DEFAULT_ACTIVITY_LIMIT = 10
MAX_ACTIVITY_LIMIT = 100


def _activity_limit(value):
    try:
        limit = int(value)
    except (TypeError, ValueError):
        return DEFAULT_ACTIVITY_LIMIT
    return min(limit, MAX_ACTIVITY_LIMIT) if limit > 0 else DEFAULT_ACTIVITY_LIMIT


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def dashboard_stats(request):
    requested = request.query_params.get('service_type')
    service_filter = get_service_type_filter(request.user, requested)

    projects = Project.objects.filter(**service_filter)
    leads = Lead.objects.filter(**service_filter)

    if requested:
        current_service_type = requested
    elif request.user.role == 'super_admin':
        current_service_type = 'all'
    else:
        current_service_type = request.user.service_type

    return Response({
        'total_employees': Employee.objects.filter(**service_filter).exclude(status='inactive').count(),
        'total_leads': leads.count(),
        'pending_leads': leads.filter(status__in=['new', 'rnr']).count(),
        'total_users': User.objects.filter(role='user', **service_filter).count(),
        'total_projects': projects.count(),
        'active_projects': projects.exclude(status__in=Project.CLOSED_STATUSES).count(),
        'current_service_type': current_service_type,
        'available_service_types': get_user_service_types(request.user),
        'user_role': request.user.role,
    })


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def recent_activities(request):
    """Newest leads, projects and customers merged into one feed"""
    limit = _activity_limit(request.query_params.get('limit'))
    service_filter = get_service_type_filter(request.user, request.query_params.get('service_type'))

    activities = []
    for lead in Lead.objects.filter(**service_filter).order_by('-created_at')[:limit]:
        activities.append({
            'type': 'lead',
            'id': lead.id,
            'title': f"New lead from {lead.name}",
            'description': lead.email,
            'status': lead.status,
            'service_type': lead.service_type,
            'timestamp': lead.created_at,
        })

    projects = Project.objects.filter(**service_filter).select_related('customer').order_by('-created_at')[:limit]
    for project in projects:
        activities.append({
            'type': 'project',
            'id': project.id,
            'title': f"New project: {project.title}",
            'description': f"Customer: {project.customer.full_name}" if project.customer_id else 'No customer assigned',
            'status': project.status,
            'service_type': project.service_type,
            'timestamp': project.created_at,
        })

    for user in User.objects.filter(role='user', **service_filter).order_by('-created_at')[:limit]:
        activities.append({
            'type': 'user',
            'id': user.id,
            'title': f"New user registered: {user.full_name}",
            'description': user.email,
            'status': 'active' if user.is_active else 'inactive',
            'service_type': user.service_type,
            'timestamp': user.created_at,
        })

    activities.sort(key=itemgetter('timestamp'), reverse=True)
    return Response({'results': activities[:limit], 'count': len(activities[:limit])})
