import logging

from django.db.models import Count, Q
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from hoh.core.access import get_service_type_filter, default_service_type, has_service_type_access
from hoh.core.exceptions import ServiceTypeAccessDenied
from hoh.core.pagination import paginate
from hoh.core.permissions import IsBackOfficeRole, HasAdminPermission
from hoh.core.utils import create_audit_log
from hoh.staff.models import Employee
from .models import Project
from .serializers import ProjectSerializer, ProjectListSerializer, MilestoneSerializer

logger = logging.getLogger(__name__)

PROJECT_PERMISSIONS = [IsAuthenticated, IsBackOfficeRole, HasAdminPermission('projects', allow_read=True)]

# Roles that only ever see the projects assigned to them
ASSIGNMENT_FIELDS = {
    'designer': 'assigned_designer',
    'crm': 'assigned_crm',
}


def scoped_projects(request):
    """Projects visible to the requesting user"""
    queryset = Project.objects.filter(
        **get_service_type_filter(request.user, request.query_params.get('service_type'))
    ).select_related('customer', 'assigned_designer', 'assigned_crm').prefetch_related('milestones')

    assignment_field = ASSIGNMENT_FIELDS.get(request.user.role)
    if assignment_field:
        employee = Employee.objects.filter(email=request.user.email).first()
        if employee is None:
            raise NotFound('Employee record not found')
        queryset = queryset.filter(**{assignment_field: employee})
    return queryset


@api_view(['GET', 'POST'])
@permission_classes(PROJECT_PERMISSIONS)
def project_list_create(request):
    """List projects or create a project"""
    if request.method == 'GET':
        queryset = scoped_projects(request)

        search = request.query_params.get('search', '').strip()
        if search:
            queryset = queryset.filter(Q(title__icontains=search) | Q(project_id__icontains=search))
        status_filter = request.query_params.get('status')
        if status_filter:
            queryset = queryset.filter(status=status_filter)
        customer_id = request.query_params.get('customer')
        if customer_id:
            queryset = queryset.filter(customer_id=customer_id)

        return paginate(request, queryset.order_by('-created_at'), ProjectListSerializer)

    serializer = ProjectSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    customer = serializer.validated_data['customer']
    service_type = (
        serializer.validated_data.get('service_type')
        or customer.service_type
        or default_service_type(request.user)
    )
    if not has_service_type_access(request.user, service_type):
        raise ServiceTypeAccessDenied(service_type)

    project = serializer.save(service_type=service_type)
    create_audit_log(request=request, action='create', model_name='Project',
                     object_id=project.id, object_name=project.title,
                     object_reference=project.project_id)
    logger.info(f"Project created: {project.project_id} for customer {customer.customer_id}")
    return Response(ProjectSerializer(project).data, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes(PROJECT_PERMISSIONS)
def project_detail(request, pk):
    """Retrieve, update or delete a project"""
    project = get_object_or_404(scoped_projects(request), pk=pk)

    if request.method == 'GET':
        return Response(ProjectSerializer(project).data)
    elif request.method in ('PUT', 'PATCH'):
        previous_status = project.status
        serializer = ProjectSerializer(project, data=request.data, partial=True)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        new_service_type = serializer.validated_data.get('service_type')
        if new_service_type and not has_service_type_access(request.user, new_service_type):
            raise ServiceTypeAccessDenied(new_service_type)

        project = serializer.save()
        if project.status != previous_status:
            logger.info(f"Project {project.project_id} status: {previous_status} -> {project.status}")
            create_audit_log(request=request, action='status_change', model_name='Project',
                             object_id=project.id, object_name=project.title,
                             object_reference=project.project_id,
                             changes={'status': {'from': previous_status, 'to': project.status}})
        else:
            create_audit_log(request=request, action='update', model_name='Project',
                             object_id=project.id, object_name=project.title,
                             object_reference=project.project_id,
                             changes={k: str(v) for k, v in request.data.items()})
        return Response(ProjectSerializer(project).data)
    else:  # DELETE
        create_audit_log(request=request, action='delete', model_name='Project',
                         object_id=project.id, object_name=project.title,
                         object_reference=project.project_id)
        project.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsBackOfficeRole, HasAdminPermission('projects')])
def project_add_milestone(request, pk):
    project = get_object_or_404(scoped_projects(request), pk=pk)
    serializer = MilestoneSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    serializer.save(project=project)
    return Response(ProjectSerializer(project).data, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsBackOfficeRole])
def project_stats(request):
    queryset = scoped_projects(request)
    by_status = {row['status']: row['count'] for row in queryset.values('status').annotate(count=Count('id'))}
    return Response({
        'total': queryset.count(),
        'active': queryset.exclude(status__in=Project.CLOSED_STATUSES).count(),
        'completed': by_status.get('handover_move_in', 0),
        'on_hold': by_status.get('on_hold', 0),
        'by_status': by_status,
        'by_type': {
            row['project_type']: row['count'] for row in queryset.values('project_type').annotate(count=Count('id'))
        },
    })
