import logging

from django.db import transaction
from django.db.models import Count, Q
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from hoh.core.access import get_service_type_filter, default_service_type, has_service_type_access
from hoh.core.exceptions import ServiceTypeAccessDenied
from hoh.core.models import User
from hoh.core.pagination import paginate
from hoh.core.permissions import IsBackOfficeRole, HasAdminPermission
from hoh.core.utils import create_audit_log
from .models import Employee
from .serializers import (
    EmployeeSerializer, EmployeeCreateSerializer, EmployeeSummarySerializer, EmployeePasswordSerializer,
)

logger = logging.getLogger(__name__)

EMPLOYEE_PERMISSIONS = [IsAuthenticated, IsBackOfficeRole, HasAdminPermission('employees')]

# Fields copied onto the linked login account when an employee changes
LOGIN_SYNC_FIELDS = ('full_name', 'email', 'phone', 'role', 'service_type')


def scoped_employees(request):
    return Employee.objects.filter(
        **get_service_type_filter(request.user, request.query_params.get('service_type'))
    ).prefetch_related('designer_projects', 'crm_projects')


def _sync_login_account(employee, previous_email):
    user = User.objects.filter(email=previous_email).first()
    if user is None:
        logger.warning(f"No login account found for employee {employee.employee_id} ({previous_email})")
        return
    user.full_name = employee.full_name
    user.email = employee.email
    user.phone = employee.phone
    user.role = Employee.LOGIN_ROLES.get(employee.role, 'crm')
    user.service_type = employee.service_type
    user.is_active = employee.status != 'inactive'
    user.save()


@api_view(['GET', 'POST'])
@permission_classes(EMPLOYEE_PERMISSIONS)
def employee_list_create(request):
    """List employees or create an employee together with their login account"""
    if request.method == 'GET':
        queryset = scoped_employees(request)

        search = request.query_params.get('search', '').strip()
        if search:
            queryset = queryset.filter(
                Q(full_name__icontains=search) |
                Q(email__icontains=search) |
                Q(employee_id__icontains=search) |
                Q(phone__icontains=search)
            )
        for field in ('role', 'status', 'department'):
            value = request.query_params.get(field)
            if value:
                queryset = queryset.filter(**{field: value})

        return paginate(request, queryset.order_by('-created_at'), EmployeeSerializer)

    serializer = EmployeeCreateSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    service_type = serializer.validated_data.get('service_type') or default_service_type(request.user)
    if not has_service_type_access(request.user, service_type):
        raise ServiceTypeAccessDenied(service_type)

    with transaction.atomic():
        employee = serializer.save(service_type=service_type)
        user = User(
            username=employee.email,
            email=employee.email,
            full_name=employee.full_name,
            phone=employee.phone,
            role=Employee.LOGIN_ROLES.get(employee.role, 'crm'),
            service_type=employee.service_type,
            verticals=[employee.service_type],
        )
        user.set_password(serializer.validated_data['password'])
        user.save()

    create_audit_log(request=request, action='create', model_name='Employee',
                     object_id=employee.id, object_name=employee.full_name,
                     object_reference=employee.employee_id)
    logger.info(f"Employee created: {employee.employee_id} with login {user.email} ({user.role})")
    return Response({
        'employee': EmployeeSerializer(employee).data,
        'user': {'email': user.email, 'role': user.role},
        'message': 'Employee and login account created successfully',
    }, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes(EMPLOYEE_PERMISSIONS)
def employee_detail(request, pk):
    """Retrieve, update or delete an employee"""
    employee = get_object_or_404(scoped_employees(request), pk=pk)

    if request.method == 'GET':
        return Response(EmployeeSerializer(employee).data)
    elif request.method in ('PUT', 'PATCH'):
        serializer = EmployeeSerializer(employee, data=request.data, partial=True)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        new_service_type = serializer.validated_data.get('service_type')
        if new_service_type and not has_service_type_access(request.user, new_service_type):
            raise ServiceTypeAccessDenied(new_service_type)

        previous_email = employee.email
        with transaction.atomic():
            serializer.save()
            if any(field in serializer.validated_data for field in LOGIN_SYNC_FIELDS + ('status',)):
                _sync_login_account(employee, previous_email)

        create_audit_log(request=request, action='update', model_name='Employee',
                         object_id=employee.id, object_name=employee.full_name,
                         object_reference=employee.employee_id,
                         changes={k: str(v) for k, v in serializer.validated_data.items()})
        return Response(EmployeeSerializer(employee).data)
    else:  # DELETE
        with transaction.atomic():
            # The login account is kept for history but can no longer sign in
            User.objects.filter(email=employee.email).update(is_active=False)
            create_audit_log(request=request, action='delete', model_name='Employee',
                             object_id=employee.id, object_name=employee.full_name,
                             object_reference=employee.employee_id)
            employee.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsBackOfficeRole])
def employees_by_role(request, role):
    """Active employees with a role, for assignment dropdowns"""
    employees = scoped_employees(request).filter(role=role, status='active').order_by('full_name')
    serializer = EmployeeSummarySerializer(employees, many=True)
    return Response({'results': serializer.data, 'count': len(serializer.data)})


@api_view(['GET'])
@permission_classes(EMPLOYEE_PERMISSIONS)
def employee_stats(request):
    queryset = Employee.objects.filter(
        **get_service_type_filter(request.user, request.query_params.get('service_type'))
    )
    status_counts = {row['status']: row['count'] for row in queryset.values('status').annotate(count=Count('id'))}
    return Response({
        'total': queryset.count(),
        'active': status_counts.get('active', 0),
        'inactive': status_counts.get('inactive', 0),
        'on_leave': status_counts.get('on-leave', 0),
        'by_role': {row['role']: row['count'] for row in queryset.values('role').annotate(count=Count('id'))},
        'by_department': {
            row['department']: row['count'] for row in queryset.values('department').annotate(count=Count('id'))
        },
    })


@api_view(['PUT'])
@permission_classes([IsAuthenticated, IsBackOfficeRole, HasAdminPermission('employees')])
def employee_change_password(request, pk):
    """Set a new password on the employee's login account"""
    employee = get_object_or_404(scoped_employees(request), pk=pk)
    serializer = EmployeePasswordSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    user = User.objects.filter(email=employee.email).first()
    if user is None:
        return Response({'error': 'User account not found for this employee'}, status=status.HTTP_404_NOT_FOUND)

    user.set_password(serializer.validated_data['new_password'])
    user.save(update_fields=['password'])
    create_audit_log(request=request, action='password_change', model_name='Employee',
                     object_id=employee.id, object_name=employee.full_name,
                     object_reference=employee.employee_id)
    return Response({'message': 'Password updated successfully'})
