import logging
from datetime import timedelta

from django.contrib.auth import get_user_model
from django.core.exceptions import ObjectDoesNotExist
from django.db.models import Count, ProtectedError, Q
from django.shortcuts import get_object_or_404
from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework.response import Response
from rest_framework_simplejwt.exceptions import AuthenticationFailed, InvalidToken, TokenError
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer, TokenRefreshSerializer
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from .access import get_service_type_filter
from .models import AuditLog
from .pagination import paginate
from .permissions import IsAdminRole, IsSuperAdmin, IsSuperAdminOrReadOnly, HasAdminPermission
from .serializers import (
    UserSerializer, SignupSerializer, ProfileSerializer, ChangePasswordSerializer,
    CustomerSerializer, AuditLogSerializer, StaffUserSerializer, UserPermissionsSerializer,
    SetPasswordSerializer,
)
from .utils import create_audit_log

logger = logging.getLogger(__name__)

User = get_user_model()


class CustomTokenObtainPairSerializer(TokenObtainPairSerializer):
    def validate(self, attrs):
        data = super().validate(attrs)
        if not self.user.is_active:
            raise AuthenticationFailed('User account is disabled.')
        data['user'] = UserSerializer(self.user).data
        logger.info(f"User logged in: {self.user.email} ({self.user.role})")
        return data

    @classmethod
    def get_token(cls, user):
        token = super().get_token(user)
        token['email'] = user.email
        token['role'] = user.role
        token['service_type'] = user.service_type
        return token


class CustomTokenObtainPairView(TokenObtainPairView):
    serializer_class = CustomTokenObtainPairSerializer


class CustomTokenRefreshSerializer(TokenRefreshSerializer):
    """Token refresh serializer that handles deleted users gracefully"""
    def validate(self, attrs):
        try:
            return super().validate(attrs)
        except (InvalidToken, TokenError):
            raise InvalidToken('Token is invalid or expired.')
        except ObjectDoesNotExist:
            raise InvalidToken('Token is invalid. User no longer exists.')


class CustomTokenRefreshView(TokenRefreshView):
    serializer_class = CustomTokenRefreshSerializer


def _token_response(user, status_code=status.HTTP_200_OK):
    token = CustomTokenObtainPairSerializer.get_token(user)
    return Response({
        'user': UserSerializer(user).data,
        'access': str(token.access_token),
        'refresh': str(token),
    }, status=status_code)


@api_view(['POST'])
@permission_classes([AllowAny])
def signup(request):
    """Customer self-registration"""
    serializer = SignupSerializer(data=request.data)
    if serializer.is_valid():
        user = serializer.save()
        logger.info(f"Customer signed up: {user.email} ({user.customer_id})")
        return _token_response(user, status.HTTP_201_CREATED)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def user_me(request):
    """Current user with the verticals they can access"""
    data = UserSerializer(request.user).data
    data['accessible_service_types'] = request.user.get_accessible_verticals()
    return Response(data)


@api_view(['PUT', 'PATCH'])
@permission_classes([IsAuthenticated])
def update_profile(request):
    serializer = ProfileSerializer(request.user, data=request.data, partial=True)
    if serializer.is_valid():
        serializer.save()
        return Response(UserSerializer(request.user).data)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['PUT'])
@permission_classes([IsAuthenticated])
def change_password(request):
    serializer = ChangePasswordSerializer(data=request.data, context={'user': request.user})
    if serializer.is_valid():
        request.user.set_password(serializer.validated_data['new_password'])
        request.user.save(update_fields=['password'])
        create_audit_log(request=request, action='password_change', model_name='User',
                         object_id=request.user.id, object_name=request.user.email)
        return Response({'message': 'Password updated successfully'})
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


# Customer views
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, HasAdminPermission('customers')])
def customer_list_create(request):
    """List customers or create a customer account"""
    if request.method == 'GET':
        queryset = User.objects.filter(
            role='user', **get_service_type_filter(request.user, request.query_params.get('service_type'))
        )
        search = request.query_params.get('search', '').strip()
        if search:
            queryset = queryset.filter(
                Q(full_name__icontains=search) |
                Q(email__icontains=search) |
                Q(phone__icontains=search) |
                Q(customer_id__icontains=search)
            )
        return paginate(request, queryset.order_by('-created_at'), CustomerSerializer)
    else:
        serializer = CustomerSerializer(data=request.data)
        if serializer.is_valid():
            customer = serializer.save()
            create_audit_log(request=request, action='create', model_name='Customer',
                             object_id=customer.id, object_name=customer.full_name,
                             object_reference=customer.customer_id)
            return Response(serializer.data, status=status.HTTP_201_CREATED)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, HasAdminPermission('customers')])
def customer_detail(request, pk):
    """Retrieve, update or delete a customer"""
    customer = get_object_or_404(User, pk=pk, role='user')

    if request.method == 'GET':
        return Response(CustomerSerializer(customer).data)
    elif request.method in ('PUT', 'PATCH'):
        serializer = CustomerSerializer(customer, data=request.data, partial=True)
        if serializer.is_valid():
            serializer.save()
            create_audit_log(request=request, action='update', model_name='Customer',
                             object_id=customer.id, object_name=customer.full_name,
                             object_reference=customer.customer_id,
                             changes={k: v for k, v in request.data.items() if k != 'password'})
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        try:
            customer.delete()
        except ProtectedError:
            return Response(
                {'error': 'Customer has projects or payments and cannot be deleted'},
                status=status.HTTP_400_BAD_REQUEST,
            )
        create_audit_log(request=request, action='delete', model_name='Customer',
                         object_id=pk, object_name=customer.full_name,
                         object_reference=customer.customer_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


# AuditLog views (read-only)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def audit_log_list(request):
    """List audit logs with filtering"""
    queryset = AuditLog.objects.select_related('user')

    action_filter = request.query_params.get('action')
    if action_filter:
        queryset = queryset.filter(action=action_filter)

    model_filter = request.query_params.get('model')
    if model_filter:
        queryset = queryset.filter(model_name=model_filter)

    date_from = request.query_params.get('date_from')
    date_to = request.query_params.get('date_to')
    if date_from:
        queryset = queryset.filter(created_at__date__gte=date_from)
    if date_to:
        queryset = queryset.filter(created_at__date__lte=date_to)

    return paginate(request, queryset.order_by('-created_at'), AuditLogSerializer, default_limit=50)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def audit_log_detail(request, pk):
    audit_log = get_object_or_404(AuditLog, pk=pk)
    return Response(AuditLogSerializer(audit_log).data)


# Staff account views
USER_PERMISSIONS = [IsAuthenticated, IsAdminRole, IsSuperAdminOrReadOnly]

RECENT_USER_DAYS = 30


def scoped_accounts(request):
    return User.objects.filter(**get_service_type_filter(request.user, request.query_params.get('service_type')))


@api_view(['GET', 'POST'])
@permission_classes(USER_PERMISSIONS)
def user_list_create(request):
    """List back-office accounts or create one"""
    if request.method == 'GET':
        queryset = scoped_accounts(request).exclude(role='user')
        search = request.query_params.get('search', '').strip()
        if search:
            queryset = queryset.filter(
                Q(full_name__icontains=search) |
                Q(email__icontains=search) |
                Q(phone__icontains=search)
            )
        role = request.query_params.get('role')
        if role:
            queryset = queryset.filter(role=role)
        account_status = request.query_params.get('status')
        if account_status in ('active', 'inactive'):
            queryset = queryset.filter(is_active=account_status == 'active')
        return paginate(request, queryset.order_by('-created_at'), UserSerializer)

    serializer = StaffUserSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    user = serializer.save()
    create_audit_log(request=request, action='create', model_name='User',
                     object_id=user.id, object_name=user.email, changes={'role': user.role})
    logger.info(f"Staff account {user.email} ({user.role}) created by {request.user.email}")
    return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes(USER_PERMISSIONS)
def user_detail(request, pk):
    """Retrieve, update or delete a back-office account"""
    user = get_object_or_404(scoped_accounts(request).exclude(role='user'), pk=pk)

    if request.method == 'GET':
        return Response(UserSerializer(user).data)
    elif request.method in ('PUT', 'PATCH'):
        serializer = StaffUserSerializer(user, data=request.data, partial=True)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        data = serializer.validated_data
        if user == request.user and (data.get('role', user.role) != user.role or data.get('is_active') is False):
            return Response({'error': 'Cannot change the role of or deactivate your own account'},
                            status=status.HTTP_400_BAD_REQUEST)
        serializer.save()
        create_audit_log(request=request, action='update', model_name='User',
                         object_id=user.id, object_name=user.email,
                         changes={k: v for k, v in request.data.items() if k != 'password'})
        return Response(UserSerializer(user).data)
    else:  # DELETE
        if user == request.user:
            return Response({'error': 'Cannot delete your own account'}, status=status.HTTP_400_BAD_REQUEST)
        try:
            user.delete()
        except ProtectedError:
            return Response({'error': 'User has linked records and cannot be deleted'},
                            status=status.HTTP_400_BAD_REQUEST)
        create_audit_log(request=request, action='delete', model_name='User',
                         object_id=pk, object_name=user.email)
        logger.info(f"Staff account {user.email} deleted by {request.user.email}")
        return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['PATCH'])
@permission_classes([IsAuthenticated, IsSuperAdmin])
def user_permissions(request, pk):
    """Replace the permissions granted to a non-admin staff account"""
    user = get_object_or_404(User.objects.exclude(role='user'), pk=pk)
    serializer = UserPermissionsSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    previous = list(user.admin_permissions or [])
    user.admin_permissions = serializer.validated_data['admin_permissions']
    user.save(update_fields=['admin_permissions', 'updated_at'])
    create_audit_log(request=request, action='update', model_name='User',
                     object_id=user.id, object_name=user.email,
                     changes={'admin_permissions': {'from': previous, 'to': user.admin_permissions}})
    return Response(UserSerializer(user).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def user_stats(request):
    queryset = scoped_accounts(request)
    since = timezone.now() - timedelta(days=RECENT_USER_DAYS)
    by_role = {row['role']: row['count'] for row in queryset.values('role').annotate(count=Count('id'))}
    return Response({
        'total': sum(by_role.values()),
        'active': queryset.filter(is_active=True).count(),
        'inactive': queryset.filter(is_active=False).count(),
        'recent': queryset.filter(created_at__gte=since).count(),
        'by_role': by_role,
    })


@api_view(['PUT'])
@permission_classes([IsAuthenticated, IsSuperAdmin])
def user_change_password(request, pk):
    user = get_object_or_404(User.objects.exclude(role='user'), pk=pk)
    serializer = SetPasswordSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    user.set_password(serializer.validated_data['new_password'])
    user.save(update_fields=['password'])
    create_audit_log(request=request, action='password_change', model_name='User',
                     object_id=user.id, object_name=user.email)
    logger.info(f"Password reset for {user.email} by {request.user.email}")
    return Response({'message': 'Password changed successfully'})
