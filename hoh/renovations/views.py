import logging

from django.db import transaction
from django.db.models import Count, F, ProtectedError, Q, Sum
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, BasePermission, IsAuthenticated
from rest_framework.response import Response

from hoh.core.access import has_service_type_access
from hoh.core.pagination import paginate
from hoh.core.permissions import IsAdminRole
from hoh.core.utils import create_audit_log
from .cache import get_cached_service_list, invalidate_service_list_cache
from .models import RenovationService, RenovationBooking
from .serializers import (
    RenovationServiceSerializer, BookingCreateSerializer, BookingTrackSerializer,
    RenovationBookingSerializer, BookingStatusSerializer, BookingAssignSerializer,
    QuotationSerializer,
)

logger = logging.getLogger(__name__)


class HasRenovationAccess(BasePermission):
    message = 'Access denied. You do not have access to renovation service type.'

    def has_permission(self, request, view):
        return has_service_type_access(request.user, 'renovation')


RENOVATION_ADMIN_PERMISSIONS = [IsAuthenticated, IsAdminRole, HasRenovationAccess]


def _is_true(value):
    return str(value).lower() in ('true', '1', 'yes')


def filter_services(queryset, params):
    category = params.get('category')
    if category and category != 'All':
        queryset = queryset.filter(category=category)
    search = params.get('search', '').strip()
    if search:
        queryset = queryset.filter(
            Q(title__icontains=search) |
            Q(description__icontains=search) |
            Q(category__icontains=search)
        )
    return queryset


# ---------------------------------------------------------------------------
# Public endpoints
# ---------------------------------------------------------------------------

@api_view(['GET'])
@permission_classes([AllowAny])
def service_list(request):
    """Active renovation services, popular and most booked first"""
    category = request.query_params.get('category')
    popular = _is_true(request.query_params.get('popular'))
    search = request.query_params.get('search', '').strip()

    def build():
        queryset = filter_services(RenovationService.objects.filter(active=True), request.query_params)
        if popular:
            queryset = queryset.filter(popular=True)
        queryset = queryset.order_by('-popular', '-total_bookings', '-created_at')
        results = RenovationServiceSerializer(queryset, many=True).data
        return {'count': len(results), 'results': results}

    return Response(get_cached_service_list(category, popular, search, build))


@api_view(['GET'])
@permission_classes([AllowAny])
def service_detail(request, pk):
    service = get_object_or_404(RenovationService, pk=pk)
    return Response(RenovationServiceSerializer(service).data)


@api_view(['POST'])
@permission_classes([AllowAny])
def booking_create(request):
    """Book a renovation service from the public site"""
    service_pk = request.data.get('service')
    service = None
    if service_pk is not None and str(service_pk).isdigit():
        service = RenovationService.objects.filter(pk=service_pk).first()
    if service is None:
        return Response({'error': 'Renovation service not found'}, status=status.HTTP_404_NOT_FOUND)

    serializer = BookingCreateSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    with transaction.atomic():
        booking = serializer.save(service=service)
        RenovationService.objects.filter(pk=service.pk).update(total_bookings=F('total_bookings') + 1)
    # queryset.update() skips the post_save receiver
    invalidate_service_list_cache()

    logger.info(f"Renovation booking {booking.booking_id} created for service {service.service_id}")
    return Response({
        'message': 'Renovation booking created successfully. We will contact you soon!',
        'booking': BookingTrackSerializer(booking).data,
    }, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([AllowAny])
def booking_track(request, booking_id):
    booking = get_object_or_404(
        RenovationBooking.objects.select_related('service').prefetch_related('timeline'),
        booking_id=booking_id,
    )
    return Response(BookingTrackSerializer(booking).data)


# ---------------------------------------------------------------------------
# Admin: services
# ---------------------------------------------------------------------------

@api_view(['GET', 'POST'])
@permission_classes(RENOVATION_ADMIN_PERMISSIONS)
def admin_service_list_create(request):
    """All services including inactive ones, or create a service"""
    if request.method == 'GET':
        queryset = filter_services(RenovationService.objects.all(), request.query_params)
        popular = request.query_params.get('popular')
        if popular is not None:
            queryset = queryset.filter(popular=_is_true(popular))
        active = request.query_params.get('active')
        if active is not None:
            queryset = queryset.filter(active=_is_true(active))
        serializer = RenovationServiceSerializer(queryset.order_by('-created_at'), many=True)
        return Response({'count': len(serializer.data), 'results': serializer.data})

    serializer = RenovationServiceSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    service = serializer.save(created_by=request.user, last_modified_by=request.user)
    create_audit_log(request=request, action='create', model_name='RenovationService',
                     object_id=service.id, object_name=service.title,
                     object_reference=service.service_id)
    logger.info(f"Renovation service created: {service.service_id} - {service.title}")
    return Response(RenovationServiceSerializer(service).data, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes(RENOVATION_ADMIN_PERMISSIONS)
def admin_service_detail(request, pk):
    service = get_object_or_404(RenovationService, pk=pk)

    if request.method == 'GET':
        return Response(RenovationServiceSerializer(service).data)
    elif request.method in ('PUT', 'PATCH'):
        serializer = RenovationServiceSerializer(service, data=request.data, partial=True)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        service = serializer.save(last_modified_by=request.user)
        create_audit_log(request=request, action='update', model_name='RenovationService',
                         object_id=service.id, object_name=service.title,
                         object_reference=service.service_id,
                         changes={k: str(v) for k, v in serializer.validated_data.items()})
        return Response(RenovationServiceSerializer(service).data)
    else:  # DELETE
        try:
            service.delete()
        except ProtectedError:
            return Response(
                {'error': 'Service has bookings and cannot be deleted. Deactivate it instead.'},
                status=status.HTTP_400_BAD_REQUEST,
            )
        create_audit_log(request=request, action='delete', model_name='RenovationService',
                         object_id=pk, object_name=service.title,
                         object_reference=service.service_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


def _toggle(request, pk, field, on_message, off_message):
    service = get_object_or_404(RenovationService, pk=pk)
    setattr(service, field, not getattr(service, field))
    service.last_modified_by = request.user
    service.save(update_fields=[field, 'last_modified_by', 'updated_at'])
    create_audit_log(request=request, action='update', model_name='RenovationService',
                     object_id=service.id, object_name=service.title,
                     object_reference=service.service_id,
                     changes={field: getattr(service, field)})
    return Response({
        'message': on_message if getattr(service, field) else off_message,
        'service': RenovationServiceSerializer(service).data,
    })


@api_view(['PATCH', 'POST'])
@permission_classes(RENOVATION_ADMIN_PERMISSIONS)
def admin_service_toggle_active(request, pk):
    return _toggle(request, pk, 'active', 'Renovation service activated', 'Renovation service deactivated')


@api_view(['PATCH', 'POST'])
@permission_classes(RENOVATION_ADMIN_PERMISSIONS)
def admin_service_toggle_popular(request, pk):
    return _toggle(request, pk, 'popular', 'Renovation service marked as popular',
                   'Renovation service unmarked from popular')


@api_view(['GET'])
@permission_classes(RENOVATION_ADMIN_PERMISSIONS)
def admin_service_stats(request):
    queryset = RenovationService.objects.all()
    top_services = queryset.filter(active=True).order_by('-total_bookings')[:5]
    return Response({
        'total': queryset.count(),
        'active': queryset.filter(active=True).count(),
        'inactive': queryset.filter(active=False).count(),
        'popular': queryset.filter(popular=True).count(),
        'total_bookings': queryset.aggregate(total=Sum('total_bookings'))['total'] or 0,
        'by_category': {
            row['category']: row['count']
            for row in queryset.values('category').annotate(count=Count('id')).order_by('-count')
        },
        'top_services': [
            {'id': s.id, 'service_id': s.service_id, 'title': s.title,
             'category': s.category, 'total_bookings': s.total_bookings}
            for s in top_services
        ],
    })


# ---------------------------------------------------------------------------
# Admin: bookings
# ---------------------------------------------------------------------------

@api_view(['GET'])
@permission_classes(RENOVATION_ADMIN_PERMISSIONS)
def admin_booking_list(request):
    queryset = RenovationBooking.objects.select_related('service', 'assigned_to').prefetch_related('timeline')

    status_filter = request.query_params.get('status')
    if status_filter and status_filter != 'all':
        queryset = queryset.filter(status=status_filter)
    priority = request.query_params.get('priority')
    if priority and priority != 'all':
        queryset = queryset.filter(priority=priority)
    search = request.query_params.get('search', '').strip()
    if search:
        queryset = queryset.filter(
            Q(booking_id__icontains=search) |
            Q(customer_name__icontains=search) |
            Q(customer_email__icontains=search) |
            Q(customer_phone__icontains=search)
        )

    return paginate(request, queryset.order_by('-created_at'), RenovationBookingSerializer)


@api_view(['GET'])
@permission_classes(RENOVATION_ADMIN_PERMISSIONS)
def admin_booking_stats(request):
    queryset = RenovationBooking.objects.all()
    by_status = {row['status']: row['count'] for row in queryset.values('status').annotate(count=Count('id'))}
    return Response({
        'total': queryset.count(),
        'pending': by_status.get('pending', 0),
        'in_progress': by_status.get('in_progress', 0),
        'completed': by_status.get('completed', 0),
        'cancelled': by_status.get('cancelled', 0),
        'by_status': by_status,
        'by_priority': {
            row['priority']: row['count'] for row in queryset.values('priority').annotate(count=Count('id'))
        },
        'total_revenue': float(
            queryset.filter(status='completed').aggregate(total=Sum('estimated_cost'))['total'] or 0
        ),
    })


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes(RENOVATION_ADMIN_PERMISSIONS)
def admin_booking_detail(request, pk):
    booking = get_object_or_404(RenovationBooking.objects.select_related('service', 'assigned_to'), pk=pk)

    if request.method == 'GET':
        return Response(RenovationBookingSerializer(booking).data)
    elif request.method in ('PUT', 'PATCH'):
        serializer = RenovationBookingSerializer(booking, data=request.data, partial=True)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        booking = serializer.save(last_modified_by=request.user)
        create_audit_log(request=request, action='update', model_name='RenovationBooking',
                         object_id=booking.id, object_name=booking.customer_name,
                         object_reference=booking.booking_id,
                         changes={k: str(v) for k, v in serializer.validated_data.items()})
        return Response(RenovationBookingSerializer(booking).data)
    else:  # DELETE
        create_audit_log(request=request, action='delete', model_name='RenovationBooking',
                         object_id=booking.id, object_name=booking.customer_name,
                         object_reference=booking.booking_id)
        booking.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['PATCH', 'PUT'])
@permission_classes(RENOVATION_ADMIN_PERMISSIONS)
def admin_booking_status(request, pk):
    """Move a booking to a new status; notes go on the new timeline entry"""
    booking = get_object_or_404(RenovationBooking, pk=pk)
    serializer = BookingStatusSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    previous_status = booking.status
    booking.status = serializer.validated_data['status']
    booking.last_modified_by = request.user
    booking.save(timeline_notes=serializer.validated_data['notes'])

    create_audit_log(request=request, action='status_change', model_name='RenovationBooking',
                     object_id=booking.id, object_name=booking.customer_name,
                     object_reference=booking.booking_id,
                     changes={'status': {'from': previous_status, 'to': booking.status}})
    logger.info(f"Renovation booking {booking.booking_id} status: {previous_status} -> {booking.status}")
    return Response(RenovationBookingSerializer(booking).data)


@api_view(['PATCH', 'PUT'])
@permission_classes(RENOVATION_ADMIN_PERMISSIONS)
def admin_booking_assign(request, pk):
    booking = get_object_or_404(RenovationBooking, pk=pk)
    serializer = BookingAssignSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    booking.assigned_to = serializer.validated_data['assigned_to']
    booking.last_modified_by = request.user
    booking.save()

    create_audit_log(request=request, action='assign', model_name='RenovationBooking',
                     object_id=booking.id, object_name=booking.customer_name,
                     object_reference=booking.booking_id,
                     changes={'assigned_to': booking.assigned_to_id})
    return Response(RenovationBookingSerializer(booking).data)


@api_view(['POST'])
@permission_classes(RENOVATION_ADMIN_PERMISSIONS)
def admin_booking_quotation(request, pk):
    """Attach a quotation and mark it as sent to the customer"""
    booking = get_object_or_404(RenovationBooking, pk=pk)
    serializer = QuotationSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    data = serializer.validated_data
    booking.quotation_amount = data['amount']
    booking.quotation_breakdown = [
        {'item': line['item'], 'cost': float(line['cost'])} for line in data['breakdown']
    ]
    booking.quotation_valid_until = data.get('valid_until')
    booking.quotation_notes = data['notes']
    booking.status = 'quote_sent'
    booking.last_modified_by = request.user
    booking.save()

    create_audit_log(request=request, action='quotation_sent', model_name='RenovationBooking',
                     object_id=booking.id, object_name=booking.customer_name,
                     object_reference=booking.booking_id,
                     changes={'amount': float(booking.quotation_amount)})
    logger.info(f"Quotation of {booking.quotation_amount} sent for booking {booking.booking_id}")
    return Response(RenovationBookingSerializer(booking).data)
