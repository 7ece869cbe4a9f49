import csv
import logging
from decimal import Decimal

from django.db.models import Count, Q, Sum
from django.http import HttpResponse
from django.shortcuts import get_object_or_404
from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from hoh.core.access import get_service_type_filter, has_service_type_access
from hoh.core.exceptions import ServiceTypeAccessDenied
from hoh.core.pagination import paginate
from hoh.core.permissions import IsCollectionsRole
from hoh.core.utils import create_audit_log
from .models import Payment
from .serializers import PaymentSerializer, PaymentUpdateSerializer, MarkPaidSerializer

logger = logging.getLogger(__name__)

PAYMENT_PERMISSIONS = [IsAuthenticated, IsCollectionsRole]

OVERDUE_LIMIT = 50

CSV_COLUMNS = [
    ('Payment ID', 'payment_id'),
    ('Project', 'project.project_id'),
    ('Customer', 'customer.full_name'),
    ('Customer Email', 'customer.email'),
    ('Service Type', 'service_type'),
    ('Milestone', 'milestone'),
    ('Amount', 'amount'),
    ('Status', 'status'),
    ('Method', 'payment_method'),
    ('Due Date', 'due_date'),
    ('Paid Date', 'paid_date'),
    ('Transaction ID', 'transaction_id'),
]


def scoped_payments(request):
    return Payment.objects.filter(
        **get_service_type_filter(request.user, request.query_params.get('service_type'))
    ).select_related('project', 'customer', 'collected_by')


def filtered_payments(request):
    queryset = scoped_payments(request)
    status_filter = request.query_params.get('status')
    if status_filter:
        queryset = queryset.filter(status=status_filter)
    project_id = request.query_params.get('project')
    if project_id:
        queryset = queryset.filter(project_id=project_id)
    customer_id = request.query_params.get('customer')
    if customer_id:
        queryset = queryset.filter(customer_id=customer_id)
    return queryset


def _resolve(obj, path):
    for attr in path.split('.'):
        obj = getattr(obj, attr, None)
        if obj is None:
            return ''
    return obj


@api_view(['GET', 'POST'])
@permission_classes(PAYMENT_PERMISSIONS)
def payment_list_create(request):
    """List payments or record a new payment"""
    if request.method == 'GET':
        return paginate(request, filtered_payments(request).order_by('-created_at'), PaymentSerializer)

    serializer = PaymentSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    project = serializer.validated_data['project']
    service_type = project.service_type
    if not has_service_type_access(request.user, service_type):
        raise ServiceTypeAccessDenied(service_type)
    requested = serializer.validated_data.get('service_type')
    if requested and requested != service_type:
        return Response({'service_type': ['Service type must match the project service type']},
                        status=status.HTTP_400_BAD_REQUEST)

    payment = serializer.save(service_type=service_type, collected_by=request.user)
    create_audit_log(request=request, action='create', model_name='Payment',
                     object_id=payment.id, object_name=f"{payment.milestone} payment",
                     object_reference=payment.payment_id,
                     changes={'amount': float(payment.amount), 'project': project.project_id})
    logger.info(f"Payment {payment.payment_id} of {payment.amount} recorded for project {project.project_id}")
    return Response(PaymentSerializer(payment).data, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes(PAYMENT_PERMISSIONS)
def payment_detail(request, pk):
    payment = get_object_or_404(scoped_payments(request), pk=pk)

    if request.method == 'GET':
        return Response(PaymentSerializer(payment).data)
    elif request.method in ('PUT', 'PATCH'):
        serializer = PaymentUpdateSerializer(payment, data=request.data, partial=True)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        previous_status = payment.status
        payment = serializer.save()
        create_audit_log(request=request,
                         action='status_change' if payment.status != previous_status else 'update',
                         model_name='Payment', object_id=payment.id,
                         object_reference=payment.payment_id,
                         changes={k: str(v) for k, v in serializer.validated_data.items()})
        return Response(PaymentSerializer(payment).data)
    else:  # DELETE
        create_audit_log(request=request, action='delete', model_name='Payment',
                         object_id=payment.id, object_reference=payment.payment_id)
        payment.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['GET'])
@permission_classes(PAYMENT_PERMISSIONS)
def payment_stats(request):
    queryset = scoped_payments(request)
    counts = {row['status']: row['count'] for row in queryset.values('status').annotate(count=Count('id'))}
    totals = queryset.aggregate(
        total_amount=Sum('amount'),
        paid_amount=Sum('amount', filter=Q(status='paid')),
        pending_amount=Sum('amount', filter=Q(status__in=['pending', 'overdue'])),
    )
    total_amount = totals['total_amount'] or Decimal('0')
    paid_amount = totals['paid_amount'] or Decimal('0')
    pending_amount = totals['pending_amount'] or Decimal('0')
    collection_rate = round(float(paid_amount / total_amount * 100), 2) if total_amount else 0

    return Response({
        'total': sum(counts.values()),
        'pending': counts.get('pending', 0),
        'partially_paid': counts.get('partially_paid', 0),
        'paid': counts.get('paid', 0),
        'overdue': counts.get('overdue', 0),
        'total_amount': float(total_amount),
        'paid_amount': float(paid_amount),
        'pending_amount': float(pending_amount),
        'collection_rate': collection_rate,
    })


@api_view(['GET'])
@permission_classes(PAYMENT_PERMISSIONS)
def overdue_payments(request):
    """Pending or overdue payments whose due date has passed, earliest first"""
    queryset = scoped_payments(request).filter(
        status__in=['pending', 'overdue'],
        due_date__lt=timezone.localdate(),
    ).order_by('due_date')[:OVERDUE_LIMIT]
    serializer = PaymentSerializer(queryset, many=True)
    return Response({'results': serializer.data, 'count': len(serializer.data)})


@api_view(['PUT', 'PATCH'])
@permission_classes(PAYMENT_PERMISSIONS)
def mark_payment_paid(request, pk):
    payment = get_object_or_404(scoped_payments(request), pk=pk)
    serializer = MarkPaidSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    data = serializer.validated_data
    previous_status = payment.status
    payment.status = 'paid'
    payment.paid_date = data.get('paid_date') or timezone.now()
    if 'transaction_id' in data:
        payment.transaction_id = data['transaction_id']
    if 'payment_method' in data:
        payment.payment_method = data['payment_method']
    if 'notes' in data:
        payment.notes = data['notes']
    payment.collected_by = request.user
    payment.save()

    create_audit_log(request=request, action='payment_received', model_name='Payment',
                     object_id=payment.id, object_reference=payment.payment_id,
                     changes={'status': {'from': previous_status, 'to': 'paid'},
                              'amount': float(payment.amount)})
    logger.info(f"Payment {payment.payment_id} marked as paid by {request.user.email}")
    return Response(PaymentSerializer(payment).data)


@api_view(['GET'])
@permission_classes(PAYMENT_PERMISSIONS)
def export_payments(request):
    """Download the filtered payments as CSV"""
    queryset = filtered_payments(request).order_by('-created_at')

    response = HttpResponse(content_type='text/csv')
    filename = f"payments_{timezone.localdate().isoformat()}.csv"
    response['Content-Disposition'] = f'attachment; filename="{filename}"'

    writer = csv.writer(response)
    writer.writerow([header for header, _ in CSV_COLUMNS])
    for payment in queryset:
        writer.writerow([_resolve(payment, path) for _, path in CSV_COLUMNS])

    logger.info(f"Exported {queryset.count()} payments to CSV for {request.user.email}")
    return response
