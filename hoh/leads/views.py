import logging
from datetime import timedelta

from django.db import transaction
from django.db.models import Avg, Count
from django.shortcuts import get_object_or_404
from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework.response import Response

from hoh.core.access import get_service_type_filter
from hoh.core.pagination import paginate
from hoh.core.permissions import IsAdminRole
from hoh.core.utils import create_audit_log, jsonable
from hoh.estimates.calculators import round_whole
from .filters import LeadFilter
from .models import Lead
from .serializers import LeadSerializer, LeadListSerializer, LeadCreateSerializer, LeadUpdateSerializer

logger = logging.getLogger(__name__)

SORTABLE_FIELDS = {
    'created_at', 'updated_at', 'date', 'name', 'city', 'status',
    'estimated_cost', 'carpet_area',
}


@api_view(['POST'])
@permission_classes([AllowAny])
def lead_create(request):
    """Store a lead enquiry submitted from the website"""
    serializer = LeadCreateSerializer(data=request.data)
    if serializer.is_valid():
        lead = serializer.save()
        lead.add_history('created', f'Lead created from {lead.source}')
        logger.info(f"Lead created: {lead.id} ({lead.lead_type}, {lead.service_type})")
        return Response({
            'message': 'Lead inquiry saved successfully',
            'lead': LeadSerializer(lead).data,
        }, status=status.HTTP_201_CREATED)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def lead_list(request):
    """List leads with search, filters, sorting and pagination"""
    queryset = Lead.objects.filter(
        **get_service_type_filter(request.user, request.query_params.get('service_type'))
    )
    lead_filter = LeadFilter(request.query_params, queryset=queryset)
    if not lead_filter.is_valid():
        return Response(lead_filter.errors, status=status.HTTP_400_BAD_REQUEST)

    sort_by = request.query_params.get('sort_by', 'created_at')
    if sort_by not in SORTABLE_FIELDS:
        sort_by = 'created_at'
    order = request.query_params.get('order', 'desc')
    ordering = sort_by if order == 'asc' else f'-{sort_by}'

    return paginate(request, lead_filter.qs.order_by(ordering, '-id'), LeadListSerializer)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, IsAdminRole])
def lead_detail(request, pk):
    """Retrieve, update (with change history) or delete a lead"""
    lead = get_object_or_404(
        Lead.objects.filter(**get_service_type_filter(request.user, request.query_params.get('service_type'))),
        pk=pk,
    )

    if request.method == 'GET':
        return Response(LeadSerializer(lead).data)
    elif request.method in ('PUT', 'PATCH'):
        serializer = LeadUpdateSerializer(lead, data=request.data, partial=True)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        changes = {}
        descriptions = []
        for field in LeadUpdateSerializer.TRACKED_FIELDS:
            if field not in serializer.validated_data:
                continue
            old_value = getattr(lead, field)
            new_value = serializer.validated_data[field]
            if old_value == new_value:
                continue
            changes[field] = {'from': jsonable(old_value), 'to': jsonable(new_value)}
            if field == 'status':
                descriptions.append(f'Status changed from "{old_value}" to "{new_value}"')
            elif field == 'notes':
                descriptions.append('Notes updated')
            else:
                descriptions.append(f"{field.replace('_', ' ').capitalize()} updated")

        with transaction.atomic():
            serializer.save(last_modified_by=request.user)
            if changes:
                action = 'status_changed' if list(changes) == ['status'] else 'updated'
                lead.add_history(action, ', '.join(descriptions), user=request.user, changes=changes)
                create_audit_log(request=request, action='update', model_name='Lead',
                                 object_id=lead.id, object_name=lead.name, changes=changes)

        lead.refresh_from_db()
        return Response({
            'message': ', '.join(descriptions) if descriptions else 'Lead information updated',
            'lead': LeadSerializer(lead).data,
        })
    else:  # DELETE
        create_audit_log(request=request, action='delete', model_name='Lead',
                         object_id=lead.id, object_name=lead.name)
        lead.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def lead_stats(request):
    """Totals, recent volume, top cities and averages"""
    queryset = Lead.objects.filter(
        **get_service_type_filter(request.user, request.query_params.get('service_type'))
    )
    thirty_days_ago = timezone.now() - timedelta(days=30)

    by_city = (
        queryset.values('city')
        .annotate(count=Count('id'))
        .order_by('-count', 'city')[:10]
    )
    averages = queryset.aggregate(
        avg_estimated_cost=Avg('estimated_cost'),
        avg_carpet_area=Avg('carpet_area'),
    )

    return Response({
        'total': queryset.count(),
        'recent': queryset.filter(created_at__gte=thirty_days_ago).count(),
        'by_status': {row['status']: row['count'] for row in queryset.values('status').annotate(count=Count('id'))},
        'by_city': [{'city': row['city'], 'count': row['count']} for row in by_city],
        'avg_estimated_cost': round_whole(averages['avg_estimated_cost'] or 0),
        'avg_carpet_area': round_whole(averages['avg_carpet_area'] or 0),
    })
