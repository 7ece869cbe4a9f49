import django_filters
from django.db.models import Q
from .models import Lead


class LeadFilter(django_filters.FilterSet):
    """Admin lead list filters"""
    search = django_filters.CharFilter(method='filter_search', label='Search')
    status = django_filters.ChoiceFilter(choices=Lead.STATUS_CHOICES)
    lead_type = django_filters.ChoiceFilter(choices=Lead.LEAD_TYPE_CHOICES)
    city = django_filters.CharFilter(field_name='city', lookup_expr='iexact')
    date_from = django_filters.DateFilter(field_name='created_at', lookup_expr='date__gte')
    date_to = django_filters.DateFilter(field_name='created_at', lookup_expr='date__lte')

    class Meta:
        model = Lead
        fields = ['search', 'status', 'lead_type', 'city', 'date_from', 'date_to']

    def filter_search(self, queryset, name, value):
        """Case-insensitive match on name, email or city"""
        value = value.strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(name__icontains=value) |
            Q(email__icontains=value) |
            Q(city__icontains=value)
        )
