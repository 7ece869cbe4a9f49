from django.urls import path
from .views import lead_create, lead_list, lead_detail, lead_stats

urlpatterns = [
    # Public endpoint
    path('leads/', lead_create, name='lead-create'),

    # Admin endpoints
    path('admin/leads/', lead_list, name='lead-list'),
    path('admin/leads/stats/', lead_stats, name='lead-stats'),
    path('admin/leads/<int:pk>/', lead_detail, name='lead-detail'),
]
