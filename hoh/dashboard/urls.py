from django.urls import path
from .views import dashboard_stats, recent_activities

urlpatterns = [
    path('admin/dashboard/stats/', dashboard_stats, name='dashboard-stats'),
    path('admin/dashboard/recent-activities/', recent_activities, name='dashboard-recent-activities'),
]
