from django.urls import path
from .views import project_list_create, project_detail, project_add_milestone, project_stats

urlpatterns = [
    path('admin/projects/', project_list_create, name='project-list-create'),
    path('admin/projects/stats/', project_stats, name='project-stats'),
    path('admin/projects/<int:pk>/', project_detail, name='project-detail'),
    path('admin/projects/<int:pk>/milestones/', project_add_milestone, name='project-add-milestone'),
]
