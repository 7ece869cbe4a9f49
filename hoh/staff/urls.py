from django.urls import path
from .views import (
    employee_list_create, employee_detail, employees_by_role, employee_stats,
    employee_change_password,
)

urlpatterns = [
    path('admin/employees/', employee_list_create, name='employee-list-create'),
    path('admin/employees/stats/', employee_stats, name='employee-stats'),
    path('admin/employees/role/<str:role>/', employees_by_role, name='employees-by-role'),
    path('admin/employees/<int:pk>/', employee_detail, name='employee-detail'),
    path('admin/employees/<int:pk>/change-password/', employee_change_password, name='employee-change-password'),
]
