from django.urls import path
from .views import (
    CustomTokenObtainPairView, CustomTokenRefreshView, signup, user_me,
    update_profile, change_password,
    customer_list_create, customer_detail,
    audit_log_list, audit_log_detail,
    user_list_create, user_detail, user_permissions, user_stats, user_change_password,
)

urlpatterns = [
    # Auth endpoints
    path('auth/signup/', signup, name='signup'),
    path('auth/login/', CustomTokenObtainPairView.as_view(), name='token_obtain_pair'),
    path('auth/refresh/', CustomTokenRefreshView.as_view(), name='token_refresh'),
    path('auth/me/', user_me, name='user-me'),
    path('auth/profile/', update_profile, name='user-profile'),
    path('auth/change-password/', change_password, name='change-password'),

    # Customer endpoints
    path('admin/customers/', customer_list_create, name='customer-list-create'),
    path('admin/customers/<int:pk>/', customer_detail, name='customer-detail'),

    # Staff account endpoints
    path('admin/users/', user_list_create, name='user-list-create'),
    path('admin/users/stats/', user_stats, name='user-stats'),
    path('admin/users/<int:pk>/', user_detail, name='user-detail'),
    path('admin/users/<int:pk>/permissions/', user_permissions, name='user-permissions'),
    path('admin/users/<int:pk>/change-password/', user_change_password, name='user-change-password'),

    # AuditLog endpoints
    path('admin/audit-logs/', audit_log_list, name='audit-log-list'),
    path('admin/audit-logs/<int:pk>/', audit_log_detail, name='audit-log-detail'),
]
