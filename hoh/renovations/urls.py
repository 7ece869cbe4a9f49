from django.urls import path
from .views import (
    service_list, service_detail, booking_create, booking_track,
    admin_service_list_create, admin_service_detail, admin_service_stats,
    admin_service_toggle_active, admin_service_toggle_popular,
    admin_booking_list, admin_booking_stats, admin_booking_detail,
    admin_booking_status, admin_booking_assign, admin_booking_quotation,
)

urlpatterns = [
    # Public
    path('renovation-services/', service_list, name='renovation-service-list'),
    path('renovation-services/<int:pk>/', service_detail, name='renovation-service-detail'),
    path('renovation-bookings/', booking_create, name='renovation-booking-create'),
    path('renovation-bookings/<str:booking_id>/', booking_track, name='renovation-booking-track'),

    # Admin: services
    path('admin/renovation-services/', admin_service_list_create, name='admin-renovation-service-list-create'),
    path('admin/renovation-services/stats/', admin_service_stats, name='admin-renovation-service-stats'),
    path('admin/renovation-services/<int:pk>/', admin_service_detail, name='admin-renovation-service-detail'),
    path('admin/renovation-services/<int:pk>/toggle-active/', admin_service_toggle_active, name='admin-renovation-service-toggle-active'),
    path('admin/renovation-services/<int:pk>/toggle-popular/', admin_service_toggle_popular, name='admin-renovation-service-toggle-popular'),

    # Admin: bookings
    path('admin/renovation-bookings/', admin_booking_list, name='admin-renovation-booking-list'),
    path('admin/renovation-bookings/stats/', admin_booking_stats, name='admin-renovation-booking-stats'),
    path('admin/renovation-bookings/<int:pk>/', admin_booking_detail, name='admin-renovation-booking-detail'),
    path('admin/renovation-bookings/<int:pk>/status/', admin_booking_status, name='admin-renovation-booking-status'),
    path('admin/renovation-bookings/<int:pk>/assign/', admin_booking_assign, name='admin-renovation-booking-assign'),
    path('admin/renovation-bookings/<int:pk>/quotation/', admin_booking_quotation, name='admin-renovation-booking-quotation'),
]
