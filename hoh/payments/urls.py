from django.urls import path
from .views import (
    payment_list_create, payment_detail, payment_stats, overdue_payments,
    mark_payment_paid, export_payments,
)

urlpatterns = [
    path('admin/payments/', payment_list_create, name='payment-list-create'),
    path('admin/payments/stats/', payment_stats, name='payment-stats'),
    path('admin/payments/overdue/', overdue_payments, name='payment-overdue'),
    path('admin/payments/export/', export_payments, name='payment-export'),
    path('admin/payments/<int:pk>/', payment_detail, name='payment-detail'),
    path('admin/payments/<int:pk>/mark-paid/', mark_payment_paid, name='payment-mark-paid'),
]
