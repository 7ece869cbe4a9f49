from django.urls import path
from .views import (
    testimonial_list, gallery_list,
    testimonial_create, testimonial_detail,
    gallery_item_create, gallery_item_detail,
)

urlpatterns = [
    # Public endpoints
    path('testimonials/', testimonial_list, name='testimonial-list'),
    path('gallery/', gallery_list, name='gallery-list'),

    # Admin endpoints
    path('admin/testimonials/', testimonial_create, name='testimonial-create'),
    path('admin/testimonials/<int:pk>/', testimonial_detail, name='testimonial-detail'),
    path('admin/gallery/', gallery_item_create, name='gallery-item-create'),
    path('admin/gallery/<int:pk>/', gallery_item_detail, name='gallery-item-detail'),
]
