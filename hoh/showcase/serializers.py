from rest_framework import serializers
from .models import Testimonial, GalleryItem


class TestimonialSerializer(serializers.ModelSerializer):
    class Meta:
        model = Testimonial
        fields = ['id', 'name', 'photo_url', 'review', 'rating', 'created_at', 'updated_at']
        read_only_fields = ['created_at', 'updated_at']


class GalleryItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = GalleryItem
        fields = ['id', 'image_url', 'category', 'title', 'description', 'created_at', 'updated_at']
        read_only_fields = ['created_at', 'updated_at']
