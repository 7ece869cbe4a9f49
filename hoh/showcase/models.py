from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models


class Testimonial(models.Model):
    """Customer review shown on the public site"""
    name = models.CharField(max_length=200)
    photo_url = models.URLField(max_length=500, blank=True)
    review = models.TextField()
    rating = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(5)])
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.name} ({self.rating}/5)"

    class Meta:
        db_table = 'testimonials'
        ordering = ['-created_at']


class GalleryItem(models.Model):
    """Portfolio image"""
    image_url = models.URLField(max_length=500)
    category = models.CharField(max_length=100)
    title = models.CharField(max_length=200, blank=True)
    description = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.title or self.image_url

    class Meta:
        db_table = 'gallery_items'
        ordering = ['-created_at']
