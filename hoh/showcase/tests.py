"""
Comprehensive test suite for Showcase module
Tests: Public testimonial and gallery lists, caching, admin management
"""
from django.core.cache import cache
from django.test import TestCase
from rest_framework import status
from hoh.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from hoh.showcase.cache import TESTIMONIAL_LIST_KEY, get_gallery_list_cache_key
from hoh.showcase.models import Testimonial, GalleryItem


class PublicShowcaseAPITests(TestCase):
    """Test public testimonial and gallery endpoints"""

    def setUp(self):
        cache.clear()
        self.client = AuthenticatedAPIClient()

    def test_testimonial_list(self):
        TestDataFactory.create_testimonial(name='Priya')
        TestDataFactory.create_testimonial(name='Arjun')
        response = self.client.get('/api/testimonials/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['count'], 2)
        self.assertEqual(response.data['results'][0]['name'], 'Arjun')

    def test_testimonial_list_is_cached(self):
        TestDataFactory.create_testimonial()
        self.client.get('/api/testimonials/')
        self.assertIsNotNone(cache.get(TESTIMONIAL_LIST_KEY))

    def test_testimonial_save_invalidates_cache(self):
        TestDataFactory.create_testimonial()
        self.client.get('/api/testimonials/')
        TestDataFactory.create_testimonial()
        self.assertIsNone(cache.get(TESTIMONIAL_LIST_KEY))
        response = self.client.get('/api/testimonials/')
        self.assertEqual(response.data['count'], 2)

    def test_gallery_category_filter_is_case_insensitive(self):
        TestDataFactory.create_gallery_item(category='Kitchen')
        TestDataFactory.create_gallery_item(category='Bedroom')
        response = self.client.get('/api/gallery/', {'category': 'kitchen'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['count'], 1)
        self.assertEqual(response.data['results'][0]['category'], 'Kitchen')

    def test_gallery_delete_invalidates_all_categories(self):
        item = TestDataFactory.create_gallery_item(category='Kitchen')
        self.client.get('/api/gallery/', {'category': 'Kitchen'})
        self.client.get('/api/gallery/')
        item.delete()
        self.assertIsNone(cache.get(get_gallery_list_cache_key('Kitchen')))
        self.assertIsNone(cache.get(get_gallery_list_cache_key()))
        response = self.client.get('/api/gallery/')
        self.assertEqual(response.data['count'], 0)


class AdminShowcaseAPITests(TestCase):
    """Test admin testimonial and gallery management"""

    def setUp(self):
        cache.clear()
        self.admin = TestDataFactory.create_admin(role='admin')
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.admin)

    def test_create_testimonial(self):
        response = self.client.post('/api/admin/testimonials/', {
            'name': 'Kavya', 'review': 'Loved the kitchen', 'rating': 5,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(Testimonial.objects.filter(name='Kavya').exists())

    def test_create_testimonial_rating_out_of_range(self):
        response = self.client.post('/api/admin/testimonials/', {
            'name': 'Kavya', 'review': 'Hmm', 'rating': 6,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('rating', response.data)

    def test_update_testimonial(self):
        testimonial = TestDataFactory.create_testimonial(rating=3)
        response = self.client.patch(f'/api/admin/testimonials/{testimonial.id}/', {'rating': 4}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['rating'], 4)

    def test_delete_gallery_item(self):
        item = TestDataFactory.create_gallery_item()
        response = self.client.delete(f'/api/admin/gallery/{item.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(GalleryItem.objects.filter(pk=item.id).exists())

    def test_create_gallery_item(self):
        response = self.client.post('/api/admin/gallery/', {
            'image_url': 'https://example.com/a.jpg', 'category': 'Living Room',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

    def test_customer_cannot_manage(self):
        self.client.authenticate_user(TestDataFactory.create_customer())
        response = self.client.post('/api/admin/gallery/', {
            'image_url': 'https://example.com/a.jpg', 'category': 'Living Room',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
