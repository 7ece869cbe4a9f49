"""
Comprehensive test suite for Renovations module
Tests: Public service catalogue and caching, bookings, timeline, tracking and admin management
"""
from django.core.cache import cache
from django.test import TestCase
from rest_framework import status
from decimal import Decimal
from hoh.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from hoh.core.models import AuditLog
from hoh.renovations.cache import get_service_list_cache_key
from hoh.renovations.models import RenovationService, RenovationBooking


class RenovationModelTests(TestCase):
    """Test identifiers and the booking timeline"""

    def test_identifiers(self):
        service = TestDataFactory.create_renovation_service()
        booking = TestDataFactory.create_booking(service=service)
        self.assertEqual(service.service_id, 'REN-SVC-0001')
        self.assertEqual(booking.booking_id, 'REN-BK-00001')

    def test_new_booking_starts_timeline(self):
        booking = TestDataFactory.create_booking()
        self.assertEqual(booking.timeline.count(), 1)
        self.assertEqual(booking.timeline.get().status, 'pending')

    def test_timeline_only_grows_on_status_change(self):
        booking = TestDataFactory.create_booking()
        booking = RenovationBooking.objects.get(pk=booking.pk)
        booking.notes = 'Called the customer'
        booking.save()
        self.assertEqual(booking.timeline.count(), 1)
        booking.status = 'scheduled'
        booking.save(timeline_notes='Site visit on Monday')
        self.assertEqual(booking.timeline.count(), 2)
        self.assertEqual(booking.timeline.last().notes, 'Site visit on Monday')

    def test_completed_booking_is_stamped(self):
        booking = TestDataFactory.create_booking()
        booking.status = 'completed'
        booking.save()
        self.assertIsNotNone(booking.actual_completion_date)


class PublicRenovationAPITests(TestCase):
    """Test the public service list, booking and tracking endpoints"""

    def setUp(self):
        cache.clear()
        self.client = AuthenticatedAPIClient()
        self.service = TestDataFactory.create_renovation_service(title='Kitchen Refresh')

    def test_service_list_popular_first(self):
        TestDataFactory.create_renovation_service(title='Bathroom Makeover', category='Bathroom Renovation',
                                                  popular=True)
        TestDataFactory.create_renovation_service(title='Old Wing', active=False)
        response = self.client.get('/api/renovation-services/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['count'], 2)
        self.assertEqual(response.data['results'][0]['title'], 'Bathroom Makeover')

    def test_service_list_category_filter(self):
        TestDataFactory.create_renovation_service(category='Bathroom Renovation')
        response = self.client.get('/api/renovation-services/', {'category': 'Kitchen Renovation'})
        self.assertEqual(response.data['count'], 1)
        response = self.client.get('/api/renovation-services/', {'category': 'All'})
        self.assertEqual(response.data['count'], 2)

    def test_service_list_is_cached_and_invalidated(self):
        self.client.get('/api/renovation-services/')
        key = get_service_list_cache_key()
        self.assertIsNotNone(cache.get(key))
        self.service.title = 'Kitchen Refresh Plus'
        self.service.save()
        self.assertIsNone(cache.get(key))

    def test_create_booking(self):
        response = self.client.post('/api/renovation-bookings/', {
            'service': self.service.id,
            'customer_name': 'Neha',
            'customer_email': 'Neha@Example.com',
            'customer_phone': '98765 43210',
            'property_type': 'Residential',
            'area': '650',
            'requirement_description': 'Replace cabinets and countertop',
            'budget_min': '200000',
            'budget_max': '350000',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data['booking']['booking_id'].startswith('REN-BK-'))
        self.assertEqual(len(response.data['booking']['timeline']), 1)
        booking = RenovationBooking.objects.get()
        self.assertEqual(booking.customer_email, 'neha@example.com')
        self.service.refresh_from_db()
        self.assertEqual(self.service.total_bookings, 1)

    def test_booking_refreshes_cached_counts(self):
        self.client.get('/api/renovation-services/')
        self.client.post('/api/renovation-bookings/', {
            'service': self.service.id, 'customer_name': 'Neha', 'customer_email': 'neha@example.com',
            'customer_phone': '9876543210', 'property_type': 'Residential', 'area': '650',
            'requirement_description': 'Cabinets',
        }, format='json')
        response = self.client.get('/api/renovation-services/')
        self.assertEqual(response.data['results'][0]['total_bookings'], 1)

    def test_booking_unknown_service(self):
        response = self.client.post('/api/renovation-bookings/', {'service': 9999}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['error'], 'Renovation service not found')

    def test_booking_validation(self):
        response = self.client.post('/api/renovation-bookings/', {
            'service': self.service.id, 'customer_name': 'Neha', 'customer_email': 'bad',
            'customer_phone': '123', 'property_type': 'Residential', 'area': '0',
            'requirement_description': 'Cabinets', 'budget_min': '500', 'budget_max': '100',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        for field in ('customer_email', 'customer_phone', 'area'):
            self.assertIn(field, response.data)
        self.assertFalse(RenovationBooking.objects.exists())

    def test_track_booking(self):
        booking = TestDataFactory.create_booking(service=self.service)
        response = self.client.get(f'/api/renovation-bookings/{booking.booking_id}/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['service']['title'], 'Kitchen Refresh')
        self.assertNotIn('customer_email', response.data)

    def test_track_unknown_booking(self):
        response = self.client.get('/api/renovation-bookings/REN-BK-99999/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class AdminRenovationServiceTests(TestCase):
    """Test admin service management"""

    def setUp(self):
        cache.clear()
        self.admin = TestDataFactory.create_admin(role='renovation_admin')
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.admin)

    def test_other_vertical_admin_forbidden(self):
        self.client.authenticate_user(TestDataFactory.create_admin(role='interior_admin'))
        response = self.client.get('/api/admin/renovation-services/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_create_service(self):
        response = self.client.post('/api/admin/renovation-services/', {
            'title': 'Full Home Repaint',
            'description': 'Interior and exterior painting',
            'category': 'Exterior Renovation',
            'image_url': 'https://example.com/paint.jpg',
            'pricing_type': 'per_sqft',
            'base_price': '25',
            'duration_min': 5,
            'duration_max': 10,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        service = RenovationService.objects.get()
        self.assertEqual(service.created_by, self.admin)

    def test_duration_range(self):
        response = self.client.post('/api/admin/renovation-services/', {
            'title': 'X', 'description': 'Y', 'category': 'Exterior Renovation',
            'image_url': 'https://example.com/x.jpg', 'duration_min': 10, 'duration_max': 5,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('duration_max', response.data)

    def test_admin_list_includes_inactive(self):
        TestDataFactory.create_renovation_service(active=False)
        TestDataFactory.create_renovation_service()
        response = self.client.get('/api/admin/renovation-services/')
        self.assertEqual(response.data['count'], 2)
        response = self.client.get('/api/admin/renovation-services/', {'active': 'false'})
        self.assertEqual(response.data['count'], 1)

    def test_toggle_active_and_popular(self):
        service = TestDataFactory.create_renovation_service()
        response = self.client.patch(f'/api/admin/renovation-services/{service.id}/toggle-active/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['message'], 'Renovation service deactivated')
        self.assertFalse(response.data['service']['active'])

        response = self.client.post(f'/api/admin/renovation-services/{service.id}/toggle-popular/')
        self.assertEqual(response.data['message'], 'Renovation service marked as popular')
        service.refresh_from_db()
        self.assertTrue(service.popular)
        self.assertEqual(service.last_modified_by, self.admin)

    def test_service_with_bookings_cannot_be_deleted(self):
        booking = TestDataFactory.create_booking()
        response = self.client.delete(f'/api/admin/renovation-services/{booking.service_id}/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('Deactivate it instead', response.data['error'])

    def test_delete_unbooked_service(self):
        service = TestDataFactory.create_renovation_service()
        response = self.client.delete(f'/api/admin/renovation-services/{service.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)

    def test_service_stats(self):
        TestDataFactory.create_renovation_service(popular=True, total_bookings=4)
        TestDataFactory.create_renovation_service(category='Exterior Renovation', active=False, total_bookings=1)
        response = self.client.get('/api/admin/renovation-services/stats/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['total'], 2)
        self.assertEqual(response.data['inactive'], 1)
        self.assertEqual(response.data['popular'], 1)
        self.assertEqual(response.data['total_bookings'], 5)
        self.assertEqual(len(response.data['top_services']), 1)


class AdminRenovationBookingTests(TestCase):
    """Test admin booking workflow"""

    def setUp(self):
        self.admin = TestDataFactory.create_admin()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.admin)
        self.booking = TestDataFactory.create_booking(customer_name='Farah Ali')

    def test_list_search_and_filters(self):
        TestDataFactory.create_booking(customer_name='Gopal', priority='High')
        response = self.client.get('/api/admin/renovation-bookings/', {'search': 'farah', 'status': 'all'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['count'], 1)
        response = self.client.get('/api/admin/renovation-bookings/', {'priority': 'High'})
        self.assertEqual(response.data['results'][0]['customer_name'], 'Gopal')

    def test_status_update_adds_timeline_note(self):
        response = self.client.patch(f'/api/admin/renovation-bookings/{self.booking.id}/status/', {
            'status': 'scheduled', 'notes': 'Crew booked for the 12th',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data['timeline']), 2)
        self.assertEqual(response.data['timeline'][-1]['notes'], 'Crew booked for the 12th')
        self.assertEqual(response.data['timeline'][-1]['updated_by'], self.admin.id)

    def test_completion_is_stamped(self):
        response = self.client.patch(f'/api/admin/renovation-bookings/{self.booking.id}/status/',
                                     {'status': 'completed'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIsNotNone(response.data['actual_completion_date'])

    def test_invalid_status(self):
        response = self.client.patch(f'/api/admin/renovation-bookings/{self.booking.id}/status/',
                                     {'status': 'teleported'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_assign(self):
        member = TestDataFactory.create_user(role='crm', service_type='renovation')
        response = self.client.patch(f'/api/admin/renovation-bookings/{self.booking.id}/assign/',
                                     {'assigned_to': member.id}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['assigned_to'], member.id)

    def test_assign_customer_rejected(self):
        customer = TestDataFactory.create_customer()
        response = self.client.patch(f'/api/admin/renovation-bookings/{self.booking.id}/assign/',
                                     {'assigned_to': customer.id}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(str(response.data['assigned_to'][0]), 'Team member not found')

    def test_quotation(self):
        response = self.client.post(f'/api/admin/renovation-bookings/{self.booking.id}/quotation/', {
            'amount': '180000',
            'breakdown': [{'item': 'Cabinets', 'cost': '120000'}, {'item': 'Labour', 'cost': '60000'}],
            'valid_until': '2026-12-31',
            'notes': 'Includes hardware',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['status'], 'quote_sent')
        self.booking.refresh_from_db()
        self.assertEqual(self.booking.quotation_amount, Decimal('180000'))
        self.assertEqual(self.booking.quotation_breakdown[0], {'item': 'Cabinets', 'cost': 120000.0})
        self.assertTrue(AuditLog.objects.filter(action='quotation_sent').exists())

    def test_booking_stats(self):
        TestDataFactory.create_booking(status='completed', estimated_cost=Decimal('90000'))
        TestDataFactory.create_booking(status='cancelled', priority='Low')
        response = self.client.get('/api/admin/renovation-bookings/stats/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['total'], 3)
        self.assertEqual(response.data['pending'], 1)
        self.assertEqual(response.data['completed'], 1)
        self.assertEqual(response.data['cancelled'], 1)
        self.assertEqual(response.data['total_revenue'], 90000.0)
        self.assertEqual(response.data['by_priority'], {'Medium': 2, 'Low': 1})
