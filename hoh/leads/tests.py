"""
Comprehensive test suite for Leads module
Tests: Public lead capture, admin listing, filtering, change history and statistics
"""
from django.test import TestCase
from rest_framework import status
from decimal import Decimal
from hoh.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from hoh.core.models import AuditLog
from hoh.leads.models import Lead, LeadHistory


class LeadModelTests(TestCase):
    """Test Lead model methods"""

    def test_email_is_lowercased(self):
        lead = TestDataFactory.create_lead(email='Someone@Example.COM')
        self.assertEqual(lead.email, 'someone@example.com')

    def test_add_history_without_user(self):
        lead = TestDataFactory.create_lead()
        entry = lead.add_history('note_added', 'Called back')
        self.assertEqual(entry.changed_by_name, 'System')
        self.assertIsNone(entry.changed_by)

    def test_add_history_with_user(self):
        admin = TestDataFactory.create_admin(full_name='Anita Admin')
        lead = TestDataFactory.create_lead()
        entry = lead.add_history('updated', 'City updated', user=admin, changes={'city': {'from': 'A', 'to': 'B'}})
        self.assertEqual(entry.changed_by, admin)
        self.assertEqual(entry.changed_by_name, 'Anita Admin')


class LeadCreateAPITests(TestCase):
    """Test the public lead capture endpoint"""

    def setUp(self):
        self.client = AuthenticatedAPIClient()

    def test_create_lead(self):
        response = self.client.post('/api/leads/', {
            'name': 'Rahul',
            'email': 'Rahul@Example.com',
            'phone': '9876543210',
            'city': 'Hyderabad',
            'carpet_area': '1100',
            'bhk': '2BHK',
            'package': 'Premium',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['message'], 'Lead inquiry saved successfully')
        lead = Lead.objects.get()
        self.assertEqual(lead.email, 'rahul@example.com')
        self.assertEqual(lead.status, 'new')
        self.assertEqual(lead.history.count(), 1)
        self.assertEqual(lead.history.first().action, 'created')

    def test_name_required(self):
        response = self.client.post('/api/leads/', {'email': 'a@b.com'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(str(response.data['name'][0]), 'Name is required')

    def test_invalid_email(self):
        response = self.client.post('/api/leads/', {'name': 'X', 'email': 'not-an-email'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('email', response.data)

    def test_non_positive_carpet_area(self):
        response = self.client.post('/api/leads/', {
            'name': 'X', 'email': 'x@y.com', 'carpet_area': '0',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('carpet_area', response.data)

    def test_status_cannot_be_set_publicly(self):
        response = self.client.post('/api/leads/', {
            'name': 'X', 'email': 'x@y.com', 'status': 'qualified',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Lead.objects.get().status, 'new')


class LeadAdminAPITests(TestCase):
    """Test admin lead endpoints"""

    def setUp(self):
        self.admin = TestDataFactory.create_admin()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.admin)

    def test_list_requires_admin(self):
        self.client.authenticate_user(TestDataFactory.create_customer())
        response = self.client.get('/api/admin/leads/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_list_paginated(self):
        for _ in range(12):
            TestDataFactory.create_lead()
        response = self.client.get('/api/admin/leads/', {'limit': 5})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['count'], 12)
        self.assertEqual(len(response.data['results']), 5)
        self.assertEqual(response.data['total_pages'], 3)

    def test_search_and_status_filter(self):
        TestDataFactory.create_lead(name='Deepa', status='qualified')
        TestDataFactory.create_lead(name='Deepak', status='new')
        TestDataFactory.create_lead(name='Suresh', status='qualified')
        response = self.client.get('/api/admin/leads/', {'search': 'deep', 'status': 'qualified'})
        self.assertEqual(response.data['count'], 1)
        self.assertEqual(response.data['results'][0]['name'], 'Deepa')

    def test_sort_by_whitelist(self):
        TestDataFactory.create_lead(name='Bravo')
        TestDataFactory.create_lead(name='Alpha')
        response = self.client.get('/api/admin/leads/', {'sort_by': 'name', 'order': 'asc'})
        self.assertEqual(response.data['results'][0]['name'], 'Alpha')
        response = self.client.get('/api/admin/leads/', {'sort_by': 'password'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_list_scoped_by_vertical(self):
        TestDataFactory.create_lead(service_type='interior')
        TestDataFactory.create_lead(service_type='construction')
        self.client.authenticate_user(TestDataFactory.create_admin(role='construction_admin'))
        response = self.client.get('/api/admin/leads/')
        self.assertEqual(response.data['count'], 1)
        self.assertEqual(response.data['results'][0]['service_type'], 'construction')

    def test_status_change_records_history(self):
        lead = TestDataFactory.create_lead()
        response = self.client.patch(f'/api/admin/leads/{lead.id}/', {'status': 'qualified'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['message'], 'Status changed from "new" to "qualified"')
        history = LeadHistory.objects.get(lead=lead)
        self.assertEqual(history.action, 'status_changed')
        self.assertEqual(history.changes['status'], {'from': 'new', 'to': 'qualified'})
        self.assertTrue(AuditLog.objects.filter(model_name='Lead', action='update').exists())

    def test_multiple_field_update(self):
        lead = TestDataFactory.create_lead(city='Pune')
        response = self.client.patch(f'/api/admin/leads/{lead.id}/', {
            'city': 'Mumbai', 'notes': 'Wants a site visit',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('City updated', response.data['message'])
        self.assertIn('Notes updated', response.data['message'])
        self.assertEqual(LeadHistory.objects.get(lead=lead).action, 'updated')

    def test_update_without_changes(self):
        lead = TestDataFactory.create_lead(city='Pune')
        response = self.client.patch(f'/api/admin/leads/{lead.id}/', {'city': 'Pune'}, format='json')
        self.assertEqual(response.data['message'], 'Lead information updated')
        self.assertFalse(LeadHistory.objects.filter(lead=lead).exists())

    def test_invalid_status(self):
        lead = TestDataFactory.create_lead()
        response = self.client.patch(f'/api/admin/leads/{lead.id}/', {'status': 'bogus'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_delete(self):
        lead = TestDataFactory.create_lead()
        response = self.client.delete(f'/api/admin/leads/{lead.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Lead.objects.filter(pk=lead.id).exists())

    def test_other_vertical_lead_not_found(self):
        lead = TestDataFactory.create_lead(service_type='interior')
        self.client.authenticate_user(TestDataFactory.create_admin(role='construction_admin'))
        response = self.client.get(f'/api/admin/leads/{lead.id}/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_stats(self):
        TestDataFactory.create_lead(city='Pune', carpet_area=Decimal('1000'), estimated_cost=Decimal('500000'))
        TestDataFactory.create_lead(city='Pune', carpet_area=Decimal('2000'), estimated_cost=Decimal('700000'))
        TestDataFactory.create_lead(city='Goa', status='lost')
        response = self.client.get('/api/admin/leads/stats/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['total'], 3)
        self.assertEqual(response.data['recent'], 3)
        self.assertEqual(response.data['by_status'], {'new': 2, 'lost': 1})
        self.assertEqual(response.data['by_city'][0], {'city': 'Pune', 'count': 2})
        self.assertEqual(response.data['avg_estimated_cost'], 600000)
        self.assertEqual(response.data['avg_carpet_area'], 1500)

    def test_stats_averages_round_half_up(self):
        TestDataFactory.create_lead(carpet_area=Decimal('1000'), estimated_cost=Decimal('2'))
        TestDataFactory.create_lead(carpet_area=Decimal('1001'), estimated_cost=Decimal('3'))
        response = self.client.get('/api/admin/leads/stats/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['avg_estimated_cost'], 3)
        self.assertEqual(response.data['avg_carpet_area'], 1001)
