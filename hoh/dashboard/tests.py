"""
Comprehensive test suite for Dashboard module
Tests: Summary counts, vertical scoping and the recent activity feed
"""
from django.test import TestCase
from django.utils import timezone
from rest_framework import status
import datetime
from hoh.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from hoh.leads.models import Lead
from hoh.projects.models import Project


class DashboardStatsTests(TestCase):
    """Test dashboard summary counts"""

    def setUp(self):
        self.client = AuthenticatedAPIClient()
        self.admin = TestDataFactory.create_admin()
        TestDataFactory.create_employee(service_type='interior')
        TestDataFactory.create_employee(service_type='interior', status='inactive')
        TestDataFactory.create_employee(service_type='construction')
        TestDataFactory.create_lead(service_type='interior', status='new')
        TestDataFactory.create_lead(service_type='interior', status='rnr')
        TestDataFactory.create_lead(service_type='interior', status='qualified')
        TestDataFactory.create_lead(service_type='construction')
        TestDataFactory.create_project(service_type='interior', status='design_done')
        TestDataFactory.create_project(service_type='interior', status='cancelled')
        TestDataFactory.create_project(service_type='construction')

    def test_super_admin_sees_everything(self):
        self.client.authenticate_user(self.admin)
        response = self.client.get('/api/admin/dashboard/stats/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['total_employees'], 2)
        self.assertEqual(response.data['total_leads'], 4)
        self.assertEqual(response.data['pending_leads'], 3)
        self.assertEqual(response.data['total_users'], 3)
        self.assertEqual(response.data['total_projects'], 3)
        self.assertEqual(response.data['active_projects'], 2)
        self.assertEqual(response.data['current_service_type'], 'all')
        self.assertEqual(len(response.data['available_service_types']), 4)
        self.assertEqual(response.data['user_role'], 'super_admin')

    def test_super_admin_narrows_by_service_type(self):
        self.client.authenticate_user(self.admin)
        response = self.client.get('/api/admin/dashboard/stats/', {'service_type': 'construction'})
        self.assertEqual(response.data['total_leads'], 1)
        self.assertEqual(response.data['total_projects'], 1)
        self.assertEqual(response.data['current_service_type'], 'construction')

    def test_vertical_admin_scoped(self):
        self.client.authenticate_user(TestDataFactory.create_admin(role='interior_admin'))
        response = self.client.get('/api/admin/dashboard/stats/')
        self.assertEqual(response.data['total_employees'], 1)
        self.assertEqual(response.data['total_leads'], 3)
        self.assertEqual(response.data['pending_leads'], 2)
        self.assertEqual(response.data['total_projects'], 2)
        self.assertEqual(response.data['active_projects'], 1)
        self.assertEqual(response.data['current_service_type'], 'interior')
        self.assertEqual(response.data['available_service_types'], ['interior'])

    def test_vertical_admin_cannot_request_other_vertical(self):
        self.client.authenticate_user(TestDataFactory.create_admin(role='interior_admin'))
        response = self.client.get('/api/admin/dashboard/stats/', {'service_type': 'construction'})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertIn('error', response.data)

    def test_staff_denied(self):
        self.client.authenticate_user(TestDataFactory.create_user(role='manager'))
        response = self.client.get('/api/admin/dashboard/stats/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class RecentActivitiesTests(TestCase):
    """Test the merged activity feed"""

    def setUp(self):
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(TestDataFactory.create_admin())

    def test_feed_is_newest_first(self):
        now = timezone.now()
        lead = TestDataFactory.create_lead(name='Old Lead')
        project = TestDataFactory.create_project(title='Fresh Project')
        Lead.objects.filter(pk=lead.pk).update(created_at=now - datetime.timedelta(days=2))
        Project.objects.filter(pk=project.pk).update(created_at=now + datetime.timedelta(minutes=1))

        response = self.client.get('/api/admin/dashboard/recent-activities/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        types = [activity['type'] for activity in response.data['results']]
        self.assertEqual(types[0], 'project')
        self.assertEqual(types[-1], 'lead')
        self.assertEqual(response.data['results'][0]['title'], 'New project: Fresh Project')

    def test_limit(self):
        for _ in range(4):
            TestDataFactory.create_lead()
        response = self.client.get('/api/admin/dashboard/recent-activities/', {'limit': 3})
        self.assertEqual(response.data['count'], 3)

    def test_invalid_limit_uses_default(self):
        for _ in range(12):
            TestDataFactory.create_lead()
        response = self.client.get('/api/admin/dashboard/recent-activities/', {'limit': 'lots'})
        self.assertEqual(response.data['count'], 10)
