"""
Comprehensive test suite for Projects module
Tests: Project CRUD, assignment scoping, milestones and statistics
"""
from django.test import TestCase
from rest_framework import status
from decimal import Decimal
from hoh.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from hoh.core.models import AuditLog
from hoh.projects.models import Project, Milestone


class ProjectModelTests(TestCase):
    """Test Project and Milestone model behaviour"""

    def test_project_ids_are_sequential(self):
        first = TestDataFactory.create_project()
        second = TestDataFactory.create_project()
        self.assertEqual(first.project_id, 'PRJ000001')
        self.assertEqual(second.project_id, 'PRJ000002')

    def test_completed_milestone_gets_completion_date(self):
        project = TestDataFactory.create_project()
        milestone = Milestone.objects.create(project=project, name='Design sign-off', status='completed')
        self.assertIsNotNone(milestone.completed_date)


class ProjectAPITests(TestCase):
    """Test project endpoints as an admin"""

    def setUp(self):
        self.admin = TestDataFactory.create_admin()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.admin)
        self.customer = TestDataFactory.create_customer()

    def _payload(self, **overrides):
        data = {
            'title': 'Villa interiors',
            'customer': self.customer.id,
            'project_type': 'residential',
            'carpet_area': '1850.00',
            'room_types': ['Living Room', 'Kitchen'],
        }
        data.update(overrides)
        return data

    def test_create_project(self):
        response = self.client.post('/api/admin/projects/', self._payload(), format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data['project_id'].startswith('PRJ'))
        self.assertEqual(response.data['customer_detail']['email'], self.customer.email)
        self.assertEqual(response.data['status'], 'inquiry')
        self.assertTrue(AuditLog.objects.filter(model_name='Project', action='create').exists())

    def test_service_type_falls_back_to_customer(self):
        customer = TestDataFactory.create_customer(service_type='construction')
        response = self.client.post('/api/admin/projects/', self._payload(customer=customer.id), format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['service_type'], 'construction')

    def test_unknown_customer(self):
        response = self.client.post('/api/admin/projects/', self._payload(customer=99999), format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(str(response.data['customer'][0]), 'Customer not found')

    def test_designer_must_have_designer_role(self):
        crm = TestDataFactory.create_employee(role='crm')
        response = self.client.post('/api/admin/projects/', self._payload(assigned_designer=crm.id), format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(str(response.data['assigned_designer'][0]), 'Invalid designer ID')

    def test_carpet_area_must_be_positive(self):
        response = self.client.post('/api/admin/projects/', self._payload(carpet_area='0'), format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(str(response.data['carpet_area'][0]), 'Carpet area must be greater than 0')

    def test_end_date_before_start(self):
        response = self.client.post('/api/admin/projects/', self._payload(
            start_date='2026-05-01', expected_end_date='2026-04-01',
        ), format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('expected_end_date', response.data)

    def test_vertical_admin_cannot_create_elsewhere(self):
        self.client.authenticate_user(TestDataFactory.create_admin(role='interior_admin'))
        response = self.client.post('/api/admin/projects/', self._payload(service_type='renovation'),
                                    format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(Project.objects.exists())

    def test_list_search_and_status(self):
        TestDataFactory.create_project(title='Lake View Penthouse', status='design_done')
        TestDataFactory.create_project(title='Lake Side Cottage')
        TestDataFactory.create_project(title='Office Fitout', status='design_done')
        response = self.client.get('/api/admin/projects/', {'search': 'lake', 'status': 'design_done'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['count'], 1)
        self.assertEqual(response.data['results'][0]['title'], 'Lake View Penthouse')

    def test_status_change_is_audited(self):
        project = TestDataFactory.create_project()
        response = self.client.patch(f'/api/admin/projects/{project.id}/', {'status': 'design_done'},
                                     format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        log = AuditLog.objects.get(model_name='Project', action='status_change')
        self.assertEqual(log.changes['status'], {'from': 'inquiry', 'to': 'design_done'})

    def test_clear_designer_with_empty_string(self):
        designer = TestDataFactory.create_employee(role='designer')
        project = TestDataFactory.create_project(assigned_designer=designer)
        response = self.client.patch(f'/api/admin/projects/{project.id}/', {'assigned_designer': ''},
                                     format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        project.refresh_from_db()
        self.assertIsNone(project.assigned_designer)

    def test_delete(self):
        project = TestDataFactory.create_project()
        response = self.client.delete(f'/api/admin/projects/{project.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Project.objects.filter(pk=project.id).exists())

    def test_customer_with_project_cannot_be_deleted(self):
        project = TestDataFactory.create_project(customer=self.customer)
        response = self.client.delete(f'/api/admin/customers/{self.customer.id}/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertTrue(Project.objects.filter(pk=project.id).exists())

    def test_add_milestone(self):
        project = TestDataFactory.create_project()
        response = self.client.post(f'/api/admin/projects/{project.id}/milestones/', {
            'name': 'Advance', 'payment_percentage': '10', 'payment_amount': '50000',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(len(response.data['milestones']), 1)
        self.assertEqual(response.data['milestones'][0]['name'], 'Advance')

    def test_milestone_percentage_range(self):
        project = TestDataFactory.create_project()
        response = self.client.post(f'/api/admin/projects/{project.id}/milestones/', {
            'name': 'Advance', 'payment_percentage': '120',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Milestone.objects.exists())

    def test_stats(self):
        TestDataFactory.create_project(status='design_done')
        TestDataFactory.create_project(status='on_hold', project_type='commercial')
        TestDataFactory.create_project(status='handover_move_in')
        TestDataFactory.create_project(status='cancelled', carpet_area=Decimal('900'))
        response = self.client.get('/api/admin/projects/stats/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['total'], 4)
        self.assertEqual(response.data['active'], 2)
        self.assertEqual(response.data['completed'], 1)
        self.assertEqual(response.data['on_hold'], 1)
        self.assertEqual(response.data['by_type'], {'residential': 3, 'commercial': 1})


class ProjectAssignmentScopeTests(TestCase):
    """Designers and CRMs only see their own projects"""

    def setUp(self):
        self.client = AuthenticatedAPIClient()
        self.designer_user = TestDataFactory.create_user(email='maya@hoh.com', role='designer')
        self.designer = TestDataFactory.create_employee(role='designer', email='maya@hoh.com')
        self.mine = TestDataFactory.create_project(title='Mine', assigned_designer=self.designer)
        self.other = TestDataFactory.create_project(title='Someone else')

    def test_designer_sees_assigned_only(self):
        self.client.authenticate_user(self.designer_user)
        response = self.client.get('/api/admin/projects/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['count'], 1)
        self.assertEqual(response.data['results'][0]['title'], 'Mine')

    def test_designer_cannot_open_unassigned_project(self):
        self.client.authenticate_user(self.designer_user)
        response = self.client.get(f'/api/admin/projects/{self.other.id}/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_designer_cannot_create_without_permission(self):
        self.client.authenticate_user(self.designer_user)
        response = self.client.post('/api/admin/projects/', {
            'title': 'X', 'customer': self.mine.customer_id, 'project_type': 'office', 'carpet_area': '500',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_designer_without_employee_record(self):
        self.client.authenticate_user(TestDataFactory.create_user(role='designer'))
        response = self.client.get('/api/admin/projects/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(str(response.data['detail']), 'Employee record not found')

    def test_crm_scope(self):
        crm_user = TestDataFactory.create_user(email='ravi@hoh.com', role='crm')
        crm = TestDataFactory.create_employee(role='crm', email='ravi@hoh.com')
        TestDataFactory.create_project(title='Handled by Ravi', assigned_crm=crm)
        self.client.authenticate_user(crm_user)
        response = self.client.get('/api/admin/projects/stats/')
        self.assertEqual(response.data['total'], 1)

    def test_customer_denied(self):
        self.client.authenticate_user(TestDataFactory.create_customer())
        response = self.client.get('/api/admin/projects/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
