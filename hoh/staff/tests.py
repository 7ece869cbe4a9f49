"""
Comprehensive test suite for Staff module
Tests: Employee CRUD, linked login accounts, role lookups, statistics and access rules
"""
from django.test import TestCase
from rest_framework import status
from hoh.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from hoh.core.models import User, AuditLog
from hoh.staff.models import Employee


class EmployeeModelTests(TestCase):
    """Test Employee model helpers"""

    def test_email_is_lowercased(self):
        employee = TestDataFactory.create_employee(email='Designer@HOH.com')
        self.assertEqual(employee.email, 'designer@hoh.com')

    def test_department_for_role(self):
        self.assertEqual(Employee.department_for_role('crm'), 'sales')
        self.assertEqual(Employee.department_for_role('manager'), 'management')
        self.assertEqual(Employee.department_for_role('unknown'), 'design')


class EmployeeAPITests(TestCase):
    """Test employee endpoints"""

    def setUp(self):
        self.admin = TestDataFactory.create_admin()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.admin)

    def _payload(self, **overrides):
        data = {
            'employee_id': 'EMP001',
            'full_name': 'Divya Menon',
            'email': 'Divya@HOH.com',
            'phone': '9876543210',
            'role': 'designer',
            'password': 'secret123',
        }
        data.update(overrides)
        return data

    def test_create_employee_with_login(self):
        response = self.client.post('/api/admin/employees/', self._payload(), format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['employee']['department'], 'design')
        self.assertEqual(response.data['employee']['service_type'], 'interior')

        user = User.objects.get(email='divya@hoh.com')
        self.assertEqual(user.role, 'designer')
        self.assertEqual(user.verticals, ['interior'])
        self.assertTrue(user.check_password('secret123'))
        self.assertTrue(AuditLog.objects.filter(model_name='Employee', action='create').exists())

    def test_sales_employee_logs_in_as_crm(self):
        response = self.client.post('/api/admin/employees/', self._payload(role='sales'), format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['user']['role'], 'crm')
        self.assertEqual(response.data['employee']['department'], 'sales')

    def test_invalid_department_falls_back_to_role(self):
        response = self.client.post('/api/admin/employees/', self._payload(role='manager', department='space'),
                                    format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['employee']['department'], 'management')

    def test_password_required(self):
        payload = self._payload()
        payload.pop('password')
        response = self.client.post('/api/admin/employees/', payload, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(str(response.data['password'][0]), 'Password is required and must be at least 6 characters')
        self.assertFalse(Employee.objects.exists())

    def test_duplicate_employee_id(self):
        TestDataFactory.create_employee(employee_id='EMP001')
        response = self.client.post('/api/admin/employees/', self._payload(), format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('employee_id', response.data)

    def test_existing_user_email(self):
        TestDataFactory.create_customer(email='divya@hoh.com')
        response = self.client.post('/api/admin/employees/', self._payload(), format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(str(response.data['email'][0]), 'User with this email already exists')

    def test_vertical_admin_cannot_create_in_other_vertical(self):
        self.client.authenticate_user(TestDataFactory.create_admin(role='interior_admin'))
        response = self.client.post('/api/admin/employees/', self._payload(service_type='construction'),
                                    format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(Employee.objects.exists())

    def test_vertical_admin_defaults_to_own_vertical(self):
        self.client.authenticate_user(TestDataFactory.create_admin(role='construction_admin'))
        response = self.client.post('/api/admin/employees/', self._payload(), format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['employee']['service_type'], 'construction')

    def test_list_search_and_filter(self):
        TestDataFactory.create_employee(role='designer', full_name='Arun Das')
        TestDataFactory.create_employee(role='crm', full_name='Arundhati Roy')
        TestDataFactory.create_employee(role='crm', full_name='Zoya Khan')
        response = self.client.get('/api/admin/employees/', {'search': 'arun', 'role': 'crm'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['count'], 1)
        self.assertEqual(response.data['results'][0]['full_name'], 'Arundhati Roy')

    def test_assigned_projects_listed(self):
        designer = TestDataFactory.create_employee(role='designer')
        project = TestDataFactory.create_project(assigned_designer=designer)
        response = self.client.get(f'/api/admin/employees/{designer.id}/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['assigned_projects'][0]['project_id'], project.project_id)

    def test_update_syncs_login_account(self):
        self.client.post('/api/admin/employees/', self._payload(), format='json')
        employee = Employee.objects.get()
        response = self.client.patch(f'/api/admin/employees/{employee.id}/', {
            'email': 'divya.m@hoh.com', 'status': 'inactive',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        user = User.objects.get(email='divya.m@hoh.com')
        self.assertFalse(user.is_active)
        self.assertFalse(User.objects.filter(email='divya@hoh.com').exists())

    def test_update_rejects_email_of_another_user(self):
        self.client.post('/api/admin/employees/', self._payload(), format='json')
        TestDataFactory.create_customer(email='taken@hoh.com')
        employee = Employee.objects.get()
        response = self.client.patch(f'/api/admin/employees/{employee.id}/', {'email': 'taken@hoh.com'},
                                     format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(str(response.data['email'][0]), 'User with this email already exists')
        employee.refresh_from_db()
        self.assertEqual(employee.email, 'divya@hoh.com')
        self.assertTrue(User.objects.filter(email='divya@hoh.com').exists())

    def test_update_keeps_own_email(self):
        self.client.post('/api/admin/employees/', self._payload(), format='json')
        employee = Employee.objects.get()
        response = self.client.patch(f'/api/admin/employees/{employee.id}/', {
            'email': 'divya@hoh.com', 'full_name': 'Divya M',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(User.objects.get(email='divya@hoh.com').full_name, 'Divya M')

    def test_delete_deactivates_login(self):
        self.client.post('/api/admin/employees/', self._payload(), format='json')
        employee = Employee.objects.get()
        response = self.client.delete(f'/api/admin/employees/{employee.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Employee.objects.exists())
        self.assertFalse(User.objects.get(email='divya@hoh.com').is_active)

    def test_by_role_returns_active_only(self):
        TestDataFactory.create_employee(role='designer', full_name='Active One')
        TestDataFactory.create_employee(role='designer', status='inactive')
        TestDataFactory.create_employee(role='crm')
        response = self.client.get('/api/admin/employees/role/designer/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['count'], 1)
        self.assertEqual(response.data['results'][0]['full_name'], 'Active One')

    def test_stats(self):
        TestDataFactory.create_employee(role='designer')
        TestDataFactory.create_employee(role='crm', status='on-leave')
        TestDataFactory.create_employee(role='crm', status='inactive')
        response = self.client.get('/api/admin/employees/stats/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['total'], 3)
        self.assertEqual(response.data['active'], 1)
        self.assertEqual(response.data['on_leave'], 1)
        self.assertEqual(response.data['inactive'], 1)
        self.assertEqual(response.data['by_role'], {'designer': 1, 'crm': 2})
        self.assertEqual(response.data['by_department'], {'design': 1, 'sales': 2})

    def test_change_password(self):
        self.client.post('/api/admin/employees/', self._payload(), format='json')
        employee = Employee.objects.get()
        response = self.client.put(f'/api/admin/employees/{employee.id}/change-password/',
                                   {'new_password': 'brandnew1'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(User.objects.get(email='divya@hoh.com').check_password('brandnew1'))

    def test_change_password_without_login_account(self):
        employee = TestDataFactory.create_employee()
        response = self.client.put(f'/api/admin/employees/{employee.id}/change-password/',
                                   {'new_password': 'brandnew1'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['error'], 'User account not found for this employee')

    def test_change_password_too_short(self):
        employee = TestDataFactory.create_employee()
        response = self.client.put(f'/api/admin/employees/{employee.id}/change-password/',
                                   {'new_password': '123'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class EmployeeAccessTests(TestCase):
    """Test who may reach the employee endpoints"""

    def setUp(self):
        self.client = AuthenticatedAPIClient()

    def test_customer_denied(self):
        self.client.authenticate_user(TestDataFactory.create_customer())
        response = self.client.get('/api/admin/employees/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_manager_needs_permission(self):
        manager = TestDataFactory.create_user(role='manager')
        self.client.authenticate_user(manager)
        self.assertEqual(self.client.get('/api/admin/employees/').status_code, status.HTTP_403_FORBIDDEN)

        manager.admin_permissions = ['view_employees']
        manager.save()
        self.assertEqual(self.client.get('/api/admin/employees/').status_code, status.HTTP_200_OK)
        response = self.client.post('/api/admin/employees/', {}, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_vertical_scoping(self):
        TestDataFactory.create_employee(service_type='interior')
        TestDataFactory.create_employee(service_type='renovation')
        self.client.authenticate_user(TestDataFactory.create_admin(role='renovation_admin'))
        response = self.client.get('/api/admin/employees/')
        self.assertEqual(response.data['count'], 1)
        self.assertEqual(response.data['results'][0]['service_type'], 'renovation')
