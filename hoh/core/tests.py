"""
Comprehensive test suite for Core module
Tests: Authentication, role and vertical access, customers, staff accounts, audit logs, pagination, routing
"""
from django.core.management import call_command
from django.test import TestCase, RequestFactory
from django.urls import resolve, Resolver404
from rest_framework import status
from rest_framework.request import Request
from io import StringIO
from hoh.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from hoh.core.access import (
    get_service_type_filter, get_user_service_types, has_admin_permission, is_admin_role, is_staff_role,
)
from hoh.core.exceptions import ServiceTypeAccessDenied
from hoh.core.models import User, AuditLog
from hoh.core.pagination import paginate
from hoh.core.serializers import UserSummarySerializer
from hoh.core.utils import create_audit_log, next_sequential_id
from hoh.core.validators import normalize_phone, is_valid_email, is_valid_phone, is_valid_mobile_number


class UserModelTests(TestCase):
    """Test User model behaviour"""

    def test_customer_gets_sequential_customer_id(self):
        first = TestDataFactory.create_customer()
        second = TestDataFactory.create_customer()
        self.assertEqual(first.customer_id, 'CUS000001')
        self.assertEqual(second.customer_id, 'CUS000002')

    def test_staff_has_no_customer_id(self):
        admin = TestDataFactory.create_admin()
        self.assertIsNone(admin.customer_id)

    def test_email_is_lowercased(self):
        user = TestDataFactory.create_customer(email='Mixed.Case@Test.com')
        self.assertEqual(user.email, 'mixed.case@test.com')

    def test_superuser_becomes_super_admin(self):
        user = User.objects.create_superuser(username='root@test.com', email='root@test.com', password='testpass123')
        self.assertEqual(user.role, 'super_admin')

    def test_accessible_verticals(self):
        admin = TestDataFactory.create_admin(role='construction_admin')
        self.assertEqual(admin.get_accessible_verticals(), ['construction'])
        self.assertTrue(admin.has_vertical_access('construction'))
        self.assertFalse(admin.has_vertical_access('interior'))


class AccessRuleTests(TestCase):
    """Test role and service type access helpers"""

    def test_super_admin_sees_everything(self):
        admin = TestDataFactory.create_admin()
        self.assertEqual(get_service_type_filter(admin), {})
        self.assertEqual(len(get_user_service_types(admin)), 4)

    def test_super_admin_can_narrow(self):
        admin = TestDataFactory.create_admin()
        self.assertEqual(get_service_type_filter(admin, 'renovation'), {'service_type': 'renovation'})

    def test_vertical_admin_is_pinned(self):
        admin = TestDataFactory.create_admin(role='interior_admin')
        self.assertEqual(get_service_type_filter(admin), {'service_type': 'interior'})

    def test_vertical_admin_denied_other_vertical(self):
        admin = TestDataFactory.create_admin(role='interior_admin')
        with self.assertRaises(ServiceTypeAccessDenied):
            get_service_type_filter(admin, 'construction')

    def test_staff_with_multiple_verticals(self):
        manager = TestDataFactory.create_user(role='manager', verticals=['interior', 'renovation'])
        self.assertEqual(
            get_service_type_filter(manager),
            {'service_type__in': ['interior', 'renovation']}
        )

    def test_unknown_requested_type_is_ignored(self):
        admin = TestDataFactory.create_admin(role='interior_admin')
        self.assertEqual(get_service_type_filter(admin, 'bogus'), {'service_type': 'interior'})

    def test_admin_permissions(self):
        admin = TestDataFactory.create_admin(role='admin')
        designer = TestDataFactory.create_user(role='designer', admin_permissions=['view_projects'])
        self.assertTrue(has_admin_permission(admin, 'delete_employees'))
        self.assertTrue(has_admin_permission(designer, 'view_projects'))
        self.assertFalse(has_admin_permission(designer, 'edit_projects'))

    def test_role_checks(self):
        self.assertTrue(is_admin_role(TestDataFactory.create_admin(role='renovation_admin')))
        self.assertFalse(is_admin_role(TestDataFactory.create_user(role='crm')))
        self.assertTrue(is_staff_role(TestDataFactory.create_user(role='crm')))
        self.assertFalse(is_staff_role(TestDataFactory.create_customer()))


class ValidatorTests(TestCase):
    """Test contact field validators"""

    def test_normalize_phone(self):
        self.assertEqual(normalize_phone('+91 (98765) 432-10'), '919876543210')

    def test_email(self):
        self.assertTrue(is_valid_email('a@b.co'))
        self.assertFalse(is_valid_email('a@b'))
        self.assertFalse(is_valid_email('a b@c.com'))

    def test_phone(self):
        self.assertTrue(is_valid_phone('+91 98765-43210'))
        self.assertFalse(is_valid_phone('12345'))

    def test_mobile_number(self):
        self.assertTrue(is_valid_mobile_number('98765 43210'))
        self.assertFalse(is_valid_mobile_number('+91 9876543210'))


class UtilsTests(TestCase):
    """Test sequential IDs and audit logging"""

    def test_next_sequential_id_skips_taken_numbers(self):
        TestDataFactory.create_customer()
        taken = TestDataFactory.create_customer()
        taken.customer_id = 'CUS000003'
        taken.save()
        self.assertEqual(next_sequential_id(User, 'customer_id', 'CUS', 6, role='user'), 'CUS000004')

    def test_create_audit_log(self):
        user = TestDataFactory.create_admin()
        log = create_audit_log(user=user, action='create', model_name='Project', object_id=7,
                               object_name='Villa', changes={'status': 'inquiry'})
        self.assertIsNotNone(log)
        self.assertEqual(log.object_id, '7')
        self.assertEqual(log.user, user)

    def test_create_audit_log_skips_missing_fields(self):
        self.assertIsNone(create_audit_log(action='create', model_name='Project'))
        self.assertEqual(AuditLog.objects.count(), 0)


class PaginationTests(TestCase):
    """Test the shared paginate helper"""

    def setUp(self):
        for _ in range(15):
            TestDataFactory.create_customer()
        self.factory = RequestFactory()

    def _paginate(self, query):
        request = Request(self.factory.get('/', query))
        return paginate(request, User.objects.order_by('id'), UserSummarySerializer)

    def test_defaults(self):
        data = self._paginate({}).data
        self.assertEqual(data['count'], 15)
        self.assertEqual(len(data['results']), 10)
        self.assertEqual(data['next'], 2)
        self.assertIsNone(data['previous'])
        self.assertEqual(data['total_pages'], 2)

    def test_invalid_values_fall_back(self):
        data = self._paginate({'page': 'abc', 'limit': '-3'}).data
        self.assertEqual(data['page'], 1)
        self.assertEqual(data['page_size'], 10)

    def test_limit_is_capped(self):
        data = self._paginate({'limit': '500'}).data
        self.assertEqual(data['page_size'], 100)


class AuthAPITests(TestCase):
    """Test signup, login and profile endpoints"""

    def setUp(self):
        self.client = AuthenticatedAPIClient()

    def test_signup(self):
        response = self.client.post('/api/auth/signup/', {
            'name': 'Asha Rao',
            'email': 'Asha@Example.com',
            'phone': '9876543210',
            'password': 'secret1',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertIn('access', response.data)
        self.assertEqual(response.data['user']['role'], 'user')
        self.assertEqual(response.data['user']['email'], 'asha@example.com')

    def test_signup_duplicate_email(self):
        TestDataFactory.create_customer(email='taken@example.com')
        response = self.client.post('/api/auth/signup/', {
            'name': 'Someone', 'email': 'taken@example.com', 'phone': '9876543210', 'password': 'secret1',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('email', response.data)

    def test_signup_invalid_phone(self):
        response = self.client.post('/api/auth/signup/', {
            'name': 'Someone', 'email': 'new@example.com', 'phone': '12345', 'password': 'secret1',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('phone', response.data)

    def test_signup_short_password(self):
        response = self.client.post('/api/auth/signup/', {
            'name': 'Someone', 'email': 'new@example.com', 'phone': '9876543210', 'password': '123',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('password', response.data)

    def test_login(self):
        TestDataFactory.create_admin(email='boss@test.com', password='pass12345')
        response = self.client.post('/api/auth/login/', {
            'email': 'boss@test.com', 'password': 'pass12345',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('refresh', response.data)
        self.assertEqual(response.data['user']['role'], 'super_admin')

    def test_login_wrong_password(self):
        TestDataFactory.create_admin(email='boss@test.com', password='pass12345')
        response = self.client.post('/api/auth/login/', {
            'email': 'boss@test.com', 'password': 'wrong',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_refresh(self):
        TestDataFactory.create_customer(email='cust@test.com', password='pass12345')
        login = self.client.post('/api/auth/login/', {
            'email': 'cust@test.com', 'password': 'pass12345',
        }, format='json')
        response = self.client.post('/api/auth/refresh/', {'refresh': login.data['refresh']}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('access', response.data)

    def test_refresh_with_garbage_token(self):
        response = self.client.post('/api/auth/refresh/', {'refresh': 'not-a-token'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_me(self):
        admin = TestDataFactory.create_admin(role='renovation_admin')
        self.client.authenticate_user(admin)
        response = self.client.get('/api/auth/me/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['accessible_service_types'], ['renovation'])

    def test_me_requires_auth(self):
        response = self.client.get('/api/auth/me/')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_update_profile(self):
        user = TestDataFactory.create_customer()
        self.client.authenticate_user(user)
        response = self.client.put('/api/auth/profile/', {'city': 'Pune'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        user.refresh_from_db()
        self.assertEqual(user.city, 'Pune')

    def test_change_password(self):
        user = TestDataFactory.create_customer(password='oldpass1')
        self.client.authenticate_user(user)
        response = self.client.put('/api/auth/change-password/', {
            'current_password': 'oldpass1', 'new_password': 'newpass1',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        user.refresh_from_db()
        self.assertTrue(user.check_password('newpass1'))
        self.assertTrue(AuditLog.objects.filter(action='password_change').exists())

    def test_change_password_wrong_current(self):
        user = TestDataFactory.create_customer(password='oldpass1')
        self.client.authenticate_user(user)
        response = self.client.put('/api/auth/change-password/', {
            'current_password': 'nope', 'new_password': 'newpass1',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class CustomerAPITests(TestCase):
    """Test admin customer endpoints"""

    def setUp(self):
        self.admin = TestDataFactory.create_admin()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.admin)

    def test_list_and_search(self):
        TestDataFactory.create_customer(full_name='Ravi Kumar')
        TestDataFactory.create_customer(full_name='Meena Iyer')
        response = self.client.get('/api/admin/customers/', {'search': 'ravi'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['count'], 1)
        self.assertEqual(response.data['results'][0]['full_name'], 'Ravi Kumar')

    def test_list_scoped_to_vertical(self):
        TestDataFactory.create_customer(service_type='interior')
        TestDataFactory.create_customer(service_type='construction')
        admin = TestDataFactory.create_admin(role='construction_admin')
        self.client.authenticate_user(admin)
        response = self.client.get('/api/admin/customers/')
        self.assertEqual(response.data['count'], 1)

    def test_vertical_admin_denied_other_vertical(self):
        admin = TestDataFactory.create_admin(role='construction_admin')
        self.client.authenticate_user(admin)
        response = self.client.get('/api/admin/customers/', {'service_type': 'interior'})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertIn('error', response.data)

    def test_create_customer(self):
        response = self.client.post('/api/admin/customers/', {
            'full_name': 'New Customer', 'email': 'new@cust.com', 'phone': '9876543210',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data['customer_id'].startswith('CUS'))
        self.assertTrue(AuditLog.objects.filter(model_name='Customer', action='create').exists())

    def test_update_customer(self):
        customer = TestDataFactory.create_customer()
        response = self.client.patch(f'/api/admin/customers/{customer.id}/', {'city': 'Chennai'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['city'], 'Chennai')

    def test_delete_customer_with_project(self):
        project = TestDataFactory.create_project()
        response = self.client.delete(f'/api/admin/customers/{project.customer_id}/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_delete_customer(self):
        customer = TestDataFactory.create_customer()
        response = self.client.delete(f'/api/admin/customers/{customer.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(User.objects.filter(pk=customer.id).exists())

    def test_staff_without_permission_denied(self):
        designer = TestDataFactory.create_user(role='designer')
        self.client.authenticate_user(designer)
        response = self.client.get('/api/admin/customers/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_staff_with_permission_allowed(self):
        manager = TestDataFactory.create_user(role='manager', admin_permissions=['view_customers'])
        self.client.authenticate_user(manager)
        response = self.client.get('/api/admin/customers/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)


class AuditLogAPITests(TestCase):
    """Test audit log endpoints"""

    def setUp(self):
        self.admin = TestDataFactory.create_admin()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.admin)
        create_audit_log(user=self.admin, action='create', model_name='Lead', object_id=1)
        create_audit_log(user=self.admin, action='delete', model_name='Project', object_id=2)

    def test_list_filter_by_action(self):
        response = self.client.get('/api/admin/audit-logs/', {'action': 'delete'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['count'], 1)
        self.assertEqual(response.data['results'][0]['model_name'], 'Project')

    def test_detail(self):
        log = AuditLog.objects.first()
        response = self.client.get(f'/api/admin/audit-logs/{log.id}/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_customer_denied(self):
        self.client.authenticate_user(TestDataFactory.create_customer())
        response = self.client.get('/api/admin/audit-logs/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class StaffUserAPITests(TestCase):
    """Test admin management of back-office accounts"""

    def setUp(self):
        self.admin = TestDataFactory.create_admin()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.admin)

    def _payload(self, **overrides):
        data = {
            'full_name': 'Nisha Pillai',
            'email': 'Nisha@HOH.com',
            'phone': '9876543210',
            'role': 'manager',
            'password': 'secret12',
        }
        data.update(overrides)
        return data

    def test_list_excludes_customers(self):
        TestDataFactory.create_user(role='manager', full_name='Kiran Shah')
        TestDataFactory.create_customer()
        response = self.client.get('/api/admin/users/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['count'], 2)
        self.assertNotIn('user', [row['role'] for row in response.data['results']])

    def test_list_search_and_role(self):
        TestDataFactory.create_user(role='manager', full_name='Kiran Shah')
        TestDataFactory.create_user(role='designer', full_name='Kiran Rao')
        response = self.client.get('/api/admin/users/', {'search': 'kiran', 'role': 'designer'})
        self.assertEqual(response.data['count'], 1)
        self.assertEqual(response.data['results'][0]['full_name'], 'Kiran Rao')

    def test_create_staff_account(self):
        response = self.client.post('/api/admin/users/', self._payload(admin_permissions=['view_customers']),
                                    format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['email'], 'nisha@hoh.com')
        self.assertEqual(response.data['admin_permissions'], ['view_customers'])
        self.assertNotIn('password', response.data)
        user = User.objects.get(email='nisha@hoh.com')
        self.assertTrue(user.check_password('secret12'))
        self.assertIsNone(user.customer_id)
        self.assertTrue(AuditLog.objects.filter(model_name='User', action='create').exists())

    def test_create_requires_password(self):
        payload = self._payload()
        payload.pop('password')
        response = self.client.post('/api/admin/users/', payload, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('password', response.data)

    def test_create_rejects_customer_role(self):
        response = self.client.post('/api/admin/users/', self._payload(role='user'), format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('role', response.data)

    def test_create_duplicate_email(self):
        TestDataFactory.create_customer(email='nisha@hoh.com')
        response = self.client.post('/api/admin/users/', self._payload(), format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(str(response.data['email'][0]), 'User with this email already exists')

    def test_create_invalid_permission(self):
        response = self.client.post('/api/admin/users/', self._payload(admin_permissions=['fly']), format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('admin_permissions', response.data)

    def test_update_ignores_password(self):
        manager = TestDataFactory.create_user(role='manager', password='original1')
        response = self.client.patch(f'/api/admin/users/{manager.id}/', {
            'role': 'designer', 'password': 'hijacked1',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        manager.refresh_from_db()
        self.assertEqual(manager.role, 'designer')
        self.assertTrue(manager.check_password('original1'))

    def test_cannot_demote_own_account(self):
        response = self.client.patch(f'/api/admin/users/{self.admin.id}/', {'role': 'manager'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.admin.refresh_from_db()
        self.assertEqual(self.admin.role, 'super_admin')

    def test_customer_not_reachable(self):
        customer = TestDataFactory.create_customer()
        response = self.client.get(f'/api/admin/users/{customer.id}/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_delete(self):
        manager = TestDataFactory.create_user(role='manager')
        response = self.client.delete(f'/api/admin/users/{manager.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(User.objects.filter(pk=manager.id).exists())
        self.assertTrue(AuditLog.objects.filter(model_name='User', action='delete').exists())

    def test_cannot_delete_own_account(self):
        response = self.client.delete(f'/api/admin/users/{self.admin.id}/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Cannot delete your own account')

    def test_update_permissions(self):
        manager = TestDataFactory.create_user(role='manager')
        response = self.client.patch(f'/api/admin/users/{manager.id}/permissions/', {
            'admin_permissions': ['view_customers', 'view_projects'],
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        log = AuditLog.objects.get(model_name='User', action='update')
        self.assertEqual(log.changes['admin_permissions']['to'], ['view_customers', 'view_projects'])

        self.client.authenticate_user(manager)
        self.assertEqual(self.client.get('/api/admin/customers/').status_code, status.HTTP_200_OK)

    def test_permissions_must_be_a_list(self):
        manager = TestDataFactory.create_user(role='manager')
        response = self.client.patch(f'/api/admin/users/{manager.id}/permissions/', {
            'admin_permissions': 'view_customers',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(str(response.data['admin_permissions'][0]), 'Permissions must be an array')

    def test_unknown_permission_rejected(self):
        manager = TestDataFactory.create_user(role='manager')
        response = self.client.patch(f'/api/admin/users/{manager.id}/permissions/', {
            'admin_permissions': ['view_customers', 'launch_rockets'],
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        manager.refresh_from_db()
        self.assertEqual(manager.admin_permissions, [])

    def test_stats(self):
        TestDataFactory.create_user(role='manager', is_active=False)
        TestDataFactory.create_customer()
        response = self.client.get('/api/admin/users/stats/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['total'], 3)
        self.assertEqual(response.data['active'], 2)
        self.assertEqual(response.data['inactive'], 1)
        self.assertEqual(response.data['recent'], 3)
        self.assertEqual(response.data['by_role'], {'super_admin': 1, 'manager': 1, 'user': 1})

    def test_change_password(self):
        manager = TestDataFactory.create_user(role='manager')
        response = self.client.put(f'/api/admin/users/{manager.id}/change-password/',
                                   {'new_password': 'brandnew1'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        manager.refresh_from_db()
        self.assertTrue(manager.check_password('brandnew1'))
        self.assertTrue(AuditLog.objects.filter(model_name='User', action='password_change').exists())

    def test_change_password_too_short(self):
        manager = TestDataFactory.create_user(role='manager')
        response = self.client.put(f'/api/admin/users/{manager.id}/change-password/',
                                   {'new_password': '123'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(str(response.data['new_password'][0]), 'Password must be at least 6 characters')


class StaffUserAccessTests(TestCase):
    """Only admins read accounts and only a super admin changes them"""

    def setUp(self):
        self.client = AuthenticatedAPIClient()
        self.manager = TestDataFactory.create_user(role='manager')

    def test_vertical_admin_reads_but_cannot_write(self):
        self.client.authenticate_user(TestDataFactory.create_admin(role='interior_admin'))
        self.assertEqual(self.client.get('/api/admin/users/').status_code, status.HTTP_200_OK)
        response = self.client.post('/api/admin/users/', {
            'full_name': 'X', 'email': 'x@hoh.com', 'role': 'super_admin', 'password': 'secret12',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(User.objects.filter(email='x@hoh.com').exists())

    def test_vertical_admin_cannot_grant_permissions(self):
        self.client.authenticate_user(TestDataFactory.create_admin(role='interior_admin'))
        response = self.client.patch(f'/api/admin/users/{self.manager.id}/permissions/', {
            'admin_permissions': ['manage_permissions'],
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_vertical_admin_cannot_reset_password(self):
        self.client.authenticate_user(TestDataFactory.create_admin(role='construction_admin'))
        response = self.client.put(f'/api/admin/users/{self.manager.id}/change-password/',
                                   {'new_password': 'brandnew1'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_staff_with_permission_still_denied(self):
        self.manager.admin_permissions = ['view_users', 'manage_permissions']
        self.manager.save()
        self.client.authenticate_user(self.manager)
        self.assertEqual(self.client.get('/api/admin/users/').status_code, status.HTTP_403_FORBIDDEN)

    def test_vertical_admin_list_scoped(self):
        TestDataFactory.create_user(role='crm', service_type='construction')
        self.client.authenticate_user(TestDataFactory.create_admin(role='construction_admin'))
        response = self.client.get('/api/admin/users/')
        self.assertTrue(all(row['service_type'] == 'construction' for row in response.data['results']))
        self.assertEqual(response.data['count'], 2)


class SeedAdminsCommandTests(TestCase):
    """Test the seed_admins management command"""

    def test_creates_admins_once(self):
        call_command('seed_admins', '--password', 'seedpass1', stdout=StringIO())
        self.assertEqual(User.objects.filter(role='super_admin').count(), 1)
        self.assertTrue(User.objects.filter(role='on_demand_admin').exists())
        call_command('seed_admins', stdout=StringIO())
        self.assertEqual(User.objects.exclude(role='user').count(), 5)


class HealthCheckTests(TestCase):
    def test_health(self):
        response = self.client.get('/health/')
        self.assertEqual(response.status_code, 200)

    def test_api_mounted_without_version_prefix(self):
        self.assertEqual(resolve('/api/auth/login/').url_name, 'token_obtain_pair')
        with self.assertRaises(Resolver404):
            resolve('/api/v1/auth/login/')

    def test_media_not_served(self):
        with self.assertRaises(Resolver404):
            resolve('/media/secrets.txt')
