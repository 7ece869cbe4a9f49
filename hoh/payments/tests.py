"""
Comprehensive test suite for Payments module
Tests: Payment status rules, recording, collection stats, overdue tracking and CSV export
"""
from io import StringIO
from django.core.management import call_command
from django.test import TestCase
from django.utils import timezone
from rest_framework import status
from decimal import Decimal
import datetime
from hoh.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from hoh.core.models import AuditLog
from hoh.payments.models import Payment


def days_from_today(days):
    return timezone.localdate() + datetime.timedelta(days=days)


class PaymentModelTests(TestCase):
    """Test Payment.save status rules"""

    def test_payment_ids_are_sequential(self):
        first = TestDataFactory.create_payment()
        second = TestDataFactory.create_payment()
        self.assertEqual(first.payment_id, 'PAY000001')
        self.assertEqual(second.payment_id, 'PAY000002')

    def test_pending_with_paid_date_becomes_paid(self):
        payment = TestDataFactory.create_payment(paid_date=timezone.now())
        self.assertEqual(payment.status, 'paid')

    def test_pending_past_due_becomes_overdue(self):
        payment = TestDataFactory.create_payment(due_date=days_from_today(-3))
        self.assertEqual(payment.status, 'overdue')

    def test_pending_due_in_future_stays_pending(self):
        payment = TestDataFactory.create_payment(due_date=days_from_today(3))
        self.assertEqual(payment.status, 'pending')

    def test_partially_paid_is_left_alone(self):
        payment = TestDataFactory.create_payment(due_date=days_from_today(-3), status='partially_paid')
        self.assertEqual(payment.status, 'partially_paid')


class PaymentAPITests(TestCase):
    """Test payment endpoints"""

    def setUp(self):
        self.admin = TestDataFactory.create_admin()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.admin)
        self.project = TestDataFactory.create_project(service_type='construction')

    def test_record_payment(self):
        response = self.client.post('/api/admin/payments/', {
            'project': self.project.id,
            'customer': self.project.customer_id,
            'amount': '250000.00',
            'due_date': days_from_today(10).isoformat(),
            'milestone': 'stage_1',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['service_type'], 'construction')
        self.assertEqual(response.data['status'], 'pending')
        self.assertEqual(response.data['project_code'], self.project.project_id)
        payment = Payment.objects.get()
        self.assertEqual(payment.collected_by, self.admin)

    def test_unknown_project(self):
        response = self.client.post('/api/admin/payments/', {
            'project': 9999, 'customer': self.project.customer_id, 'amount': '10',
            'due_date': days_from_today(1).isoformat(), 'milestone': 'advance',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(str(response.data['project'][0]), 'Project not found')

    def test_negative_amount(self):
        response = self.client.post('/api/admin/payments/', {
            'project': self.project.id, 'customer': self.project.customer_id, 'amount': '-5',
            'due_date': days_from_today(1).isoformat(), 'milestone': 'advance',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(str(response.data['amount'][0]), 'Amount cannot be negative')

    def test_vertical_admin_cannot_record_for_other_vertical(self):
        self.client.authenticate_user(TestDataFactory.create_admin(role='interior_admin'))
        response = self.client.post('/api/admin/payments/', {
            'project': self.project.id, 'customer': self.project.customer_id, 'amount': '10',
            'due_date': days_from_today(1).isoformat(), 'milestone': 'advance',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_own_service_type_does_not_unlock_other_vertical_project(self):
        interior_project = TestDataFactory.create_project(service_type='interior')
        self.client.authenticate_user(TestDataFactory.create_admin(role='construction_admin'))
        response = self.client.post('/api/admin/payments/', {
            'project': interior_project.id, 'customer': interior_project.customer_id, 'amount': '10',
            'due_date': days_from_today(1).isoformat(), 'milestone': 'advance',
            'service_type': 'construction',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(Payment.objects.exists())

    def test_service_type_must_match_project(self):
        response = self.client.post('/api/admin/payments/', {
            'project': self.project.id, 'customer': self.project.customer_id, 'amount': '10',
            'due_date': days_from_today(1).isoformat(), 'milestone': 'advance',
            'service_type': 'interior',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('service_type', response.data)
        self.assertFalse(Payment.objects.exists())

    def test_customer_must_match_project(self):
        other_customer = TestDataFactory.create_customer()
        response = self.client.post('/api/admin/payments/', {
            'project': self.project.id, 'customer': other_customer.id, 'amount': '10',
            'due_date': days_from_today(1).isoformat(), 'milestone': 'advance',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(str(response.data['customer'][0]), 'Customer does not match the project customer')

    def test_staff_account_is_not_a_customer(self):
        response = self.client.post('/api/admin/payments/', {
            'project': self.project.id, 'customer': self.admin.id, 'amount': '10',
            'due_date': days_from_today(1).isoformat(), 'milestone': 'advance',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(str(response.data['customer'][0]), 'Customer not found')

    def test_update_cannot_move_payment_to_another_project(self):
        payment = TestDataFactory.create_payment(project=self.project)
        other = TestDataFactory.create_project()
        response = self.client.patch(f'/api/admin/payments/{payment.id}/', {
            'project': other.id, 'notes': 'Customer asked for an extension',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        payment.refresh_from_db()
        self.assertEqual(payment.project, self.project)
        self.assertEqual(payment.notes, 'Customer asked for an extension')

    def test_list_filters(self):
        TestDataFactory.create_payment(project=self.project)
        TestDataFactory.create_payment(project=self.project, paid_date=timezone.now())
        TestDataFactory.create_payment()
        response = self.client.get('/api/admin/payments/', {'project': self.project.id, 'status': 'paid'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['count'], 1)

    def test_stats(self):
        TestDataFactory.create_payment(amount=Decimal('100000'), paid_date=timezone.now())
        TestDataFactory.create_payment(amount=Decimal('50000'))
        TestDataFactory.create_payment(amount=Decimal('50000'), due_date=days_from_today(-1))
        response = self.client.get('/api/admin/payments/stats/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['total'], 3)
        self.assertEqual(response.data['paid'], 1)
        self.assertEqual(response.data['pending'], 1)
        self.assertEqual(response.data['overdue'], 1)
        self.assertEqual(response.data['total_amount'], 200000.0)
        self.assertEqual(response.data['paid_amount'], 100000.0)
        self.assertEqual(response.data['pending_amount'], 100000.0)
        self.assertEqual(response.data['collection_rate'], 50.0)

    def test_stats_without_payments(self):
        response = self.client.get('/api/admin/payments/stats/')
        self.assertEqual(response.data['total'], 0)
        self.assertEqual(response.data['collection_rate'], 0)

    def test_overdue_list_earliest_first(self):
        late = TestDataFactory.create_payment(due_date=days_from_today(-2))
        later = TestDataFactory.create_payment(due_date=days_from_today(-9))
        TestDataFactory.create_payment(due_date=days_from_today(5))
        response = self.client.get('/api/admin/payments/overdue/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['count'], 2)
        self.assertEqual([row['id'] for row in response.data['results']], [later.id, late.id])

    def test_mark_paid(self):
        payment = TestDataFactory.create_payment(due_date=days_from_today(-2))
        response = self.client.patch(f'/api/admin/payments/{payment.id}/mark-paid/', {
            'transaction_id': 'UTR12345', 'payment_method': 'upi',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        payment.refresh_from_db()
        self.assertEqual(payment.status, 'paid')
        self.assertIsNotNone(payment.paid_date)
        self.assertEqual(payment.payment_method, 'upi')
        log = AuditLog.objects.get(action='payment_received')
        self.assertEqual(log.changes['status'], {'from': 'overdue', 'to': 'paid'})

    def test_export_csv(self):
        payment = TestDataFactory.create_payment(project=self.project)
        response = self.client.get('/api/admin/payments/export/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response['Content-Type'], 'text/csv')
        self.assertIn('attachment; filename="payments_', response['Content-Disposition'])
        lines = response.content.decode().strip().splitlines()
        self.assertEqual(len(lines), 2)
        self.assertTrue(lines[0].startswith('Payment ID,Project,Customer'))
        self.assertIn(payment.payment_id, lines[1])
        self.assertIn(self.project.project_id, lines[1])

    def test_delete(self):
        payment = TestDataFactory.create_payment()
        response = self.client.delete(f'/api/admin/payments/{payment.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Payment.objects.exists())


class PaymentAccessTests(TestCase):
    """Only admins, managers and CRMs handle payments"""

    def setUp(self):
        self.client = AuthenticatedAPIClient()

    def test_designer_forbidden(self):
        self.client.authenticate_user(TestDataFactory.create_user(role='designer'))
        response = self.client.get('/api/admin/payments/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_crm_sees_own_vertical(self):
        TestDataFactory.create_payment(project=TestDataFactory.create_project(service_type='interior'))
        TestDataFactory.create_payment(project=TestDataFactory.create_project(service_type='renovation'))
        self.client.authenticate_user(TestDataFactory.create_user(role='crm', service_type='renovation'))
        response = self.client.get('/api/admin/payments/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['count'], 1)
        self.assertEqual(response.data['results'][0]['service_type'], 'renovation')


class MarkOverduePaymentsCommandTests(TestCase):
    """Test the mark_overdue_payments management command"""

    def setUp(self):
        self.stale = TestDataFactory.create_payment(due_date=days_from_today(5))
        self.current = TestDataFactory.create_payment(due_date=days_from_today(5))
        # Move the due date into the past without going through save()
        Payment.objects.filter(pk=self.stale.pk).update(due_date=days_from_today(-1))

    def test_dry_run(self):
        out = StringIO()
        call_command('mark_overdue_payments', '--dry-run', stdout=out)
        self.assertIn('1 pending payment(s)', out.getvalue())
        self.stale.refresh_from_db()
        self.assertEqual(self.stale.status, 'pending')

    def test_marks_overdue(self):
        out = StringIO()
        call_command('mark_overdue_payments', stdout=out)
        self.assertIn('Marked 1 payment(s) as overdue', out.getvalue())
        self.stale.refresh_from_db()
        self.current.refresh_from_db()
        self.assertEqual(self.stale.status, 'overdue')
        self.assertEqual(self.current.status, 'pending')
