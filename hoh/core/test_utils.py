"""
Test utilities and factories for creating test data
"""
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from hoh.leads.models import Lead
from hoh.staff.models import Employee
from hoh.projects.models import Project
from hoh.payments.models import Payment
from hoh.renovations.models import RenovationService, RenovationBooking
from hoh.showcase.models import Testimonial, GalleryItem
from decimal import Decimal
from django.utils import timezone
import datetime
import random
import string

User = get_user_model()


class TestDataFactory:
    """Factory class for creating test data"""

    @staticmethod
    def random_string(length=10):
        """Generate a random string"""
        return ''.join(random.choices(string.ascii_lowercase + string.digits, k=length))

    @staticmethod
    def random_phone():
        return f'9{random.randint(100000000, 999999999)}'

    @staticmethod
    def create_user(email=None, password='testpass123', role='user', service_type='interior', **extra):
        """Create a test user"""
        if not email:
            email = f'user_{TestDataFactory.random_string(6)}@test.com'
        return User.objects.create_user(
            username=email,
            email=email,
            password=password,
            role=role,
            service_type=service_type,
            full_name=extra.pop('full_name', f'Test {role.title()}'),
            **extra
        )

    @staticmethod
    def create_admin(role='super_admin', **kwargs):
        """Create an admin user; vertical admins get their vertical as service type"""
        service_type = {
            'interior_admin': 'interior',
            'construction_admin': 'construction',
            'renovation_admin': 'renovation',
            'on_demand_admin': 'on_demand',
        }.get(role, kwargs.pop('service_type', 'interior'))
        return TestDataFactory.create_user(role=role, service_type=service_type, **kwargs)

    @staticmethod
    def create_customer(full_name=None, email=None, service_type='interior', **kwargs):
        """Create a test customer (role ``user``)"""
        if not full_name:
            full_name = f'Customer {TestDataFactory.random_string(6)}'
        return TestDataFactory.create_user(
            email=email,
            role='user',
            service_type=service_type,
            full_name=full_name,
            phone=kwargs.pop('phone', TestDataFactory.random_phone()),
            **kwargs
        )

    @staticmethod
    def create_employee(role='designer', email=None, service_type='interior', status='active', **kwargs):
        """Create a test employee record"""
        if not email:
            email = f'{role}_{TestDataFactory.random_string(6)}@test.com'
        return Employee.objects.create(
            employee_id=kwargs.pop('employee_id', f'EMP{TestDataFactory.random_string(6).upper()}'),
            full_name=kwargs.pop('full_name', f'Test {role.title()}'),
            email=email,
            phone=kwargs.pop('phone', TestDataFactory.random_phone()),
            role=role,
            department=Employee.department_for_role(role),
            service_type=service_type,
            status=status,
            **kwargs
        )

    @staticmethod
    def create_lead(name=None, email=None, service_type='interior', status='new', **kwargs):
        """Create a test lead"""
        if not name:
            name = f'Lead {TestDataFactory.random_string(6)}'
        if not email:
            email = f'lead_{TestDataFactory.random_string(6)}@test.com'
        return Lead.objects.create(
            name=name,
            email=email,
            phone=kwargs.pop('phone', TestDataFactory.random_phone()),
            city=kwargs.pop('city', 'Bangalore'),
            service_type=service_type,
            status=status,
            **kwargs
        )

    @staticmethod
    def create_project(customer=None, title=None, service_type='interior', **kwargs):
        """Create a test project"""
        if not customer:
            customer = TestDataFactory.create_customer(service_type=service_type)
        if not title:
            title = f'Project {TestDataFactory.random_string(6)}'
        return Project.objects.create(
            title=title,
            customer=customer,
            service_type=service_type,
            project_type=kwargs.pop('project_type', 'residential'),
            carpet_area=kwargs.pop('carpet_area', Decimal('1200.00')),
            **kwargs
        )

    @staticmethod
    def create_payment(project=None, amount=None, due_date=None, milestone='advance', **kwargs):
        """Create a test payment"""
        if not project:
            project = TestDataFactory.create_project()
        if amount is None:
            amount = Decimal('50000.00')
        if not due_date:
            due_date = timezone.localdate() + datetime.timedelta(days=7)
        return Payment.objects.create(
            project=project,
            customer=kwargs.pop('customer', project.customer),
            service_type=kwargs.pop('service_type', project.service_type),
            amount=amount,
            due_date=due_date,
            milestone=milestone,
            **kwargs
        )

    @staticmethod
    def create_renovation_service(title=None, category='Kitchen Renovation', **kwargs):
        """Create a test renovation service"""
        if not title:
            title = f'Renovation {TestDataFactory.random_string(6)}'
        return RenovationService.objects.create(
            title=title,
            description=kwargs.pop('description', f'Test service {title}'),
            category=category,
            image_url=kwargs.pop('image_url', 'https://example.com/renovation.jpg'),
            duration_min=kwargs.pop('duration_min', 7),
            duration_max=kwargs.pop('duration_max', 14),
            **kwargs
        )

    @staticmethod
    def create_booking(service=None, **kwargs):
        """Create a test renovation booking"""
        if not service:
            service = TestDataFactory.create_renovation_service()
        return RenovationBooking.objects.create(
            service=service,
            customer_name=kwargs.pop('customer_name', f'Booker {TestDataFactory.random_string(6)}'),
            customer_email=kwargs.pop('customer_email', f'booker_{TestDataFactory.random_string(6)}@test.com'),
            customer_phone=kwargs.pop('customer_phone', TestDataFactory.random_phone()),
            property_type=kwargs.pop('property_type', 'Residential'),
            area=kwargs.pop('area', Decimal('800.00')),
            requirement_description=kwargs.pop('requirement_description', 'Full kitchen remodel'),
            **kwargs
        )

    @staticmethod
    def create_testimonial(name=None, rating=5, **kwargs):
        """Create a test testimonial"""
        if not name:
            name = f'Reviewer {TestDataFactory.random_string(6)}'
        return Testimonial.objects.create(
            name=name,
            review=kwargs.pop('review', 'Great work by the team'),
            rating=rating,
            **kwargs
        )

    @staticmethod
    def create_gallery_item(category='Living Room', **kwargs):
        """Create a test gallery item"""
        return GalleryItem.objects.create(
            image_url=kwargs.pop('image_url', f'https://example.com/{TestDataFactory.random_string(8)}.jpg'),
            category=category,
            title=kwargs.pop('title', f'Gallery {TestDataFactory.random_string(6)}'),
            **kwargs
        )


class AuthenticatedAPIClient(APIClient):
    """APIClient with authentication helper"""

    def authenticate_user(self, user):
        """Authenticate the client with a user"""
        refresh = RefreshToken.for_user(user)
        self.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
        return self

    def logout(self):
        """Remove authentication"""
        self.credentials()
