import os

from django.core.management.base import BaseCommand
from django.db import transaction

from hoh.core.models import User


class Command(BaseCommand):
    help = 'Create the super admin and one admin per vertical if they do not exist yet'

    def add_arguments(self, parser):
        parser.add_argument(
            '--password',
            default=os.environ.get('SEED_ADMIN_PASSWORD', 'admin123'),
            help='Password for newly created admin accounts',
        )
        parser.add_argument(
            '--domain',
            default='hoh108.com',
            help='Email domain used for the seeded accounts',
        )

    def handle(self, *args, **options):
        password = options['password']
        domain = options['domain']

        admins = [
            {'email': f'superadmin@{domain}', 'full_name': 'Super Admin', 'role': 'super_admin', 'service_type': 'interior', 'is_superuser': True},
            {'email': f'interior@{domain}', 'full_name': 'Interior Admin', 'role': 'interior_admin', 'service_type': 'interior'},
            {'email': f'construction@{domain}', 'full_name': 'Construction Admin', 'role': 'construction_admin', 'service_type': 'construction'},
            {'email': f'renovation@{domain}', 'full_name': 'Renovation Admin', 'role': 'renovation_admin', 'service_type': 'renovation'},
            {'email': f'ondemand@{domain}', 'full_name': 'On Demand Admin', 'role': 'on_demand_admin', 'service_type': 'on_demand'},
        ]

        created_count = 0
        with transaction.atomic():
            for admin_data in admins:
                email = admin_data['email']
                if User.objects.filter(email=email).exists():
                    self.stdout.write(self.style.WARNING(f'Admin already exists: {email}'))
                    continue

                is_superuser = admin_data.pop('is_superuser', False)
                user = User(username=email, is_staff=True, is_superuser=is_superuser, **admin_data)
                user.set_password(password)
                user.save()
                created_count += 1
                self.stdout.write(self.style.SUCCESS(f'Created {user.role}: {email}'))

        self.stdout.write(self.style.SUCCESS(f'\nSuccessfully created {created_count} admin account(s)'))
