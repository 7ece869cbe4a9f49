# Generated manually
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='RenovationService',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('service_id', models.CharField(editable=False, max_length=20, unique=True)),
                ('title', models.CharField(max_length=200)),
                ('description', models.TextField()),
                ('category', models.CharField(choices=[('Kitchen Renovation', 'Kitchen Renovation'), ('Bathroom Renovation', 'Bathroom Renovation'), ('Living Room Renovation', 'Living Room Renovation'), ('Bedroom Renovation', 'Bedroom Renovation'), ('Full Home Renovation', 'Full Home Renovation'), ('Office Renovation', 'Office Renovation'), ('Exterior Renovation', 'Exterior Renovation'), ('Other', 'Other')], max_length=40)),
                ('image_url', models.URLField(max_length=500)),
                ('images', models.JSONField(blank=True, default=list)),
                ('pricing_type', models.CharField(choices=[('fixed', 'Fixed'), ('per_sqft', 'Per Sq. Ft.'), ('custom', 'Custom')], default='custom', max_length=20)),
                ('base_price', models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ('min_price', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ('max_price', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ('duration_min', models.PositiveIntegerField()),
                ('duration_max', models.PositiveIntegerField()),
                ('duration_unit', models.CharField(choices=[('days', 'Days'), ('weeks', 'Weeks'), ('months', 'Months')], default='days', max_length=10)),
                ('features', models.JSONField(blank=True, default=list)),
                ('included_services', models.JSONField(blank=True, default=list)),
                ('excluded_services', models.JSONField(blank=True, default=list)),
                ('popular', models.BooleanField(default=False)),
                ('active', models.BooleanField(default=True)),
                ('total_bookings', models.PositiveIntegerField(default=0)),
                ('rating_average', models.DecimalField(decimal_places=2, default=0, max_digits=3)),
                ('rating_count', models.PositiveIntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='renovation_services_created', to=settings.AUTH_USER_MODEL)),
                ('last_modified_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'renovation_services',
                'ordering': ['-popular', '-total_bookings', '-created_at'],
                'indexes': [models.Index(fields=['category'], name='renov_svc_category_idx'), models.Index(fields=['active', 'popular'], name='renov_svc_active_pop_idx')],
            },
        ),
        migrations.CreateModel(
            name='RenovationBooking',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('booking_id', models.CharField(editable=False, max_length=20, unique=True)),
                ('customer_name', models.CharField(max_length=200)),
                ('customer_email', models.EmailField(max_length=254)),
                ('customer_phone', models.CharField(max_length=20)),
                ('street', models.CharField(blank=True, max_length=255)),
                ('city', models.CharField(blank=True, max_length=100)),
                ('state', models.CharField(blank=True, max_length=100)),
                ('pincode', models.CharField(blank=True, max_length=20)),
                ('property_type', models.CharField(choices=[('Residential', 'Residential'), ('Commercial', 'Commercial'), ('Industrial', 'Industrial')], max_length=20)),
                ('area', models.DecimalField(decimal_places=2, max_digits=10)),
                ('area_unit', models.CharField(choices=[('sqft', 'Sq. Ft.'), ('sqm', 'Sq. M.')], default='sqft', max_length=10)),
                ('floors', models.PositiveIntegerField(blank=True, null=True)),
                ('rooms', models.PositiveIntegerField(blank=True, null=True)),
                ('current_condition', models.CharField(blank=True, choices=[('Excellent', 'Excellent'), ('Good', 'Good'), ('Average', 'Average'), ('Poor', 'Poor'), ('Very Poor', 'Very Poor')], max_length=20)),
                ('requirement_description', models.TextField()),
                ('budget_min', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ('budget_max', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ('preferred_start_date', models.DateField(blank=True, null=True)),
                ('urgency', models.CharField(choices=[('Immediate', 'Immediate'), ('Within 1 Month', 'Within 1 Month'), ('Within 3 Months', 'Within 3 Months'), ('Flexible', 'Flexible')], default='Flexible', max_length=20)),
                ('specific_requirements', models.JSONField(blank=True, default=list)),
                ('estimated_cost', models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ('quotation_amount', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ('quotation_breakdown', models.JSONField(blank=True, default=list)),
                ('quotation_valid_until', models.DateField(blank=True, null=True)),
                ('quotation_notes', models.TextField(blank=True)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('quote_requested', 'Quote Requested'), ('quote_sent', 'Quote Sent'), ('quote_approved', 'Quote Approved'), ('scheduled', 'Scheduled'), ('in_progress', 'In Progress'), ('inspection', 'Inspection'), ('completed', 'Completed'), ('cancelled', 'Cancelled'), ('on_hold', 'On Hold')], default='pending', max_length=20)),
                ('scheduled_date', models.DateField(blank=True, null=True)),
                ('completion_date', models.DateField(blank=True, null=True)),
                ('actual_completion_date', models.DateTimeField(blank=True, null=True)),
                ('notes', models.TextField(blank=True)),
                ('internal_notes', models.TextField(blank=True)),
                ('priority', models.CharField(choices=[('Low', 'Low'), ('Medium', 'Medium'), ('High', 'High'), ('Urgent', 'Urgent')], default='Medium', max_length=10)),
                ('source', models.CharField(choices=[('Website', 'Website'), ('Mobile App', 'Mobile App'), ('Phone', 'Phone'), ('Walk-in', 'Walk-in'), ('Referral', 'Referral'), ('Other', 'Other')], default='Website', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('assigned_to', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='assigned_renovation_bookings', to=settings.AUTH_USER_MODEL)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
                ('last_modified_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
                ('service', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='bookings', to='renovations.renovationservice')),
            ],
            options={
                'db_table': 'renovation_bookings',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['status'], name='renov_bk_status_idx'), models.Index(fields=['priority'], name='renov_bk_priority_idx')],
            },
        ),
        migrations.CreateModel(
            name='BookingTimelineEntry',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('quote_requested', 'Quote Requested'), ('quote_sent', 'Quote Sent'), ('quote_approved', 'Quote Approved'), ('scheduled', 'Scheduled'), ('in_progress', 'In Progress'), ('inspection', 'Inspection'), ('completed', 'Completed'), ('cancelled', 'Cancelled'), ('on_hold', 'On Hold')], max_length=20)),
                ('date', models.DateTimeField(default=django.utils.timezone.now)),
                ('notes', models.TextField(blank=True)),
                ('booking', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='timeline', to='renovations.renovationbooking')),
                ('updated_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'renovation_booking_timeline',
                'ordering': ['date', 'id'],
            },
        ),
    ]
