# Generated manually
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ('staff', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Project',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('project_id', models.CharField(editable=False, max_length=20, unique=True)),
                ('title', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True)),
                ('service_type', models.CharField(choices=[('interior', 'Interior'), ('construction', 'Construction'), ('renovation', 'Renovation'), ('on_demand', 'On Demand')], default='interior', max_length=20)),
                ('project_type', models.CharField(choices=[('residential', 'Residential'), ('commercial', 'Commercial'), ('office', 'Office'), ('hospitality', 'Hospitality'), ('industrial', 'Industrial'), ('landscape', 'Landscape'), ('full_home', 'Full Home'), ('modular_kitchen', 'Modular Kitchen'), ('interior_design', 'Interior Design')], max_length=30)),
                ('room_types', models.JSONField(blank=True, default=list)),
                ('carpet_area', models.DecimalField(decimal_places=2, max_digits=10)),
                ('budget_estimated', models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True)),
                ('budget_actual', models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True)),
                ('budget_currency', models.CharField(default='INR', max_length=3)),
                ('address', models.CharField(blank=True, max_length=255)),
                ('city', models.CharField(blank=True, max_length=100)),
                ('state', models.CharField(blank=True, max_length=100)),
                ('pincode', models.CharField(blank=True, max_length=20)),
                ('start_date', models.DateField(blank=True, null=True)),
                ('expected_end_date', models.DateField(blank=True, null=True)),
                ('actual_end_date', models.DateField(blank=True, null=True)),
                ('status', models.CharField(choices=[('inquiry', 'Inquiry'), ('design_done', 'Design Done'), ('budget_approved', 'Budget Approved'), ('stage1_fee_paid', 'Stage 1 Fee Paid'), ('material_procurement_done', 'Material Procurement Done'), ('factory_production_started', 'Factory Production Started'), ('factory_production_completed', 'Factory Production Completed'), ('dispatched', 'Dispatched'), ('delivered', 'Delivered'), ('onsite_execution_started', 'Onsite Execution Started'), ('onsite_execution_completed', 'Onsite Execution Completed'), ('handover_move_in', 'Handover / Move In'), ('on_hold', 'On Hold'), ('cancelled', 'Cancelled')], default='inquiry', max_length=40)),
                ('notes', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('assigned_crm', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='crm_projects', to='staff.employee')),
                ('assigned_designer', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='designer_projects', to='staff.employee')),
                ('customer', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='projects', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'projects',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['status'], name='projects_status_idx'), models.Index(fields=['service_type'], name='projects_service_type_idx')],
            },
        ),
        migrations.CreateModel(
            name='Milestone',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('in_progress', 'In Progress'), ('completed', 'Completed')], default='pending', max_length=20)),
                ('due_date', models.DateField(blank=True, null=True)),
                ('completed_date', models.DateField(blank=True, null=True)),
                ('payment_percentage', models.DecimalField(blank=True, decimal_places=2, max_digits=5, null=True)),
                ('payment_amount', models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True)),
                ('payment_status', models.CharField(choices=[('pending', 'Pending'), ('received', 'Received')], default='pending', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('project', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='milestones', to='projects.project')),
            ],
            options={
                'db_table': 'project_milestones',
                'ordering': ['due_date', 'id'],
            },
        ),
    ]
