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
            name='Lead',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=200)),
                ('email', models.EmailField(max_length=254)),
                ('phone', models.CharField(blank=True, max_length=30)),
                ('city', models.CharField(blank=True, max_length=100)),
                ('carpet_area', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ('bhk', models.CharField(blank=True, max_length=10)),
                ('package', models.CharField(blank=True, max_length=50)),
                ('estimated_cost', models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True)),
                ('service_type', models.CharField(choices=[('interior', 'Interior'), ('construction', 'Construction'), ('renovation', 'Renovation'), ('on_demand', 'On Demand')], default='interior', max_length=20)),
                ('lead_type', models.CharField(choices=[('general', 'General'), ('cost_estimate', 'Cost Estimate')], default='general', max_length=20)),
                ('status', models.CharField(choices=[('new', 'New'), ('rnr', 'Ringing No Response'), ('qualified', 'Qualified'), ('lost', 'Lost'), ('non_prospect', 'Non Prospect'), ('not_reachable', 'Not Reachable'), ('low_budget', 'Low Budget'), ('non_serviceable_area', 'Non Serviceable Area'), ('future_prospect', 'Future Prospect')], default='new', max_length=30)),
                ('source', models.CharField(default='website', max_length=50)),
                ('budget_range', models.CharField(blank=True, max_length=100)),
                ('start_timeline', models.CharField(blank=True, max_length=100)),
                ('work_type', models.CharField(blank=True, max_length=20)),
                ('selected_spaces', models.JSONField(blank=True, default=list)),
                ('project_type', models.CharField(blank=True, max_length=20)),
                ('plot_area', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ('floors', models.CharField(blank=True, max_length=10)),
                ('notes', models.TextField(blank=True)),
                ('date', models.DateTimeField(default=django.utils.timezone.now)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('last_modified_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='modified_leads', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'leads',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['status'], name='leads_status_idx'), models.Index(fields=['service_type'], name='leads_service_type_idx'), models.Index(fields=['-created_at'], name='leads_created_at_idx')],
            },
        ),
        migrations.CreateModel(
            name='LeadHistory',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('action', models.CharField(choices=[('created', 'Created'), ('updated', 'Updated'), ('status_changed', 'Status Changed'), ('note_added', 'Note Added')], max_length=20)),
                ('description', models.TextField()),
                ('changed_by_name', models.CharField(blank=True, max_length=200)),
                ('changes', models.JSONField(blank=True, default=dict)),
                ('timestamp', models.DateTimeField(default=django.utils.timezone.now)),
                ('changed_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='lead_changes', to=settings.AUTH_USER_MODEL)),
                ('lead', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='history', to='leads.lead')),
            ],
            options={
                'db_table': 'lead_history',
                'ordering': ['-timestamp'],
            },
        ),
    ]
