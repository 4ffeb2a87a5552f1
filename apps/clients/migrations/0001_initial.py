import django.core.validators
import django.db.models.deletion
import django.utils.timezone
import uuid
from decimal import Decimal
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('core', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Client',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('business_name', models.CharField(help_text='Name of the prospect business', max_length=200)),
                ('contact_name', models.CharField(blank=True, help_text='Person we talk to (optional)', max_length=200)),
                ('phone', models.CharField(help_text='Contact phone number', max_length=30)),
                ('city', models.CharField(help_text='City of the business', max_length=100)),
                ('contact_date', models.DateField(db_index=True, default=django.utils.timezone.localdate, help_text='When was the first contact')),
                ('status', models.CharField(choices=[('in_progress', 'In Progress'), ('negotiating', 'Negotiating'), ('lost', 'Lost'), ('closed', 'Closed')], db_index=True, default='negotiating', help_text='Current pipeline status', max_length=20)),
                ('notes', models.TextField(blank=True, help_text='General notes about this client')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('company', models.ForeignKey(help_text='Which agency owns this client', on_delete=django.db.models.deletion.CASCADE, related_name='clients', to='core.company')),
                ('site_type', models.ForeignKey(blank=True, help_text='Kind of website the client wants', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='clients', to='core.sitetype')),
            ],
            options={
                'verbose_name': 'Client',
                'verbose_name_plural': 'Clients',
                'ordering': ['-contact_date', '-created_at'],
                'indexes': [
                    models.Index(fields=['company', 'status'], name='client_company_status_idx'),
                    models.Index(fields=['company', 'contact_date'], name='client_company_date_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Project',
            fields=[
                ('client', models.OneToOneField(help_text='The closed client this project belongs to', on_delete=django.db.models.deletion.CASCADE, primary_key=True, related_name='project', serialize=False, to='clients.client')),
                ('value', models.DecimalField(decimal_places=2, help_text='Contract value', max_digits=12, validators=[django.core.validators.MinValueValidator(Decimal('0'))])),
                ('project_timeline', models.PositiveIntegerField(default=4, help_text='Development time in weeks', validators=[django.core.validators.MinValueValidator(1)])),
                ('progress_percentage', models.PositiveSmallIntegerField(default=0, help_text='Completion progress (0-100)', validators=[django.core.validators.MinValueValidator(0), django.core.validators.MaxValueValidator(100)])),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Project',
                'verbose_name_plural': 'Projects',
                'ordering': ['-client__contact_date'],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('progress_percentage__lte', 100)), name='project_progress_at_most_100'),
                    models.CheckConstraint(condition=models.Q(('project_timeline__gte', 1)), name='project_timeline_at_least_one_week'),
                ],
            },
        ),
    ]
