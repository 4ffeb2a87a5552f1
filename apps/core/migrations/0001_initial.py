import django.core.validators
import django.db.models.deletion
from decimal import Decimal
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='Company',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(help_text='Company name shown in the header', max_length=200, unique=True)),
                ('slug', models.SlugField(help_text='URL-friendly name (auto-generated)', max_length=200, unique=True)),
                ('logo', models.ImageField(blank=True, help_text='Company logo', null=True, upload_to='companies/logos/')),
                ('name_color', models.CharField(default='#1A1A1A', help_text='Hex color of the company name', max_length=7, validators=[django.core.validators.RegexValidator(message='Enter a hex color such as #00A3FF.', regex='^#(?:[0-9a-fA-F]{3}){1,2}$')])),
                ('primary_color', models.CharField(default='#00A3FF', help_text='Hex color used as the UI primary color', max_length=7, validators=[django.core.validators.RegexValidator(message='Enter a hex color such as #00A3FF.', regex='^#(?:[0-9a-fA-F]{3}){1,2}$')])),
                ('is_active', models.BooleanField(default=True, help_text='Is company active?')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Company',
                'verbose_name_plural': 'Companies',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['is_active'], name='company_is_active_idx')],
            },
        ),
        migrations.CreateModel(
            name='SiteType',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(help_text='Site type name (e.g. Landing Page, E-commerce)', max_length=100)),
                ('description', models.TextField(blank=True, help_text='Optional description')),
                ('base_value', models.DecimalField(decimal_places=2, help_text='Base price, used as the default project value', max_digits=12, validators=[django.core.validators.MinValueValidator(Decimal('0.01'))])),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('company', models.ForeignKey(help_text='Which company owns this catalog entry', on_delete=django.db.models.deletion.CASCADE, related_name='site_types', to='core.company')),
            ],
            options={
                'verbose_name': 'Site Type',
                'verbose_name_plural': 'Site Types',
                'ordering': ['base_value', 'name'],
                'constraints': [models.UniqueConstraint(fields=('company', 'name'), name='unique_site_type_name_per_company')],
            },
        ),
    ]
