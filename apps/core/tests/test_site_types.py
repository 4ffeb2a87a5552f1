"""
Site Type Catalog Tests
=======================

Test Coverage:
1. Seeding - new companies get the default catalog (signal), command
2. Services - create, update, delete
3. Protection - a site type used by a closed project stays, at the
   service level and at the ORM level (admin, querysets)
4. Forms - positive base value, unique name per company

Run tests:
    python manage.py test apps.core.tests.test_site_types
"""

from decimal import Decimal
from io import StringIO

from django.core.exceptions import ValidationError
from django.core.management import CommandError, call_command
from django.db import transaction
from django.db.models import ProtectedError
from django.test import TestCase

from apps.clients import services as client_services
from apps.clients.models import Client
from apps.core import services
from apps.core.forms import SiteTypeForm
from apps.core.models import Company, SiteType


class SeedingTest(TestCase):

    def test_new_company_gets_default_catalog(self):
        company = Company.objects.create(name='Pixel Agency')

        catalog = {st.name: st.base_value for st in company.site_types.all()}
        self.assertEqual(catalog, {
            'Landing Page': Decimal('1500.00'),
            'Site Institucional': Decimal('3000.00'),
            'E-commerce': Decimal('5000.00'),
        })

    def test_seeding_is_idempotent(self):
        company = Company.objects.create(name='Pixel Agency')

        self.assertEqual(services.seed_default_site_types(company), [])
        self.assertEqual(company.site_types.count(), 3)

    def test_saving_existing_company_does_not_reseed(self):
        company = Company.objects.create(name='Pixel Agency')
        company.site_types.filter(name='E-commerce').delete()

        company.name = 'Pixel Studio'
        company.save()

        self.assertEqual(company.site_types.count(), 2)

    def test_command_restores_missing_defaults(self):
        company = Company.objects.create(name='Pixel Agency')
        company.site_types.filter(name='Landing Page').delete()
        out = StringIO()

        call_command('seed_site_types', stdout=out)

        self.assertEqual(company.site_types.count(), 3)
        self.assertIn('Done, 1 site type(s) created', out.getvalue())

    def test_command_for_one_company(self):
        company = Company.objects.create(name='Pixel Agency')
        other = Company.objects.create(name='Other Agency')
        company.site_types.all().delete()
        other.site_types.all().delete()

        call_command('seed_site_types', company=company.slug, stdout=StringIO())

        self.assertEqual(company.site_types.count(), 3)
        self.assertEqual(other.site_types.count(), 0)

    def test_command_unknown_company(self):
        with self.assertRaises(CommandError):
            call_command('seed_site_types', company='nobody', stdout=StringIO())


class SiteTypeServiceTest(TestCase):

    def setUp(self):
        self.company = Company.objects.create(name='Pixel Agency')
        self.landing_page = self.company.site_types.get(name='Landing Page')

    def test_create(self):
        site_type = services.create_site_type(self.company, {'name': 'Blog', 'base_value': Decimal('800')})

        self.assertEqual(site_type.company, self.company)
        self.assertEqual(self.company.site_types.count(), 4)

    def test_create_duplicate_name(self):
        with self.assertRaises(ValidationError):
            services.create_site_type(self.company, {'name': 'Landing Page', 'base_value': Decimal('900')})

        self.assertEqual(self.company.site_types.count(), 3)

    def test_create_negative_value(self):
        with self.assertRaises(ValidationError):
            services.create_site_type(self.company, {'name': 'Blog', 'base_value': Decimal('-1')})

    def test_create_zero_value(self):
        with self.assertRaises(ValidationError):
            services.create_site_type(self.company, {'name': 'Free', 'base_value': Decimal('0')})

        self.assertFalse(self.company.site_types.filter(name='Free').exists())

    def test_update_to_zero_value(self):
        with self.assertRaises(ValidationError):
            services.update_site_type(self.company, self.landing_page.pk, {'base_value': Decimal('0')})

        self.landing_page.refresh_from_db()
        self.assertEqual(self.landing_page.base_value, Decimal('1500'))

    def test_same_name_in_another_company(self):
        other = Company.objects.create(name='Other Agency')

        self.assertEqual(other.site_types.filter(name='Landing Page').count(), 1)

    def test_update(self):
        site_type = services.update_site_type(
            self.company, self.landing_page.pk, {'base_value': Decimal('1700'), 'description': 'One page'}
        )

        site_type.refresh_from_db()
        self.assertEqual(site_type.base_value, Decimal('1700'))
        self.assertEqual(site_type.description, 'One page')
        self.assertEqual(site_type.name, 'Landing Page')

    def test_update_unknown_returns_none(self):
        self.assertIsNone(services.update_site_type(self.company, 999999, {'name': 'X'}))

    def test_delete_unused(self):
        self.assertTrue(services.delete_site_type(self.company, self.landing_page.pk))
        self.assertFalse(SiteType.objects.filter(pk=self.landing_page.pk).exists())

    def test_delete_unknown_returns_false(self):
        self.assertFalse(services.delete_site_type(self.company, 999999))

    def test_malformed_id_is_not_found(self):
        self.assertIsNone(services.get_site_type(self.company, 'abc'))
        self.assertIsNone(services.update_site_type(self.company, 'abc', {'name': 'X'}))
        self.assertFalse(services.delete_site_type(self.company, 'abc'))
        self.assertEqual(self.company.site_types.count(), 3)

    def test_delete_other_company_type_returns_false(self):
        other = Company.objects.create(name='Other Agency')
        foreign = other.site_types.first()

        self.assertFalse(services.delete_site_type(self.company, foreign.pk))
        self.assertTrue(SiteType.objects.filter(pk=foreign.pk).exists())


class SiteTypeProtectionTest(TestCase):

    def setUp(self):
        self.company = Company.objects.create(name='Pixel Agency')
        self.landing_page = self.company.site_types.get(name='Landing Page')
        self.closed = client_services.create_client(self.company, {
            'business_name': 'Acme',
            'phone': '11999990000',
            'city': 'Campinas',
            'status': Client.STATUS_CLOSED,
            'site_type': self.landing_page,
        })

    def test_service_refuses(self):
        with self.assertLogs('apps.core.services', level='WARNING'):
            self.assertFalse(services.delete_site_type(self.company, self.landing_page.pk))

        self.assertTrue(SiteType.objects.filter(pk=self.landing_page.pk).exists())
        self.assertTrue(self.landing_page.is_in_use())

    def test_queryset_delete_is_blocked(self):
        with self.assertRaises(ProtectedError):
            with transaction.atomic():
                SiteType.objects.filter(pk=self.landing_page.pk).delete()

        self.assertEqual(self.company.site_types.count(), 3)

    def test_delete_allowed_after_project_removed(self):
        client_services.delete_closed_project(self.company, self.closed.pk)

        self.assertTrue(services.delete_site_type(self.company, self.landing_page.pk))

        self.closed.refresh_from_db()
        self.assertIsNone(self.closed.site_type)
        self.assertEqual(self.closed.status, Client.STATUS_LOST)


class SiteTypeFormTest(TestCase):

    def setUp(self):
        self.company = Company.objects.create(name='Pixel Agency')

    def test_valid(self):
        form = SiteTypeForm(data={'name': 'Blog', 'base_value': '800'}, company=self.company)

        self.assertTrue(form.is_valid(), form.errors)

    def test_base_value_must_be_positive(self):
        form = SiteTypeForm(data={'name': 'Blog', 'base_value': '0'}, company=self.company)

        self.assertFalse(form.is_valid())
        self.assertIn('base_value', form.errors)

    def test_duplicate_name_ignoring_case(self):
        form = SiteTypeForm(data={'name': 'landing page', 'base_value': '900'}, company=self.company)

        self.assertFalse(form.is_valid())
        self.assertIn('name', form.errors)

    def test_editing_keeps_own_name(self):
        landing_page = self.company.site_types.get(name='Landing Page')
        form = SiteTypeForm(
            data={'name': 'Landing Page', 'base_value': '1600'}, instance=landing_page, company=self.company
        )

        self.assertTrue(form.is_valid(), form.errors)
