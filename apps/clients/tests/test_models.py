"""
Client Models Tests
===================

Test Coverage:
1. Client Model
   - Defaults (UUID id, negotiating status, today's contact date)
   - get_project / is_closed
   - JSON representation
2. Project Model
   - Shares the client's primary key
   - Expected delivery date and completion
   - Cascade when the client is deleted
   - Database check constraints
3. Site type removal
   - Pipeline clients keep existing, their site type is cleared

Run tests:
    python manage.py test apps.clients.tests.test_models
"""

import uuid
from datetime import date
from decimal import Decimal

from django.db import IntegrityError, transaction
from django.db.models import ProtectedError
from django.test import TestCase
from django.utils import timezone

from apps.clients.models import Client, Project
from apps.core.models import Company


class ClientModelTest(TestCase):

    def setUp(self):
        self.company = Company.objects.create(name='Pixel Agency')
        self.landing_page = self.company.site_types.get(name='Landing Page')

        self.client_obj = Client.objects.create(
            company=self.company,
            business_name='Acme',
            contact_name='John',
            phone='11999990000',
            city='Campinas',
        )

    def test_defaults(self):
        self.assertIsInstance(self.client_obj.pk, uuid.UUID)
        self.assertEqual(self.client_obj.status, Client.STATUS_NEGOTIATING)
        self.assertEqual(self.client_obj.contact_date, timezone.localdate())
        self.assertFalse(self.client_obj.is_closed)
        self.assertIsNone(self.client_obj.get_project())

    def test_str(self):
        self.assertEqual(str(self.client_obj), 'Acme (Campinas) - Negotiating')

    def test_to_dict_without_project(self):
        data = self.client_obj.to_dict()

        self.assertEqual(data['id'], str(self.client_obj.pk))
        self.assertEqual(data['businessName'], 'Acme')
        self.assertEqual(data['status'], 'negotiating')
        self.assertEqual(data['statusDisplay'], 'Negotiating')
        self.assertIsNone(data['siteTypeId'])
        self.assertIsNone(data['project'])

    def test_to_dict_with_project(self):
        self.client_obj.status = Client.STATUS_CLOSED
        self.client_obj.site_type = self.landing_page
        self.client_obj.save()
        Project.objects.create(client=self.client_obj, value=Decimal('1500.00'))

        client = Client.objects.get(pk=self.client_obj.pk)
        data = client.to_dict()

        self.assertEqual(data['siteTypeId'], self.landing_page.pk)
        self.assertEqual(data['project']['value'], '1500.00')
        self.assertEqual(data['project']['progressPercentage'], 0)

    def test_ordering_by_contact_date(self):
        older = Client.objects.create(
            company=self.company, business_name='Older', phone='1', city='X', contact_date=date(2024, 1, 10)
        )

        self.assertEqual(list(Client.objects.all()), [self.client_obj, older])

    def test_deleting_unused_site_type_clears_it(self):
        self.client_obj.site_type = self.landing_page
        self.client_obj.save()

        self.landing_page.delete()

        self.client_obj.refresh_from_db()
        self.assertIsNone(self.client_obj.site_type)

    def test_deleting_used_site_type_raises(self):
        self.client_obj.status = Client.STATUS_CLOSED
        self.client_obj.site_type = self.landing_page
        self.client_obj.save()
        Project.objects.create(client=self.client_obj, value=Decimal('1500.00'))

        with self.assertRaises(ProtectedError):
            with transaction.atomic():
                self.landing_page.delete()

    def test_deleting_company_removes_everything(self):
        self.client_obj.status = Client.STATUS_CLOSED
        self.client_obj.site_type = self.landing_page
        self.client_obj.save()
        Project.objects.create(client=self.client_obj, value=Decimal('1500.00'))

        self.company.delete()

        self.assertFalse(Client.objects.exists())
        self.assertFalse(Project.objects.exists())


class ProjectModelTest(TestCase):

    def setUp(self):
        self.company = Company.objects.create(name='Pixel Agency')
        self.site_type = self.company.site_types.get(name='E-commerce')

        self.client_obj = Client.objects.create(
            company=self.company,
            business_name='Shop',
            phone='11999990000',
            city='Santos',
            contact_date=date(2025, 3, 3),
            status=Client.STATUS_CLOSED,
            site_type=self.site_type,
        )
        self.project = Project.objects.create(client=self.client_obj, value=Decimal('5000.00'))

    def test_shares_client_primary_key(self):
        self.assertEqual(self.project.pk, self.client_obj.pk)
        self.assertEqual(self.client_obj.get_project(), self.project)

    def test_defaults(self):
        self.assertEqual(self.project.project_timeline, 4)
        self.assertEqual(self.project.progress_percentage, 0)
        self.assertFalse(self.project.is_complete)

    def test_site_type_comes_from_client(self):
        self.assertEqual(self.project.site_type, self.site_type)

    def test_expected_delivery_date(self):
        self.assertEqual(self.project.expected_delivery_date, date(2025, 3, 31))

    def test_to_dict_includes_client_fields(self):
        data = self.project.to_dict()

        self.assertEqual(data['id'], str(self.client_obj.pk))
        self.assertEqual(data['businessName'], 'Shop')
        self.assertEqual(data['value'], '5000.00')
        self.assertEqual(data['expectedDeliveryDate'], '2025-03-31')
        self.assertNotIn('project', data)

    def test_client_delete_cascades(self):
        self.client_obj.delete()

        self.assertFalse(Project.objects.exists())

    def test_progress_check_constraint(self):
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                Project.objects.filter(pk=self.project.pk).update(progress_percentage=150)

    def test_timeline_check_constraint(self):
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                Project.objects.filter(pk=self.project.pk).update(project_timeline=0)
