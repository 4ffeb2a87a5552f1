"""
Reporting Tests
===============

Test Coverage:
1. count_by_status / status_distribution
2. total_revenue
3. conversion_rate (rounding half up, empty pipeline)
4. monthly_buckets (count, order, zero months, year boundary)
5. per_site_type_totals
6. dashboard_summary

Run tests:
    python manage.py test apps.core.tests.test_reporting
"""

from datetime import date
from decimal import Decimal

from django.test import TestCase

from apps.clients import services
from apps.clients.models import Client
from apps.core import reporting
from apps.core.models import Company


class ReportingTestCase(TestCase):

    def setUp(self):
        self.company = Company.objects.create(name='Pixel Agency')
        self.landing_page = self.company.site_types.get(name='Landing Page')
        self.ecommerce = self.company.site_types.get(name='E-commerce')

    def add_client(self, name, status=Client.STATUS_NEGOTIATING, contact_date=None, site_type=None, value=None):
        data = {
            'business_name': name,
            'phone': '11999990000',
            'city': 'Campinas',
            'status': status,
            'site_type': site_type,
        }
        if contact_date:
            data['contact_date'] = contact_date
        return services.create_client(self.company, data, terms={'value': value})

    def add_closed(self, name, contact_date=None, site_type=None, value=None):
        return self.add_client(
            name, Client.STATUS_CLOSED, contact_date, site_type or self.landing_page, value
        )


class EmptyPipelineTest(ReportingTestCase):

    def test_counts_are_zero(self):
        self.assertEqual(reporting.count_by_status(self.company), 0)
        self.assertEqual(
            reporting.status_distribution(self.company),
            {'in_progress': 0, 'negotiating': 0, 'lost': 0, 'closed': 0},
        )

    def test_revenue_and_conversion_are_zero(self):
        self.assertEqual(reporting.total_revenue(self.company), Decimal('0'))
        self.assertEqual(reporting.conversion_rate(self.company), 0)

    def test_six_empty_buckets(self):
        buckets = reporting.monthly_buckets(self.company, today=date(2025, 6, 20))

        self.assertEqual(len(buckets), 6)
        self.assertTrue(all(b['closed_count'] == 0 and b['revenue'] == 0 for b in buckets))

    def test_site_types_listed_with_zeros(self):
        totals = reporting.per_site_type_totals(self.company)

        self.assertEqual([t['name'] for t in totals], ['Landing Page', 'Site Institucional', 'E-commerce'])
        self.assertTrue(all(t['count'] == 0 and t['value'] == 0 for t in totals))


class CountsTest(ReportingTestCase):

    def setUp(self):
        super().setUp()
        self.add_client('A')
        self.add_client('B', Client.STATUS_LOST)
        self.add_client('C', Client.STATUS_IN_PROGRESS)
        self.add_closed('D', value='2000')
        self.add_closed('E', site_type=self.ecommerce)

    def test_count_by_status(self):
        self.assertEqual(reporting.count_by_status(self.company), 5)
        self.assertEqual(reporting.count_by_status(self.company, 'all'), 5)
        self.assertEqual(reporting.count_by_status(self.company, Client.STATUS_CLOSED), 2)
        self.assertEqual(reporting.count_by_status(self.company, Client.STATUS_LOST), 1)

    def test_status_distribution(self):
        self.assertEqual(
            reporting.status_distribution(self.company),
            {'in_progress': 1, 'negotiating': 1, 'lost': 1, 'closed': 2},
        )

    def test_total_revenue(self):
        self.assertEqual(reporting.total_revenue(self.company), Decimal('7000.00'))

    def test_other_companies_are_not_counted(self):
        other = Company.objects.create(name='Other Agency')
        services.create_client(other, {
            'business_name': 'Foreign', 'phone': '1', 'city': 'Rio',
            'status': Client.STATUS_CLOSED, 'site_type': other.site_types.first(),
        })

        self.assertEqual(reporting.count_by_status(self.company), 5)
        self.assertEqual(reporting.total_revenue(self.company), Decimal('7000.00'))

    def test_per_site_type_totals(self):
        totals = {t['name']: t for t in reporting.per_site_type_totals(self.company)}

        self.assertEqual(totals['Landing Page']['count'], 1)
        self.assertEqual(totals['Landing Page']['value'], Decimal('2000'))
        self.assertEqual(totals['E-commerce']['count'], 1)
        self.assertEqual(totals['E-commerce']['value'], Decimal('5000'))
        self.assertEqual(totals['Site Institucional']['count'], 0)

    def test_pipeline_clients_with_site_type_are_not_totalled(self):
        self.add_client('F', site_type=self.ecommerce)

        totals = {t['name']: t for t in reporting.per_site_type_totals(self.company)}
        self.assertEqual(totals['E-commerce']['count'], 1)


class ConversionRateTest(ReportingTestCase):

    def test_rounds_half_up(self):
        """1 closed out of 8 is 12.5%, reported as 13"""
        self.add_closed('Closed')
        for i in range(7):
            self.add_client(f'Lead {i}')

        self.assertEqual(reporting.conversion_rate(self.company), 13)

    def test_rounds_down_below_half(self):
        self.add_closed('Closed')
        self.add_client('Lead 1')
        self.add_client('Lead 2')

        self.assertEqual(reporting.conversion_rate(self.company), 33)

    def test_all_closed(self):
        self.add_closed('Only')

        self.assertEqual(reporting.conversion_rate(self.company), 100)


class MonthlyBucketsTest(ReportingTestCase):

    def setUp(self):
        super().setUp()
        self.today = date(2025, 3, 15)

        self.add_closed('Jan 1', contact_date=date(2025, 1, 3), value='1000')
        self.add_closed('Jan 2', contact_date=date(2025, 1, 28), value='2500')
        self.add_closed('Mar', contact_date=date(2025, 3, 1))
        self.add_closed('Too old', contact_date=date(2024, 9, 30))
        self.add_client('Pipeline', contact_date=date(2025, 2, 10))

    def test_six_buckets_oldest_first(self):
        buckets = reporting.monthly_buckets(self.company, today=self.today)

        self.assertEqual(
            [(b['year'], b['month']) for b in buckets],
            [(2024, 10), (2024, 11), (2024, 12), (2025, 1), (2025, 2), (2025, 3)],
        )
        self.assertEqual(buckets[0]['label'], 'Oct 2024')
        self.assertEqual(buckets[-1]['label'], 'Mar 2025')

    def test_projects_grouped_by_contact_month(self):
        buckets = {(b['year'], b['month']): b for b in reporting.monthly_buckets(self.company, today=self.today)}

        self.assertEqual(buckets[(2025, 1)]['closed_count'], 2)
        self.assertEqual(buckets[(2025, 1)]['revenue'], Decimal('3500'))
        self.assertEqual(buckets[(2025, 3)]['closed_count'], 1)
        self.assertEqual(buckets[(2025, 3)]['revenue'], Decimal('1500'))

    def test_empty_months_report_zero(self):
        buckets = {(b['year'], b['month']): b for b in reporting.monthly_buckets(self.company, today=self.today)}

        self.assertEqual(buckets[(2025, 2)]['closed_count'], 0)
        self.assertEqual(buckets[(2024, 12)]['revenue'], Decimal('0'))

    def test_older_months_are_left_out(self):
        buckets = reporting.monthly_buckets(self.company, today=self.today)

        self.assertEqual(sum(b['closed_count'] for b in buckets), 3)

    def test_custom_month_count(self):
        buckets = reporting.monthly_buckets(self.company, month_count=12, today=self.today)

        self.assertEqual(len(buckets), 12)
        self.assertEqual((buckets[0]['year'], buckets[0]['month']), (2024, 4))
        self.assertEqual(sum(b['closed_count'] for b in buckets), 4)

    def test_later_date_in_current_month_counts(self):
        self.add_closed('Later this month', contact_date=date(2026, 10, 25), value='2000')
        self.add_closed('Next month', contact_date=date(2026, 11, 2))

        buckets = reporting.monthly_buckets(self.company, 6, today=date(2026, 10, 19))

        self.assertEqual((buckets[-1]['year'], buckets[-1]['month']), (2026, 10))
        self.assertEqual(buckets[-1]['closed_count'], 1)
        self.assertEqual(buckets[-1]['revenue'], Decimal('2000'))
        self.assertEqual(sum(b['closed_count'] for b in buckets), 1)

    def test_december_includes_whole_month(self):
        self.add_closed('New year eve', contact_date=date(2025, 12, 31))

        buckets = reporting.monthly_buckets(self.company, 1, today=date(2025, 12, 5))

        self.assertEqual(buckets[0]['closed_count'], 1)

    def test_default_month_count(self):
        self.assertEqual(len(reporting.monthly_buckets(self.company, None, today=self.today)), 6)

    def test_month_count_below_one_rejected(self):
        for month_count in (0, -3):
            with self.assertRaises(ValueError):
                reporting.monthly_buckets(self.company, month_count, today=self.today)


class DashboardSummaryTest(ReportingTestCase):

    def test_summary(self):
        self.add_closed('Closed', contact_date=date(2025, 3, 1), value='2000')
        self.add_client('Lead', contact_date=date(2025, 3, 2))

        summary = reporting.dashboard_summary(self.company, today=date(2025, 3, 20))

        self.assertEqual(summary['total_clients'], 2)
        self.assertEqual(summary['closed_clients'], 1)
        self.assertEqual(summary['conversion_rate'], 50)
        self.assertEqual(summary['total_revenue'], Decimal('2000'))
        self.assertEqual(len(summary['monthly']), 6)
        self.assertEqual(summary['monthly'][-1]['closed_count'], 1)
        self.assertEqual(len(summary['site_types']), 3)
