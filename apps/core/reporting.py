"""
Dashboard aggregates

Read-only and recomputed from the database on every call, nothing is
cached. All functions are scoped to one company.
"""
from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from django.conf import settings
from django.db.models import Count, DecimalField, Q, Sum, Value
from django.db.models.functions import Coalesce
from django.utils import timezone

from apps.clients.models import Client, Project
from .models import Company


ZERO = Decimal('0')


def _money():
    return Coalesce(Sum('value'), Value(ZERO), output_field=DecimalField(max_digits=14, decimal_places=2))


def _clients(company: Company):
    return Client.objects.filter(company=company)


def _projects(company: Company):
    return Project.objects.filter(client__company=company)


def count_by_status(company: Company, status: str = 'all') -> int:
    clients = _clients(company)
    if status != 'all':
        clients = clients.filter(status=status)
    return clients.count()


def status_distribution(company: Company) -> dict:
    """Count per pipeline status, every status present (0 when empty)"""
    counts = dict(
        _clients(company).values_list('status').annotate(count=Count('pk')).values_list('status', 'count')
    )
    return {status: counts.get(status, 0) for status, _label in Client.STATUS_CHOICES}


def total_revenue(company: Company) -> Decimal:
    """Sum of the value of every closed project, 0 when there are none"""
    return _projects(company).aggregate(total=_money())['total']


def conversion_rate(company: Company) -> int:
    """
    Closed clients over all clients, as a whole percentage.

    Rounds half up (12.5 -> 13). Returns 0 for an empty pipeline.
    """
    totals = _clients(company).aggregate(
        total=Count('pk'),
        closed=Count('pk', filter=Q(status=Client.STATUS_CLOSED)),
    )
    if not totals['total']:
        return 0

    rate = Decimal(totals['closed'] * 100) / Decimal(totals['total'])
    return int(rate.quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def _trailing_months(month_count: int, today: date) -> list[date]:
    """First day of the last month_count calendar months, oldest first"""
    months = []
    year, month = today.year, today.month
    for _ in range(month_count):
        months.append(date(year, month, 1))
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return list(reversed(months))


def monthly_buckets(company: Company, month_count: int | None = None, today: date | None = None) -> list[dict]:
    """
    Closed projects per calendar month for the trailing month_count months.

    Projects fall into the month of their client's contact date, so the
    current month includes dates later than today. Always returns
    month_count entries, oldest first, with zeros for empty months.
    Raises ValueError when month_count is below 1.
    """
    if month_count is None:
        month_count = settings.DASHBOARD_MONTH_COUNT
    if month_count < 1:
        raise ValueError('month_count must be at least 1, got %r' % month_count)
    today = today or timezone.localdate()

    months = _trailing_months(month_count, today)
    newest = months[-1]
    if newest.month == 12:
        next_month = date(newest.year + 1, 1, 1)
    else:
        next_month = date(newest.year, newest.month + 1, 1)
    buckets = {
        (m.year, m.month): {
            'year': m.year,
            'month': m.month,
            'label': m.strftime('%b %Y'),
            'closed_count': 0,
            'revenue': ZERO,
        }
        for m in months
    }

    projects = _projects(company).filter(
        client__contact_date__gte=months[0],
        client__contact_date__lt=next_month,
    ).values_list('client__contact_date', 'value')

    for contact_date, value in projects:
        bucket = buckets.get((contact_date.year, contact_date.month))
        if bucket is not None:
            bucket['closed_count'] += 1
            bucket['revenue'] += value

    return [buckets[(m.year, m.month)] for m in months]


def per_site_type_totals(company: Company) -> list[dict]:
    """Count and summed value of closed projects per site type (0 for unused types)"""
    site_types = company.site_types.annotate(
        project_count=Count('clients__project'),
        project_value=Coalesce(
            Sum('clients__project__value'), Value(ZERO),
            output_field=DecimalField(max_digits=14, decimal_places=2),
        ),
    ).order_by('base_value', 'name')

    return [
        {
            'id': site_type.pk,
            'name': site_type.name,
            'count': site_type.project_count,
            'value': site_type.project_value,
        }
        for site_type in site_types
    ]


def dashboard_summary(company: Company, today: date | None = None) -> dict:
    """Everything the dashboard shows, in one dict"""
    by_status = status_distribution(company)

    return {
        'total_clients': sum(by_status.values()),
        'closed_clients': by_status[Client.STATUS_CLOSED],
        'by_status': by_status,
        'conversion_rate': conversion_rate(company),
        'total_revenue': total_revenue(company),
        'monthly': monthly_buckets(company, today=today),
        'site_types': per_site_type_totals(company),
    }
