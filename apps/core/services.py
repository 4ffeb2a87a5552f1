"""
Site-type catalog operations

The catalog is small and per company. The one rule that matters: a site
type referenced by a closed project can't be deleted.
"""
from __future__ import annotations

import logging
from decimal import Decimal

from django.conf import settings
from django.db import transaction
from django.db.models import ProtectedError

from .models import Company, SiteType


logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ('name', 'description', 'base_value')


def seed_default_site_types(company: Company) -> list[SiteType]:
    """
    Create the default catalog (settings.DEFAULT_SITE_TYPES) for a company.
    Types whose name already exists are left alone.
    """
    created = []
    for entry in settings.DEFAULT_SITE_TYPES:
        site_type, was_created = SiteType.objects.get_or_create(
            company=company,
            name=entry['name'],
            defaults={
                'description': entry.get('description', ''),
                'base_value': Decimal(entry['base_value']),
            },
        )
        if was_created:
            created.append(site_type)

    if created:
        logger.info('Seeded %d site types for company "%s"', len(created), company.name)
    return created


def get_site_type(company: Company, site_type_id) -> SiteType | None:
    try:
        return SiteType.objects.filter(company=company, pk=site_type_id).first()
    except (TypeError, ValueError):
        # Not an integer id
        return None


def create_site_type(company: Company, data: dict) -> SiteType:
    """Raises ValidationError before saving when data is invalid"""
    site_type = SiteType(company=company, **{k: v for k, v in data.items() if k in EDITABLE_FIELDS})
    site_type.full_clean()
    site_type.save()

    logger.info('Site type "%s" created for company "%s"', site_type.name, company.name)
    return site_type


def update_site_type(company: Company, site_type_id, data: dict) -> SiteType | None:
    site_type = get_site_type(company, site_type_id)
    if site_type is None:
        return None

    for field in EDITABLE_FIELDS:
        if field in data:
            setattr(site_type, field, data[field])

    site_type.full_clean()
    site_type.save()
    return site_type


def delete_site_type(company: Company, site_type_id) -> bool:
    """
    Delete a site type unless a closed project references it.

    Returns:
        True when exactly one entry was removed, False when the id is
        unknown or the type is in use (the catalog is left unchanged)
    """
    site_type = get_site_type(company, site_type_id)
    if site_type is None:
        return False

    try:
        with transaction.atomic():
            site_type.delete()
    except ProtectedError:
        logger.warning('Refused to delete site type "%s": used by closed projects', site_type.name)
        return False

    logger.info('Site type "%s" deleted from company "%s"', site_type.name, company.name)
    return True
