"""
Pipeline operations that keep clients and their closed projects in sync.

A client has a Project (same primary key) exactly when its status is
"closed". Every function below preserves that, validates before writing,
and writes both records inside one transaction.

Ids that don't exist, or that belong to another company, are ignored:
the functions return None/False instead of raising.
"""
from __future__ import annotations

import logging

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import transaction

from apps.core.models import Company, SiteType
from .models import Client, Project


logger = logging.getLogger(__name__)

CLIENT_FIELDS = ('business_name', 'contact_name', 'phone', 'city', 'contact_date', 'status', 'site_type', 'notes')
TERM_FIELDS = ('value', 'project_timeline', 'progress_percentage')


def _given(value):
    return value is not None and value != ''


def _resolve_site_type(company: Company, value) -> SiteType | None:
    """Accepts a SiteType, an id or an empty value"""
    if not _given(value):
        return None

    site_type_id = value.pk if isinstance(value, SiteType) else value
    try:
        site_type = SiteType.objects.filter(company=company, pk=site_type_id).first()
    except (TypeError, ValueError):
        site_type = None

    if site_type is None:
        raise ValidationError({'site_type': 'Select a site type from your catalog.'})
    return site_type


def _apply_client_data(client: Client, data: dict) -> None:
    for field in CLIENT_FIELDS:
        if field not in data:
            continue
        if field == 'site_type':
            client.site_type = _resolve_site_type(client.company, data['site_type'])
        else:
            setattr(client, field, data[field] if data[field] is not None else '')

    # Forms and the JSON views may send the id under its column name
    if 'site_type' not in data and 'site_type_id' in data:
        client.site_type = _resolve_site_type(client.company, data['site_type_id'])


def _validate_client(client: Client) -> None:
    client.full_clean(exclude=['company'])

    if client.is_closed and client.site_type is None:
        raise ValidationError({'site_type': 'A closed client needs a site type.'})


def _prepare_project(client: Client, terms: dict | None) -> Project:
    """
    Build (or update in memory) the project of a closed client.

    A new project takes the site type's base value when no value is given,
    the default timeline and 0% progress. An existing one only changes the
    terms that are given.
    """
    terms = {k: v for k, v in (terms or {}).items() if k in TERM_FIELDS and _given(v)}
    project = client.get_project()

    if project is None:
        project = Project(
            client=client,
            value=client.site_type.base_value,
            project_timeline=settings.DEFAULT_PROJECT_TIMELINE_WEEKS,
            progress_percentage=0,
        )

    for field, value in terms.items():
        setattr(project, field, value)

    # The client row may not exist yet, so the FK lookup is skipped
    project.full_clean(exclude=['client'])
    return project


def get_client(company: Company, client_id) -> Client | None:
    try:
        return Client.objects.select_related('site_type').filter(company=company, pk=client_id).first()
    except ValidationError:
        # Not a UUID
        return None


def get_project(company: Company, client_id) -> Project | None:
    try:
        return Project.objects.select_related('client', 'client__site_type').filter(
            client__company=company, pk=client_id
        ).first()
    except ValidationError:
        return None


def create_client(company: Company, data: dict, terms: dict | None = None) -> Client:
    """
    Create a client. A client created as "closed" gets its project right away.

    Raises:
        ValidationError: invalid data, nothing is saved
    """
    client = Client(company=company)
    _apply_client_data(client, data)
    _validate_client(client)

    project = _prepare_project(client, terms) if client.is_closed else None

    with transaction.atomic():
        client.save()
        if project is not None:
            project.client = client
            project.save()

    logger.info('Client "%s" created with status %s', client.business_name, client.status)
    if project is not None:
        logger.info('Project created for client "%s" (value %s)', client.business_name, project.value)
    return client


def update_client(company: Company, client_id, data: dict, terms: dict | None = None) -> Client | None:
    """
    Merge data into a client and reconcile its project:

    - resulting status "closed": create the project or overwrite the given terms
    - any other status: remove the project if there is one

    Raises:
        ValidationError: invalid data, nothing is saved
    """
    client = get_client(company, client_id)
    if client is None:
        return None

    _apply_client_data(client, data)
    _validate_client(client)

    project = _prepare_project(client, terms) if client.is_closed else client.get_project()

    with transaction.atomic():
        client.save()
        if client.is_closed:
            project.save()
        elif project is not None:
            project.delete()
            logger.info('Client "%s" left closed status (%s), project removed', client.business_name, client.status)

    if not client.is_closed and project is not None:
        # Drop the cached reverse relation to the deleted project
        client.refresh_from_db()

    return client


def delete_client(company: Company, client_id) -> bool:
    """Delete a client. Its project goes with it (cascade)."""
    client = get_client(company, client_id)
    if client is None:
        return False

    with transaction.atomic():
        client.delete()

    logger.info('Client "%s" deleted', client.business_name)
    return True


def convert_client_to_closed(company: Company, client_id, site_type_id, value=None, project_timeline=None) -> Client | None:
    """
    Promote a pipeline client to closed, in place.

    The client keeps its id and created_at, and ends with exactly one
    project sharing that id.
    """
    return update_client(
        company,
        client_id,
        {'status': Client.STATUS_CLOSED, 'site_type': site_type_id},
        terms={'value': value, 'project_timeline': project_timeline},
    )


def update_project(company: Company, client_id, value=None, project_timeline=None, progress_percentage=None) -> Project | None:
    """Edit the contract value, the timeline or the progress of a closed project"""
    project = get_project(company, client_id)
    if project is None:
        return None

    terms = {'value': value, 'project_timeline': project_timeline, 'progress_percentage': progress_percentage}
    for field, term in terms.items():
        if _given(term):
            setattr(project, field, term)

    project.full_clean()
    project.save()
    return project


def delete_closed_project(company: Company, client_id) -> Client | None:
    """
    Remove a closed project. The client stays, demoted to "lost", so the
    contact history is kept.
    """
    project = get_project(company, client_id)
    if project is None:
        return None

    client = project.client
    with transaction.atomic():
        project.delete()
        client.status = Client.STATUS_LOST
        client.save(update_fields=['status', 'updated_at'])

    client.refresh_from_db()

    logger.info('Project of "%s" deleted, client moved to lost', client.business_name)
    return client
