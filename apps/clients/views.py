import csv
import logging

import openpyxl
from openpyxl.styles import Font, PatternFill
from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.core.exceptions import ValidationError
from django.core.paginator import Paginator
from django.db import DatabaseError
from django.db.models import DecimalField, Sum, Value
from django.db.models.functions import Coalesce
from django.http import HttpResponse, JsonResponse
from django.shortcuts import get_object_or_404
from django.utils import timezone
from django.views.decorators.http import require_GET, require_POST

from apps.accounts.decorators import company_required
from apps.core.reporting import status_distribution
from . import services
from .filters import filter_projects, search_clients, sort_by_contact_date
from .forms import ClientFilterForm, ClientForm, ConvertClientForm, ProjectFilterForm, ProjectTermsForm
from .models import Client, Project


logger = logging.getLogger(__name__)

PAGE_SIZE = 50

EXPORT_HEADERS = [
    'ID', 'Business Name', 'Contact Name', 'Phone', 'City',
    'Contact Date', 'Status', 'Site Type', 'Value',
    'Timeline (weeks)', 'Progress (%)', 'Created Date',
]


# HELPER FUNCTIONS
def _error_dict(exc):
    return exc.message_dict if hasattr(exc, 'error_dict') else {'__all__': exc.messages}


def _invalid(request, errors):
    messages.error(request, 'Please correct the errors below.')
    return JsonResponse({'success': False, 'errors': errors}, status=400)


def _database_failure(request, action):
    # Must be called from inside the except block
    logger.exception('Database error while trying to %s', action)
    message = f'Could not {action}. Nothing was saved, please try again.'
    messages.error(request, message)
    return JsonResponse({'success': False, 'error': message}, status=500)


def _done(request, message, status=200, **data):
    messages.success(request, message)
    return JsonResponse({'success': True, 'message': message, **data}, status=status)


def _company_clients(request):
    return Client.objects.filter(company=request.user.company).select_related('site_type', 'project')


def _filtered_clients(request):
    """Client queryset after the list filters (search, status, order)"""
    clients = _company_clients(request)

    filter_form = ClientFilterForm(request.GET)
    if not filter_form.is_valid():
        return clients, filter_form

    if filter_form.cleaned_data.get('status'):
        clients = clients.filter(status=filter_form.cleaned_data['status'])

    clients = search_clients(clients, filter_form.cleaned_data.get('search'))
    clients = sort_by_contact_date(clients, filter_form.cleaned_data.get('order') or 'desc')
    return clients, filter_form


# PIPELINE VIEWS
@login_required
@company_required
@require_GET
def client_list_view(request):
    clients, filter_form = _filtered_clients(request)
    if filter_form.errors:
        return JsonResponse({'success': False, 'errors': filter_form.errors}, status=400)

    paginator = Paginator(clients, PAGE_SIZE)
    page_obj = paginator.get_page(request.GET.get('page', 1))

    return JsonResponse({
        'success': True,
        'clients': [client.to_dict() for client in page_obj],
        'total_count': paginator.count,
        'status_counts': status_distribution(request.user.company),

        # Pagination info
        'page': page_obj.number,
        'num_pages': paginator.num_pages,
        'has_next': page_obj.has_next(),
        'has_previous': page_obj.has_previous(),
    })


@login_required
@company_required
@require_POST
def client_create_view(request):
    company = request.user.company
    form = ClientForm(request.POST, company=company)

    if not form.is_valid():
        return _invalid(request, form.errors)

    try:
        client = services.create_client(company, form.client_data(), terms=form.terms())
    except ValidationError as exc:
        return _invalid(request, _error_dict(exc))
    except DatabaseError:
        return _database_failure(request, 'create the client')

    return _done(request, f'Client "{client.business_name}" created successfully', status=201, client=client.to_dict())


@login_required
@company_required
@require_GET
def client_detail_view(request, pk):
    client = get_object_or_404(_company_clients(request), pk=pk)
    return JsonResponse({'success': True, 'client': client.to_dict()})


@login_required
@company_required
@require_POST
def client_edit_view(request, pk):
    company = request.user.company
    client = get_object_or_404(Client, pk=pk, company=company)

    form = ClientForm(request.POST, instance=client, company=company)
    if not form.is_valid():
        return _invalid(request, form.errors)

    try:
        client = services.update_client(company, client.pk, form.client_data(), terms=form.terms())
    except ValidationError as exc:
        return _invalid(request, _error_dict(exc))
    except DatabaseError:
        return _database_failure(request, 'update the client')

    return _done(request, f'Client "{client.business_name}" updated successfully', client=client.to_dict())


@login_required
@company_required
@require_POST
def client_delete_view(request, pk):
    client = get_object_or_404(Client, pk=pk, company=request.user.company)
    business_name = client.business_name

    try:
        services.delete_client(request.user.company, client.pk)
    except DatabaseError:
        return _database_failure(request, 'delete the client')

    return _done(request, f'Client "{business_name}" deleted successfully')


@login_required
@company_required
@require_POST
def client_convert_view(request, pk):
    """Promote a pipeline client to a closed project"""
    company = request.user.company
    client = get_object_or_404(Client, pk=pk, company=company)

    if client.is_closed:
        messages.error(request, 'This client is already closed.')
        return JsonResponse({'success': False, 'error': 'This client is already closed.'}, status=400)

    form = ConvertClientForm(request.POST, company=company)
    if not form.is_valid():
        return _invalid(request, form.errors)

    try:
        client = services.convert_client_to_closed(
            company,
            client.pk,
            form.cleaned_data['site_type'],
            value=form.cleaned_data.get('value'),
            project_timeline=form.cleaned_data.get('project_timeline'),
        )
    except ValidationError as exc:
        return _invalid(request, _error_dict(exc))
    except DatabaseError:
        return _database_failure(request, 'convert the client')

    return _done(request, f'"{client.business_name}" moved to closed projects', client=client.to_dict())


@login_required
@company_required
@require_GET
def client_export_view(request):
    export_format = request.GET.get('format', 'excel')
    clients, _filter_form = _filtered_clients(request)

    rows = []
    for client in clients:
        project = client.get_project()
        rows.append([
            str(client.pk),
            client.business_name,
            client.contact_name,
            client.phone,
            client.city,
            client.contact_date.strftime('%Y-%m-%d'),
            client.get_status_display(),
            client.site_type.name if client.site_type else '',
            float(project.value) if project else '',
            project.project_timeline if project else '',
            project.progress_percentage if project else '',
            timezone.localtime(client.created_at).strftime('%Y-%m-%d %H:%M'),
        ])

    filename = f'clients_{timezone.now().strftime("%Y%m%d_%H%M%S")}'

    if export_format in ('excel', 'xlsx'):
        wb = openpyxl.Workbook()
        ws = wb.active
        ws.title = "Clients"

        # Write headers with styling
        for col, header in enumerate(EXPORT_HEADERS, start=1):
            cell = ws.cell(row=1, column=col, value=header)
            cell.font = Font(bold=True, color="FFFFFF")
            cell.fill = PatternFill(start_color="00A3FF", end_color="00A3FF", fill_type="solid")

        for row in rows:
            ws.append(row)

        # Adjust column widths
        for col in ws.columns:
            max_length = max(len(str(cell.value)) for cell in col if cell.value is not None)
            ws.column_dimensions[col[0].column_letter].width = min(max_length + 2, 50)

        response = HttpResponse(
            content_type='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
        )
        response['Content-Disposition'] = f'attachment; filename="{filename}.xlsx"'
        wb.save(response)
        return response

    if export_format == 'csv':
        response = HttpResponse(content_type='text/csv; charset=utf-8')
        response['Content-Disposition'] = f'attachment; filename="{filename}.csv"'

        # Write BOM for Excel UTF-8 compatibility
        response.write('\ufeff')

        writer = csv.writer(response)
        writer.writerow(EXPORT_HEADERS)
        writer.writerows(rows)
        return response

    return JsonResponse({'success': False, 'error': 'Invalid export format'}, status=400)


# CLOSED PROJECT VIEWS
@login_required
@company_required
@require_GET
def project_list_view(request):
    company = request.user.company
    projects = Project.objects.filter(client__company=company).select_related('client', 'client__site_type')

    filter_form = ProjectFilterForm(request.GET, company=company)
    if not filter_form.is_valid():
        return JsonResponse({'success': False, 'errors': filter_form.errors}, status=400)

    site_type = filter_form.cleaned_data.get('site_type')
    projects = filter_projects(
        projects,
        filter_form.cleaned_data.get('search'),
        site_type.pk if site_type else None,
    ).order_by('-client__contact_date', '-client__created_at')

    total_value = projects.aggregate(
        total=Coalesce(Sum('value'), Value(0), output_field=DecimalField(max_digits=14, decimal_places=2))
    )['total']

    return JsonResponse({
        'success': True,
        'projects': [project.to_dict() for project in projects],
        'total_count': len(projects),
        'total_value': total_value,
    })


@login_required
@company_required
@require_POST
def project_edit_view(request, pk):
    """Value, timeline or progress of a closed project"""
    company = request.user.company
    project = get_object_or_404(Project, pk=pk, client__company=company)

    form = ProjectTermsForm(request.POST)
    if not form.is_valid():
        return _invalid(request, form.errors)

    try:
        project = services.update_project(company, project.pk, **form.cleaned_data)
    except ValidationError as exc:
        return _invalid(request, _error_dict(exc))
    except DatabaseError:
        return _database_failure(request, 'update the project')

    return _done(request, 'Project updated successfully', project=project.to_dict())


@login_required
@company_required
@require_POST
def project_delete_view(request, pk):
    """Drops the project, the client goes back to the pipeline as lost"""
    company = request.user.company
    project = get_object_or_404(Project, pk=pk, client__company=company)

    try:
        client = services.delete_closed_project(company, project.pk)
    except DatabaseError:
        return _database_failure(request, 'delete the project')

    return _done(request, f'Project of "{client.business_name}" deleted, client marked as lost', client=client.to_dict())
