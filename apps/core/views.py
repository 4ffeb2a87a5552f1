import logging

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.core.exceptions import ValidationError
from django.db import DatabaseError
from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from apps.accounts.decorators import admin_required, company_required
from . import services
from .forms import CompanyBrandingForm, SiteTypeForm
from .models import SiteType
from .reporting import dashboard_summary


logger = logging.getLogger(__name__)


def _invalid(request, errors):
    messages.error(request, 'Please correct the errors below.')
    return JsonResponse({'success': False, 'errors': errors}, status=400)


def _database_failure(request, action):
    logger.exception('Database error while trying to %s', action)
    message = f'Could not {action}. Nothing was saved, please try again.'
    messages.error(request, message)
    return JsonResponse({'success': False, 'error': message}, status=500)


@login_required
@company_required
@require_GET
def dashboard_view(request):
    """
    Main dashboard data
    - Key metrics: total clients, closed clients, conversion rate, revenue
    - Distribution by status
    - Closed projects per month (trailing months, oldest first)
    - Closed projects per site type
    """
    company = request.user.company

    return JsonResponse({
        'success': True,
        'company': company.get_branding(),
        'summary': dashboard_summary(company),
    })


@login_required
@company_required
@require_http_methods(['GET', 'POST'])
def branding_view(request):
    """
    GET: name, colors and logo URL of the company
    POST: update them (admins only), the logo comes as a multipart upload
    """
    company = request.user.company

    if request.method == 'GET':
        return JsonResponse({'success': True, 'branding': company.get_branding()})

    # Members can read the branding but not change it
    if not request.user.is_admin():
        messages.error(request, 'Only admins can change the company branding')
        return JsonResponse({'success': False, 'error': 'Admin access required'}, status=403)

    form = CompanyBrandingForm(request.POST, request.FILES, instance=company)
    if not form.is_valid():
        return _invalid(request, form.errors)

    try:
        company = form.save()
    except DatabaseError:
        return _database_failure(request, 'update the branding')

    logger.info('Branding of company "%s" updated by %s', company.name, request.user.email)

    message = 'Company branding updated successfully.'
    messages.success(request, message)
    return JsonResponse({'success': True, 'message': message, 'branding': company.get_branding()})


# SITE TYPE CATALOG
@login_required
@company_required
@require_GET
def site_type_list_view(request):
    site_types = SiteType.objects.filter(company=request.user.company)
    return JsonResponse({'success': True, 'site_types': [site_type.to_dict() for site_type in site_types]})


@login_required
@company_required
@admin_required
@require_POST
def site_type_create_view(request):
    company = request.user.company
    form = SiteTypeForm(request.POST, company=company)

    if not form.is_valid():
        return _invalid(request, form.errors)

    try:
        site_type = services.create_site_type(company, form.cleaned_data)
    except ValidationError as exc:
        return _invalid(request, exc.message_dict)
    except DatabaseError:
        return _database_failure(request, 'create the site type')

    message = f'Site type "{site_type.name}" created successfully'
    messages.success(request, message)
    return JsonResponse({'success': True, 'message': message, 'site_type': site_type.to_dict()}, status=201)


@login_required
@company_required
@admin_required
@require_POST
def site_type_edit_view(request, pk):
    company = request.user.company
    site_type = get_object_or_404(SiteType, pk=pk, company=company)

    form = SiteTypeForm(request.POST, instance=site_type, company=company)
    if not form.is_valid():
        return _invalid(request, form.errors)

    try:
        site_type = services.update_site_type(company, site_type.pk, form.cleaned_data)
    except ValidationError as exc:
        return _invalid(request, exc.message_dict)
    except DatabaseError:
        return _database_failure(request, 'update the site type')

    message = f'Site type "{site_type.name}" updated successfully'
    messages.success(request, message)
    return JsonResponse({'success': True, 'message': message, 'site_type': site_type.to_dict()})


@login_required
@company_required
@admin_required
@require_POST
def site_type_delete_view(request, pk):
    company = request.user.company
    site_type = get_object_or_404(SiteType, pk=pk, company=company)
    name = site_type.name

    try:
        deleted = services.delete_site_type(company, site_type.pk)
    except DatabaseError:
        return _database_failure(request, 'delete the site type')

    if not deleted:
        message = f'Site type "{name}" is used by closed projects and cannot be deleted'
        messages.error(request, message)
        return JsonResponse({'success': False, 'error': message}, status=409)

    message = f'Site type "{name}" deleted successfully'
    messages.success(request, message)
    return JsonResponse({'success': True, 'message': message})
