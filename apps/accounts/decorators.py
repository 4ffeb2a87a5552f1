# Decorators in this file:
# 1. admin_required - Only admins can access
# 2. company_required - User must belong to a company (tenant)
#
# Every CRM view works on the data of one company, and the catalog and
# branding writes are admin-only. Both checks answer with JSON because
# the screens are rendered by the front-end app.
# ==============================================================================

from functools import wraps
from django.http import JsonResponse
from django.utils.translation import gettext as _


def _forbidden(error):
    return JsonResponse({'success': False, 'error': error}, status=403)


# ROLE-BASED DECORATORS
def admin_required(view_func):
    """
    Decorator: Only admins can access this view

    Checks:
    1. User is authenticated (logged in)
    2. User role is 'admin' OR is superuser
    """

    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        # Should already be checked by @login_required
        if not request.user.is_authenticated:
            return JsonResponse({'success': False, 'error': _('Please login to continue.')}, status=401)

        if request.user.is_admin():
            return view_func(request, *args, **kwargs)

        return _forbidden(_('Admin access required'))

    return wrapper



# COMPANY-BASED DECORATORS
def company_required(view_func):
    """
    Checks:
    1. User is authenticated
    2. User has an active company assigned

    Prevents errors when accessing request.user.company in the views,
    and keeps users of a deactivated company out.
    """

    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        if not request.user.is_authenticated:
            return JsonResponse({'success': False, 'error': _('Please login to continue.')}, status=401)

        company = request.user.company
        if company is not None and company.is_active:
            return view_func(request, *args, **kwargs)

        return _forbidden(_('You must be assigned to a company to access this page.'))

    return wrapper
