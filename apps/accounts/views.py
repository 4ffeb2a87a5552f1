import logging

from django.contrib.auth import authenticate, login, logout
from django.contrib import messages
from django.http import JsonResponse
from django.utils.translation import gettext as _
from django.views.decorators.http import require_GET, require_POST
from django.views.decorators.cache import never_cache
from django.views.decorators.csrf import ensure_csrf_cookie

from .forms import LoginForm, SignUpForm


logger = logging.getLogger(__name__)


# HELPER FUNCTIONS
def get_client_ip(request):

    x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
    if x_forwarded_for:
        # First one is the original client IP
        ip = x_forwarded_for.split(',')[0].strip()
    else:
        ip = request.META.get('REMOTE_ADDR')
    return ip


def session_payload(request):
    """Body shared by the session, login and signup responses"""
    if not request.user.is_authenticated:
        return {'authenticated': False, 'user': None}
    return {'authenticated': True, 'user': request.user.get_session_profile()}



# AUTHENTICATION VIEWS
@never_cache
@require_POST
def login_view(request):
    form = LoginForm(request.POST)

    if not form.is_valid():
        return JsonResponse({'success': False, 'errors': form.errors}, status=400)

    email = form.cleaned_data['email']
    password = form.cleaned_data['password']

    # Returns User object if valid, None if invalid (or inactive)
    user = authenticate(request, username=email, password=password)

    if user is None:
        # Logged by the user_login_failed receiver
        return JsonResponse({
            'success': False,
            'error': _('Invalid email or password. Please try again.')
        }, status=401)

    login(request, user)

    if form.cleaned_data.get('remember'):
        # Session expires in 30 days
        request.session.set_expiry(30 * 24 * 60 * 60)
    else:
        # Session expires when browser closes
        request.session.set_expiry(0)

    message = _('Welcome back, {}!').format(user.get_full_name())
    messages.success(request, message)

    return JsonResponse({'success': True, 'message': message, **session_payload(request)})


@require_POST
def logout_view(request):
    if request.user.is_authenticated:
        logout(request)

    return JsonResponse({'success': True, **session_payload(request)})


@never_cache
@require_POST
def signup_view(request):
    form = SignUpForm(request.POST)

    if not form.is_valid():
        return JsonResponse({'success': False, 'errors': form.errors}, status=400)

    user = form.save()
    logger.info('New company "%s" signed up by %s', user.company.name, user.email)

    login(request, user, backend='django.contrib.auth.backends.ModelBackend')

    message = _('Account created successfully')
    messages.success(request, message)

    return JsonResponse({'success': True, 'message': message, **session_payload(request)}, status=201)


@never_cache
@ensure_csrf_cookie
@require_GET
def session_view(request):
    """Current session: the login gate plus the branding profile"""
    return JsonResponse(session_payload(request))
