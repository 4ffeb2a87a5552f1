import logging

from django.contrib.auth.signals import user_logged_in, user_logged_out, user_login_failed
from django.dispatch import receiver


logger = logging.getLogger(__name__)


# SIGNAL 1: TRACK LOGINS
@receiver(user_logged_in)
def track_user_login(sender, request, user, **kwargs):
    from .views import get_client_ip

    ip_address = get_client_ip(request) if request is not None else None
    user.increment_login_count(ip_address=ip_address)

    logger.info('User logged in: %s (login #%s)', user.email, user.login_count)



# SIGNAL 2: LOG LOGOUTS
@receiver(user_logged_out)
def log_user_logout(sender, request, user, **kwargs):
    # user is None when the session had already expired
    if user is not None:
        logger.info('User logged out: %s', user.email)



# SIGNAL 3: LOG FAILED LOGINS
@receiver(user_login_failed)
def log_failed_login(sender, credentials, request=None, **kwargs):
    logger.warning('Login failed for %s', credentials.get('username', 'unknown'))
