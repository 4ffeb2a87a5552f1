# WSGI (Web Server Gateway Interface) configuration for production deployment

# Used by production servers like:
# - Gunicorn
# - uWSGI
# - Apache with mod_wsgi
# ==============================================================================

import os
from django.core.wsgi import get_wsgi_application

# Points to config/settings.py
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

application = get_wsgi_application()


# GUNICORN (Recommended)
# =====================
# Run: gunicorn config.wsgi:application --bind 0.0.0.0:8000 --workers 4
#
# Set environment variables in production:
#    - DEBUG=False
#    - SECRET_KEY=<random-value>
#    - ALLOWED_HOSTS=yourdomain.com
#    - CORS_ALLOWED_ORIGINS=https://app.yourdomain.com
#    - DB_ENGINE=django.db.backends.postgresql
