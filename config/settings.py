import os
from pathlib import Path
from decouple import config, Csv


# BASE DIRECTORY
# BASE_DIR points to the project root (where manage.py is)
BASE_DIR = Path(__file__).resolve().parent.parent


# SECURITY SETTINGS

# SECURITY WARNING: keep the secret key used in production secret!
# Generate new key: python -c 'from django.core.management.utils import get_random_secret_key; print(get_random_secret_key())'
SECRET_KEY = config('SECRET_KEY', default='django-insecure-CHANGE-THIS-IN-PRODUCTION')

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = config('DEBUG', default=True, cast=bool)

# Format: 'domain.com,www.domain.com,api.domain.com'
ALLOWED_HOSTS = config('ALLOWED_HOSTS', default='localhost,127.0.0.1,0.0.0.0,testserver', cast=Csv())


# INSTALLED APPS

INSTALLED_APPS = [
    # Django built-in apps
    'django.contrib.admin',  # Admin interface
    'django.contrib.auth',  # Authentication framework
    'django.contrib.contenttypes',  # Content types framework
    'django.contrib.sessions',  # Session framework
    'django.contrib.messages',  # Messaging framework (user notifications)
    'django.contrib.staticfiles',  # Static files management

    # Third-party apps
    'corsheaders',  # CORS headers support (the UI is a separate single-page app)

    # Our custom apps
    # IMPORTANT: accounts must be first (custom user model)
    'apps.accounts',  # Users, login gate, session profile
    'apps.core',  # Company branding, site-type catalog, dashboard
    'apps.clients',  # Pipeline clients and closed projects
]


# MIDDLEWARE

# Each request passes through these in order (top to bottom)
MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'corsheaders.middleware.CorsMiddleware',  # must be before CommonMiddleware
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]


# URL CONFIGURATION
ROOT_URLCONF = 'config.urls'


# TEMPLATES
# Only the admin renders templates, the CRM screens live in the front-end app
TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]


# ASGI/WSGI APPLICATION
ASGI_APPLICATION = 'config.asgi.application'
WSGI_APPLICATION = 'config.wsgi.application'


# DATABASE

# SQLite by default (local runs and tests)
# Production: DB_ENGINE=django.db.backends.postgresql plus the DB_* variables
DB_ENGINE = config('DB_ENGINE', default='django.db.backends.sqlite3')

if DB_ENGINE == 'django.db.backends.sqlite3':
    DATABASES = {
        'default': {
            'ENGINE': DB_ENGINE,
            'NAME': config('DB_NAME', default=str(BASE_DIR / 'db.sqlite3')),
        }
    }
else:
    DATABASES = {
        'default': {
            'ENGINE': DB_ENGINE,
            'NAME': config('DB_NAME', default='sitecrm_db'),
            'USER': config('DB_USER', default='sitecrm_user'),
            'PASSWORD': config('DB_PASSWORD', default='sitecrm_pass'),
            'HOST': config('DB_HOST', default='db'),  # 'db' is Docker service name
            'PORT': config('DB_PORT', default='5432'),

            # Keep connection open for 10 minutes
            'CONN_MAX_AGE': 600,

            'OPTIONS': {
                'connect_timeout': 10,
            }
        }
    }


# AUTHENTICATION

# Custom user model (email login, company membership)
# IMPORTANT: This MUST be set before first migration!
AUTH_USER_MODEL = 'accounts.User'

AUTH_PASSWORD_VALIDATORS = [
    {
        'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator',
        'OPTIONS': {
            'min_length': 8,
        }
    },
]

# Login/Logout URLs
LOGIN_URL = '/accounts/login/'  # Redirect here if not authenticated
LOGIN_REDIRECT_URL = '/dashboard/'
LOGOUT_REDIRECT_URL = '/accounts/login/'


# INTERNATIONALIZATION

LANGUAGE_CODE = 'en-us'

# List: https://en.wikipedia.org/wiki/List_of_tz_database_time_zones
TIME_ZONE = config('TIME_ZONE', default='America/Sao_Paulo')

USE_I18N = True

# All datetimes in database are stored in UTC
USE_TZ = True


# STATIC FILES (CSS, JavaScript, Images)
STATIC_URL = '/static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'


# MEDIA FILES (User Uploads)

# Example: http://localhost:8000/media/companies/logos/acme.png
MEDIA_URL = '/media/'
MEDIA_ROOT = BASE_DIR / 'media'


# CORS HEADERS (Cross-Origin Resource Sharing)

# The front-end sends the session cookie with every call
CORS_ALLOW_CREDENTIALS = True

if DEBUG:
    CORS_ALLOW_ALL_ORIGINS = True
else:
    CORS_ALLOWED_ORIGINS = config('CORS_ALLOWED_ORIGINS', default='https://yourdomain.com', cast=Csv())


# LOGGING

LOG_DIR = BASE_DIR / 'logs'
os.makedirs(LOG_DIR, exist_ok=True)

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,

    # Log formatters
    'formatters': {
        'verbose': {
            'format': '{levelname} {asctime} {module} {message}',
            'style': '{',
        },
        'simple': {
            'format': '{levelname} {message}',
            'style': '{',
        },
    },

    # Log handlers (where to send logs)
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
        'file': {
            'class': 'logging.handlers.RotatingFileHandler',
            'filename': LOG_DIR / 'django.log',
            'maxBytes': 1024 * 1024 * 10,  # 10 MB
            'backupCount': 5,
            'formatter': 'verbose',
        },
    },

    # Loggers
    'loggers': {
        'django': {
            'handlers': ['console', 'file'],
            'level': config('LOG_LEVEL', default='INFO'),
            'propagate': True,
        },
        'apps': {  # Our custom apps
            'handlers': ['console', 'file'],
            'level': config('APPS_LOG_LEVEL', default='DEBUG'),
            'propagate': False,
        },
    },
}


# CUSTOM SETTINGS

# Session settings
SESSION_COOKIE_AGE = 86400  # 24 hours in seconds
SESSION_SAVE_EVERY_REQUEST = False

# File upload settings
FILE_UPLOAD_MAX_MEMORY_SIZE = 5 * 1024 * 1024  # 5 MB
DATA_UPLOAD_MAX_MEMORY_SIZE = 10 * 1024 * 1024  # 10 MB

# Branding settings
LOGO_MAX_UPLOAD_SIZE = 2 * 1024 * 1024  # 2 MB
DEFAULT_PRIMARY_COLOR = '#00A3FF'

# Pipeline / project settings
DEFAULT_PROJECT_TIMELINE_WEEKS = 4
DASHBOARD_MONTH_COUNT = 6

# Seeded into every new company's site-type catalog
DEFAULT_SITE_TYPES = [
    {'name': 'Landing Page', 'description': 'Single presentation page', 'base_value': '1500'},
    {'name': 'Site Institucional', 'description': 'Complete corporate website', 'base_value': '3000'},
    {'name': 'E-commerce', 'description': 'Complete online store', 'base_value': '5000'},
]


# SECURITY SETTINGS (Production)

if not DEBUG:
    SECURE_SSL_REDIRECT = True
    SESSION_COOKIE_SECURE = True
    CSRF_COOKIE_SECURE = True

    SECURE_CONTENT_TYPE_NOSNIFF = True
    X_FRAME_OPTIONS = 'DENY'

    # HSTS (HTTP Strict Transport Security)
    SECURE_HSTS_SECONDS = 31536000  # 1 year
    SECURE_HSTS_INCLUDE_SUBDOMAINS = True
    SECURE_HSTS_PRELOAD = True


# DEFAULT AUTO FIELD
DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'
