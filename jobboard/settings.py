"""
Django settings for jobboard project.
"""

from pathlib import Path
import os

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent


# -------------------------
# Basic / environment
# -------------------------
SECRET_KEY = os.environ.get('JOBBOARD_SECRET_KEY', 'django-insecure-dev-secret-for-local')

DEBUG = os.environ.get('JOBBOARD_DEBUG', 'True').lower() in ('1', 'true', 'yes')

ALLOWED_HOSTS = (
    os.environ.get('JOBBOARD_ALLOWED_HOSTS', '')
    .split(',') if os.environ.get('JOBBOARD_ALLOWED_HOSTS') else []
)


# -------------------------
# Installed apps / middleware
# -------------------------
INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    'django.contrib.humanize',

    # project apps
    'accounts',
    'jobs',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'jobboard.urls'


# -------------------------
# Templates
# -------------------------
TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [os.path.join(BASE_DIR, 'templates')],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
                'django.template.context_processors.static',
                'django.template.context_processors.media',    # MEDIA_URL for avatars / resumes
                'django.template.context_processors.csrf',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
                'accounts.session.session_context',            # `session` in every template
            ],
        },
    },
]


WSGI_APPLICATION = 'jobboard.wsgi.application'


# -------------------------
# Database (sqlite for dev)
# -------------------------
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': os.environ.get('JOBBOARD_DATABASE_PATH', BASE_DIR / 'db.sqlite3'),
    }
}


# -------------------------
# Password validation
# -------------------------
AUTH_PASSWORD_VALIDATORS = [
    {'NAME': 'django.contrib.auth.password_validation.UserAttributeSimilarityValidator'},
    {'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator'},
    {'NAME': 'django.contrib.auth.password_validation.CommonPasswordValidator'},
    {'NAME': 'django.contrib.auth.password_validation.NumericPasswordValidator'},
]


# -------------------------
# Internationalization
# -------------------------
LANGUAGE_CODE = 'en-us'
TIME_ZONE = os.environ.get('JOBBOARD_TIME_ZONE', 'UTC')
USE_I18N = True
USE_TZ = True


# -------------------------
# Static & media
# -------------------------
STATIC_URL = '/static/'
STATIC_ROOT = os.environ.get('JOBBOARD_STATIC_ROOT', os.path.join(BASE_DIR, 'staticfiles'))

# uploaded avatars and resumes (the blob store)
MEDIA_URL = '/media/'
MEDIA_ROOT = os.environ.get('JOBBOARD_MEDIA_ROOT', os.path.join(BASE_DIR, 'media'))


# -------------------------
# Auth
# -------------------------
DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'
AUTH_USER_MODEL = 'accounts.User'

LOGIN_URL = '/accounts/login/'
LOGIN_REDIRECT_URL = '/dashboard/'
LOGOUT_REDIRECT_URL = '/'


# -------------------------
# Job board tunables
# -------------------------
# upper end of the salary slider; a missing salary_max filter falls back to it
JOBBOARD_SALARY_SLIDER_MAX = int(os.environ.get('JOBBOARD_SALARY_SLIDER_MAX', 300000))
JOBBOARD_RESUME_MAX_MB = int(os.environ.get('JOBBOARD_RESUME_MAX_MB', 5))
JOBBOARD_FEATURED_MIN_SALARY = int(os.environ.get('JOBBOARD_FEATURED_MIN_SALARY', 80000))


# -------------------------
# Email configuration
# -------------------------
# Default: console backend in development (prints emails to terminal)
EMAIL_BACKEND = os.environ.get('JOBBOARD_EMAIL_BACKEND', 'django.core.mail.backends.console.EmailBackend')
DEFAULT_FROM_EMAIL = os.environ.get('JOBBOARD_DEFAULT_FROM_EMAIL', 'Job Board <no-reply@jobboard.local>')

# Allow shorthand JOBBOARD_EMAIL_BACKEND='smtp' for convenience
if EMAIL_BACKEND.lower() in ('smtp', 'django.core.mail.backends.smtp.emailbackend'):
    EMAIL_BACKEND = 'django.core.mail.backends.smtp.EmailBackend'
    EMAIL_HOST = os.environ.get('JOBBOARD_EMAIL_HOST', 'smtp.gmail.com')
    EMAIL_PORT = int(os.environ.get('JOBBOARD_EMAIL_PORT', 587))
    EMAIL_USE_TLS = os.environ.get('JOBBOARD_EMAIL_USE_TLS', 'True').lower() in ('1', 'true', 'yes')
    EMAIL_HOST_USER = os.environ.get('JOBBOARD_EMAIL_HOST_USER', '')
    EMAIL_HOST_PASSWORD = os.environ.get('JOBBOARD_EMAIL_HOST_PASSWORD', '')


# -------------------------
# Logging (basic)
# -------------------------
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {'format': '%(asctime)s %(levelname)s %(name)s %(message)s'},
    },
    'handlers': {
        'console': {'class': 'logging.StreamHandler', 'formatter': 'simple'},
    },
    'root': {
        'handlers': ['console'],
        'level': os.environ.get('JOBBOARD_LOG_LEVEL', 'INFO'),
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': 'INFO' if DEBUG else 'WARNING',
            'propagate': False,
        },
    },
}


# -------------------------
# Security (production suggestions)
# -------------------------
# In production, set these via environment variables:
# SECURE_HSTS_SECONDS = 31536000
# SECURE_SSL_REDIRECT = True
# SESSION_COOKIE_SECURE = True
# CSRF_COOKIE_SECURE = True
