"""
Django settings for the Detox Wellness clinic backend.

Base configuration: PostgreSQL, JWT auth, local upload storage.
Development (SQLite) and production overrides live in settings_dev.py and
settings_prod.py.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

from datetime import timedelta


BASE_DIR = Path(__file__).resolve().parent.parent


SECRET_KEY = os.getenv(
    'DJANGO_SECRET_KEY',
    'django-insecure-3v!x0m$k7w_detox-wellness-local-only-key-q9^t2z#e8'
)

DEBUG = os.getenv('DJANGO_DEBUG', 'True').lower() == 'true'

ENVIRONMENT = os.getenv('APP_ENV', 'development')

ALLOWED_HOSTS = [
    host.strip()
    for host in os.getenv('DJANGO_ALLOWED_HOSTS', 'localhost,127.0.0.1,[::1]').split(',')
    if host.strip()
]


INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',

    'rest_framework',
    'corsheaders',

    'wellness_backend.core',
    'wellness_backend.catalog',
    'wellness_backend.appointments',
    'wellness_backend.inquiries',
    'wellness_backend.notifications',
    'wellness_backend.uploads',
    'wellness_backend.dashboard',
]


MIDDLEWARE = [
    'corsheaders.middleware.CorsMiddleware',
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
    'wellness_backend.core.middleware.RequestLogMiddleware',
]


ROOT_URLCONF = 'wellness_backend.urls'


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


WSGI_APPLICATION = 'wellness_backend.wsgi.application'


DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.postgresql',
        'NAME': os.getenv('DB_NAME', 'detox_wellness'),
        'USER': os.getenv('DB_USER', 'postgres'),
        'PASSWORD': os.getenv('DB_PASSWORD') or os.getenv('PGPASSWORD', ''),
        'HOST': os.getenv('DB_HOST', 'localhost'),
        'PORT': os.getenv('DB_PORT', '5432'),
        'CONN_MAX_AGE': int(os.getenv('DB_CONN_MAX_AGE', '0')),
    },
}


AUTH_PASSWORD_VALIDATORS = [
    {'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator',
     'OPTIONS': {'min_length': 6}},
]


# Custom user model (must be set before running any migrations)
AUTH_USER_MODEL = 'core.User'


# Django REST Framework
REST_FRAMEWORK = {
    'DEFAULT_AUTHENTICATION_CLASSES': (
        'rest_framework_simplejwt.authentication.JWTAuthentication',
    ),
    'DEFAULT_PERMISSION_CLASSES': (
        'rest_framework.permissions.AllowAny',
    ),
    'DEFAULT_RENDERER_CLASSES': (
        'rest_framework.renderers.JSONRenderer',
    ),
    'DEFAULT_PARSER_CLASSES': (
        'rest_framework.parsers.JSONParser',
        'rest_framework.parsers.FormParser',
        'rest_framework.parsers.MultiPartParser',
    ),
    'EXCEPTION_HANDLER': 'wellness_backend.core.exceptions.api_exception_handler',
}


# SimpleJWT: tokens are valid for 7 days unless JWT_ACCESS_DAYS says otherwise
JWT_SIGNING_KEY = os.getenv('JWT_SIGNING_KEY', SECRET_KEY)

SIMPLE_JWT = {
    'ACCESS_TOKEN_LIFETIME': timedelta(days=int(os.getenv('JWT_ACCESS_DAYS', '7'))),
    'REFRESH_TOKEN_LIFETIME': timedelta(days=30),
    'ALGORITHM': 'HS256',
    'SIGNING_KEY': JWT_SIGNING_KEY,
    'AUTH_HEADER_TYPES': ('Bearer',),
}


# CORS: the public site and admin panel run on FRONTEND_URL
FRONTEND_URL = os.getenv('FRONTEND_URL', 'http://localhost:3000')
CORS_ALLOWED_ORIGINS = [
    origin.strip()
    for origin in FRONTEND_URL.split(',')
    if origin.strip()
]
CORS_ALLOW_CREDENTIALS = True


LANGUAGE_CODE = 'en-us'
TIME_ZONE = os.getenv('TIME_ZONE', 'UTC')
USE_I18N = True
USE_TZ = True


STATIC_URL = 'static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'


# ---------------------------------------------------------
# UPLOADS
# ---------------------------------------------------------

# Uploaded files are stored below UPLOAD_ROOT and served under /uploads/
MEDIA_URL = '/uploads/'
MEDIA_ROOT = Path(os.getenv('UPLOAD_ROOT', BASE_DIR / 'uploads'))

UPLOAD_MAX_BYTES = 10 * 1024 * 1024
PRACTITIONER_PHOTO_MAX_BYTES = 5 * 1024 * 1024
CATALOG_IMAGE_MAX_BYTES = 5 * 1024 * 1024
TESTIMONIAL_PHOTO_MAX_BYTES = 2 * 1024 * 1024
UPLOAD_MAX_FILES = 10
IMAGE_MAX_DIMENSION = 1200
IMAGE_QUALITY = 85

DATA_UPLOAD_MAX_MEMORY_SIZE = UPLOAD_MAX_BYTES + 1024 * 1024
FILE_UPLOAD_MAX_MEMORY_SIZE = 2621440


# ---------------------------------------------------------
# EMAIL
# ---------------------------------------------------------

EMAIL_BACKEND = 'django.core.mail.backends.smtp.EmailBackend'
EMAIL_HOST = os.getenv('SMTP_HOST', 'smtp.gmail.com')
EMAIL_PORT = int(os.getenv('SMTP_PORT', '587'))
EMAIL_HOST_USER = os.getenv('SMTP_USER', '')
EMAIL_HOST_PASSWORD = os.getenv('SMTP_PASS', '')
EMAIL_USE_TLS = os.getenv('SMTP_USE_TLS', 'True').lower() == 'true'
DEFAULT_FROM_EMAIL = os.getenv('DEFAULT_FROM_EMAIL', EMAIL_HOST_USER or 'noreply@detoxwellness.in')
ADMIN_EMAIL = os.getenv('ADMIN_EMAIL', '')


# ---------------------------------------------------------
# CLINIC CONTACT INFO (GET /api/contact/info/)
# ---------------------------------------------------------

CLINIC_INFO = {
    'address': os.getenv('CLINIC_ADDRESS', '123 Wellness Street, Health City, HC 12345'),
    'phone': os.getenv('CLINIC_PHONE', '+91 98765 43210'),
    'email': os.getenv('CLINIC_EMAIL', 'info@detoxwellness.in'),
    'hours': {
        'weekdays': os.getenv('CLINIC_HOURS_WEEKDAYS', '9:00 AM - 6:00 PM'),
        'saturday': os.getenv('CLINIC_HOURS_SATURDAY', '9:00 AM - 2:00 PM'),
        'sunday': os.getenv('CLINIC_HOURS_SUNDAY', 'Closed'),
    },
    'social_media': {
        'facebook': os.getenv('SOCIAL_FACEBOOK', ''),
        'instagram': os.getenv('SOCIAL_INSTAGRAM', ''),
        'twitter': os.getenv('SOCIAL_TWITTER', ''),
        'linkedin': os.getenv('SOCIAL_LINKEDIN', ''),
    },
}


# ---------------------------------------------------------
# LOGGING
# ---------------------------------------------------------

LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {
            'format': '{levelname} {asctime} {module}: {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': 'WARNING',
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': 'INFO',
            'propagate': False,
        },
        'wellness_backend': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
    },
}
