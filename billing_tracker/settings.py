"""
Django settings for billing_tracker.

Values come from environment variables; the defaults are for local
development only.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get('DJANGO_SECRET_KEY', 'dev-only-insecure-key')

DEBUG = os.environ.get('DJANGO_DEBUG', '1') == '1'

ALLOWED_HOSTS = [h for h in os.environ.get('DJANGO_ALLOWED_HOSTS', '127.0.0.1,localhost').split(',') if h]


INSTALLED_APPS = [
    'django.contrib.contenttypes',
    'django.contrib.auth',
    'rest_framework',
    'billing.apps.BillingConfig',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
]

ROOT_URLCONF = 'billing_tracker.urls'

WSGI_APPLICATION = 'billing_tracker.wsgi.application'

# Bills are kept in memory; the database only backs Django's own apps.
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'Asia/Kolkata'
USE_I18N = True
USE_TZ = True

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'


REST_FRAMEWORK = {
    'DEFAULT_RENDERER_CLASSES': ['rest_framework.renderers.JSONRenderer'],
    'DEFAULT_PARSER_CLASSES': ['rest_framework.parsers.JSONParser'],
    'DEFAULT_AUTHENTICATION_CLASSES': [],
    'DEFAULT_PERMISSION_CLASSES': ['rest_framework.permissions.AllowAny'],
    'UNAUTHENTICATED_USER': None,
}


# ----------------- PAYMENTS -----------------

STRIPE_SECRET_KEY = os.environ.get('STRIPE_SECRET_KEY', '')
STRIPE_API_BASE = os.environ.get('STRIPE_API_BASE', 'https://api.stripe.com')


# ----------------- BILLING -----------------

BILLING = {
    'TAX_RATE': float(os.environ.get('BILLING_TAX_RATE', '0.05')),
    # category -> product key -> {"name", "price"}; None uses the built-in catalog
    'CATALOG': None,
    'CURRENCY': os.environ.get('BILLING_CURRENCY', 'inr'),
    'CURRENCY_SYMBOL': '₹',
    'PAYMENT_TIMEOUT': 15,
    'SHOP': {
        'NAME': 'MODERN BILLING SYSTEM',
        'GST_NUMBER': '22AAAAA0000A1Z5',
        'CONTACT': '+91 9876543210',
    },
}


# ----------------- LOGGING -----------------

LOG_LEVEL = os.environ.get('BILLING_LOG_LEVEL', 'INFO')
LOG_FILE = os.environ.get('BILLING_LOG_FILE', '')

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'standard': {
            'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'standard',
        },
    },
    'loggers': {
        'billing': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
    },
}

if LOG_FILE:
    LOGGING['handlers']['error_file'] = {
        'class': 'logging.FileHandler',
        'filename': LOG_FILE,
        'level': 'ERROR',
        'formatter': 'standard',
    }
    LOGGING['loggers']['billing']['handlers'].append('error_file')
