"""
Django settings for ota_portal project.

For more information on this file, see
https://docs.djangoproject.com/en/5.1/topics/settings/
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get('DJANGO_SECRET_KEY', 'django-insecure-ota-portal-development-key')

DEBUG = os.environ.get('DJANGO_DEBUG', 'true').lower() in ('1', 'true', 'yes')

ALLOWED_HOSTS = [h for h in os.environ.get('DJANGO_ALLOWED_HOSTS', 'localhost,127.0.0.1').split(',') if h]


INSTALLED_APPS = [
    'daphne',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    'django.contrib.humanize',
    'rest_framework',
    'channels',
    'firmware_upload',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'ota_portal.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
                'django.contrib.messages.context_processors.messages',
                'firmware_upload.context_processors.portal',
            ],
        },
    },
]

WSGI_APPLICATION = 'ota_portal.wsgi.application'
ASGI_APPLICATION = 'ota_portal.asgi.application'


# Nothing the portal does is persisted; the database only backs contrib apps
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': BASE_DIR / 'db.sqlite3',
    }
}

# Drafts and success results live in the client cookie, never in the database
SESSION_ENGINE = 'django.contrib.sessions.backends.signed_cookies'
MESSAGE_STORAGE = 'django.contrib.messages.storage.cookie.CookieStorage'


LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True

STATIC_URL = 'static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'


# Django REST framework
REST_FRAMEWORK = {
    'DEFAULT_RENDERER_CLASSES': ['rest_framework.renderers.JSONRenderer'],
    'DEFAULT_PERMISSION_CLASSES': ['rest_framework.permissions.AllowAny'],
}


# Channels: Redis when configured, otherwise a single-process in-memory layer
REDIS_URL = os.environ.get('REDIS_URL')
if REDIS_URL:
    CHANNEL_LAYERS = {
        'default': {
            'BACKEND': 'channels_redis.core.RedisChannelLayer',
            'CONFIG': {'hosts': [REDIS_URL]},
        },
    }
else:
    CHANNEL_LAYERS = {
        'default': {'BACKEND': 'channels.layers.InMemoryChannelLayer'},
    }


# OTA portal
OTA_PORTAL_TITLE = os.environ.get('OTA_PORTAL_TITLE', 'Zubi Technologies OTA Firmware Upload')

OTA_MAX_FIRMWARE_SIZE = 50 * 1024 * 1024  # 50 MiB
OTA_FIRMWARE_EXTENSIONS = ['.bin', '.hex', '.elf', '.img']
OTA_RESET_DELAY_SECONDS = 3

OTA_FIRMWARE_CATALOG = 'firmware_upload.catalog.StaticCatalog'

# Backend-as-a-service connection. The default client performs no remote I/O.
OTA_BACKEND = {
    'CLASS': os.environ.get('OTA_BACKEND_CLASS', 'firmware_upload.backends.InertBackend'),
    'CONFIG': {
        'api_key': os.environ.get('FIREBASE_API_KEY', ''),
        'auth_domain': os.environ.get('FIREBASE_AUTH_DOMAIN', ''),
        'database_url': os.environ.get('FIREBASE_DATABASE_URL', ''),
        'project_id': os.environ.get('FIREBASE_PROJECT_ID', ''),
        'storage_bucket': os.environ.get('FIREBASE_STORAGE_BUCKET', ''),
        'messaging_sender_id': os.environ.get('FIREBASE_MESSAGING_SENDER_ID', ''),
        'app_id': os.environ.get('FIREBASE_APP_ID', ''),
    },
}


LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{asctime} {levelname} {name}: {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': 'WARNING',
    },
    'loggers': {
        'firmware_upload': {
            'handlers': ['console'],
            'level': os.environ.get('OTA_LOG_LEVEL', 'INFO'),
            'propagate': False,
        },
    },
}
