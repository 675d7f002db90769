from pathlib import Path

from decouple import config

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = config(
    'SECRET_KEY',
    default='django-insecure-dev-key-only'
)

DEBUG = config('DEBUG', default=False, cast=bool)

INSTALLED_APPS = [
    'rest_framework',
    'events',
]

# Durable key-value storage for collections and form drafts.
CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.filebased.FileBasedCache',
        'LOCATION': config('EVENTEASE_STORAGE_DIR', default=str(BASE_DIR / '.storage')),
        'TIMEOUT': None,
    }
}

EVENTEASE = {
    'STORAGE_CACHE': 'default',
    'AUTOSAVE_INTERVAL': config('EVENTEASE_AUTOSAVE_INTERVAL', default=1.0, cast=float),
    'DEFAULT_PAGE_SIZE': 10,
    'MAX_PAGE_SIZE': 100,
    'STATISTICS_CACHE_SIZE': 256,
}

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {
            'format': '{asctime} [{levelname}] {name}: {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'loggers': {
        'events': {
            'handlers': ['console'],
            'level': config('EVENTEASE_LOG_LEVEL', default='INFO'),
        },
    },
}

USE_TZ = True
