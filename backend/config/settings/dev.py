# config/settings/dev.py

from .base import *

# Debug mode
DEBUG = True

ALLOWED_HOSTS = ['*']

# Local SQLite when no Postgres is around
if config('USE_SQLITE', default=False, cast=bool):
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.sqlite3',
            'NAME': BASE_DIR / 'db.sqlite3',
        }
    }

# Storefront frontend dev servers
CORS_ALLOWED_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]
CORS_ALLOW_CREDENTIALS = True

CSRF_TRUSTED_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://localhost:8000",
]

# Low stock alerts and other mail go to the console
EMAIL_BACKEND = 'django.core.mail.backends.console.EmailBackend'

STOREFRONT.update({
    'ALERT_EMAILS': config('STORE_ALERT_EMAILS', default='stock@localhost', cast=Csv()),
})

LOGGING['loggers'].update({
    'apps': {
        'handlers': ['console'],
        'level': 'DEBUG',
        'propagate': False,
    },
    'apps.shop.infrastructure.realtime': {
        'handlers': ['console'],
        'level': config('CHANGE_FEED_LOG_LEVEL', default='INFO'),
        'propagate': False,
    },
    'django.db.backends': {
        'handlers': ['console'],
        'level': config('SQL_LOG_LEVEL', default='WARNING'),
        'propagate': False,
    },
})

# Run checkout follow-ups inline unless a worker is running
CELERY_TASK_ALWAYS_EAGER = config('CELERY_ALWAYS_EAGER', default=True, cast=bool)
CELERY_TASK_EAGER_PROPAGATES = True

CACHES = {
    'default': {
        'BACKEND': 'django_redis.cache.RedisCache',
        'LOCATION': config('REDIS_URL', default='redis://localhost:6379/1'),
        'OPTIONS': {
            'CLIENT_CLASS': 'django_redis.client.DefaultClient',
        },
        'KEY_PREFIX': 'storefront',
    }
}

# Guest carts and wishlists live in the session
SESSION_ENGINE = 'django.contrib.sessions.backends.cached_db'
SESSION_CACHE_ALIAS = 'default'

SIMPLE_JWT.update({
    'ACCESS_TOKEN_LIFETIME': timedelta(hours=2),
})
