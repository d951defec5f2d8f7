# config/settings/test.py
from .base import *
import tempfile

# Enable testing mode
DEBUG = False
ALLOWED_HOSTS = ['*']
SECRET_KEY = 'test-secret-key-not-for-production'
TESTING = True

# Use in-memory database for speed
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

# Disable migrations for faster tests
class DisableMigrations:
    def __contains__(self, item):
        return True

    def __getitem__(self, item):
        return None

MIGRATION_MODULES = DisableMigrations()

# Cache configuration for tests
CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'test-cache',
    }
}

SESSION_ENGINE = 'django.contrib.sessions.backends.db'

# Test media root
MEDIA_ROOT = tempfile.mkdtemp()

EMAIL_BACKEND = 'django.core.mail.backends.locmem.EmailBackend'

# Celery eager execution for tests
CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_BROKER_URL = 'memory://'
CELERY_RESULT_BACKEND = 'cache+memory://'

# Tests inject a fakeredis client and deliver with change_feed.drain()
CHANGE_FEED = {
    **CHANGE_FEED,
    'LISTEN_IN_THREAD': False,
}

# Disable logging during tests
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'handlers': {
        'null': {
            'class': 'logging.NullHandler',
        },
    },
    'root': {
        'handlers': ['null'],
        'level': 'INFO',
    },
}

STOREFRONT = {
    **STOREFRONT,
    'FREE_SHIPPING_THRESHOLD': '999',
    'SHIPPING_FEE': '50',
    'LOW_STOCK_THRESHOLD': 10,
    'CURRENCY': 'INR',
    'ALERT_EMAILS': ['ops@example.com'],
}

PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.MD5PasswordHasher',  # Fast for tests
]

REST_FRAMEWORK = {
    **REST_FRAMEWORK,
    'TEST_REQUEST_DEFAULT_FORMAT': 'json',
}
