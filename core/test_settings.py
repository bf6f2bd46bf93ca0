"""
Settings for the test suite.

SQLite in memory, in-process mail outbox and simulated SMS.
"""
import os

os.environ.setdefault('SECRET_KEY', 'test-secret-key-not-for-production')

from .settings import *  # noqa: E402,F401,F403

DEBUG = False
SECURE_SSL_REDIRECT = False

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

TIME_ZONE = 'Asia/Manila'

EMAIL_BACKEND = 'django.core.mail.backends.locmem.EmailBackend'
DEFAULT_FROM_EMAIL = 'registry@example.com'
SITE_BASE_URL = 'http://testserver'

SMS_ENABLED = False
TEXTBEE_API_KEY = ''
TEXTBEE_DEVICE_ID = ''

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

LOGGING['root']['handlers'] = ['console']
LOGGING['root']['level'] = 'WARNING'
