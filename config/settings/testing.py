"""
Django Settings - Testing Configuration
"""

from .base import *

DEBUG = False
TESTING = True

# Use faster password hasher
PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.MD5PasswordHasher',
]

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

# Use sync Celery
CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_BROKER_URL = 'memory://'
CELERY_RESULT_BACKEND = 'cache+memory://'

# Disable logging during tests
LOGGING = {}

# Email - In-memory backend
EMAIL_BACKEND = 'django.core.mail.backends.locmem.EmailBackend'
DEFAULT_FROM_EMAIL = 'Members <noreply@example.com>'

MEMBERSHIPS_RENEWAL_REMINDER_PERIOD = '+1 week'
MEMBERSHIPS_EMAIL_ON_EXPIRATION = True
MEMBERSHIPS_EXPIRED_MEMBERS_QUERY_FILTERS = []
MEMBERSHIPS_EXPIRED_MEMBERS_FILTERS = []
MEMBERSHIPS_REGISTER_JOBS_ON_MIGRATE = False
