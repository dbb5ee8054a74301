"""Test settings.

In-memory SQLite, fast password hashing and quiet logging.
"""

from .base import *  # noqa: F401,F403

DEBUG = False

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

RENTAL_REPRESENTATION = 'relational'
RENTAL_STATS_DEFAULT_DAYS = 30
RENTAL_TOP_CARS_LIMIT = 5

LOGGING['handlers']['console']['level'] = 'WARNING'  # noqa: F405
