"""Test settings for the Innkeeper project.

File-backed SQLite, eager Celery and a fast password hasher. The test
database lives in a file so threads get their own connections, and
BEGIN IMMEDIATE serializes concurrent admissions. Set DB_ENGINE/DB_NAME
to run against PostgreSQL instead.
"""

from .base import *  # noqa: F401,F403

DEBUG = False

SECRET_KEY = 'test-secret-key'

ALLOWED_HOSTS = ['*']

if not os.environ.get('DB_ENGINE'):  # noqa: F405
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.sqlite3',
            'NAME': BASE_DIR / 'db.sqlite3',  # noqa: F405
            'OPTIONS': {'transaction_mode': 'IMMEDIATE', 'timeout': 20},
            'TEST': {'NAME': str(BASE_DIR / 'test-db.sqlite3')},  # noqa: F405
        }
    }

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

STORAGES = {
    'default': {'BACKEND': 'django.core.files.storage.FileSystemStorage'},
    'staticfiles': {'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage'},
}

CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_BROKER_URL = 'memory://'
CELERY_RESULT_BACKEND = 'cache+memory://'

LOGGING['root']['level'] = 'CRITICAL'  # noqa: F405
LOGGING['loggers']['apps']['level'] = 'WARNING'  # noqa: F405
LOGGING['loggers']['shared']['level'] = 'WARNING'  # noqa: F405
