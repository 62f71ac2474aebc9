"""Development settings for the Innkeeper project.

This module extends the base settings with development specific
configuration, such as enabling debug, allowing all hosts and verbose
logging. Do not use these settings in production!
"""

from .base import *  # noqa: F401,F403

# Enable debug mode for development
DEBUG = True

# Allow all hosts in development
ALLOWED_HOSTS = ['*']

# Plain static storage; no collectstatic manifest needed locally
STORAGES = {
    **STORAGES,  # noqa: F405
    'staticfiles': {'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage'},
}

LOGGING['loggers']['apps']['level'] = 'DEBUG'  # noqa: F405
