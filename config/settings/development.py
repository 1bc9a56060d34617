"""
Django Settings - Development Configuration
"""

from .base import *

DEBUG = True

# Database logging
LOGGING["loggers"]["django.db.backends"] = {
    "handlers": ["console"],
    "level": config("DB_LOG_LEVEL", default="INFO"),
    "propagate": False,
}

# Print every membership email to the console
EMAIL_BACKEND = "django.core.mail.backends.console.EmailBackend"
