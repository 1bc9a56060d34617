"""
Django Settings - Base Configuration
Membership maintenance platform
"""

from pathlib import Path
from decouple import config, Csv
from django.core.exceptions import ImproperlyConfigured

# =============================================================================
# PATHS
# =============================================================================

BASE_DIR = Path(__file__).resolve().parent.parent.parent

# =============================================================================
# SECURITY
# =============================================================================

DEBUG = config("DEBUG", default=True, cast=bool)

SECRET_KEY = config(
    "SECRET_KEY",
    default="django-insecure-development-key-change-in-production",
)

# Block unsafe production deploys
if not DEBUG and SECRET_KEY.startswith("django-insecure"):
    raise ImproperlyConfigured("SECRET_KEY must be set in production")

# =============================================================================
# ENVIRONMENT
# =============================================================================

ENVIRONMENT = config("ENVIRONMENT", default="development")

# =============================================================================
# HOSTS
# =============================================================================

if DEBUG:
    ALLOWED_HOSTS = ["*"]
else:
    ALLOWED_HOSTS = config(
        "ALLOWED_HOSTS",
        default="localhost,127.0.0.1",
        cast=Csv(),
    )

# =============================================================================
# APPLICATIONS
# =============================================================================

INSTALLED_APPS = [
    # Django
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",

    # Domain apps
    "apps.core",
    "apps.memberships",

    # Third-party
    "django_celery_beat",
]

# =============================================================================
# MIDDLEWARE
# =============================================================================

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

# =============================================================================
# URL
# =============================================================================

ROOT_URLCONF = "config.urls"

# =============================================================================
# TEMPLATES
# =============================================================================

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [BASE_DIR / "templates"],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

# =============================================================================
# DATABASE
# =============================================================================

DATABASE_URL = config("DATABASE_URL", default="sqlite")

if DATABASE_URL.startswith("sqlite"):
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": BASE_DIR / "db.sqlite3",
        }
    }

else:
    POSTGRES_PASSWORD = config("POSTGRES_PASSWORD", default=None)

    if not POSTGRES_PASSWORD:
        raise ImproperlyConfigured(
            "PostgreSQL selected but POSTGRES_PASSWORD is missing"
        )

    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.postgresql",
            "NAME": config("POSTGRES_DB"),
            "USER": config("POSTGRES_USER"),
            "PASSWORD": POSTGRES_PASSWORD,
            "HOST": config("DB_HOST", default="localhost"),
            "PORT": config("DB_PORT", default="5432"),
            "CONN_MAX_AGE": 60,
        }
    }

# =============================================================================
# AUTH
# =============================================================================

AUTH_PASSWORD_VALIDATORS = [
    {"NAME": "django.contrib.auth.password_validation.UserAttributeSimilarityValidator"},
    {"NAME": "django.contrib.auth.password_validation.MinimumLengthValidator"},
    {"NAME": "django.contrib.auth.password_validation.CommonPasswordValidator"},
    {"NAME": "django.contrib.auth.password_validation.NumericPasswordValidator"},
]

# =============================================================================
# I18N
# =============================================================================

LANGUAGE_CODE = "en-us"
TIME_ZONE = config("TIME_ZONE", default="UTC")
USE_I18N = True
USE_TZ = True

# =============================================================================
# STATIC
# =============================================================================

STATIC_URL = "/static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# =============================================================================
# LOGGING
# =============================================================================

LOG_LEVEL = config("LOG_LEVEL", default="INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "filters": {
        "correlation_id": {
            "()": "apps.core.logging.CorrelationIdFilter",
        },
    },
    "formatters": {
        "verbose": {
            "format": "%(asctime)s %(levelname)s [%(correlation_id)s] %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "filters": ["correlation_id"],
            "formatter": "verbose",
        },
    },
    "loggers": {
        "apps": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": False,
        },
        "celery": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": False,
        },
    },
}

# =============================================================================
# CELERY
# =============================================================================

CELERY_BROKER_URL = config("CELERY_BROKER_URL", default="redis://127.0.0.1:6379/0")
CELERY_RESULT_BACKEND = config("CELERY_RESULT_BACKEND", default="redis://127.0.0.1:6379/0")
CELERY_ACCEPT_CONTENT = ["json"]
CELERY_TASK_SERIALIZER = "json"
CELERY_RESULT_SERIALIZER = "json"
CELERY_TIMEZONE = TIME_ZONE
CELERY_TASK_TRACK_STARTED = True
CELERY_TASK_TIME_LIMIT = 600          # hard kill after 10 min
CELERY_TASK_SOFT_TIME_LIMIT = 540     # soft warning at 9 min

# Membership jobs are registered in the database by apps.memberships.schedule
CELERY_BEAT_SCHEDULER = "django_celery_beat.schedulers:DatabaseScheduler"

# =============================================================================
# EMAIL
# =============================================================================

EMAIL_BACKEND = config(
    "EMAIL_BACKEND",
    default="django.core.mail.backends.console.EmailBackend",
)

DEFAULT_FROM_EMAIL = config("DEFAULT_FROM_EMAIL", default="Members <noreply@localhost>")
EMAIL_HOST = config("EMAIL_HOST", default="localhost")
EMAIL_PORT = config("EMAIL_PORT", default=465, cast=int)
EMAIL_HOST_USER = config("EMAIL_HOST_USER", default="")
EMAIL_HOST_PASSWORD = config("EMAIL_HOST_PASSWORD", default="")
EMAIL_USE_SSL = config("EMAIL_USE_SSL", default=True, cast=bool)

# =============================================================================
# MEMBERSHIPS
# =============================================================================

MEMBERSHIPS_SITE_NAME = config("MEMBERSHIPS_SITE_NAME", default="Members")
MEMBERSHIPS_RENEWAL_URL = config("MEMBERSHIPS_RENEWAL_URL", default="")

# "none" disables reminders; otherwise "+1 week", "+2 weeks", "+1 month", ...
MEMBERSHIPS_RENEWAL_REMINDER_PERIOD = config("MEMBERSHIPS_RENEWAL_REMINDER_PERIOD", default="none")
MEMBERSHIPS_EMAIL_ON_EXPIRATION = config("MEMBERSHIPS_EMAIL_ON_EXPIRATION", default=True, cast=bool)
MEMBERSHIPS_EXPIRING_SUBJECT = config(
    "MEMBERSHIPS_EXPIRING_SUBJECT",
    default="Your {level} membership is about to expire",
)
MEMBERSHIPS_EXPIRED_SUBJECT = config(
    "MEMBERSHIPS_EXPIRED_SUBJECT",
    default="Your {level} membership has expired",
)

# Dotted paths to filter callables, see apps.memberships.hooks
MEMBERSHIPS_EXPIRED_MEMBERS_QUERY_FILTERS = config(
    "MEMBERSHIPS_EXPIRED_MEMBERS_QUERY_FILTERS", default="", cast=Csv()
)
MEMBERSHIPS_EXPIRED_MEMBERS_FILTERS = config(
    "MEMBERSHIPS_EXPIRED_MEMBERS_FILTERS", default="", cast=Csv()
)

MEMBERSHIPS_REGISTER_JOBS_ON_MIGRATE = config(
    "MEMBERSHIPS_REGISTER_JOBS_ON_MIGRATE", default=True, cast=bool
)
