import os
from pathlib import Path

import dj_database_url

from .logging_config import get_logging_config

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "changeme")
DEBUG = os.getenv("DJANGO_DEBUG", "False") == "True"
ALLOWED_HOSTS = os.getenv("ALLOWED_HOSTS", "127.0.0.1,localhost").split(",")

INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "ledger_core.apps.LedgerCoreConfig",
]

MIDDLEWARE = []

# =============================================================================
# Database Configuration
# =============================================================================
DATABASES = {
    "default": dj_database_url.config(
        env="DATABASE_URL",
        default=f"sqlite:///{BASE_DIR / 'db.sqlite3'}",
        conn_max_age=600,
    )
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

LANGUAGE_CODE = "en-us"
TIME_ZONE = os.getenv("TIME_ZONE", "America/Lima")
USE_I18N = True
USE_TZ = True

# =============================================================================
# Celery
# =============================================================================
CELERY_BROKER_URL = os.getenv("CELERY_BROKER_URL", "redis://127.0.0.1:6379/0")
CELERY_RESULT_BACKEND = os.getenv("CELERY_RESULT_BACKEND", CELERY_BROKER_URL)
CELERY_ACCEPT_CONTENT = ["json"]
CELERY_TASK_SERIALIZER = "json"
CELERY_RESULT_SERIALIZER = "json"
CELERY_TIMEZONE = TIME_ZONE
CELERY_TASK_TRACK_STARTED = True
CELERY_TASK_ALWAYS_EAGER = os.getenv("CELERY_TASK_ALWAYS_EAGER", "False") == "True"

# =============================================================================
# Logging
# =============================================================================
LOGGING = get_logging_config(DEBUG)

# =============================================================================
# Ledger
# =============================================================================
# Journal entries are numbered "<prefix>-NNN" per company
LEDGER_ENTRY_NUMBER_PREFIX = os.getenv("LEDGER_ENTRY_NUMBER_PREFIX", "ASI")
# How many times a payment transaction is re-run after a conflict
LEDGER_TRANSACTION_ATTEMPTS = int(os.getenv("LEDGER_TRANSACTION_ATTEMPTS", "3"))
# Pause before the n-th re-run: n times this many seconds
LEDGER_TRANSACTION_BACKOFF = float(os.getenv("LEDGER_TRANSACTION_BACKOFF", "0.05"))
