"""
Back Office - Django Settings (Infrastructure Only)
====================================================
Django serves as the framework container for the report endpoints.
The engines are the authority; Django does not dictate structure.

No models, no database tables. Report settings live in
BACKOFFICE_REPORTS and are turned into a core.config.ReportConfig by
the adapter wiring.
"""

import os
from pathlib import Path

# ── Paths ─────────────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent.parent

# ── Security ──────────────────────────────────────────────────
SECRET_KEY = os.environ.get(
    "BACKOFFICE_SECRET_KEY", "backoffice-dev-key-replace-before-deployment"
)

DEBUG = os.environ.get("BACKOFFICE_DEBUG", "1") == "1"

ALLOWED_HOSTS = ["localhost", "127.0.0.1", "testserver"]

# ── Installed Apps ────────────────────────────────────────────
INSTALLED_APPS = [
    "django.contrib.contenttypes",
]

# ── Middleware ────────────────────────────────────────────────
MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

# ── URL ──────────────────────────────────────────────────────
ROOT_URLCONF = "config.urls"

# ── Database ──────────────────────────────────────────────────
# Reports are computed from request payloads; nothing is stored.
DATABASES = {}

# ── Internationalization ──────────────────────────────────────
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# ── Reports ───────────────────────────────────────────────────
BACKOFFICE_REPORTS = {
    "company_name": "Ultra Water Technologies",
    "currency_label": "Rs",
    "default_page_size": 25,
    "page_sizes": [10, 25, 50, 100],
    "unknown_customer": "Unknown Customer",
    "unknown_supplier": "Unknown Supplier",
    # Every request brings fresh collections, so the merge memo never hits.
    "merge_cache_size": 0,
}

# ── Logging ───────────────────────────────────────────────────
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "plain": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "plain",
        },
    },
    "loggers": {
        "backoffice": {
            "handlers": ["console"],
            "level": os.environ.get("BACKOFFICE_LOG_LEVEL", "INFO"),
            "propagate": True,
        },
    },
}
