"""
TrackSure – Django Settings (Infrastructure Only)
==================================================
Django serves as the host container for the provenance registry:
ORM-backed custody storage and settings. Registry rules live in
engines.provenance and never import Django.

Registry configuration comes from the environment:
    TRACKSURE_ADMINISTRATOR          identity allowed to verify participants
    TRACKSURE_STRICT_DEACTIVATION    "1" to require verified custodians
                                     for deactivation (off by default)
"""

import os
from pathlib import Path

# ── Paths ─────────────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent.parent

# ── Security ──────────────────────────────────────────────────
SECRET_KEY = os.environ.get(
    "TRACKSURE_SECRET_KEY", "tracksure-dev-key-replace-before-deployment"
)

DEBUG = os.environ.get("TRACKSURE_DEBUG", "0") == "1"

ALLOWED_HOSTS = []

# ── Installed Apps ────────────────────────────────────────────
INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "adapters.django_store",
]

# ── Database ──────────────────────────────────────────────────
# SQLite for development. Production DB configured separately.
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.environ.get("TRACKSURE_DB_PATH", BASE_DIR / "db.sqlite3"),
        # Seconds a writer waits for the ledger write lock.
        "OPTIONS": {"timeout": 20},
        # File-backed so threaded tests get real per-thread connections.
        "TEST": {"NAME": BASE_DIR / "test_tracksure.sqlite3"},
    }
}

# ── Internationalization ──────────────────────────────────────
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = False
USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# ── Provenance Registry ───────────────────────────────────────
TRACKSURE_ADMINISTRATOR = os.environ.get(
    "TRACKSURE_ADMINISTRATOR", "tracksure-admin"
)
TRACKSURE_STRICT_DEACTIVATION = os.environ.get(
    "TRACKSURE_STRICT_DEACTIVATION", "0"
)

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
        "tracksure": {
            "handlers": ["console"],
            "level": os.environ.get("TRACKSURE_LOG_LEVEL", "INFO"),
            "propagate": True,
        },
    },
}
