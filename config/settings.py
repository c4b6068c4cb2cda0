import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent


SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "restora-local-session")


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.environ.get(name, "")
    if not value:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_float(name: str, default: float) -> float:
    value = os.environ.get(name, "").strip()
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name, "").strip()
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        return default


DEBUG = _env_bool("DEBUG", True)

# Application definition

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",

    # Third-party
    "rest_framework",

    # Local apps
    "restora.apps.RestoraConfig",
]

# Internationalization
# https://docs.djangoproject.com/en/5.0/topics/i18n/

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# Restoration agent (remote upload + restoration service)
RESTORA_AGENT_API_URL = (
    os.environ.get("RESTORA_AGENT_API_URL", "https://agent-prod.studio.lyzr.ai/v3")
    .strip()
    .rstrip("/")
)
RESTORA_AGENT_API_KEY = os.environ.get("RESTORA_AGENT_API_KEY", "")
RESTORA_AGENT_ID = os.environ.get("RESTORA_AGENT_ID", "69a28d550082f39a3a37ce31")
RESTORA_HTTP_TIMEOUT = _env_float("RESTORA_HTTP_TIMEOUT", 60.0)

# Upload policy
RESTORA_MAX_UPLOAD_BYTES = _env_int("RESTORA_MAX_UPLOAD_BYTES", 20 * 1024 * 1024)

# Fabricated progress while the restoration call is outstanding
RESTORA_PROGRESS_INTERVAL = _env_float("RESTORA_PROGRESS_INTERVAL", 2.0)

# History persistence
RESTORA_HISTORY_KEY = os.environ.get("RESTORA_HISTORY_KEY", "photo-restore-history")
RESTORA_HISTORY_CACHE = os.environ.get("RESTORA_HISTORY_CACHE", "history")
RESTORA_HISTORY_DIR = Path(
    os.environ.get("RESTORA_HISTORY_DIR", "").strip() or BASE_DIR / ".restora" / "history"
)

# Cache
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "restora-default",
    },
    "history": {
        "BACKEND": "django.core.cache.backends.filebased.FileBasedCache",
        "LOCATION": str(RESTORA_HISTORY_DIR),
        "TIMEOUT": None,
    },
}

# Logging
RESTORA_LOG_LEVEL = os.environ.get("RESTORA_LOG_LEVEL", "INFO").strip().upper() or "INFO"

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {
            "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "simple",
        },
    },
    "loggers": {
        "restora": {
            "handlers": ["console"],
            "level": RESTORA_LOG_LEVEL,
            "propagate": False,
        },
    },
}
