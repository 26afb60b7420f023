"""Django settings for the taskmaster project.

Values come from environment variables with the TASKMASTER_ prefix so the
same settings module works for local runs, tests and deployment. There is no
database: tasks live in a JSON file owned by `tasks.repository`.
"""

import os
from pathlib import Path
from typing import List

ENV_PREFIX = "TASKMASTER"

BASE_DIR = Path(__file__).resolve().parent.parent


def _k(suffix: str) -> str:
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(_k(name))
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(_k(name))
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_list(name: str, default: List[str]) -> List[str]:
    raw = os.getenv(_k(name))
    if raw is None or raw.strip() == "":
        return list(default)
    return [p.strip() for p in raw.replace(",", " ").split() if p.strip()]


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(_k(name))
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


SECRET_KEY = _env("SECRET_KEY", "taskmaster-dev-secret-key-change-me")

DEBUG = _env_bool("DEBUG", False)

ALLOWED_HOSTS = _env_list("ALLOWED_HOSTS", ["localhost", "127.0.0.1", "[::1]"])

INSTALLED_APPS = [
    "rest_framework",
    "tasks",
]

MIDDLEWARE = [
    "tasks.middleware.CorsMiddleware",
    "tasks.middleware.ServerErrorMiddleware",
]

ROOT_URLCONF = "taskmaster.urls"

WSGI_APPLICATION = "taskmaster.wsgi.application"

DATABASES = {}

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = False
USE_TZ = True

# ---- Task storage / client assets ----
TASKMASTER_STORAGE_FILE = _env_path("STORAGE_FILE", Path.cwd() / "tasks.json")
TASKMASTER_WEB_ROOT = _env_path("WEB_ROOT", BASE_DIR / "tasks" / "web")

REST_FRAMEWORK = {
    "DEFAULT_RENDERER_CLASSES": ["rest_framework.renderers.JSONRenderer"],
    "DEFAULT_PARSER_CLASSES": ["rest_framework.parsers.JSONParser"],
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": [],
    "UNAUTHENTICATED_USER": None,
    "EXCEPTION_HANDLER": "tasks.exceptions.api_exception_handler",
}

LOG_LEVEL = _env("LOG_LEVEL", "INFO").upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {
            "format": "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "default",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "WARNING",
    },
    "loggers": {
        "tasks": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": False,
        },
        "django.server": {
            "handlers": ["console"],
            "level": "INFO",
            "propagate": False,
        },
    },
}
