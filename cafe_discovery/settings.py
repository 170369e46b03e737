"""Django settings for the cafe discovery service.

Every deployment-specific value is read from the environment. The service
keeps no database: cafes and ratings live in a Google Sheets spreadsheet and
query results are cached in the Django cache.
"""

import os
from pathlib import Path

from core.logging import setup_logging

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "django-insecure-cafe-discovery-dev-key")

DEBUG = os.getenv("DEBUG", "false").lower() == "true"

ALLOWED_HOSTS = [
    host.strip()
    for host in os.getenv("ALLOWED_HOSTS", "localhost,127.0.0.1").split(",")
    if host.strip()
]

INSTALLED_APPS = [
    "rest_framework",
    "core",
]

MIDDLEWARE = [
    "core.middleware.RequestIDMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "cafe_discovery.urls"

WSGI_APPLICATION = "cafe_discovery.wsgi.application"
ASGI_APPLICATION = "cafe_discovery.asgi.application"

DATABASES: dict = {}

APPEND_SLASH = False
USE_TZ = True
TIME_ZONE = "UTC"
LANGUAGE_CODE = "en-us"

REST_FRAMEWORK = {
    "DEFAULT_RENDERER_CLASSES": ["rest_framework.renderers.JSONRenderer"],
    "DEFAULT_PARSER_CLASSES": ["rest_framework.parsers.JSONParser"],
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": ["rest_framework.permissions.AllowAny"],
    "UNAUTHENTICATED_USER": None,
    "EXCEPTION_HANDLER": "core.exceptions.handlers.custom_exception_handler",
}

# Google Sheets
GOOGLE_SHEETS_SPREADSHEET_ID = os.getenv("GOOGLE_SHEETS_SPREADSHEET_ID", "")
GOOGLE_SHEETS_API_KEY = os.getenv("GOOGLE_SHEETS_API_KEY", "")
SHEETS_API_BASE_URL = os.getenv(
    "SHEETS_API_BASE_URL", "https://sheets.googleapis.com/v4/spreadsheets"
)
SHEETS_REQUEST_TIMEOUT = float(os.getenv("SHEETS_REQUEST_TIMEOUT", "10"))
SHEETS_RATE_LIMIT_REQUESTS = int(os.getenv("SHEETS_RATE_LIMIT_REQUESTS", "300"))
SHEETS_RATE_LIMIT_WINDOW = float(os.getenv("SHEETS_RATE_LIMIT_WINDOW", "60"))

# Query cache (seconds)
CAFE_CACHE_ALIAS = os.getenv("CAFE_CACHE_ALIAS", "default")
CAFE_CACHE_STALE_TIME = float(os.getenv("CAFE_CACHE_STALE_TIME", "300"))
CAFE_CACHE_GC_TIME = float(os.getenv("CAFE_CACHE_GC_TIME", "600"))
CAFE_CACHE_REFETCH_INTERVAL = float(os.getenv("CAFE_CACHE_REFETCH_INTERVAL", "900"))
# Refresh the cafe list every refetch interval on a background thread
CAFE_BACKGROUND_REFRESH = os.getenv("CAFE_BACKGROUND_REFRESH", "true").lower() == "true"

# Empty disables the probe; the store is then assumed reachable
CONNECTIVITY_CHECK_HOST = os.getenv("CONNECTIVITY_CHECK_HOST", "sheets.googleapis.com")

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "cafe-discovery",
        "TIMEOUT": CAFE_CACHE_GC_TIME,
    }
}

# Logging is configured by structlog, not Django's LOGGING dict
LOGGING_CONFIG = None
setup_logging()
