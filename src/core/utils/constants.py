"""Global constants used throughout the application.

This module centralizes error codes, pagination bounds, provider endpoints,
cache directives and environment variable names so they can be changed in
one place.
"""

from typing import Final

# ============================================================================
# Error Codes
# ============================================================================

ERROR_CODE_VALIDATION_FAILED = "VALIDATION_FAILED"

ERROR_CODE_UNAUTHORIZED = "UNAUTHORIZED"
ERROR_CODE_RESOURCE_NOT_FOUND = "NOT_FOUND"
ERROR_CODE_METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"

ERROR_CODE_CONFIGURATION = "CONFIGURATION_ERROR"
ERROR_CODE_NO_BOT_TOKEN = "NO_BOT_TOKEN"

# Store Errors
ERROR_CODE_STORE = "STORE_ERROR"
ERROR_CODE_STORE_LIST_FAILED = "STORE_LIST_FAILED"
ERROR_CODE_STORE_DELETE_FAILED = "STORE_DELETE_FAILED"
ERROR_CODE_STORE_LOOKUP_FAILED = "STORE_LOOKUP_FAILED"

# Provider Errors
ERROR_CODE_UPSTREAM_RESOLUTION_FAILED = "UPSTREAM_RESOLUTION_FAILED"

ERROR_CODE_INTERNAL_ERROR = "INTERNAL_ERROR"


# ============================================================================
# Pagination Constraints
# ============================================================================

DEFAULT_LIMIT = 60
MIN_LIMIT = 1
MAX_LIMIT = 200
LEGACY_LIMIT = 200


# ============================================================================
# Store Layout
# ============================================================================

DEFAULT_MONGO_DB_NAME = "magic_plugin_db"
DEFAULT_MONGO_COLLECTION_NAME = "gallery"
DEFAULT_MONGO_SERVER_SELECTION_TIMEOUT_MS = 5000

GALLERY_PROJECTION: Final[dict[str, int]] = {
    "prompt": 1,
    "metadata": 1,
    "telegram": 1,
    "timestamp": 1,
}


# ============================================================================
# Telegram Providers
# ============================================================================

TELEGRAM_OFFICIAL_BASE = "https://api.telegram.org"
TELEGRAM_MIRROR_BASE = "https://tgapi.kairod.cfd"
PROVIDER_PRIMARY = "primary"
PROVIDER_MIRROR = "mirror"
DEFAULT_PROVIDER_TIMEOUT_SECONDS = 10.0
DEFAULT_MEDIA_CONTENT_TYPE = "image/jpeg"

ASSET_FORMAT_RAW = "raw"
ASSET_FORMAT_URL = "url"


# ============================================================================
# Cache Directives
# ============================================================================

LIST_CACHE_CONTROL = "public, max-age=60"
ASSET_CACHE_CONTROL = "public, max-age=31536000, immutable"


# ============================================================================
# API Gateway Configuration
# ============================================================================

CORS_ORIGIN = "*"
CORS_METHODS = "GET,DELETE,OPTIONS"
CORS_HEADERS = "Content-Type,Authorization"
EXPOSE_HEADERS = "Content-Type,Content-Length,Cache-Control"
DEFAULT_CONTENT_TYPE = "application/json"

GALLERY_METHODS = ("GET", "DELETE")
ASSET_METHODS = ("GET",)


# ============================================================================
# Authentication
# ============================================================================

DEFAULT_JWT_SECRET = "change-me"
DEFAULT_JWT_ALGORITHM = "HS256"


# ============================================================================
# Environment Variable Names
# ============================================================================

ENV_MONGO_URI = "MONGO_URI"
ENV_MONGO_DB_NAME = "MONGO_DB_NAME"
ENV_MONGO_COLLECTION_NAME = "MONGO_COLLECTION_NAME"
ENV_MONGO_SERVER_SELECTION_TIMEOUT_MS = "MONGO_SERVER_SELECTION_TIMEOUT_MS"
ENV_BOT_TOKEN = "BOT_TOKEN"
ENV_JWT_SECRET = "JWT_SECRET"
ENV_JWT_ALGORITHM = "JWT_ALGORITHM"
ENV_TELEGRAM_API_BASE = "TELEGRAM_API_BASE"
ENV_TELEGRAM_MIRROR_BASE = "TELEGRAM_MIRROR_BASE"
ENV_PROVIDER_TIMEOUT_SECONDS = "PROVIDER_TIMEOUT_SECONDS"


# ============================================================================
# Observability
# ============================================================================

METRICS_NAMESPACE = "GalleryApi"
METRIC_ASSET_RESOLVED = "AssetResolved"
METRIC_PROVIDER_FALLBACK = "ProviderFallback"
