"""Custom exception classes for the gallery service."""

from http import HTTPStatus
from typing import Any

from core.utils.constants import (
    ERROR_CODE_CONFIGURATION,
    ERROR_CODE_METHOD_NOT_ALLOWED,
    ERROR_CODE_RESOURCE_NOT_FOUND,
    ERROR_CODE_STORE,
    ERROR_CODE_UNAUTHORIZED,
    ERROR_CODE_UPSTREAM_RESOLUTION_FAILED,
    ERROR_CODE_VALIDATION_FAILED,
)


class GalleryServiceError(Exception):
    """
    Base exception for all gallery service errors.

    All custom errors must inherit from this class and declare the HTTP
    status they map to at the request boundary. Callers must explicitly
    provide a message; optional context goes into `details`.
    """

    status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR
    default_error_code: str = ERROR_CODE_STORE

    message: str
    error_code: str
    details: dict[str, Any]

    def __init__(
        self,
        *,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}

        super().__init__(self.message)


class ValidationError(GalleryServiceError):
    """Raised when a request parameter is missing or malformed."""

    status = HTTPStatus.BAD_REQUEST
    default_error_code = ERROR_CODE_VALIDATION_FAILED


class AuthError(GalleryServiceError):
    """Raised when the bearer token is missing or fails verification."""

    status = HTTPStatus.UNAUTHORIZED
    default_error_code = ERROR_CODE_UNAUTHORIZED


class NotFoundError(GalleryServiceError):
    """Raised when a requested resource is not found."""

    status = HTTPStatus.NOT_FOUND
    default_error_code = ERROR_CODE_RESOURCE_NOT_FOUND


class MethodNotAllowedError(GalleryServiceError):
    """Raised when an endpoint is called with an unsupported HTTP method."""

    status = HTTPStatus.METHOD_NOT_ALLOWED
    default_error_code = ERROR_CODE_METHOD_NOT_ALLOWED


class ConfigurationError(GalleryServiceError):
    """Raised when required configuration (store URI, bot token) is missing."""

    status = HTTPStatus.INTERNAL_SERVER_ERROR
    default_error_code = ERROR_CODE_CONFIGURATION


class StoreError(GalleryServiceError):
    """Raised when a document store operation fails."""

    status = HTTPStatus.INTERNAL_SERVER_ERROR
    default_error_code = ERROR_CODE_STORE


class UpstreamResolutionError(GalleryServiceError):
    """Raised when every asset provider failed to resolve a file."""

    status = HTTPStatus.BAD_GATEWAY
    default_error_code = ERROR_CODE_UPSTREAM_RESOLUTION_FAILED
