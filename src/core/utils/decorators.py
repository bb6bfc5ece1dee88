"""
Common decorators and helpers for API Gateway Lambda handlers.
"""

from __future__ import annotations

import traceback
from collections.abc import Callable, Iterable
from functools import wraps
from http import HTTPStatus
from typing import Any

from aws_lambda_powertools import Logger
from pydantic import ValidationError as PydanticValidationError

from core.models.errors import GalleryServiceError, MethodNotAllowedError
from core.utils.constants import ERROR_CODE_INTERNAL_ERROR, ERROR_CODE_VALIDATION_FAILED
from core.utils.response import ResponseBuilder
from core.utils.validators import sanitize_validation_errors

logger = Logger(service="api-gateway-handler", UTC=True)

JsonDict = dict[str, Any]
Handler = Callable[..., JsonDict]


def _log_error(
    message: str,
    *,
    handler_name: str,
    request_id: str | None,
    exc: Exception,
    level: str = "warning",
) -> None:
    """
    Log error with consistent structure and full context.

    Args:
        message: Log message
        handler_name: Name of the handler function
        request_id: AWS request ID
        exc: Exception that was raised
        level: Log level ('warning' or 'exception')
    """
    log_extra = {
        "handler": handler_name,
        "request_id": request_id,
        "error": str(exc),
        "error_type": type(exc).__name__,
    }

    if level == "exception":
        # logger.exception automatically includes traceback
        logger.exception(message, extra=log_extra)
    else:
        log_extra["traceback"] = traceback.format_exc()
        logger.warning(message, extra=log_extra)


def _allowed_header(methods: tuple[str, ...]) -> str:
    return ",".join((*methods, "OPTIONS"))


def api_gateway_handler(
    *,
    methods: Iterable[str] = ("GET",),
) -> Callable[[Handler], Handler]:
    """
    Decorator for API Gateway Lambda handlers.

    Provides:
    - Automatic CORS preflight (OPTIONS) handling
    - Rejection of unsupported HTTP methods with 405
    - Translation of domain errors into JSON error responses
    - Request ID tracking and structured logging

    Example:
        @api_gateway_handler(methods=("GET", "DELETE"))
        def handler(event, context):
            return ResponseBuilder.ok({"ok": True})
    """
    accepted = tuple(method.upper() for method in methods)
    allowed_methods = _allowed_header(accepted)

    def decorate(inner: Handler) -> Handler:
        @wraps(inner)
        def wrapper(
            event: Any,
            context: Any,
            *,
            cors_origin: str | None = None,
        ) -> JsonDict:
            method = (event.get("httpMethod") or "GET").upper()

            # Handle CORS preflight requests
            if method == "OPTIONS":
                return ResponseBuilder.no_content(
                    cors_origin=cors_origin,
                    allowed_methods=allowed_methods,
                )

            request_id = getattr(context, "aws_request_id", None)

            try:
                if method not in accepted:
                    raise MethodNotAllowedError(
                        message="Method Not Allowed",
                        details={"method": method},
                    )

                response = inner(event, context)
                response["headers"].update(
                    ResponseBuilder._build_cors_headers(cors_origin, allowed_methods)
                )
                return response

            # Domain errors carry their own status
            except GalleryServiceError as exc:
                is_server_error = exc.status >= HTTPStatus.INTERNAL_SERVER_ERROR
                _log_error(
                    "Request failed",
                    handler_name=inner.__name__,
                    request_id=request_id,
                    exc=exc,
                    level="exception" if is_server_error else "warning",
                )
                return ResponseBuilder.error(
                    status=exc.status,
                    message=exc.message,
                    error_code=exc.error_code,
                    # Server-side details stay in the logs
                    details=None if is_server_error else exc.details,
                    request_id=request_id,
                    cors_origin=cors_origin,
                    allowed_methods=allowed_methods,
                )

            # Request models rejected the input
            except PydanticValidationError as exc:
                _log_error(
                    "Request validation failed",
                    handler_name=inner.__name__,
                    request_id=request_id,
                    exc=exc,
                )
                return ResponseBuilder.error(
                    status=HTTPStatus.BAD_REQUEST,
                    message="Invalid request parameters",
                    error_code=ERROR_CODE_VALIDATION_FAILED,
                    details=sanitize_validation_errors(exc.errors()),
                    request_id=request_id,
                    cors_origin=cors_origin,
                    allowed_methods=allowed_methods,
                )

            # Catch-all for unexpected errors
            except Exception as exc:
                _log_error(
                    "Unexpected error in handler",
                    handler_name=inner.__name__,
                    request_id=request_id,
                    exc=exc,
                    level="exception",
                )
                return ResponseBuilder.error(
                    status=HTTPStatus.INTERNAL_SERVER_ERROR,
                    message="We're experiencing technical difficulties. Please try again in a few moments.",
                    error_code=ERROR_CODE_INTERNAL_ERROR,
                    request_id=request_id,
                    cors_origin=cors_origin,
                    allowed_methods=allowed_methods,
                )

        return wrapper

    return decorate
