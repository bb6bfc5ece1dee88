"""
Centralized API response builder for AWS Lambda / API Gateway.
"""

from __future__ import annotations

import base64
import json
from http import HTTPStatus
from typing import Any

from core.utils.constants import (
    CORS_HEADERS,
    CORS_METHODS,
    CORS_ORIGIN,
    DEFAULT_CONTENT_TYPE,
    EXPOSE_HEADERS,
)
from core.utils.time import utc_now_iso

JsonDict = dict[str, Any]
JsonBody = JsonDict | list[Any]


class ResponseBuilder:
    """Factory for API Gateway-compatible HTTP responses."""

    DEFAULT_HEADERS: dict[str, str] = {
        "Content-Type": DEFAULT_CONTENT_TYPE,
    }

    DEFAULT_CORS_HEADERS: dict[str, str] = {
        "Access-Control-Allow-Origin": CORS_ORIGIN,
        "Access-Control-Allow-Headers": CORS_HEADERS,
        "Access-Control-Allow-Methods": CORS_METHODS,
        "Access-Control-Expose-Headers": EXPOSE_HEADERS,
    }

    @staticmethod
    def _build_cors_headers(
        cors_origin: str | None = None,
        allowed_methods: str | None = None,
    ) -> dict[str, str]:
        headers: dict[str, str] = dict(ResponseBuilder.DEFAULT_CORS_HEADERS)

        if cors_origin:
            headers["Access-Control-Allow-Origin"] = cors_origin

        if allowed_methods:
            headers["Access-Control-Allow-Methods"] = allowed_methods

        return headers

    @staticmethod
    def _build_headers(
        cors_origin: str | None = None,
        allowed_methods: str | None = None,
    ) -> dict[str, str]:
        headers: dict[str, str] = dict(ResponseBuilder.DEFAULT_HEADERS)

        # Always include CORS headers
        headers.update(ResponseBuilder._build_cors_headers(cors_origin, allowed_methods))

        return headers

    @staticmethod
    def _response(
        *,
        status: HTTPStatus,
        body: JsonBody | None = None,
        request_id: str | None = None,
        cors_origin: str | None = None,
        allowed_methods: str | None = None,
        cache_control: str | None = None,
    ) -> JsonDict:
        payload: JsonBody

        # Legacy gallery listings are bare JSON arrays; request_id only rides on objects
        if isinstance(body, list):
            payload = body
        else:
            payload = {}
            if body:
                payload.update(body)
            if request_id:
                payload["request_id"] = request_id

        headers = ResponseBuilder._build_headers(cors_origin, allowed_methods)
        if cache_control:
            headers["Cache-Control"] = cache_control

        return {
            "statusCode": status.value,
            "headers": headers,
            "body": json.dumps(payload),
        }

    @staticmethod
    def ok(
        body: JsonBody,
        *,
        request_id: str | None = None,
        cors_origin: str | None = None,
        allowed_methods: str | None = None,
        cache_control: str | None = None,
    ) -> JsonDict:
        return ResponseBuilder._response(
            status=HTTPStatus.OK,
            body=body,
            request_id=request_id,
            cors_origin=cors_origin,
            allowed_methods=allowed_methods,
            cache_control=cache_control,
        )

    @staticmethod
    def no_content(
        *,
        cors_origin: str | None = None,
        allowed_methods: str | None = None,
    ) -> JsonDict:
        return {
            "statusCode": HTTPStatus.NO_CONTENT.value,
            "headers": ResponseBuilder._build_headers(cors_origin, allowed_methods),
            "body": "",
        }

    @staticmethod
    def error(
        *,
        status: HTTPStatus,
        message: str,
        error_code: str | None = None,
        details: Any = None,
        request_id: str | None = None,
        cors_origin: str | None = None,
        allowed_methods: str | None = None,
    ) -> JsonDict:
        payload: JsonDict = {
            "error": message,
            "code": error_code or status.name,
            "timestamp": utc_now_iso(),
        }

        if details:
            payload["details"] = details

        return ResponseBuilder._response(
            status=status,
            body=payload,
            request_id=request_id,
            cors_origin=cors_origin,
            allowed_methods=allowed_methods,
        )

    @staticmethod
    def binary_response(
        content: bytes,
        *,
        content_type: str,
        cache_control: str | None = None,
        headers: dict[str, str] | None = None,
        cors_origin: str | None = None,
        allowed_methods: str | None = None,
    ) -> JsonDict:
        response_headers: dict[str, str] = ResponseBuilder._build_cors_headers(
            cors_origin, allowed_methods
        )
        response_headers["Content-Type"] = content_type
        response_headers["Content-Length"] = str(len(content))

        if cache_control:
            response_headers["Cache-Control"] = cache_control

        if headers:
            response_headers.update(headers)

        return {
            "statusCode": HTTPStatus.OK.value,
            "headers": response_headers,
            "body": base64.b64encode(content).decode("utf-8"),
            "isBase64Encoded": True,
        }
