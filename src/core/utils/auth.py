"""
Bearer token verification for protected endpoints.

Tokens are issued elsewhere; this module only checks that an
`Authorization: Bearer <jwt>` header carries a token signed with the
configured secret.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any

import jwt
from aws_lambda_powertools import Logger

from core.models.errors import AuthError
from core.utils.constants import (
    DEFAULT_JWT_ALGORITHM,
    DEFAULT_JWT_SECRET,
    ENV_JWT_ALGORITHM,
    ENV_JWT_SECRET,
)

logger = Logger(UTC=True)


def jwt_secret() -> str:
    return os.getenv(ENV_JWT_SECRET, "").strip() or DEFAULT_JWT_SECRET


def jwt_algorithm() -> str:
    return os.getenv(ENV_JWT_ALGORITHM, "").strip() or DEFAULT_JWT_ALGORITHM


def extract_bearer_token(headers: Mapping[str, Any] | None) -> str | None:
    """Return the token part of the Authorization header, if any.

    Header names are matched case-insensitively since API Gateway forwards
    them as the client sent them.
    """
    for name, value in (headers or {}).items():
        if name.lower() == "authorization" and isinstance(value, str):
            parts = value.split(" ")
            return parts[1] if len(parts) > 1 and parts[1] else None
    return None


def verify_bearer_token(headers: Mapping[str, Any] | None) -> dict[str, Any]:
    """Verify the request's bearer token and return its claims.

    Raises:
        AuthError: If the token is missing, expired or has a bad signature
    """
    token = extract_bearer_token(headers)
    if not token:
        raise AuthError(message="Unauthorized", details={"reason": "missing token"})

    try:
        claims: dict[str, Any] = jwt.decode(token, jwt_secret(), algorithms=[jwt_algorithm()])
    except jwt.PyJWTError as exc:
        logger.info("Bearer token rejected", extra={"reason": type(exc).__name__})
        raise AuthError(message="Unauthorized", details={"reason": "invalid token"}) from exc

    return claims
