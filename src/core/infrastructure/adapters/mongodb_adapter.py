"""Request-scoped MongoDB session wrapping a pymongo client."""

from __future__ import annotations

import os
from types import TracebackType
from typing import Any, Protocol

from aws_lambda_powertools import Logger
from pymongo import MongoClient

from core.models.errors import ConfigurationError
from core.utils.constants import (
    DEFAULT_MONGO_COLLECTION_NAME,
    DEFAULT_MONGO_DB_NAME,
    DEFAULT_MONGO_SERVER_SELECTION_TIMEOUT_MS,
    ENV_MONGO_COLLECTION_NAME,
    ENV_MONGO_DB_NAME,
    ENV_MONGO_SERVER_SELECTION_TIMEOUT_MS,
    ENV_MONGO_URI,
)

logger = Logger(UTC=True)


class MongoCollection(Protocol):
    """Minimal pymongo Collection protocol."""

    def find(self, filter: dict[str, Any], projection: dict[str, Any] | None = None) -> Any: ...
    def find_one(self, filter: dict[str, Any], projection: dict[str, Any] | None = None) -> Any: ...
    def delete_one(self, filter: dict[str, Any]) -> Any: ...


def mongo_uri() -> str | None:
    return os.getenv(ENV_MONGO_URI) or None


class MongoDBSession:
    """Low-level MongoDB connection scoped to a single request.

    The client is created on entry and closed on exit, whichever way the
    block is left. Sessions are never shared between requests.

    This session:
    - Wraps a pymongo client and exposes one collection
    - Does NOT translate query errors (they bubble up to the store)

    Usage:
        with MongoDBSession.from_env() as collection:
            collection.find({})
    """

    def __init__(
        self,
        *,
        uri: str,
        db_name: str = DEFAULT_MONGO_DB_NAME,
        collection_name: str = DEFAULT_MONGO_COLLECTION_NAME,
        server_selection_timeout_ms: int = DEFAULT_MONGO_SERVER_SELECTION_TIMEOUT_MS,
    ) -> None:
        self.uri = uri
        self.db_name = db_name
        self.collection_name = collection_name
        self.server_selection_timeout_ms = server_selection_timeout_ms
        self._client: MongoClient | None = None

    @classmethod
    def from_env(cls) -> MongoDBSession:
        """Build a session from environment configuration.

        Raises:
            ConfigurationError: If MONGO_URI is not set
        """
        uri = mongo_uri()
        if not uri:
            raise ConfigurationError(
                message=f"{ENV_MONGO_URI} not configured",
            )

        return cls(
            uri=uri,
            db_name=os.getenv(ENV_MONGO_DB_NAME) or DEFAULT_MONGO_DB_NAME,
            collection_name=os.getenv(ENV_MONGO_COLLECTION_NAME) or DEFAULT_MONGO_COLLECTION_NAME,
            server_selection_timeout_ms=int(
                os.getenv(
                    ENV_MONGO_SERVER_SELECTION_TIMEOUT_MS,
                    str(DEFAULT_MONGO_SERVER_SELECTION_TIMEOUT_MS),
                )
            ),
        )

    @property
    def collection(self) -> MongoCollection:
        if self._client is None:
            raise RuntimeError("MongoDB session is not open")
        collection: MongoCollection = self._client[self.db_name][self.collection_name]
        return collection

    def open(self) -> MongoCollection:
        if self._client is None:
            self._client = MongoClient(
                self.uri,
                serverSelectionTimeoutMS=self.server_selection_timeout_ms,
            )
            logger.debug(
                "MongoDB session opened",
                extra={"db": self.db_name, "collection": self.collection_name},
            )
        return self.collection

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
            logger.debug("MongoDB session closed")

    def __enter__(self) -> MongoCollection:
        return self.open()

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
