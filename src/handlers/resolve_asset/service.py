"""
Business logic for asset resolution.

This module picks the bot credential for a Telegram file and walks the
provider chain in order until one of them yields a URL (or, in content
mode, the file bytes).
"""

import os
from collections.abc import Callable, Sequence
from typing import Any, TypeVar

import requests
from aws_lambda_powertools import Logger
from pymongo.errors import PyMongoError

from core.infrastructure.adapters.mongodb_adapter import MongoDBSession, mongo_uri
from core.infrastructure.adapters.telegram_adapter import TelegramBotAdapter
from core.infrastructure.mongo.gallery_store import MongoGalleryStore
from core.models.asset import ResolvedContent, ResolvedUrl
from core.models.errors import ConfigurationError, StoreError, UpstreamResolutionError
from core.providers.bot_file_provider import BotFileProvider, default_provider_chain
from core.utils.constants import (
    DEFAULT_MEDIA_CONTENT_TYPE,
    ENV_BOT_TOKEN,
    ERROR_CODE_NO_BOT_TOKEN,
)

ResultT = TypeVar("ResultT")

logger = Logger(UTC=True)


class AssetResolverService:
    """Application service resolving Telegram file ids.

    This service orchestrates:
    - Credential selection: per-item override from the store, else BOT_TOKEN
    - Strictly sequential provider fallback, one attempt per provider
    - Optional relay of the file bytes from the winning provider

    Use it as a context manager so the HTTP session is released per request.
    """

    def __init__(
        self,
        *,
        adapter: TelegramBotAdapter | None = None,
        providers: Sequence[BotFileProvider] | None = None,
    ) -> None:
        self.adapter = adapter or TelegramBotAdapter()
        self.providers = tuple(providers) if providers else default_provider_chain(self.adapter)

    def close(self) -> None:
        self.adapter.close()

    def __enter__(self) -> "AssetResolverService":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def resolve_credential(self, file_id: str) -> str:
        """Pick the bot token for `file_id`.

        Raises:
            ConfigurationError: If neither an item override nor BOT_TOKEN exists
        """
        token = self._lookup_item_token(file_id) or os.getenv(ENV_BOT_TOKEN)

        if not token:
            logger.error("No bot token available", extra={"file_id": file_id})
            raise ConfigurationError(
                message="No bot token available",
                error_code=ERROR_CODE_NO_BOT_TOKEN,
            )

        return token

    def _lookup_item_token(self, file_id: str) -> str | None:
        if not mongo_uri():
            return None

        try:
            with MongoDBSession.from_env() as collection:
                item = MongoGalleryStore(collection).find_by_file_id(file_id=file_id)
        except (StoreError, PyMongoError):
            # The process-wide token still applies when the store is down
            logger.warning("Bot token lookup failed", extra={"file_id": file_id}, exc_info=True)
            return None

        if item is None:
            return None

        return item.telegram.bot_token or None

    def _first_success(
        self,
        file_id: str,
        attempt: Callable[[BotFileProvider], ResultT | None],
    ) -> ResultT:
        for provider in self.providers:
            result = attempt(provider)
            if result is not None:
                return result

        logger.error(
            "All providers failed",
            extra={"file_id": file_id, "providers": [p.name for p in self.providers]},
        )
        raise UpstreamResolutionError(
            message="Failed to retrieve file URL",
            details={"file_id": file_id},
        )

    def resolve_url(self, file_id: str) -> ResolvedUrl:
        """Return the file URL from the first provider that resolves it.

        Raises:
            ConfigurationError: If no bot token is available
            UpstreamResolutionError: If every provider failed
        """
        token = self.resolve_credential(file_id)

        def attempt(provider: BotFileProvider) -> ResolvedUrl | None:
            outcome = provider.locate(file_id, token)
            if not outcome.ok or outcome.url is None:
                return None
            return ResolvedUrl(url=outcome.url, provider=provider.name)

        resolved = self._first_success(file_id, attempt)
        logger.info("Asset URL resolved", extra={"file_id": file_id, "provider": resolved.provider})
        return resolved

    def resolve_content(self, file_id: str) -> ResolvedContent:
        """Return the file bytes from the first provider that serves them.

        A provider whose download fails is skipped just like one whose
        getFile call fails.

        Raises:
            ConfigurationError: If no bot token is available
            UpstreamResolutionError: If every provider failed
        """
        token = self.resolve_credential(file_id)

        def attempt(provider: BotFileProvider) -> ResolvedContent | None:
            outcome = provider.locate(file_id, token)
            if not outcome.ok or outcome.url is None:
                return None

            try:
                content, content_type = self.adapter.download(outcome.url)
            except requests.RequestException as exc:
                logger.warning(
                    "Provider download failed",
                    extra={
                        "provider": provider.name,
                        "file_id": file_id,
                        "error_type": type(exc).__name__,
                    },
                )
                return None

            return ResolvedContent(
                content=content,
                content_type=content_type or DEFAULT_MEDIA_CONTENT_TYPE,
                provider=provider.name,
            )

        resolved = self._first_success(file_id, attempt)
        logger.info(
            "Asset content fetched",
            extra={
                "file_id": file_id,
                "provider": resolved.provider,
                "size": len(resolved.content),
            },
        )
        return resolved
