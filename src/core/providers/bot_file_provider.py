"""
Bot API file providers.

Each provider turns `(file_id, bot_token)` into an outcome: a file URL on
success, a reason on failure. Providers never raise for upstream trouble, so
a resolver can walk an ordered chain of them and stop at the first success.
"""

import os
from typing import Any

import requests
from aws_lambda_powertools import Logger
from pydantic import BaseModel

from core.infrastructure.adapters.telegram_adapter import TelegramBotAdapter
from core.utils.constants import (
    ENV_TELEGRAM_API_BASE,
    ENV_TELEGRAM_MIRROR_BASE,
    PROVIDER_MIRROR,
    PROVIDER_PRIMARY,
    TELEGRAM_MIRROR_BASE,
    TELEGRAM_OFFICIAL_BASE,
)

logger = Logger(UTC=True)


class ProviderOutcome(BaseModel):
    """Result of one provider attempt."""

    provider: str
    url: str | None = None
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.url is not None


def _extract_file_path(data: Any) -> str | None:
    if not isinstance(data, dict) or data.get("ok") is not True:
        return None

    result = data.get("result")
    if not isinstance(result, dict):
        return None

    file_path = result.get("file_path")
    return file_path if isinstance(file_path, str) and file_path else None


class BotFileProvider:
    """A Bot API endpoint able to resolve file ids to download URLs."""

    def __init__(self, *, name: str, api_base: str, adapter: TelegramBotAdapter) -> None:
        self.name = name
        self.api_base = api_base.rstrip("/")
        self.adapter = adapter

    def __repr__(self) -> str:
        return f"BotFileProvider(name={self.name!r}, api_base={self.api_base!r})"

    def build_file_url(self, bot_token: str, file_path: str) -> str:
        return f"{self.api_base}/file/bot{bot_token}/{file_path}"

    def locate(self, file_id: str, bot_token: str) -> ProviderOutcome:
        """Resolve `file_id` to a download URL.

        Network errors, non-JSON bodies and `ok: false` answers are all
        reported as a failed outcome.
        """
        try:
            data = self.adapter.get_file(
                api_base=self.api_base,
                bot_token=bot_token,
                file_id=file_id,
            )
        except (requests.RequestException, ValueError) as exc:
            logger.warning(
                "Provider getFile request failed",
                extra={"provider": self.name, "file_id": file_id, "error_type": type(exc).__name__},
            )
            return ProviderOutcome(provider=self.name, reason="request failed")

        file_path = _extract_file_path(data)
        if not file_path:
            logger.warning(
                "Provider did not return a file path",
                extra={"provider": self.name, "file_id": file_id},
            )
            return ProviderOutcome(provider=self.name, reason="negative acknowledgement")

        return ProviderOutcome(
            provider=self.name,
            url=self.build_file_url(bot_token, file_path),
        )


def default_provider_chain(adapter: TelegramBotAdapter) -> tuple[BotFileProvider, ...]:
    """Official Bot API first, then the mirror."""
    return (
        BotFileProvider(
            name=PROVIDER_PRIMARY,
            api_base=os.getenv(ENV_TELEGRAM_API_BASE) or TELEGRAM_OFFICIAL_BASE,
            adapter=adapter,
        ),
        BotFileProvider(
            name=PROVIDER_MIRROR,
            api_base=os.getenv(ENV_TELEGRAM_MIRROR_BASE) or TELEGRAM_MIRROR_BASE,
            adapter=adapter,
        ),
    )
