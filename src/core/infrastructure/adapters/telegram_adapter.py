"""Thin Telegram Bot API adapter wrapping a requests session."""

import os
from typing import Any

import requests

from core.utils.constants import DEFAULT_PROVIDER_TIMEOUT_SECONDS, ENV_PROVIDER_TIMEOUT_SECONDS


def provider_timeout() -> float:
    return float(os.getenv(ENV_PROVIDER_TIMEOUT_SECONDS) or DEFAULT_PROVIDER_TIMEOUT_SECONDS)


class TelegramBotAdapter:
    """Low-level Bot API calls (mechanical, no error handling).

    This adapter:
    - Issues one HTTP request per call, never retries
    - Does NOT handle errors (requests and JSON errors bubble up)
    - Providers catch them and turn them into failed outcomes
    - Closes only a session it created itself
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        *,
        timeout: float | None = None,
    ) -> None:
        self._owns_session = session is None
        self.session = session or requests.Session()
        self.timeout = timeout if timeout is not None else provider_timeout()

    def close(self) -> None:
        """Close the HTTP session if this adapter created it."""
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "TelegramBotAdapter":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def get_file(self, *, api_base: str, bot_token: str, file_id: str) -> Any:
        """Call getFile and return the decoded JSON body.

        The HTTP status is not checked; the Bot API reports failures in the
        body with `ok: false`.
        """
        response = self.session.get(
            f"{api_base}/bot{bot_token}/getFile",
            params={"file_id": file_id},
            timeout=self.timeout,
        )
        return response.json()

    def download(self, url: str) -> tuple[bytes, str | None]:
        """Fetch file bytes and the upstream Content-Type.

        Raises requests.HTTPError for non-2xx responses.
        """
        response = self.session.get(url, timeout=self.timeout)
        response.raise_for_status()
        return response.content, response.headers.get("Content-Type")
