"""
Pytest configuration and fixtures for gallery service tests.
Provides MongoDB mocking, gallery item factories, auth tokens and a fake
Bot API session.
"""

import os
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
import mongomock
import pytest
import requests
from bson import ObjectId

from core.infrastructure.adapters.telegram_adapter import TelegramBotAdapter

os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "1")
os.environ.setdefault("POWERTOOLS_SERVICE_NAME", "gallery-api-test")

TEST_JWT_SECRET = "test-secret"
TEST_MONGO_URI = "mongodb://localhost:27017"
BASE_TIME = datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def service_env(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", TEST_JWT_SECRET)
    monkeypatch.setenv("MONGO_URI", TEST_MONGO_URI)
    for name in (
        "BOT_TOKEN",
        "JWT_ALGORITHM",
        "MONGO_DB_NAME",
        "MONGO_COLLECTION_NAME",
        "MONGO_SERVER_SELECTION_TIMEOUT_MS",
        "TELEGRAM_API_BASE",
        "TELEGRAM_MIRROR_BASE",
        "PROVIDER_TIMEOUT_SECONDS",
    ):
        monkeypatch.delenv(name, raising=False)


# ============================================================================
# MongoDB
# ============================================================================


class TrackedMongoClient:
    """Wraps a shared mongomock client and counts session opens/closes."""

    def __init__(self, client: mongomock.MongoClient) -> None:
        self._client = client
        self.opened = 0
        self.closed = 0

    def __call__(self, *_: Any, **__: Any) -> "TrackedMongoClient":
        self.opened += 1
        return self

    def __getitem__(self, name: str) -> Any:
        return self._client[name]

    def close(self) -> None:
        self.closed += 1


@pytest.fixture
def mongo_client(monkeypatch) -> TrackedMongoClient:
    tracked = TrackedMongoClient(mongomock.MongoClient())
    monkeypatch.setattr(
        "core.infrastructure.adapters.mongodb_adapter.MongoClient",
        tracked,
    )
    return tracked


@pytest.fixture
def gallery_collection(mongo_client) -> Any:
    return mongo_client["magic_plugin_db"]["gallery"]


@pytest.fixture
def make_item(gallery_collection) -> Callable[..., dict[str, Any]]:
    """
    Insert a gallery document whose _id is `minutes` after BASE_TIME.

    Usage:
        doc = make_item(3, file_id="file-3")
    """

    def _make(
        minutes: int,
        *,
        file_id: str | None = None,
        bot_token: str | None = None,
        **fields: Any,
    ) -> dict[str, Any]:
        created = BASE_TIME + timedelta(minutes=minutes)
        telegram: dict[str, Any] = {"chat_id": -100123, "file_id": file_id or f"file-{minutes}"}
        if bot_token:
            telegram["bot_token"] = bot_token

        document: dict[str, Any] = {
            "_id": ObjectId.from_datetime(created),
            "prompt": f"prompt {minutes}",
            "metadata": {"model": "sdxl"},
            "telegram": telegram,
            "timestamp": created.replace(tzinfo=None),
        }
        document.update(fields)
        gallery_collection.insert_one(document)
        return document

    return _make


@pytest.fixture
def gallery_items(make_item) -> list[dict[str, Any]]:
    """Five items, returned newest first."""
    return [make_item(minutes) for minutes in (5, 4, 3, 2, 1)]


# ============================================================================
# Auth
# ============================================================================


@pytest.fixture
def auth_token() -> str:
    return jwt.encode({"sub": "admin"}, TEST_JWT_SECRET, algorithm="HS256")


@pytest.fixture
def auth_headers(auth_token) -> dict[str, str]:
    return {"Authorization": f"Bearer {auth_token}"}


# ============================================================================
# Telegram Bot API
# ============================================================================


class FakeResponse:
    def __init__(
        self,
        *,
        json_data: Any = None,
        content: bytes = b"",
        headers: dict[str, str] | None = None,
        status_code: int = 200,
        invalid_json: bool = False,
    ) -> None:
        self._json_data = json_data
        self.content = content
        self.headers = headers or {}
        self.status_code = status_code
        self._invalid_json = invalid_json

    def json(self) -> Any:
        if self._invalid_json:
            raise requests.JSONDecodeError("Expecting value", "<html>", 0)
        return self._json_data

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


class FakeBotSession:
    """Routes GET requests by URL; unknown URLs behave like a dead host."""

    def __init__(self) -> None:
        self.routes: dict[str, FakeResponse | Exception] = {}
        self.calls: list[str] = []
        self.closed = 0

    def close(self) -> None:
        self.closed += 1

    def route(self, url: str, outcome: FakeResponse | Exception) -> None:
        self.routes[url] = outcome

    def get(self, url: str, params: dict[str, Any] | None = None, timeout: float | None = None) -> FakeResponse:
        self.calls.append(url)
        outcome = self.routes.get(url)
        if outcome is None:
            raise requests.ConnectionError(f"no route to {url}")
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def route_get_file(
        self,
        api_base: str,
        bot_token: str,
        outcome: str | FakeResponse | Exception | None,
    ) -> None:
        """Answer getFile with `ok: true` and a path, a rejection (None) or a raw outcome."""
        if isinstance(outcome, str):
            outcome = FakeResponse(
                json_data={"ok": True, "result": {"file_id": "x", "file_path": outcome}}
            )
        elif outcome is None:
            outcome = FakeResponse(
                json_data={"ok": False, "error_code": 400, "description": "Bad Request: invalid file_id"},
                status_code=400,
            )
        self.route(f"{api_base}/bot{bot_token}/getFile", outcome)

    def route_download(
        self,
        api_base: str,
        bot_token: str,
        file_path: str,
        outcome: bytes | FakeResponse | Exception,
        content_type: str | None = "image/png",
    ) -> None:
        if isinstance(outcome, bytes):
            headers = {"Content-Type": content_type} if content_type else {}
            outcome = FakeResponse(content=outcome, headers=headers)
        self.route(f"{api_base}/file/bot{bot_token}/{file_path}", outcome)


@pytest.fixture
def bot_session() -> FakeBotSession:
    return FakeBotSession()


@pytest.fixture
def bot_adapter(bot_session) -> TelegramBotAdapter:
    return TelegramBotAdapter(session=bot_session, timeout=1.0)


@pytest.fixture
def fake_response() -> type[FakeResponse]:
    return FakeResponse
