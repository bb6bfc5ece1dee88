import base64
import json
from http import HTTPStatus
from typing import Any

import pytest

from core.infrastructure.adapters.telegram_adapter import TelegramBotAdapter
from handlers.resolve_asset.handler import handler

OFFICIAL = "https://api.telegram.org"
MIRROR = "https://tgapi.kairod.cfd"
TOKEN = "111:env"


def parse_body(resp: dict[str, Any]) -> Any:
    body = resp.get("body")
    if not body:
        return {}
    return json.loads(body)


@pytest.fixture(autouse=True)
def resolver_env(monkeypatch, mongo_client, bot_adapter) -> None:
    monkeypatch.setenv("BOT_TOKEN", TOKEN)
    monkeypatch.setattr(
        "handlers.resolve_asset.service.TelegramBotAdapter",
        lambda: bot_adapter,
    )


def asset_event(**query: str) -> dict[str, Any]:
    return {
        "httpMethod": "GET",
        "path": "/api/fileurl",
        "queryStringParameters": query or None,
        "headers": {},
    }


def test_raw_content_by_default(lambda_context, bot_session) -> None:
    bot_session.route_get_file(OFFICIAL, TOKEN, "photos/a.png")
    bot_session.route_download(OFFICIAL, TOKEN, "photos/a.png", b"\x89PNG")

    resp = handler(asset_event(file_id="AgAD"), lambda_context)

    assert resp["statusCode"] == HTTPStatus.OK
    assert resp["isBase64Encoded"] is True
    assert base64.b64decode(resp["body"]) == b"\x89PNG"
    assert resp["headers"]["Content-Type"] == "image/png"
    assert resp["headers"]["Cache-Control"] == "public, max-age=31536000, immutable"


def test_url_format(lambda_context, bot_session) -> None:
    bot_session.route_get_file(OFFICIAL, TOKEN, "photos/a.png")

    resp = handler(asset_event(file_id="AgAD", format="url"), lambda_context)

    assert resp["statusCode"] == HTTPStatus.OK
    assert parse_body(resp)["url"] == f"{OFFICIAL}/file/bot{TOKEN}/photos/a.png"
    assert bot_session.calls == [f"{OFFICIAL}/bot{TOKEN}/getFile"]


def test_mirror_fallback(lambda_context, bot_session) -> None:
    bot_session.route_get_file(MIRROR, TOKEN, "photos/a.png")

    resp = handler(asset_event(file_id="AgAD", format="url"), lambda_context)

    assert parse_body(resp)["url"] == f"{MIRROR}/file/bot{TOKEN}/photos/a.png"


def test_all_providers_fail(lambda_context, bot_session) -> None:
    resp = handler(asset_event(file_id="AgAD"), lambda_context)
    body = parse_body(resp)

    assert resp["statusCode"] == HTTPStatus.BAD_GATEWAY
    assert body["error"] == "Failed to retrieve file URL"
    assert len(bot_session.calls) == 2


@pytest.mark.parametrize("query", [{}, {"file_id": ""}])
def test_file_id_required(lambda_context, bot_session, query) -> None:
    resp = handler(asset_event(**query), lambda_context)

    assert resp["statusCode"] == HTTPStatus.BAD_REQUEST
    assert parse_body(resp)["error"] == "file_id required"
    assert bot_session.calls == []


def test_unknown_format(lambda_context, bot_session) -> None:
    resp = handler(asset_event(file_id="AgAD", format="thumb"), lambda_context)

    assert resp["statusCode"] == HTTPStatus.BAD_REQUEST
    assert bot_session.calls == []


def test_no_bot_token(lambda_context, bot_session, monkeypatch) -> None:
    monkeypatch.delenv("BOT_TOKEN")

    resp = handler(asset_event(file_id="AgAD"), lambda_context)

    assert resp["statusCode"] == HTTPStatus.INTERNAL_SERVER_ERROR
    assert parse_body(resp)["error"] == "No bot token available"
    assert bot_session.calls == []


def test_only_get_is_allowed(lambda_context) -> None:
    event = asset_event(file_id="AgAD")
    event["httpMethod"] = "DELETE"

    resp = handler(event, lambda_context)

    assert resp["statusCode"] == HTTPStatus.METHOD_NOT_ALLOWED


@pytest.mark.parametrize("routed", [True, False])
def test_http_session_released(lambda_context, bot_session, monkeypatch, routed) -> None:
    monkeypatch.setattr(
        "handlers.resolve_asset.service.TelegramBotAdapter",
        TelegramBotAdapter,
    )
    monkeypatch.setattr("requests.Session", lambda: bot_session)
    if routed:
        bot_session.route_get_file(OFFICIAL, TOKEN, "photos/a.png")

    resp = handler(asset_event(file_id="AgAD", format="url"), lambda_context)

    assert resp["statusCode"] == (HTTPStatus.OK if routed else HTTPStatus.BAD_GATEWAY)
    assert bot_session.closed == 1
