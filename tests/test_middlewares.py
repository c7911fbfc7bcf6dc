from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import Mock

import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from reltime.middlewares.bot import RelativeTimeBotMiddleware
from reltime.middlewares.generic import make_middleware
from reltime.middlewares.http import RelativeTimeMiddleware
from reltime.services.formatter import RelativeTimeFormatter
from tests.conftest import MINUTE, NOW


TS = int((NOW - 30 * MINUTE).timestamp() * 1000)


# -------------------------------------------------------------------- generic


def test_make_middleware_returns_function() -> None:
    assert callable(make_middleware())


def test_middleware_binds_request_language(formatter: RelativeTimeFormatter) -> None:
    middleware = make_middleware(formatter)
    request = {"language": "ja"}
    next_ = Mock()

    middleware(request, {}, next_)

    next_.assert_called_once_with()
    assert request["rtf"](TS) == "30 分前"


def test_middleware_uses_custom_property_names(formatter: RelativeTimeFormatter) -> None:
    middleware = make_middleware(formatter, "relativeTimeFormat", "lng")
    request = {"lng": "ru"}
    next_ = Mock()

    middleware(request, {}, next_)

    next_.assert_called_once_with()
    assert request["relativeTimeFormat"](TS) == "30 минут назад"


def test_middleware_supports_attribute_bags(formatter: RelativeTimeFormatter) -> None:
    middleware = make_middleware(formatter)
    request = SimpleNamespace(language="ru")
    next_ = Mock()

    middleware(request, SimpleNamespace(), next_)

    next_.assert_called_once_with()
    assert request.rtf(TS) == "30 минут назад"


def test_middleware_reads_language_late(formatter: RelativeTimeFormatter) -> None:
    middleware = make_middleware(formatter)
    request = {}

    middleware(request, {}, lambda: None)
    assert request["rtf"](TS) == "30 minutes ago"

    request["language"] = "ja"
    assert request["rtf"](TS) == "30 分前"


def test_middleware_falls_back_for_unsupported_language(formatter: RelativeTimeFormatter) -> None:
    middleware = make_middleware(formatter)
    request = {"language": "JA"}

    middleware(request, {}, lambda: None)

    assert request["rtf"](TS) == "30 minutes ago"


# ------------------------------------------------------------------------ bot


@pytest.mark.asyncio
async def test_bot_middleware_injects_formatter(formatter: RelativeTimeFormatter) -> None:
    middleware = RelativeTimeBotMiddleware(formatter)
    calls = []

    async def handler(event, data):
        calls.append(event)
        return data["rtf"](TS)

    event = object()
    result = await middleware(handler, event, {"lang": "ru"})

    assert calls == [event]
    assert result == "30 минут назад"


@pytest.mark.asyncio
async def test_bot_middleware_custom_keys_and_missing_language(formatter: RelativeTimeFormatter) -> None:
    middleware = RelativeTimeBotMiddleware(formatter, data_key="ago", lang_key="locale")

    async def handler(event, data):
        return data["ago"](TS)

    assert await middleware(handler, object(), {}) == "30 minutes ago"


# ----------------------------------------------------------------------- ASGI


@pytest.fixture
def client(formatter: RelativeTimeFormatter) -> TestClient:
    app = FastAPI()
    app.add_middleware(RelativeTimeMiddleware, formatter=formatter)

    @app.get("/ago")
    def ago(request: Request, lang: str | None = None):
        if lang:
            request.state.language = lang
        return {"text": request.state.rtf(TS)}

    return TestClient(app)


def test_asgi_middleware_uses_state_language(client: TestClient) -> None:
    response = client.get("/ago", params={"lang": "ja"})
    assert response.status_code == 200
    assert response.json() == {"text": "30 分前"}


def test_asgi_middleware_uses_accept_language(client: TestClient) -> None:
    response = client.get("/ago", headers={"Accept-Language": "ru-RU,ru;q=0.9,en;q=0.8"})
    assert response.json() == {"text": "30 минут назад"}


def test_asgi_middleware_defaults_to_formatter_locale(client: TestClient) -> None:
    response = client.get("/ago", headers={"Accept-Language": "*"})
    assert response.json() == {"text": "30 minutes ago"}


def test_middlewares_are_exported_from_package() -> None:
    import reltime

    assert reltime.RelativeTimeBotMiddleware is RelativeTimeBotMiddleware
    assert reltime.RelativeTimeMiddleware is RelativeTimeMiddleware
    assert reltime.make_middleware is make_middleware
