from __future__ import annotations

import time

import pytest
from fastapi.testclient import TestClient

from reltime.main import app


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def _minutes_ago(minutes: int) -> str:
    return str(int(time.time() * 1000) - minutes * 60 * 1000)


def test_root_health_check(client: TestClient) -> None:
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_relative_uses_query_language(client: TestClient) -> None:
    response = client.get("/relative", params={"ts": _minutes_ago(30), "lang": "ja"})
    assert response.status_code == 200
    assert response.json() == {"text": "30 分前"}


def test_relative_uses_accept_language(client: TestClient) -> None:
    response = client.get(
        "/relative",
        params={"ts": _minutes_ago(30)},
        headers={"Accept-Language": "ru"},
    )
    assert response.json() == {"text": "30 минут назад"}


def test_relative_rejects_invalid_date(client: TestClient) -> None:
    response = client.get("/relative", params={"ts": "nonsense", "lang": "en"})
    assert response.status_code == 400


def test_relative_detail_reports_fallback(client: TestClient) -> None:
    response = client.get("/relative/detail", params={"ts": _minutes_ago(30), "lang": "JA"})
    assert response.status_code == 200
    body = response.json()
    assert body["locale"] == "auto"
    assert body["unit"] == "minute"
    assert body["value"] == -30
    assert body["fallback_used"] is True


def test_relative_detail_accepts_date_strings(client: TestClient) -> None:
    response = client.get("/relative/detail", params={"ts": "2000-01-01T00:00:00Z", "lang": "en"})
    body = response.json()
    assert body["unit"] == "year"
    assert body["locale"] == "en"
    assert body["fallback_used"] is False
    assert body["text"].endswith("years ago")
