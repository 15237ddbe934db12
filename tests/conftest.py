from __future__ import annotations

import json

import pytest

_ENV_VARS = (
    "HEYVR_ACCESS_TOKEN",
    "HEYVR_UPLOAD_TIMEOUT",
    "HEYVR_LOG_STREAM",
    "VALKEY_HOST",
    "VALKEY_PORT",
    "VALKEY_PASSWORD",
    "VALKEY_USE_SSL",
    "SLACK_WEBHOOK_URL",
    "DISCORD_WEBHOOK_URL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class FakeResponse:
    def __init__(self, status_code: int = 200, text: str = '{"success": true}', reason: str = "OK") -> None:
        self.status_code = status_code
        self.text = text
        self.reason = reason

    def json(self):
        return json.loads(self.text)


def read_body(prepared) -> bytes:
    """Drain a prepared request body the way the HTTP adapter would."""
    body = prepared.body
    if isinstance(body, bytes):
        return body
    return b"".join(iter(lambda: body.read(8192), b""))
