from __future__ import annotations

import pytest
import requests

from conftest import FakeResponse
from heyvr.libs import notifications
from heyvr.libs.notifications import NotificationService

RESULT = {
    "gameId": "my-game",
    "version": "1.2.0",
    "increment": "minor",
    "sdkVersion": 1,
    "size": 2048,
    "startedAt": "2026-01-20T10:30:00+00:00",
    "completedAt": "2026-01-20T10:32:05+00:00",
}


@pytest.fixture
def posts(monkeypatch: pytest.MonkeyPatch) -> list:
    sent: list = []

    def fake_post(url, json=None, timeout=None):
        sent.append((url, json))
        return FakeResponse(status_code=204, text="")

    monkeypatch.setattr(notifications.requests, "post", fake_post)
    return sent


def test_skipped_without_webhooks(posts: list) -> None:
    NotificationService({}).send_publish_notification(RESULT, "completed")
    assert posts == []


def test_discord_embed(posts: list) -> None:
    service = NotificationService({"DISCORD_WEBHOOK_URL": "https://discord.test/hook"})
    service.send_publish_notification(RESULT, "completed")

    url, message = posts[0]
    assert url == "https://discord.test/hook"
    embed = message["embeds"][0]
    assert embed["title"] == "heyVR Publish Completed: my-game"
    assert embed["color"] == 3381519
    fields = {f["name"]: f["value"] for f in embed["fields"]}
    assert fields["Increment"] == "minor"
    assert fields["Build Size"] == "2.048 kB"
    assert fields["Publish Time"] == "2m 5s"


def test_slack_failure_includes_error(posts: list) -> None:
    service = NotificationService({"SLACK_WEBHOOK_URL": "https://slack.test/hook"})
    service.send_publish_notification(RESULT, "failed", "Upload failed with code 500")

    _, message = posts[0]
    attachment = message["attachments"][0]
    assert attachment["color"] == "#d32f2f"
    assert {"title": "Error", "value": "Upload failed with code 500", "short": False} in attachment["fields"]


def test_webhook_errors_are_not_raised(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    def failing_post(url, json=None, timeout=None):
        raise requests.exceptions.ConnectionError("unreachable")

    monkeypatch.setattr(notifications.requests, "post", failing_post)
    service = NotificationService({"SLACK_WEBHOOK_URL": "https://slack.test/hook"})
    service.send_publish_notification(RESULT, "completed")

    assert "Error sending Slack notification: unreachable" in capsys.readouterr().out


def test_duration_keeps_days() -> None:
    service = NotificationService({})
    duration = service._format_duration("2026-01-20T10:00:00Z", "2026-01-21T11:02:03Z")
    assert duration == "25h 2m 3s"
    assert service._format_duration("2026-01-20T10:00:00Z", "2026-01-20T10:00:09Z") == "9s"
