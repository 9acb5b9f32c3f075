import json
import re
from unittest.mock import patch

from fastapi.testclient import TestClient

from conftest import ACCESS_TOKEN, MESSAGES_URL, OAUTH_URL, make_settings
from zoom_notify.config import get_settings
from zoom_notify.main import app

ISO_UTC = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z$")

DM = {"message": "Hello from Kiket!", "channel_type": "dm", "recipient_id": "user@example.com"}


def test_send_direct_message(client, zoom):
    zoom.on("POST", MESSAGES_URL, json={"id": "msg-123"})

    response = client.post("/notify", json={**DM, "format": "markdown"})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["message_id"] == "msg-123"
    assert ISO_UTC.match(body["delivered_at"])

    [send] = zoom.calls_to(MESSAGES_URL)
    assert send.headers["Authorization"] == f"Bearer {ACCESS_TOKEN}"
    assert send.headers["Content-Type"] == "application/json"
    assert json.loads(send.content) == {"to_contact": "user@example.com", "message": "Hello from Kiket!"}


def test_send_channel_message_with_thread(client, zoom):
    zoom.on("POST", MESSAGES_URL, json={"id": "msg-456"})

    response = client.post(
        "/notify",
        json={
            "message": "<b>Deploy</b> finished",
            "channel_type": "channel",
            "channel_id": "channel-456",
            "format": "html",
            "thread_id": "parent-1",
            "priority": "high",
            "metadata": {"build": 42},
        },
    )

    assert response.status_code == 200
    assert response.json()["message_id"] == "msg-456"
    [send] = zoom.calls_to(MESSAGES_URL)
    assert json.loads(send.content) == {
        "to_channel": "channel-456",
        "message": "*Deploy* finished",
        "reply_main_message_id": "parent-1",
    }


def test_group_routes_like_channel(client, zoom):
    zoom.on("POST", MESSAGES_URL, json={"id": "msg-789"})

    response = client.post("/notify", json={"message": "Hi", "channel_type": "group", "channel_id": "g-1"})

    assert response.status_code == 200
    [send] = zoom.calls_to(MESSAGES_URL)
    assert json.loads(send.content) == {"to_channel": "g-1", "message": "Hi"}


def test_each_request_fetches_a_new_token(client, zoom):
    zoom.on("POST", MESSAGES_URL, json={"id": "msg-1"})

    client.post("/notify", json=DM)
    client.post("/notify", json=DM)

    assert len(zoom.calls_to(OAUTH_URL)) == 2


def test_missing_message(client, zoom):
    response = client.post("/notify", json={"channel_type": "dm", "recipient_id": "user@example.com"})

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "message is required"}
    assert zoom.requests == []


def test_missing_channel_type(client):
    response = client.post("/notify", json={"message": "Test"})

    assert response.status_code == 400
    assert "channel_type is required" in response.json()["error"]


def test_missing_recipient_for_dm(client):
    response = client.post("/notify", json={"message": "Test", "channel_type": "dm"})

    assert response.status_code == 400
    assert "recipient_id is required for DM" in response.json()["error"]


def test_missing_channel_id(client):
    response = client.post("/notify", json={"message": "Test", "channel_type": "channel"})

    assert response.status_code == 400
    assert "channel_id is required" in response.json()["error"]


def test_invalid_json(client, zoom):
    response = client.post("/notify", content="invalid json", headers={"Content-Type": "application/json"})

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Invalid JSON in request body"}
    assert zoom.requests == []


def test_invalid_optional_field(client, zoom):
    response = client.post("/notify", json={**DM, "thread_id": ["a", "b"]})

    assert response.status_code == 400
    assert response.json()["error"].startswith("thread_id:")
    assert zoom.requests == []


def test_missing_credentials(client, zoom):
    app.dependency_overrides[get_settings] = lambda: make_settings(zoom_account_id="")

    response = client.post("/notify", json=DM)

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Missing Zoom OAuth credentials"}
    assert zoom.requests == []


def test_token_exchange_rejected(client, zoom):
    zoom.on("POST", OAUTH_URL, status=401, text="invalid_client")

    response = client.post("/notify", json=DM)

    assert response.status_code == 502
    assert response.json() == {
        "success": False,
        "error": "Zoom API error: Failed to obtain access token: invalid_client",
    }
    assert zoom.calls_to(MESSAGES_URL) == []


def test_rate_limited(client, zoom):
    zoom.on("POST", MESSAGES_URL, status=429, text="", headers={"Retry-After": "60"})

    response = client.post("/notify", json=DM)

    assert response.status_code == 502
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Zoom API error: Rate limit exceeded"
    assert body["retry_after"] == 60


def test_rate_limited_without_header(client, zoom):
    zoom.on("POST", MESSAGES_URL, status=429, text="")

    response = client.post("/notify", json=DM)

    assert response.json()["retry_after"] == 60


def test_upstream_errors(client, zoom):
    cases = {
        401: "Unauthorized: Invalid or expired access token",
        403: "Forbidden: Insufficient permissions",
        404: "Not found: Channel or user does not exist",
        503: "503 Service Unavailable",
    }
    for status, detail in cases.items():
        zoom.on("POST", MESSAGES_URL, status=status, json={"code": 0})

        response = client.post("/notify", json=DM)

        assert response.status_code == 502
        assert response.json() == {"success": False, "error": f"Zoom API error: {detail}"}


@patch("zoom_notify.routers.notifications.send_notification")
def test_unexpected_error(mock_send, client):
    mock_send.side_effect = RuntimeError("boom")

    response = client.post("/notify", json=DM)

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Internal server error"}


def test_unrecognized_format_and_priority_are_passed_through(client, zoom):
    zoom.on("POST", MESSAGES_URL, json={"id": "msg-1"})

    response = client.post(
        "/notify", json={**DM, "message": "**Hi** <b>there</b>", "format": {"kind": "rich"}, "priority": True}
    )

    assert response.status_code == 200
    [send] = zoom.calls_to(MESSAGES_URL)
    assert json.loads(send.content) == {"to_contact": "user@example.com", "message": "**Hi** <b>there</b>"}


def test_non_string_message(client, zoom):
    response = client.post("/notify", json={**DM, "message": ["Hi"]})

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "message must be a non-empty string"}
    assert zoom.requests == []


def test_unhandled_error_keeps_json_contract(monkeypatch):
    monkeypatch.setenv("HTTP_TIMEOUT", "fast")
    app.dependency_overrides.clear()
    raw_client = TestClient(app, raise_server_exceptions=False)

    response = raw_client.post("/notify", json=DM)

    assert response.status_code == 500
    assert response.headers["content-type"].startswith("application/json")
    assert response.json() == {"success": False, "error": "Internal server error"}
