from __future__ import annotations

import json

import pytest

from app import FUNCTION_PATH, create_app


class RecordingHandler:
    def __init__(self, result: dict) -> None:
        self.result = result
        self.events: list[dict] = []

    def __call__(self, event: dict, context) -> dict:
        self.events.append(event)
        return self.result


@pytest.fixture
def recorder() -> RecordingHandler:
    return RecordingHandler(
        {
            "statusCode": 200,
            "headers": {"Content-Type": "application/json"},
            "body": json.dumps({"candidates": []}),
        }
    )


@pytest.fixture
def client(recorder: RecordingHandler):
    return create_app(recorder).test_client()


@pytest.mark.parametrize("path", ["/", FUNCTION_PATH])
def test_post_is_translated_into_event(client, recorder, path) -> None:
    raw = json.dumps({"imageData": "AAAA", "imageType": "image/png", "language": "English"})

    resp = client.post(path, data=raw, content_type="application/json")

    assert resp.status_code == 200
    assert resp.get_json() == {"candidates": []}
    [event] = recorder.events
    assert event["httpMethod"] == "POST"
    assert event["body"] == raw
    assert event["isBase64Encoded"] is False


def test_status_and_headers_come_from_handler(client, recorder) -> None:
    recorder.result = {
        "statusCode": 405,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps({"error": "Method Not Allowed"}),
    }

    resp = client.get(FUNCTION_PATH)

    assert resp.status_code == 405
    assert resp.headers["Content-Type"] == "application/json"
    assert resp.get_json() == {"error": "Method Not Allowed"}
    assert recorder.events[0]["httpMethod"] == "GET"


def test_health(client, recorder) -> None:
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.data == b"OK"
    assert recorder.events == []


def test_default_app_uses_real_handler(clean_env) -> None:
    from app import app

    resp = app.test_client().put("/")

    assert resp.status_code == 405
    assert resp.get_json() == {"error": "Method Not Allowed"}
