"""Tests for Gemini response interpretation."""

import json

import pytest

from paip.providers.base import (
    ApiError,
    DeserializationError,
    EmptyResponseError,
    UnexpectedStatusError,
)
from paip.providers.gemini import interpret_response


def _answer(*texts):
    return json.dumps({"candidates": [{"content": {"role": "model", "parts": [{"text": t} for t in texts]}}]})


def test_returns_first_part_text_unmodified():
    assert interpret_response(200, _answer("  Bonjour \n")) == "  Bonjour \n"


def test_first_candidate_and_first_part_win():
    body = json.dumps(
        {
            "candidates": [
                {"content": {"parts": [{"text": "first"}, {"text": "second"}]}},
                {"content": {"parts": [{"text": "other candidate"}]}},
            ]
        }
    )

    assert interpret_response(200, body) == "first"


def test_unknown_fields_are_ignored():
    body = json.dumps(
        {
            "candidates": [{"content": {"parts": [{"text": "ok"}]}, "finishReason": "STOP", "index": 0}],
            "usageMetadata": {"totalTokenCount": 3},
            "modelVersion": "gemini-test",
        }
    )

    assert interpret_response(200, body) == "ok"


def test_api_error_passes_code_and_message_through():
    body = json.dumps({"error": {"code": 429, "message": "quota exceeded", "status": "RESOURCE_EXHAUSTED"}})

    with pytest.raises(ApiError) as exc:
        interpret_response(429, body)

    assert exc.value.code == 429
    assert exc.value.message == "quota exceeded"
    assert exc.value.retryable is True
    assert "LLM API error 429: quota exceeded" in str(exc.value)


def test_api_error_for_bad_request_is_not_retryable():
    body = json.dumps({"error": {"code": 400, "message": "API key not valid"}})

    with pytest.raises(ApiError) as exc:
        interpret_response(400, body)

    assert exc.value.retryable is False


def test_failed_status_without_error_object_is_reported():
    with pytest.raises(UnexpectedStatusError) as exc:
        interpret_response(503, "{}")

    assert exc.value.status_code == 503
    assert exc.value.envelope == {}


def test_failed_status_with_candidates_still_fails():
    with pytest.raises(UnexpectedStatusError):
        interpret_response(500, _answer("looks fine"))


def test_success_status_with_error_object_uses_candidates():
    body = json.dumps(
        {
            "candidates": [{"content": {"parts": [{"text": "fine"}]}}],
            "error": {"code": 1, "message": "ignored"},
        }
    )

    assert interpret_response(200, body) == "fine"


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"candidates": []},
        {"candidates": [{}]},
        {"candidates": [{"finishReason": "SAFETY"}]},
        {"candidates": [{"content": {"role": "model"}, "finishReason": "MAX_TOKENS"}]},
        {"candidates": [{"content": {"parts": []}}]},
    ],
)
def test_success_without_text_is_empty_response(payload):
    with pytest.raises(EmptyResponseError) as exc:
        interpret_response(200, json.dumps(payload))

    assert "no text content found" in str(exc.value)


def test_empty_response_keeps_envelope_for_diagnosis():
    with pytest.raises(EmptyResponseError) as exc:
        interpret_response(200, json.dumps({"candidates": [{"finishReason": "SAFETY"}]}))

    assert exc.value.envelope == {"candidates": [{"finishReason": "SAFETY"}]}


@pytest.mark.parametrize(
    "body",
    [
        "",
        "not json",
        "[1, 2]",
        '{"candidates": "nope"}',
        '{"candidates": [{"content": {"parts": [{"image": "x"}]}}]}',
        '{"error": {"code": "four hundred"}}',
    ],
)
def test_malformed_body_raises_deserialization_error(body):
    with pytest.raises(DeserializationError) as exc:
        interpret_response(200, body)

    assert exc.value.body == body
    assert "Failed to deserialize" in str(exc.value)


def test_malformed_body_wins_over_failed_status():
    with pytest.raises(DeserializationError):
        interpret_response(502, "<html>Bad Gateway</html>")
