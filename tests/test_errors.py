from __future__ import annotations

import httpx
import pytest

from brewtracker.api.errors import normalize_error


def _status_error(status: int, body=None) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", "http://backend.test/api/recipes")
    if body is None:
        response = httpx.Response(status, request=request)
    else:
        response = httpx.Response(status, json=body, request=request)
    return httpx.HTTPStatusError("failed", request=request, response=response)


def test_timeout_is_retryable_network_error():
    err = normalize_error(httpx.ReadTimeout("timed out"))
    assert err.is_timeout and err.is_network_error and err.is_retryable
    assert "timed out" in err.message


def test_connect_error_is_retryable():
    err = normalize_error(httpx.ConnectError("refused"))
    assert err.is_network_error and err.is_retryable
    assert not err.is_timeout


@pytest.mark.parametrize("status, retryable", [
    (400, False), (401, False), (403, False), (404, False), (409, False), (422, False),
    (429, True), (500, True), (502, True), (503, True), (504, True), (507, True),
])
def test_status_retryability(status, retryable):
    err = normalize_error(_status_error(status))
    assert err.status_code == status
    assert err.is_retryable is retryable
    assert not err.is_network_error


def test_body_error_message_overrides_default():
    err = normalize_error(_status_error(404, {"error": "Recipe not found"}))
    assert err.message == "Recipe not found"


def test_body_message_field_used():
    err = normalize_error(_status_error(422, {"message": "name is required"}))
    assert err.message == "name is required"


def test_default_message_when_body_not_json():
    err = normalize_error(_status_error(403))
    assert err.message.startswith("Access denied")


def test_unknown_status_message():
    err = normalize_error(_status_error(418))
    assert err.message == "Server error (418). Please try again."
    assert err.is_retryable is False


def test_generic_exception():
    exc = RuntimeError("something odd")
    err = normalize_error(exc)
    assert err.message == "something odd"
    assert err.original_error is exc
    assert not err.is_retryable
