from __future__ import annotations

import json
import logging
from types import SimpleNamespace

import pytest

from brewtracker.api import id_interceptor
from brewtracker.api.id_interceptor import (
    denormalize_request_ids,
    get_interceptor_status,
    normalize_response_ids,
    remove_id_interceptors,
    setup_id_interceptors,
)
from brewtracker.api.interceptors import InterceptorManager
from brewtracker.domain.models import ApiResponse, InterceptorStatus, RequestConfig
from brewtracker.metrics import metrics_snapshot


# ---------------------------------------------------------------------------
# setup / idempotency
# ---------------------------------------------------------------------------

def test_setup_registers_one_pair_per_chain(fake_client):
    client = fake_client()
    setup_id_interceptors(client)

    assert len(client.interceptors.request.handlers) == 1
    assert len(client.interceptors.response.handlers) == 1
    handler = client.interceptors.response.handlers[0]
    assert handler.fulfilled is normalize_response_ids
    assert callable(handler.rejected)


def test_setup_is_idempotent(fake_client):
    client = fake_client()
    setup_id_interceptors(client)
    setup_id_interceptors(client)

    assert len(client.interceptors.request.handlers) == 1
    assert len(client.interceptors.response.handlers) == 1


def test_setup_keeps_foreign_handlers(fake_client):
    client = fake_client()
    client.interceptors.request.use(lambda c: c)
    setup_id_interceptors(client)

    assert len(client.interceptors.request.handlers) == 2
    assert get_interceptor_status(client) == InterceptorStatus(True, True)


def test_setup_rejects_objects_without_chains():
    with pytest.raises(TypeError):
        setup_id_interceptors(object())
    with pytest.raises(TypeError):
        setup_id_interceptors(SimpleNamespace(interceptors=SimpleNamespace(request=InterceptorManager())))


def test_setup_requires_chains_with_use(fake_client):
    client = fake_client(request=SimpleNamespace(handlers=[]), response=SimpleNamespace(handlers=[]))
    with pytest.raises(TypeError):
        setup_id_interceptors(client)
    assert client.interceptors.request.handlers == []


# ---------------------------------------------------------------------------
# remove
# ---------------------------------------------------------------------------

def test_remove_uses_native_clear(fake_client):
    client = fake_client()
    setup_id_interceptors(client)
    remove_id_interceptors(client)

    assert get_interceptor_status(client) == InterceptorStatus(False, False)


def test_remove_truncates_handler_lists_without_clear(fake_client):
    request_handlers = [{}]
    response_handlers = [{}, {}]
    client = fake_client(
        request=SimpleNamespace(handlers=request_handlers),
        response=SimpleNamespace(handlers=response_handlers),
    )
    remove_id_interceptors(client)

    assert request_handlers == []
    assert response_handlers == []


@pytest.mark.parametrize("client", [
    SimpleNamespace(interceptors=SimpleNamespace(request=SimpleNamespace(), response=SimpleNamespace())),
    SimpleNamespace(interceptors=SimpleNamespace(request=None, response=SimpleNamespace(handlers=[]))),
    SimpleNamespace(interceptors=SimpleNamespace(request=SimpleNamespace(handlers=None), response=None)),
    SimpleNamespace(interceptors=None),
    object(),
])
def test_remove_tolerates_malformed_clients(client):
    remove_id_interceptors(client)


# ---------------------------------------------------------------------------
# status
# ---------------------------------------------------------------------------

def test_status_on_clean_client(fake_client):
    assert get_interceptor_status(fake_client()) == InterceptorStatus(False, False)


@pytest.mark.parametrize("request_chain, response_chain, expected", [
    (SimpleNamespace(), SimpleNamespace(), InterceptorStatus(False, False)),
    (SimpleNamespace(handlers=None), SimpleNamespace(handlers=None), InterceptorStatus(False, False)),
    (SimpleNamespace(handlers=[]), SimpleNamespace(handlers=[]), InterceptorStatus(False, False)),
    (SimpleNamespace(handlers=[{}]), SimpleNamespace(handlers=[{}, {}]), InterceptorStatus(True, True)),
    (SimpleNamespace(handlers=[{}]), SimpleNamespace(handlers=[]), InterceptorStatus(True, False)),
    (SimpleNamespace(handlers=[None]), None, InterceptorStatus(False, False)),
    (SimpleNamespace(handlers="not-a-list"), SimpleNamespace(handlers=[{}]), InterceptorStatus(False, True)),
])
def test_status_on_partial_clients(fake_client, request_chain, response_chain, expected):
    client = fake_client(request=request_chain, response=response_chain)
    assert get_interceptor_status(client) == expected


def test_status_without_interceptors_attribute():
    assert get_interceptor_status(SimpleNamespace(interceptors=None)) == InterceptorStatus(False, False)


def test_status_ignores_ejected_slots(fake_client):
    client = fake_client()
    index = client.interceptors.request.use(lambda c: c)
    client.interceptors.request.eject(index)
    assert get_interceptor_status(client).request_interceptors is False


# ---------------------------------------------------------------------------
# Response hook
# ---------------------------------------------------------------------------

def _response(url, data):
    return ApiResponse(data=data, config=RequestConfig(url=url))


def test_response_hook_normalizes_recipe():
    response = _response("/recipes/42", {"recipe_id": "42", "name": "IPA"})
    result = normalize_response_ids(response)

    assert result is response
    assert result.data == {"id": "42", "name": "IPA"}
    assert metrics_snapshot()["responses_normalized"] == 1


def test_response_hook_skips_unknown_urls():
    data = {"recipe_id": "42"}
    response = _response("/health", data)
    assert normalize_response_ids(response).data is data


def test_response_hook_without_config():
    response = SimpleNamespace(data={"recipe_id": "42"})
    assert normalize_response_ids(response) is response
    assert response.data == {"recipe_id": "42"}


def test_response_hook_leaves_fermentation_data():
    entries = [{"temperature": 68, "gravity": 1.05, "date": "2024-01-01"}]
    response = _response("/brew-sessions/9/fermentation", entries)
    assert normalize_response_ids(response).data is entries


def test_response_hook_fails_soft(monkeypatch, caplog):
    def _broken(_data, _entity_type):
        raise RuntimeError("normalizer bug")

    monkeypatch.setattr(id_interceptor, "normalize_response_data", _broken)
    original = {"recipe_id": "42"}
    response = _response("/recipes/42", original)

    with caplog.at_level(logging.ERROR):
        result = normalize_response_ids(response)

    assert result is response
    assert result.data is original
    line = next(m for m in caplog.messages if m.startswith("id_interceptor_error "))
    payload = json.loads(line.split(" ", 1)[1])
    assert payload["direction"] == "response"
    assert payload["url"] == "/recipes/42"
    assert payload["entity_type"] == "recipe"
    assert payload["error"] == "normalizer bug"
    assert metrics_snapshot()["transform_failures"] == 1


def test_response_hook_survives_unidentifiable_list_item():
    # A list item with no id makes normalize_entity_id raise; the hook swallows it
    data = [{"recipe_id": "1"}, {"name": "no id"}]
    response = _response("/recipes", data)
    assert normalize_response_ids(response).data is data


# ---------------------------------------------------------------------------
# Request hook
# ---------------------------------------------------------------------------

def test_request_hook_denormalizes_body():
    config = RequestConfig(url="/recipes/42", method="PUT", data={"id": "42", "name": "IPA"})
    result = denormalize_request_ids(config)

    assert result is config
    assert config.data == {"recipe_id": "42", "name": "IPA"}
    assert metrics_snapshot()["requests_denormalized"] == 1


@pytest.mark.parametrize("body", [None, "raw text", 5])
def test_request_hook_skips_without_json_body(body):
    config = RequestConfig(url="/recipes/42", data=body)
    assert denormalize_request_ids(config).data is body
    assert metrics_snapshot()["requests_denormalized"] == 0


def test_request_hook_skips_unknown_urls():
    body = {"id": "1"}
    config = RequestConfig(url="/auth/login", data=body)
    assert denormalize_request_ids(config).data is body


def test_request_hook_fails_soft(monkeypatch, caplog):
    def _broken(*_args, **_kwargs):
        raise RecursionError("too deep")

    monkeypatch.setattr(id_interceptor, "denormalize_entity_id_deep", _broken)
    body = {"id": "42"}
    config = RequestConfig(url="/recipes/42", data=body)

    with caplog.at_level(logging.ERROR):
        result = denormalize_request_ids(config)

    assert result.data is body
    assert any('"direction": "request"' in m for m in caplog.messages)


# ---------------------------------------------------------------------------
# Installed pass-through of rejections
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_installed_rejected_handler_reraises(fake_client):
    client = fake_client()
    setup_id_interceptors(client)
    with pytest.raises(ConnectionError):
        await client.interceptors.response.run_error(ConnectionError("offline"))
