"""
BrewTracker IDs — ID interceptors.

Installs one response hook that rewrites backend identifier fields
(``recipe_id``, ``session_id`` ...) to the generic ``id`` and one request
hook that rewrites ``id`` back to the backend field before a body is sent.

Both hooks are fail-soft: a transformation bug is logged and the untouched
payload continues down the chain.  A network call never fails because of
ID rewriting.

Usage::

    client = ApiClient(install_id_interceptors=False)
    setup_id_interceptors(client)
    get_interceptor_status(client)   # InterceptorStatus(True, True)
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from brewtracker.api.interceptors import InterceptorChain, SupportsInterceptors
from brewtracker.core.constants import WRAPPED_LIST_KEYS
from brewtracker.core.logging import structured
from brewtracker.data_pipeline.denormalizer import denormalize_entity_id_deep
from brewtracker.data_pipeline.normalizer import debug_entity_ids, normalize_response_data
from brewtracker.data_pipeline.url_classifier import detect_entity_type_from_url
from brewtracker.domain.models import InterceptorStatus
from brewtracker.metrics import (
    record_request_denormalized,
    record_response_normalized,
    record_transform_failure,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Hooks
# ---------------------------------------------------------------------------

def _first_entity(data: Any) -> Any:
    """Pick one representative entity so debug logging stays short."""
    if isinstance(data, list):
        return data[0] if data else None
    if isinstance(data, dict):
        for key, _ in WRAPPED_LIST_KEYS:
            wrapped = data.get(key)
            if isinstance(wrapped, list):
                return wrapped[0] if wrapped else None
        return data
    return None


def _log_failure(direction: str, url: str, entity_type: Any, exc: Exception) -> None:
    record_transform_failure()
    logger.error(
        structured(
            "id_interceptor_error",
            {
                "direction": direction,
                "url": url,
                "entity_type": getattr(entity_type, "value", entity_type),
                "error": str(exc),
                "error_type": type(exc).__name__,
            },
        )
    )


def normalize_response_ids(response: Any) -> Any:
    """Response hook: backend id fields → ``id``."""
    config = getattr(response, "config", None)
    url = getattr(config, "url", None) or ""
    entity_type = None

    try:
        entity_type = detect_entity_type_from_url(url)
        if entity_type is None:
            return response

        original = response.data
        debug_entity_ids(_first_entity(original), f"Original {entity_type.value}")

        normalized = normalize_response_data(original, entity_type)
        if normalized is not original:
            response.data = normalized
            record_response_normalized()
            debug_entity_ids(_first_entity(normalized), f"Normalized {entity_type.value}")
    except Exception as exc:
        _log_failure("response", url, entity_type, exc)

    return response


def denormalize_request_ids(config: Any) -> Any:
    """Request hook: ``id`` → backend id fields, throughout the body."""
    url = getattr(config, "url", None) or ""
    entity_type = None

    try:
        body = getattr(config, "data", None)
        if not isinstance(body, (dict, list)):
            return config

        entity_type = detect_entity_type_from_url(url)
        if entity_type is None:
            return config

        debug_entity_ids(body, f"Original request data ({entity_type.value})")
        denormalized = denormalize_entity_id_deep(body, entity_type)
        config.data = denormalized
        record_request_denormalized()
        debug_entity_ids(denormalized, f"Denormalized request data ({entity_type.value})")
    except Exception as exc:
        _log_failure("request", url, entity_type, exc)

    return config


def _pass_through_error(error: BaseException) -> Any:
    raise error


# ---------------------------------------------------------------------------
# Install / remove / status
# ---------------------------------------------------------------------------

def _handler_list(chain: Any) -> Optional[list]:
    handlers = getattr(chain, "handlers", None)
    return handlers if isinstance(handlers, list) else None


def _has_handler(chain: Any, fulfilled: Any) -> bool:
    handlers = _handler_list(chain) or []
    return any(getattr(handler, "fulfilled", None) is fulfilled for handler in handlers)


def setup_id_interceptors(client: SupportsInterceptors) -> None:
    """Attach the ID request and response hooks to ``client``.

    Calling this again on the same client is a no-op for any chain that
    already carries the hook.

    Raises
    ------
    TypeError
        ``client`` does not expose ``interceptors.request`` and
        ``interceptors.response``.
    """
    interceptors = getattr(client, "interceptors", None)
    request_chain = getattr(interceptors, "request", None)
    response_chain = getattr(interceptors, "response", None)
    if not (isinstance(request_chain, InterceptorChain) and isinstance(response_chain, InterceptorChain)):
        raise TypeError(
            f"{type(client).__name__} does not expose request/response interceptor chains"
        )

    installed = False
    if not _has_handler(response_chain, normalize_response_ids):
        response_chain.use(normalize_response_ids, _pass_through_error)
        installed = True
    if not _has_handler(request_chain, denormalize_request_ids):
        request_chain.use(denormalize_request_ids, _pass_through_error)
        installed = True

    if installed:
        logger.info("ID interceptors installed on %s", type(client).__name__)
    else:
        logger.debug("ID interceptors already installed on %s; skipping", type(client).__name__)


def remove_id_interceptors(client: SupportsInterceptors) -> None:
    """Clear both interceptor chains on ``client``.

    Uses the chain's own ``clear()`` when it has one, otherwise truncates its
    ``handlers`` list in place.  Missing or malformed chains are skipped.
    """
    interceptors = getattr(client, "interceptors", None)
    if interceptors is None:
        return

    for name in ("request", "response"):
        chain = getattr(interceptors, name, None)
        if chain is None:
            continue

        clear = getattr(chain, "clear", None)
        if callable(clear):
            clear()
            continue

        handlers = _handler_list(chain)
        if handlers is not None:
            del handlers[:]


def _has_any_handler(chain: Any) -> bool:
    handlers = _handler_list(chain)
    if not handlers:
        return False
    return any(handler is not None for handler in handlers)


def get_interceptor_status(client: SupportsInterceptors) -> InterceptorStatus:
    """Report whether each of ``client``'s chains holds any handler."""
    interceptors = getattr(client, "interceptors", None)
    return InterceptorStatus(
        request_interceptors=_has_any_handler(getattr(interceptors, "request", None)),
        response_interceptors=_has_any_handler(getattr(interceptors, "response", None)),
    )
