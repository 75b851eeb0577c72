"""
BrewTracker IDs — Backend API client.

Wraps all HTTP calls to the BrewTracker backend into a single, reusable
class.  Every exchange runs through request and response interceptor
chains, so bodies reach the application with uniform ``id`` fields and reach
the backend with its own field names.  Idempotent reads are retried on
transient failures.

Usage::

    async with ApiClient() as api:
        recipes = (await api.get("/recipes", params={"page": 1})).data
        await api.put("/recipes/42", data={"id": "42", "name": "IPA"})
"""

from __future__ import annotations

import asyncio
import logging
import random
from typing import Any, Dict, Optional

import httpx

from brewtracker import config
from brewtracker.api.errors import normalize_error
from brewtracker.api.id_interceptor import setup_id_interceptors
from brewtracker.api.interceptors import Interceptors
from brewtracker.domain.models import ApiResponse, RequestConfig

logger = logging.getLogger(__name__)

_HEADERS = {"Content-Type": "application/json", "Accept": "application/json"}


def _decode_body(resp: httpx.Response) -> Any:
    if not resp.content:
        return None
    try:
        return resp.json()
    except ValueError:
        return resp.text


class ApiClient:
    """Async HTTP client for the BrewTracker backend.

    Instantiate once per process; the internal httpx.AsyncClient is
    lazily created and reused across calls.  ``transport`` is handed to
    httpx unchanged, which lets tests plug in ``httpx.MockTransport``.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        retry_delay: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        install_id_interceptors: Optional[bool] = None,
    ) -> None:
        self.base_url = base_url or config.API_URL
        self.timeout = timeout if timeout is not None else config.API_TIMEOUT_SECONDS
        self.max_retries = max(1, max_retries if max_retries is not None else config.API_MAX_RETRIES)
        self.retry_delay = retry_delay if retry_delay is not None else config.API_RETRY_DELAY_SECONDS
        self.retry_max_delay = config.API_RETRY_MAX_DELAY_SECONDS

        self.interceptors = Interceptors()
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

        if install_id_interceptors is None:
            install_id_interceptors = config.ID_NORMALIZATION_ENABLED
        if install_id_interceptors:
            setup_id_interceptors(self)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _client_get(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=_HEADERS,
                timeout=self.timeout,
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    async def _send(self, request: RequestConfig) -> ApiResponse:
        """One exchange: request chain → network → response chain.

        A failure anywhere before the response chain (a request hook
        raising, a transport error, a non-2xx status) enters the response
        chain on its error path, where a ``rejected`` handler may recover.
        """
        try:
            # Newest request interceptor runs first
            request = await self.interceptors.request.run(request, reverse=True)
            client = await self._client_get()
            resp = await client.request(
                request.method,
                request.url,
                json=request.data,
                params=request.params or None,
                headers=request.headers or None,
                timeout=request.timeout if request.timeout is not None else httpx.USE_CLIENT_DEFAULT,
            )
            resp.raise_for_status()
        except Exception as exc:
            return await self.interceptors.response.run_error(exc)

        response = ApiResponse(
            data=_decode_body(resp),
            status_code=resp.status_code,
            headers=dict(resp.headers),
            config=request,
        )
        return await self.interceptors.response.run(response)

    def _backoff(self, attempt: int) -> float:
        delay = self.retry_delay * (2 ** (attempt - 1)) + random.uniform(0, self.retry_delay)
        return min(delay, self.retry_max_delay)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def request(
        self,
        method: str,
        url: str,
        data: Any = None,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        retry: bool = False,
    ) -> ApiResponse:
        """Send one request through the interceptor chains.

        With ``retry=True`` transient failures (network errors, timeouts,
        429, 5xx) are retried with exponential backoff and jitter.  Each
        attempt starts from the caller's original ``data``.

        Raises the last httpx exception once retries are exhausted or the
        failure is not retryable.
        """
        attempts = self.max_retries if retry else 1
        for attempt in range(1, attempts + 1):
            request = RequestConfig(
                url=url,
                method=method.upper(),
                data=data,
                params=dict(params or {}),
                headers=dict(headers or {}),
            )
            try:
                return await self._send(request)
            except Exception as exc:
                error = normalize_error(exc)
                if attempt >= attempts or not error.is_retryable:
                    if attempts > 1:
                        logger.error(
                            "API %s %s failed after %d attempt(s): %s",
                            method.upper(), url, attempt, error.message,
                        )
                    raise
                delay = self._backoff(attempt)
                logger.warning(
                    "API %s %s failed (%s); retry %d/%d in %.1fs",
                    method.upper(), url, error.message, attempt, attempts - 1, delay,
                )
                await asyncio.sleep(delay)

        raise RuntimeError("unreachable: retry loop exited without result")

    async def get(self, url: str, params: Optional[Dict[str, Any]] = None, retry: bool = True) -> ApiResponse:
        return await self.request("GET", url, params=params, retry=retry)

    async def post(self, url: str, data: Any = None, params: Optional[Dict[str, Any]] = None) -> ApiResponse:
        return await self.request("POST", url, data=data, params=params)

    async def put(self, url: str, data: Any = None, params: Optional[Dict[str, Any]] = None) -> ApiResponse:
        return await self.request("PUT", url, data=data, params=params)

    async def patch(self, url: str, data: Any = None, params: Optional[Dict[str, Any]] = None) -> ApiResponse:
        return await self.request("PATCH", url, data=data, params=params)

    async def delete(self, url: str, params: Optional[Dict[str, Any]] = None) -> ApiResponse:
        return await self.request("DELETE", url, params=params)

    async def close(self) -> None:
        """Cleanly close the underlying HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()
