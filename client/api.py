"""HTTP access for the notes client.

Every call goes through :meth:`ApiClient._make_request`, which turns transport
failures and non-2xx responses into :class:`ApiError`, collapses identical
concurrent requests into one, and keeps the session's ETag cache current.
"""

import asyncio
import json
import logging
from typing import Any, Optional
from urllib.parse import urlencode

import httpx

from client.config import client_settings
from client.etag_cache import ETagCache

logger = logging.getLogger(__name__)

ETAG_METHODS = ("GET", "POST", "PATCH")


class ApiError(Exception):
    """The single error type raised by the client.

    ``status`` is the HTTP status code, or 0 when no response was received.
    """

    def __init__(self, message: str, status: int, response: Any = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.response = response

    def __repr__(self) -> str:
        return f"ApiError(status={self.status}, message={self.message!r})"


def _error_message(response: httpx.Response, payload: Any) -> str:
    message = f"HTTP {response.status_code}: {response.reason_phrase}"
    if isinstance(payload, dict) and payload.get("message"):
        found = payload["message"]
        # Validation errors carry a list holding the first violation
        if isinstance(found, list):
            found = found[0] if found else None
        if found:
            message = str(found)
    return message


class ApiClient:
    """Async JSON client bound to one API base URL.

    Args:
        base_url: API root; defaults to ``NOTES_CLIENT_API_URL``
        transport: Optional httpx transport, e.g. ``httpx.ASGITransport`` or
            ``httpx.MockTransport`` in tests
        timeout: Request timeout in seconds
        etag_cache: Cache to use instead of a fresh one
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[float] = None,
        etag_cache: Optional[ETagCache] = None,
    ):
        self.base_url = (base_url or client_settings.api_url).rstrip("/")
        self.etag_cache = etag_cache if etag_cache is not None else ETagCache()
        self._in_flight: dict[str, asyncio.Task] = {}
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            transport=transport,
            timeout=timeout if timeout is not None else client_settings.timeout,
        )

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    @property
    def in_flight(self) -> int:
        """Number of distinct requests currently outstanding."""
        return len(self._in_flight)

    @staticmethod
    def request_key(method: str, endpoint: str, data: Any = None) -> str:
        body = json.dumps(data, sort_keys=True, default=str) if data is not None else ""
        return f"{method.upper()}:{endpoint}:{body}"

    async def get(self, endpoint: str, params: Optional[dict[str, Any]] = None) -> Any:
        if params:
            query = {key: str(value) for key, value in params.items() if value is not None}
            if query:
                endpoint = f"{endpoint}?{urlencode(query)}"
        return await self._make_request("GET", endpoint)

    async def post(self, endpoint: str, data: Any, etag: Optional[str] = None) -> Any:
        headers = {"If-None-Match": etag} if etag else {}
        return await self._make_request("POST", endpoint, data=data, headers=headers)

    async def patch(self, endpoint: str, data: Any, etag: Optional[str] = None) -> Any:
        if etag is None:
            etag = self.etag_cache.get(self.etag_cache.generate_key("GET", endpoint))
        headers = {"If-Match": etag} if etag else {}
        return await self._make_request("PATCH", endpoint, data=data, headers=headers)

    async def delete(self, endpoint: str) -> None:
        try:
            await self._make_request("DELETE", endpoint)
        finally:
            self.etag_cache.delete(self.etag_cache.generate_key("GET", endpoint))

    async def _make_request(
        self,
        method: str,
        endpoint: str,
        data: Any = None,
        headers: Optional[dict[str, str]] = None,
    ) -> Any:
        key = self.request_key(method, endpoint, data)
        task = self._in_flight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._send(method, endpoint, data, headers or {}))
            self._in_flight[key] = task
            task.add_done_callback(lambda done, key=key: self._forget(key, done))
        else:
            logger.debug("Joining in-flight request %s", key)
        # A cancelled caller must not cancel the request other callers share
        return await asyncio.shield(task)

    def _forget(self, key: str, task: asyncio.Task) -> None:
        if self._in_flight.get(key) is task:
            del self._in_flight[key]

    def _refresh_etag(self, endpoint: str, etag: Optional[str]) -> None:
        """Replace a rejected ETag with the current one, or forget it."""
        key = self.etag_cache.generate_key("GET", endpoint)
        if etag:
            self.etag_cache.set(key, etag)
        else:
            self.etag_cache.delete(key)
        logger.debug("Stale ETag for %s replaced with %s", endpoint, etag)

    async def _send(self, method: str, endpoint: str, data: Any, headers: dict[str, str]) -> Any:
        try:
            response = await self._http.request(
                method,
                endpoint,
                json=data,
                headers=headers,
            )
        except httpx.HTTPError as exc:
            raise ApiError(f"Network error: {str(exc) or type(exc).__name__}", 0) from exc

        if not response.is_success:
            if response.status_code == 412:
                self._refresh_etag(endpoint, response.headers.get("ETag"))
            try:
                payload = response.json()
            except ValueError:
                payload = None
            raise ApiError(_error_message(response, payload), response.status_code, payload)

        etag = response.headers.get("ETag")
        if etag and method in ETAG_METHODS:
            self.etag_cache.set(self.etag_cache.generate_key("GET", endpoint), etag)

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise ApiError(f"Invalid JSON response: {exc}", response.status_code) from exc
