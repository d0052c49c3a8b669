"""HTTP transport used by the REST services.

The services only need ``get(url, headers=..., params=...)`` returning the full
response envelope, so any object satisfying :class:`Transport` can be injected.
:class:`HttpxTransport` is the default implementation on top of
``httpx.AsyncClient``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

import httpx

from pagerest.core.config import RestSettings


@dataclass(frozen=True)
class TransportResponse:
    """Response envelope: status, headers and the parsed JSON body (or ``None``)."""

    status_code: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Any = None


class Transport(Protocol):
    async def get(
        self,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        params: Mapping[str, str] | None = None,
    ) -> TransportResponse: ...


class HttpxTransport:
    """Thin async wrapper around ``httpx.AsyncClient``.

    Non-2xx responses raise ``httpx.HTTPStatusError`` and network failures raise
    ``httpx.TransportError``; neither is retried here.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        base_url: str = "",
        timeout_s: float = 30.0,
        api_token: str | None = None,
    ) -> None:
        if client is None:
            headers: dict[str, str] = {}
            if api_token:
                headers["Authorization"] = f"Bearer {api_token}"
            client = httpx.AsyncClient(base_url=base_url, headers=headers, timeout=timeout_s)
        self._client = client

    @classmethod
    def from_settings(cls, settings: RestSettings) -> HttpxTransport:
        return cls(
            base_url=settings.base_url,
            timeout_s=settings.timeout_s,
            api_token=settings.api_token,
        )

    # ── lifecycle ──────────────────────────────────────────────────────────

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> HttpxTransport:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    # ── public ─────────────────────────────────────────────────────────────

    async def get(
        self,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        params: Mapping[str, str] | None = None,
    ) -> TransportResponse:
        """GET *url* and return the whole envelope, JSON body parsed."""
        response = await self._client.get(
            url,
            headers=dict(headers or {}),
            params=dict(params or {}),
        )
        response.raise_for_status()
        return TransportResponse(
            status_code=response.status_code,
            headers=response.headers,
            body=response.json() if response.content else None,
        )
