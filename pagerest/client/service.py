"""Read-only REST services over collection endpoints.

A service is bound to one endpoint URL and one converter. ``find_by_id`` and
``find_all`` cover the endpoint itself; ``find`` is the generic list call that
subclasses reuse for sub-resource endpoints with their own element type.

Transport failures are logged with the call context and re-raised unchanged;
the caller decides whether to retry, fall back or report.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any, Generic, TypeVar

import structlog

from pagerest.client.converter import Converter, IdentityConverter
from pagerest.client.decoder import decode
from pagerest.client.encoder import build_headers, encode
from pagerest.client.models import FindOptions, ListResult, PageRequest
from pagerest.client.transport import Transport

K = TypeVar("K", int, str)
S = TypeVar("S")
T = TypeVar("T")
U = TypeVar("U")
V = TypeVar("V")

_DEFAULT_MAX_PAGES = 10


class ReadOnlyRestService(Generic[K, S, T]):
    """Lookup and list operations for entities of type ``T`` read as ``S``.

    ``K`` is the identifier type used in ``{endpoint_url}/{entity_id}``.
    """

    def __init__(
        self,
        service_name: str,
        endpoint_url: str,
        transport: Transport,
        converter: Converter[S, T],
        *,
        logger: Any | None = None,
    ) -> None:
        if not service_name:
            raise ValueError("service_name is required")
        if not endpoint_url:
            raise ValueError("endpoint_url is required")
        self._service_name = service_name
        self._endpoint_url = endpoint_url.rstrip("/")
        self._transport = transport
        self._converter = converter
        self._log = logger or structlog.get_logger("pagerest.client")

    @property
    def service_name(self) -> str:
        return self._service_name

    @property
    def endpoint_url(self) -> str:
        return self._endpoint_url

    def resource_url(self, *parts: object) -> str:
        """Join *parts* under the endpoint URL, e.g. ``resource_url(7, "items")``."""
        return "/".join([self._endpoint_url, *(str(part).strip("/") for part in parts)])

    # ── public ─────────────────────────────────────────────────────────────

    async def find_by_id(self, entity_id: K) -> T:
        """Fetch ``{endpoint_url}/{entity_id}`` and convert it.

        A missing entity surfaces as the transport's own error (a 404
        ``httpx.HTTPStatusError`` with :class:`HttpxTransport`).
        """
        log = self._log.bind(service=self._service_name, operation="find_by_id", id=entity_id)
        log.debug("rest.find_by_id.start")
        try:
            response = await self._transport.get(
                self.resource_url(entity_id), headers=build_headers()
            )
        except Exception as exc:
            log.error("rest.find_by_id.failed", error=str(exc), error_type=type(exc).__name__)
            raise
        log.debug("rest.find_by_id.end")
        return self._converter.to_target(response.body)

    async def find_all(self, options: FindOptions | None = None) -> ListResult[T]:
        """List the endpoint, optionally paginated, sorted and filtered."""
        log = self._log.bind(
            service=self._service_name,
            operation="find_all",
            options=options.describe() if options else None,
        )
        log.debug("rest.find_all.start")
        result = await self.find(self._endpoint_url, options, self._converter)
        log.debug("rest.find_all.end", items=len(result.items), total=result.total)
        return result

    async def find(
        self,
        endpoint_url: str,
        options: FindOptions | None = None,
        converter: Converter[U, V] | None = None,
    ) -> ListResult[V]:
        """List any collection endpoint and decode the page headers.

        Without *converter* the items are returned as parsed from the body.
        """
        log = self._log.bind(
            service=self._service_name,
            operation="find",
            endpoint_url=endpoint_url,
            options=options.describe() if options else None,
        )
        log.debug("rest.find.start")
        request = encode(options)
        try:
            response = await self._transport.get(
                endpoint_url, headers=request.headers, params=request.params
            )
        except Exception as exc:
            log.error("rest.find.failed", error=str(exc), error_type=type(exc).__name__)
            raise
        log.debug("rest.find.end")
        return decode(response, converter)

    async def iter_all(
        self,
        options: FindOptions | None = None,
        *,
        max_pages: int = _DEFAULT_MAX_PAGES,
    ) -> AsyncIterator[T]:
        """Yield items page by page, starting at ``options.page.index``.

        Stops after the last page announced by ``X-Page-Total-Count``, on an
        empty page, or after *max_pages* requests. A server that does not send
        ``X-Page-Total-Count`` therefore yields a single page.

        Raises ``ValueError`` (on first iteration) if no page size is given.
        """
        if max_pages < 1:
            raise ValueError(f"max_pages must be >= 1, got {max_pages}")
        page = options.page if options is not None else None
        if page is None or not page.size:
            raise ValueError("iter_all requires options.page.size")

        index = page.index or 0
        for _ in range(max_pages):
            current = options.model_copy(update={"page": PageRequest(index=index, size=page.size)})
            result = await self.find_all(current)
            for item in result.items:
                yield item
            index += 1
            if not result.items or index >= result.page.total:
                break


class SimpleReadOnlyRestService(ReadOnlyRestService[K, T, T]):
    """Read-only service whose items are returned exactly as received."""

    def __init__(
        self,
        service_name: str,
        endpoint_url: str,
        transport: Transport,
        *,
        logger: Any | None = None,
    ) -> None:
        super().__init__(
            service_name, endpoint_url, transport, IdentityConverter(), logger=logger
        )
