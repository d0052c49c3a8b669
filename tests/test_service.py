"""Tests for the read-only REST service operations."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from pydantic import BaseModel
from structlog.testing import capture_logs

from pagerest.client.converter import BaseConverter, ModelConverter
from pagerest.client.models import (
    Filter,
    FilterType,
    FindOptions,
    PageRequest,
    Sort,
    SortDirection,
)
from pagerest.client.service import ReadOnlyRestService, SimpleReadOnlyRestService
from pagerest.client.transport import TransportResponse

ENDPOINT = "https://api.example.test/tickets"


class Ticket(BaseModel):
    id: int
    status: str


class Comment(BaseModel):
    id: int
    text: str


class TicketService(ReadOnlyRestService[int, dict, Ticket]):
    def __init__(self, transport):
        super().__init__("TicketService", ENDPOINT, transport, ModelConverter(Ticket))

    async def find_comments(self, ticket_id: int, options: FindOptions | None = None):
        return await self.find(
            self.resource_url(ticket_id, "comments"), options, ModelConverter(Comment)
        )


def _page(body, **headers):
    return TransportResponse(status_code=200, headers=headers, body=body)


def _not_found(url: str) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", url)
    response = httpx.Response(404, request=request)
    return httpx.HTTPStatusError("404 Not Found", request=request, response=response)


# ── construction ──────────────────────────────────────────────────────────


class TestConstruction:
    def test_requires_service_name(self, transport):
        with pytest.raises(ValueError, match="service_name"):
            SimpleReadOnlyRestService("", ENDPOINT, transport)

    def test_requires_endpoint(self, transport):
        with pytest.raises(ValueError, match="endpoint_url"):
            SimpleReadOnlyRestService("Svc", "", transport)

    def test_trailing_slash_stripped(self, transport):
        svc = SimpleReadOnlyRestService("Svc", ENDPOINT + "/", transport)
        assert svc.endpoint_url == ENDPOINT
        assert svc.resource_url(5, "/children/") == f"{ENDPOINT}/5/children"


# ── find_by_id ────────────────────────────────────────────────────────────


class TestFindById:
    @pytest.mark.anyio
    async def test_success_converts_single_element(self, transport):
        transport.get = AsyncMock(return_value=_page({"id": 42, "status": "OPEN"}))
        svc = TicketService(transport)

        ticket = await svc.find_by_id(42)

        assert ticket == Ticket(id=42, status="OPEN")
        transport.get.assert_awaited_once()
        args, kwargs = transport.get.call_args
        assert args[0] == f"{ENDPOINT}/42"
        assert kwargs["headers"]["Accept"] == "application/json"

    @pytest.mark.anyio
    async def test_not_found_propagates_same_error(self, transport):
        error = _not_found(f"{ENDPOINT}/42")
        transport.get = AsyncMock(side_effect=error)
        svc = TicketService(transport)

        with capture_logs() as logs:
            with pytest.raises(httpx.HTTPStatusError) as exc_info:
                await svc.find_by_id(42)

        assert exc_info.value is error
        debug = [entry for entry in logs if entry["log_level"] == "debug"]
        errors = [entry for entry in logs if entry["log_level"] == "error"]
        assert len(debug) == 1
        assert len(errors) == 1
        assert errors[0]["event"] == "rest.find_by_id.failed"
        assert errors[0]["service"] == "TicketService"
        assert errors[0]["operation"] == "find_by_id"
        assert errors[0]["id"] == 42

    @pytest.mark.anyio
    async def test_success_logs_start_and_end(self, transport):
        transport.get = AsyncMock(return_value=_page({"id": 1, "status": "OPEN"}))
        svc = TicketService(transport)

        with capture_logs() as logs:
            await svc.find_by_id(1)

        assert [entry["event"] for entry in logs] == [
            "rest.find_by_id.start",
            "rest.find_by_id.end",
        ]


# ── find_all / find ───────────────────────────────────────────────────────


class TestFindAll:
    @pytest.mark.anyio
    async def test_request_encoding_and_conversion(self, transport):
        transport.get = AsyncMock(
            return_value=_page(
                [{"id": 1, "status": "OPEN"}, {"id": 2, "status": "OPEN"}],
                **{"X-Total-Count": "2"},
            )
        )
        converter = MagicMock()
        converter.to_target_array.return_value = ["t1", "t2"]
        svc = ReadOnlyRestService("TicketService", ENDPOINT, transport, converter)
        options = FindOptions(
            filters=[Filter(field="status", type=FilterType.EQUALS, value="OPEN")],
            sort=Sort(field="date", direction=SortDirection.DESC),
        )

        result = await svc.find_all(options)

        args, kwargs = transport.get.call_args
        assert args[0] == ENDPOINT
        assert dict(kwargs["params"]) == {"q": "status=OPEN", "s": "dateDESC"}
        assert "X-Page" not in kwargs["headers"]
        converter.to_target_array.assert_called_once_with(
            [{"id": 1, "status": "OPEN"}, {"id": 2, "status": "OPEN"}]
        )
        assert result.items == ("t1", "t2")
        assert result.total == 2

    @pytest.mark.anyio
    async def test_page_headers_sent(self, transport):
        svc = SimpleReadOnlyRestService("Svc", ENDPOINT, transport)

        await svc.find_all(FindOptions(page=PageRequest(size=50)))

        headers = transport.get.call_args.kwargs["headers"]
        assert headers["X-Page-Size"] == "50"
        assert headers["X-Page"] == "0"

    @pytest.mark.anyio
    async def test_no_options(self, transport):
        svc = SimpleReadOnlyRestService("Svc", ENDPOINT, transport)

        result = await svc.find_all()

        assert dict(transport.get.call_args.kwargs["params"]) == {}
        assert result.items == ()
        assert result.total == 0

    @pytest.mark.anyio
    async def test_failure_propagates_unchanged(self, transport):
        error = httpx.ConnectError("connection refused")
        transport.get = AsyncMock(side_effect=error)
        svc = SimpleReadOnlyRestService("Svc", ENDPOINT, transport)

        with capture_logs() as logs:
            with pytest.raises(httpx.ConnectError) as exc_info:
                await svc.find_all(FindOptions(sort=Sort(field="name")))

        assert exc_info.value is error
        errors = [entry for entry in logs if entry["log_level"] == "error"]
        assert len(errors) == 1
        assert errors[0]["event"] == "rest.find.failed"
        assert errors[0]["endpoint_url"] == ENDPOINT
        assert errors[0]["options"] == {"sort": {"field": "name"}}
        assert "rest.find_all.end" not in [entry["event"] for entry in logs]

    @pytest.mark.anyio
    async def test_find_sub_resource_with_own_converter(self, transport):
        transport.get = AsyncMock(
            return_value=_page(
                [{"id": 9, "text": "hi"}],
                **{"X-Page": "0", "X-Page-Size": "1", "X-Page-Total-Count": "4"},
            )
        )
        svc = TicketService(transport)

        result = await svc.find_comments(7, FindOptions(page=PageRequest(size=1)))

        assert transport.get.call_args.args[0] == f"{ENDPOINT}/7/comments"
        assert result.items == (Comment(id=9, text="hi"),)
        assert result.page.total == 4

    @pytest.mark.anyio
    async def test_find_without_converter_passes_items_through(self, transport):
        raw = [{"anything": True}]
        transport.get = AsyncMock(return_value=_page(raw))
        svc = TicketService(transport)

        result = await svc.find(f"{ENDPOINT}/raw")

        assert result.items == tuple(raw)


# ── iter_all ──────────────────────────────────────────────────────────────


class _Ids(BaseConverter[dict, int]):
    def to_target(self, source: dict) -> int:
        return source["id"]


class TestIterAll:
    @pytest.mark.anyio
    async def test_walks_until_last_page(self, transport):
        transport.get = AsyncMock(
            side_effect=[
                _page([{"id": 1}, {"id": 2}], **{"X-Page": "0", "X-Page-Total-Count": "2"}),
                _page([{"id": 3}], **{"X-Page": "1", "X-Page-Total-Count": "2"}),
            ]
        )
        svc = ReadOnlyRestService("Svc", ENDPOINT, transport, _Ids())

        items = [item async for item in svc.iter_all(FindOptions(page=PageRequest(size=2)))]

        assert items == [1, 2, 3]
        assert transport.get.await_count == 2
        pages = [call.kwargs["headers"]["X-Page"] for call in transport.get.call_args_list]
        assert pages == ["0", "1"]

    @pytest.mark.anyio
    async def test_keeps_sort_and_filters(self, transport):
        svc = SimpleReadOnlyRestService("Svc", ENDPOINT, transport)
        options = FindOptions(page=PageRequest(index=3, size=5), sort=Sort(field="name"))

        items = [item async for item in svc.iter_all(options)]

        assert items == []
        kwargs = transport.get.call_args.kwargs
        assert kwargs["params"]["s"] == "nameASC"
        assert kwargs["headers"]["X-Page"] == "3"

    @pytest.mark.anyio
    async def test_stops_at_max_pages(self, transport):
        transport.get = AsyncMock(
            return_value=_page([{"id": 1}], **{"X-Page-Total-Count": "100"})
        )
        svc = ReadOnlyRestService("Svc", ENDPOINT, transport, _Ids())

        options = FindOptions(page=PageRequest(size=1))

        items = [item async for item in svc.iter_all(options, max_pages=3)]

        assert items == [1, 1, 1]
        assert transport.get.await_count == 3

    @pytest.mark.anyio
    async def test_single_page_without_total_header(self, transport):
        transport.get = AsyncMock(return_value=_page([{"id": 1}]))
        svc = ReadOnlyRestService("Svc", ENDPOINT, transport, _Ids())

        items = [item async for item in svc.iter_all(FindOptions(page=PageRequest(size=1)))]

        assert items == [1]
        assert transport.get.await_count == 1

    @pytest.mark.anyio
    async def test_requires_page_size(self, transport):
        svc = SimpleReadOnlyRestService("Svc", ENDPOINT, transport)
        with pytest.raises(ValueError, match="page.size"):
            async for _ in svc.iter_all(FindOptions()):
                pass
        transport.get.assert_not_awaited()
