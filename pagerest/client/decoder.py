"""Decode a list response (body + page headers) into a :class:`ListResult`."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx

from pagerest.client.converter import Converter
from pagerest.client.encoder import HEADER_PAGE, HEADER_PAGE_SIZE
from pagerest.client.models import ListResult, PageInfo
from pagerest.client.transport import TransportResponse

HEADER_PAGE_COUNT = "X-Page-Count"
HEADER_PAGE_TOTAL_COUNT = "X-Page-Total-Count"
HEADER_TOTAL_COUNT = "X-Total-Count"


def header_int(headers: Mapping[str, str], name: str) -> int:
    """Read an integer header; absent or unparsable values read as 0."""
    value = headers.get(name)
    if not value:
        return 0
    try:
        return int(value.strip())
    except (ValueError, TypeError):
        return 0


def _body_items(body: Any) -> list[Any]:
    if body is None:
        return []
    if isinstance(body, list):
        return body
    return [body]


def decode(
    response: TransportResponse,
    converter: Converter[Any, Any] | None = None,
) -> ListResult[Any]:
    """Build a list result from *response*.

    A missing body is an empty page and a non-list body (a lone object or
    scalar) is a page of one. Items go through
    ``converter.to_target_array`` when a converter is given and are passed
    through untouched otherwise.
    """
    items = _body_items(response.body)
    headers = httpx.Headers(response.headers)
    page = PageInfo(
        index=header_int(headers, HEADER_PAGE),
        size=header_int(headers, HEADER_PAGE_SIZE),
        count=header_int(headers, HEADER_PAGE_COUNT),
        total=header_int(headers, HEADER_PAGE_TOTAL_COUNT),
    )
    return ListResult(
        items=converter.to_target_array(items) if converter is not None else items,
        page=page,
        total=header_int(headers, HEADER_TOTAL_COUNT),
    )
