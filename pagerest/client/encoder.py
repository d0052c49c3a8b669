"""Encode find options into request headers and query parameters.

Wire conventions:
    - ``Accept: application/json`` on every request.
    - ``X-Page-Size`` / ``X-Page`` only when a page size is requested.
    - ``q``: comma-joined ``field + operator + value`` clauses.
    - ``s``: ``field + direction``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from pagerest.client.models import Filter, FilterType, FindOptions, PageRequest, Sort, SortDirection

ACCEPT_JSON = "application/json"
HEADER_PAGE = "X-Page"
HEADER_PAGE_SIZE = "X-Page-Size"
PARAM_QUERY = "q"
PARAM_SORT = "s"

_FILTER_SEPARATOR = ","


def _frozen(data: dict[str, str]) -> Mapping[str, str]:
    return MappingProxyType(data)


@dataclass(frozen=True)
class EncodedRequest:
    """Read-only header and parameter sets for one request."""

    headers: Mapping[str, str] = field(default_factory=lambda: _frozen({}))
    params: Mapping[str, str] = field(default_factory=lambda: _frozen({}))


def build_headers(page: PageRequest | None = None) -> Mapping[str, str]:
    """Common headers plus the page headers when ``page.size`` is set."""
    headers = {"Accept": ACCEPT_JSON}
    if page is not None and page.size:
        headers[HEADER_PAGE_SIZE] = str(page.size)
        headers[HEADER_PAGE] = str(page.index or 0)
    return _frozen(headers)


def render_filter(flt: Filter) -> str | None:
    """Render one clause, or ``None`` if the filter is incomplete."""
    if not (flt.field and flt.value and flt.type) or flt.type is FilterType.NONE:
        return None
    return f"{flt.field}{flt.type.value}{flt.value}"


def build_params(
    sort: Sort | None = None,
    filters: Iterable[Filter] | None = None,
) -> Mapping[str, str]:
    params: dict[str, str] = {}

    clauses = [clause for clause in map(render_filter, filters or ()) if clause]
    if clauses:
        params[PARAM_QUERY] = _FILTER_SEPARATOR.join(clauses)

    # a sort without a field is ignored
    if sort is not None and sort.field:
        direction = sort.direction or SortDirection.ASC
        params[PARAM_SORT] = f"{sort.field}{direction.value}"

    return _frozen(params)


def encode(options: FindOptions | None = None) -> EncodedRequest:
    """Build the headers and query parameters for a list request."""
    if options is None:
        return EncodedRequest(headers=build_headers(), params=build_params())
    return EncodedRequest(
        headers=build_headers(options.page),
        params=build_params(options.sort, options.filters),
    )
