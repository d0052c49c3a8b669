"""pagerest: paginated, sorted and filtered reads from REST collection endpoints."""

__version__ = "0.1.0"

from pagerest.client import (
    Converter,
    Filter,
    FilterType,
    FindOptions,
    HttpxTransport,
    ListResult,
    PageInfo,
    PageRequest,
    ReadOnlyRestService,
    SimpleReadOnlyRestService,
    Sort,
    SortDirection,
)
from pagerest.core.config import RestSettings

__all__ = [
    "Converter",
    "Filter",
    "FilterType",
    "FindOptions",
    "HttpxTransport",
    "ListResult",
    "PageInfo",
    "PageRequest",
    "ReadOnlyRestService",
    "RestSettings",
    "SimpleReadOnlyRestService",
    "Sort",
    "SortDirection",
]
