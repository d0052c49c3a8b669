"""REST collection client: find options in, paged list results out."""

from pagerest.client.converter import BaseConverter, Converter, IdentityConverter, ModelConverter
from pagerest.client.decoder import decode, header_int
from pagerest.client.encoder import EncodedRequest, encode
from pagerest.client.models import (
    Filter,
    FilterType,
    FindOptions,
    ListResult,
    PageInfo,
    PageRequest,
    Sort,
    SortDirection,
)
from pagerest.client.service import ReadOnlyRestService, SimpleReadOnlyRestService
from pagerest.client.transport import HttpxTransport, Transport, TransportResponse

__all__ = [
    "BaseConverter",
    "Converter",
    "EncodedRequest",
    "Filter",
    "FilterType",
    "FindOptions",
    "HttpxTransport",
    "IdentityConverter",
    "ListResult",
    "ModelConverter",
    "PageInfo",
    "PageRequest",
    "ReadOnlyRestService",
    "SimpleReadOnlyRestService",
    "Sort",
    "SortDirection",
    "Transport",
    "TransportResponse",
    "decode",
    "encode",
    "header_int",
]
