"""Find options and list results exchanged with collection endpoints."""

from __future__ import annotations

from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class SortDirection(str, Enum):
    """Sort direction; the value is the token appended to the field name."""

    ASC = "ASC"
    DESC = "DESC"


class FilterType(str, Enum):
    """Comparison operator; the value is the token placed between field and value."""

    NONE = ""
    EQUALS = "="
    NOT_EQUALS = "!="
    GREATER = ">"
    GREATER_OR_EQUAL = ">="
    LOWER = "<"
    LOWER_OR_EQUAL = "<="
    LIKE = "~"
    NOT_LIKE = "!~"


class PageRequest(BaseModel):
    """Requested page. Pagination is only sent when ``size`` is set."""

    model_config = ConfigDict(frozen=True)

    index: int | None = Field(default=None, ge=0)
    size: int | None = Field(default=None, ge=0)


class Sort(BaseModel):
    model_config = ConfigDict(frozen=True)

    field: str | None = None
    direction: SortDirection | None = None


class Filter(BaseModel):
    """A single ``field operator value`` condition.

    Every attribute is optional so that partially filled filters coming from
    a UI can be passed through; incomplete ones are skipped when encoding.
    """

    model_config = ConfigDict(frozen=True)

    field: str | None = None
    type: FilterType | None = None
    value: str | None = None


class FindOptions(BaseModel):
    """Pagination, sorting and filtering intent for one list query."""

    model_config = ConfigDict(frozen=True)

    page: PageRequest | None = None
    sort: Sort | None = None
    filters: tuple[Filter, ...] | None = None

    def describe(self) -> dict[str, Any]:
        """Compact JSON-friendly view used in log events."""
        return self.model_dump(mode="json", exclude_none=True)


class PageInfo(BaseModel):
    """Pagination state reported by the server through response headers."""

    model_config = ConfigDict(frozen=True)

    index: int = 0
    size: int = 0
    count: int = 0
    total: int = 0


class ListResult(BaseModel, Generic[T]):
    """One page of converted items plus the server's paging metadata.

    ``items`` is a tuple so the page cannot be changed after decoding.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    items: tuple[T, ...]
    page: PageInfo
    total: int = 0
