"""Converters between wire records and domain objects."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Generic, Protocol, TypeVar

from pydantic import BaseModel, TypeAdapter

S = TypeVar("S")
T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)


class Converter(Protocol[S, T]):
    """Maps wire records (``S``) to domain objects (``T``) and back."""

    def to_target(self, source: S) -> T: ...

    def to_target_array(self, sources: Iterable[S]) -> list[T]: ...

    def from_target(self, target: T) -> S: ...

    def from_target_array(self, targets: Iterable[T]) -> list[S]: ...


class BaseConverter(Generic[S, T]):
    """Converter whose batch methods map the single-element ones in order.

    Subclasses implement :meth:`to_target` and :meth:`from_target`.
    """

    def to_target(self, source: S) -> T:
        raise NotImplementedError

    def from_target(self, target: T) -> S:
        raise NotImplementedError

    def to_target_array(self, sources: Iterable[S]) -> list[T]:
        return [self.to_target(source) for source in sources]

    def from_target_array(self, targets: Iterable[T]) -> list[S]:
        return [self.from_target(target) for target in targets]


class IdentityConverter(BaseConverter[T, T]):
    """Returns records unchanged, for services whose wire and domain types match."""

    def to_target(self, source: T) -> T:
        return source

    def from_target(self, target: T) -> T:
        return target


class ModelConverter(BaseConverter[dict[str, Any], M]):
    """Validates JSON objects into a pydantic model and dumps them back.

    Batch conversion goes through a single ``TypeAdapter`` so validation errors
    report the offending list index.
    """

    def __init__(self, model: type[M], *, by_alias: bool = True) -> None:
        self._model = model
        self._by_alias = by_alias
        self._list_adapter: TypeAdapter[list[M]] = TypeAdapter(
            list[model]  # type: ignore[valid-type]
        )

    def to_target(self, source: dict[str, Any]) -> M:
        return self._model.model_validate(source)

    def to_target_array(self, sources: Iterable[dict[str, Any]]) -> list[M]:
        return self._list_adapter.validate_python(list(sources))

    def from_target(self, target: M) -> dict[str, Any]:
        return target.model_dump(mode="json", by_alias=self._by_alias)
