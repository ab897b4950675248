"""Named builders for pluggable pipeline components (selectors, data sources)."""

from __future__ import annotations

from typing import Callable, Generic, Optional, Type, TypeVar

from arima_pipeline.exceptions import DependencyError
from arima_pipeline.utils.logging import get_logger

T = TypeVar("T")

log = get_logger(__name__, component="factory")


class ComponentFactory(Generic[T]):
    """Defer construction of a `kind` component registered under `name`.

    Bad keyword options surface as DependencyError, and so does a builder that
    returns something other than `expected`.
    """

    def __init__(self, kind: str, name: str, builder: Callable[[], T], expected: Optional[Type[T]] = None) -> None:
        self.kind = kind
        self.name = name
        self.builder = builder
        self.expected = expected

    def create(self) -> T:
        try:
            component = self.builder()
        except TypeError as exc:
            raise DependencyError(f"Invalid options for {self.kind} '{self.name}': {exc}") from exc
        if self.expected is not None and not isinstance(component, self.expected):
            raise DependencyError(
                f"{self.kind} '{self.name}' built {type(component).__name__}, expected {self.expected.__name__}"
            )
        log.info(
            "Component loaded",
            extra={"kind": self.kind, "factory": self.name, "type": type(component).__name__},
        )
        return component


__all__ = ["ComponentFactory"]
