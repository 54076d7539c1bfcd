"""
pantheon/domain/sources.py

Source descriptors and the value-typed outcome of calling one source.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


class AggregationConfigError(ValueError):
    """
    Raised when an aggregation is invoked with an invalid configuration.
    """


class ErrorKind(str, Enum):
    TRANSPORT = "transport"
    TIMEOUT = "timeout"
    HTTP_STATUS = "http_status"
    DECODE = "decode"
    UNEXPECTED = "unexpected"


@dataclass(frozen=True)
class SourceDescriptor:
    """
    One external data provider, identified by name within an invocation.
    """

    name: str
    endpoint: str


@dataclass(frozen=True)
class Success:
    items: tuple[Any, ...] = ()

    @property
    def is_failure(self) -> bool:
        return False


@dataclass(frozen=True)
class Empty:
    """
    Source answered but had no usable data.
    """

    @property
    def items(self) -> tuple[Any, ...]:
        return ()

    @property
    def is_failure(self) -> bool:
        return False


@dataclass(frozen=True)
class Failed:
    """
    Source could not contribute. Carried for diagnostics only.
    """

    reason: ErrorKind
    detail: str = ""
    status_code: int | None = None

    @property
    def items(self) -> tuple[Any, ...]:
        return ()

    @property
    def is_failure(self) -> bool:
        return True


SourceOutcome = Union[Success, Empty, Failed]


def validate_sources(sources: Any) -> list[SourceDescriptor]:
    """
    Return ``sources`` as a list after checking the caller contract.

    Raises AggregationConfigError for an empty list, a non-descriptor entry,
    or duplicate source names.
    """

    if sources is None:
        raise AggregationConfigError("At least one source must be configured.")
    descriptors = list(sources)
    if not descriptors:
        raise AggregationConfigError("At least one source must be configured.")

    seen: set[str] = set()
    for descriptor in descriptors:
        if not isinstance(descriptor, SourceDescriptor):
            raise AggregationConfigError(f"Unsupported source entry: {descriptor!r}.")
        if descriptor.name in seen:
            raise AggregationConfigError(f"Duplicate source name '{descriptor.name}'.")
        seen.add(descriptor.name)
    return descriptors


def validate_timeout(timeout_seconds: Any) -> float:
    try:
        value = float(timeout_seconds)
    except (TypeError, ValueError) as exc:
        raise AggregationConfigError(f"Invalid timeout: {timeout_seconds!r}.") from exc
    if value <= 0:
        raise AggregationConfigError(f"Timeout must be positive, got {value}.")
    return value
