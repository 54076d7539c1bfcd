"""
pantheon/domain package marker.
"""

from pantheon.domain.sources import (
    AggregationConfigError,
    Empty,
    ErrorKind,
    Failed,
    SourceDescriptor,
    SourceOutcome,
    Success,
)

__all__ = [
    "AggregationConfigError",
    "Empty",
    "ErrorKind",
    "Failed",
    "SourceDescriptor",
    "SourceOutcome",
    "Success",
]
