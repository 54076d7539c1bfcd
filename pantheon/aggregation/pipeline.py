"""
pantheon/aggregation/pipeline.py

Pure flatten -> filter -> map -> reduce over collected source outcomes.

Nothing here performs I/O. The reduction is folded with ``functools.reduce``
from the caller's identity, so ``combine`` must be commutative and
associative for the result to be independent of source order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import reduce as fold
from typing import Any, Callable, Hashable, Iterable, Iterator, Sequence, TypeVar

from pantheon.domain.sources import AggregationConfigError, SourceDescriptor, SourceOutcome

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")


def flatten(outcomes: Iterable[SourceOutcome]) -> Iterator[Any]:
    """
    Yield every item of every outcome. Failed and empty outcomes yield nothing.
    """

    for outcome in outcomes:
        yield from outcome.items


def flatten_labeled(
    sources: Sequence[SourceDescriptor],
    outcomes: Sequence[SourceOutcome],
) -> Iterator[tuple[str, Any]]:
    """
    Yield ``(source name, item)`` pairs using the order match of sources and outcomes.
    """

    if len(sources) != len(outcomes):
        raise AggregationConfigError(
            f"Got {len(outcomes)} outcomes for {len(sources)} sources."
        )
    for source, outcome in zip(sources, outcomes):
        for item in outcome.items:
            yield source.name, item


def check_functions(**functions: Any) -> None:
    """
    Fail fast when a pipeline stage function is missing.
    """

    for name, function in functions.items():
        if function is None or not callable(function):
            raise AggregationConfigError(f"Pipeline stage '{name}' must be callable.")


class ResultPipeline:
    """
    Reduces collected outcomes to one aggregate value.
    """

    def reduce(
        self,
        outcomes: Iterable[SourceOutcome],
        predicate: Callable[[T], bool],
        transform: Callable[[T], U],
        combine: Callable[[U, U], U],
        identity: U,
    ) -> U:
        return self.reduce_items(flatten(outcomes), predicate, transform, combine, identity)

    def reduce_labeled(
        self,
        sources: Sequence[SourceDescriptor],
        outcomes: Sequence[SourceOutcome],
        predicate: Callable[[tuple[str, Any]], bool],
        transform: Callable[[tuple[str, Any]], U],
        combine: Callable[[U, U], U],
        identity: U,
    ) -> U:
        return self.reduce_items(
            flatten_labeled(sources, outcomes), predicate, transform, combine, identity
        )

    def reduce_items(
        self,
        items: Iterable[T],
        predicate: Callable[[T], bool],
        transform: Callable[[T], U],
        combine: Callable[[U, U], U],
        identity: U,
    ) -> U:
        check_functions(predicate=predicate, transform=transform, combine=combine)

        kept = [item for item in items if item is not None and predicate(item)]
        logger.debug("Pipeline kept %s items after filtering", len(kept))
        return fold(combine, (transform(item) for item in kept), identity)


# ---------------------------------------------------------------------------
# Max-group reduction
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MaxGroup:
    """
    The highest value seen and every key that reached it.
    """

    value: int
    keys: frozenset[Hashable]

    @classmethod
    def empty(cls) -> "MaxGroup":
        return cls(value=0, keys=frozenset())

    @classmethod
    def of(cls, key: Hashable, value: int) -> "MaxGroup":
        return cls(value=value, keys=frozenset({key}))


def combine_max_group(left: MaxGroup, right: MaxGroup) -> MaxGroup:
    """
    Keep the larger group; merge keys on a tie.
    """

    if left.value > right.value:
        return left
    if right.value > left.value:
        return right
    return MaxGroup(value=left.value, keys=left.keys | right.keys)


def accept_all(_: Any) -> bool:
    return True
