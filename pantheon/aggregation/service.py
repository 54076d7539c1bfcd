"""
pantheon/aggregation/service.py

Single entry point wiring the fan-out into the result pipeline.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, TypeVar

from pantheon.aggregation.coordinator import FanOutCoordinator
from pantheon.aggregation.invoker import BoundedInvoker, SourceClient
from pantheon.aggregation.pipeline import ResultPipeline, check_functions
from pantheon.aggregation.stats import AggregationStats
from pantheon.domain.sources import SourceDescriptor, SourceOutcome, validate_sources

logger = logging.getLogger(__name__)

U = TypeVar("U")


class AggregationService:
    """
    Blocks until every source has settled, then reduces what arrived.

    There are no retries at this level; callers wanting one re-invoke
    ``aggregate``.
    """

    def __init__(
        self,
        *,
        coordinator: FanOutCoordinator,
        pipeline: ResultPipeline | None = None,
    ) -> None:
        self._coordinator = coordinator
        self._pipeline = pipeline or ResultPipeline()

    def collect(
        self,
        sources: Iterable[SourceDescriptor],
        timeout_seconds: float,
    ) -> list[SourceOutcome]:
        return self._coordinator.run(sources, timeout_seconds)

    def aggregate(
        self,
        sources: Iterable[SourceDescriptor],
        timeout_seconds: float,
        predicate: Callable[[Any], bool],
        transform: Callable[[Any], U],
        combine: Callable[[U, U], U],
        identity: U,
    ) -> U:
        check_functions(predicate=predicate, transform=transform, combine=combine)
        outcomes = self.collect(sources, timeout_seconds)
        return self._pipeline.reduce(outcomes, predicate, transform, combine, identity)

    def aggregate_labeled(
        self,
        sources: Iterable[SourceDescriptor],
        timeout_seconds: float,
        predicate: Callable[[tuple[str, Any]], bool],
        transform: Callable[[tuple[str, Any]], U],
        combine: Callable[[U, U], U],
        identity: U,
    ) -> U:
        """
        Like ``aggregate`` but every item reaches the pipeline paired with its source name.
        """

        check_functions(predicate=predicate, transform=transform, combine=combine)
        descriptors = validate_sources(sources)
        outcomes = self.collect(descriptors, timeout_seconds)
        return self._pipeline.reduce_labeled(
            descriptors, outcomes, predicate, transform, combine, identity
        )


def build_aggregation_service(
    client: SourceClient,
    *,
    stats: AggregationStats | None = None,
) -> AggregationService:
    invoker = BoundedInvoker(client, stats=stats)
    return AggregationService(coordinator=FanOutCoordinator(invoker))
