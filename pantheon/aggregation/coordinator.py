"""
pantheon/aggregation/coordinator.py

Fan-out of bounded source invocations behind a full barrier.
"""

from __future__ import annotations

import logging
import time
from typing import Iterable

from pantheon.aggregation.invoker import BoundedInvoker, OutcomeSlot
from pantheon.domain.sources import (
    Empty,
    Failed,
    SourceDescriptor,
    SourceOutcome,
    validate_sources,
    validate_timeout,
)
from pantheon.logging_utils import log_event

logger = logging.getLogger(__name__)


class FanOutCoordinator:
    """
    Starts one bounded invocation per source and returns once all have settled.

    Every call is started before any wait begins, and all deadlines are
    measured from that common start, so the whole run takes about
    ``per_source_timeout`` no matter how many sources hang.
    """

    def __init__(self, invoker: BoundedInvoker) -> None:
        self._invoker = invoker

    def run(
        self,
        sources: Iterable[SourceDescriptor],
        per_source_timeout: float,
    ) -> list[SourceOutcome]:
        """
        Return one outcome per source, in input order.

        Raises AggregationConfigError for an empty or duplicate source list
        or a non-positive timeout. Source failures never raise.
        """

        descriptors = validate_sources(sources)
        timeout_seconds = validate_timeout(per_source_timeout)

        started = time.monotonic()
        deadline_at = started + timeout_seconds
        slots: list[OutcomeSlot] = [self._invoker.start(source) for source in descriptors]

        outcomes: list[SourceOutcome] = [Empty()] * len(descriptors)
        for index, (source, slot) in enumerate(zip(descriptors, slots)):
            outcomes[index] = self._invoker.settle(source, slot, deadline_at - time.monotonic())

        failed = sum(1 for outcome in outcomes if isinstance(outcome, Failed))
        log_event(
            logger,
            logging.INFO,
            "fan_out_completed",
            sources=len(descriptors),
            succeeded=len(outcomes) - failed,
            failed=failed,
            elapsed_ms=round((time.monotonic() - started) * 1000.0, 1),
        )
        return outcomes
