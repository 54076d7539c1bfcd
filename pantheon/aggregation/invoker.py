"""
pantheon/aggregation/invoker.py

Deadline-bounded invocation of a single source.

Each call runs on its own daemon thread and reports through an
``OutcomeSlot``, a single-assignment cell. The waiting side and the calling
side both try to ``claim`` the slot: the call with its real outcome, the
waiter with ``Failed(TIMEOUT)`` once the deadline passes. Whichever claims
first wins; the loser's value is dropped. A call that overruns its deadline
is abandoned, never joined.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Protocol

from pantheon.aggregation.stats import AggregationStats
from pantheon.domain.sources import (
    Empty,
    ErrorKind,
    Failed,
    SourceDescriptor,
    SourceOutcome,
    Success,
)
from pantheon.logging_utils import log_event

logger = logging.getLogger(__name__)


class SourceClient(Protocol):
    def fetch(self, endpoint: str) -> SourceOutcome:
        ...


class OutcomeSlot:
    """
    Write-once holder for one source's outcome.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._settled = threading.Event()
        self._outcome: SourceOutcome | None = None
        self.started_at = time.monotonic()

    def claim(self, outcome: SourceOutcome) -> bool:
        """
        Store ``outcome`` if the slot is still empty. Returns False otherwise.
        """

        with self._lock:
            if self._outcome is not None:
                return False
            self._outcome = outcome
        self._settled.set()
        return True

    def wait(self, timeout_seconds: float) -> bool:
        return self._settled.wait(max(0.0, timeout_seconds))

    @property
    def settled(self) -> bool:
        return self._settled.is_set()

    @property
    def outcome(self) -> SourceOutcome | None:
        with self._lock:
            return self._outcome


class BoundedInvoker:
    """
    Runs ``client.fetch`` for one source and guarantees an outcome by a deadline.

    ``invoke`` is the blocking single-source form. ``start`` and ``settle``
    split it so that many calls can be in flight before any wait begins.
    """

    def __init__(
        self,
        client: SourceClient,
        *,
        stats: AggregationStats | None = None,
    ) -> None:
        self._client = client
        self._stats = stats

    def invoke(self, source: SourceDescriptor, deadline_seconds: float) -> SourceOutcome:
        return self.settle(source, self.start(source), deadline_seconds)

    def start(self, source: SourceDescriptor) -> OutcomeSlot:
        slot = OutcomeSlot()
        worker = threading.Thread(
            target=self._call,
            args=(source, slot),
            name=f"source-fetch-{source.name}",
            daemon=True,
        )
        try:
            worker.start()
        except RuntimeError as exc:
            logger.error("Could not start fetch thread source=%s error=%s", source.name, exc)
            slot.claim(Failed(reason=ErrorKind.UNEXPECTED, detail=f"thread start failed: {exc}"))
        return slot

    def settle(
        self,
        source: SourceDescriptor,
        slot: OutcomeSlot,
        deadline_seconds: float,
    ) -> SourceOutcome:
        """
        Wait up to ``deadline_seconds`` for ``slot``; mark it timed out if still empty.
        """

        if not slot.wait(deadline_seconds):
            slot.claim(
                Failed(
                    reason=ErrorKind.TIMEOUT,
                    detail=f"no outcome within {max(0.0, deadline_seconds):.3f}s",
                )
            )

        outcome = slot.outcome
        if outcome is None:
            # claim() stores the outcome before setting the event.
            outcome = Failed(reason=ErrorKind.UNEXPECTED, detail="slot settled without outcome")

        self._report(source, slot, outcome)
        return outcome

    def _call(self, source: SourceDescriptor, slot: OutcomeSlot) -> None:
        try:
            outcome = self._client.fetch(source.endpoint)
        except Exception as exc:
            logger.exception(
                "Unhandled source client failure source=%s error=%s",
                source.name,
                exc,
            )
            outcome = Failed(reason=ErrorKind.UNEXPECTED, detail=str(exc))

        if not isinstance(outcome, (Success, Empty, Failed)):
            outcome = Failed(
                reason=ErrorKind.UNEXPECTED,
                detail=f"client returned {type(outcome).__name__}",
            )

        if not slot.claim(outcome):
            logger.debug(
                "Discarding late outcome source=%s outcome=%s",
                source.name,
                type(outcome).__name__,
            )

    def _report(
        self,
        source: SourceDescriptor,
        slot: OutcomeSlot,
        outcome: SourceOutcome,
    ) -> None:
        if self._stats is not None:
            self._stats.record(outcome)

        elapsed_ms = round((time.monotonic() - slot.started_at) * 1000.0, 1)
        if isinstance(outcome, Failed):
            log_event(
                logger,
                logging.WARNING,
                "source_failed",
                source=source.name,
                endpoint=source.endpoint,
                reason=outcome.reason.value,
                status_code=outcome.status_code,
                detail=outcome.detail,
                elapsed_ms=elapsed_ms,
            )
            return

        log_event(
            logger,
            logging.DEBUG,
            "source_succeeded",
            source=source.name,
            items=len(outcome.items),
            elapsed_ms=elapsed_ms,
        )
