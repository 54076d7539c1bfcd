"""
Cumulative diagnostic counters for source invocations.

Counters are observational only; no aggregation result depends on them.
"""

from __future__ import annotations

import threading
from collections import Counter
from dataclasses import dataclass, field

from pantheon.domain.sources import ErrorKind, Failed, SourceOutcome


@dataclass(frozen=True)
class StatsSnapshot:
    invocations: int
    successes: int
    failures: dict[str, int] = field(default_factory=dict)

    @property
    def failure_total(self) -> int:
        return sum(self.failures.values())


class AggregationStats:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._invocations = 0
        self._successes = 0
        self._failures: Counter[ErrorKind] = Counter()

    def record(self, outcome: SourceOutcome) -> None:
        with self._lock:
            self._invocations += 1
            if isinstance(outcome, Failed):
                self._failures[outcome.reason] += 1
            else:
                self._successes += 1

    def snapshot(self) -> StatsSnapshot:
        with self._lock:
            return StatsSnapshot(
                invocations=self._invocations,
                successes=self._successes,
                failures={kind.value: count for kind, count in self._failures.items()},
            )

    def reset(self) -> None:
        with self._lock:
            self._invocations = 0
            self._successes = 0
            self._failures.clear()
