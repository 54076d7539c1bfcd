"""
tests/test_bounded_invoker.py

Deadline-bounded single-source invocation and the write-once outcome slot.
"""

from __future__ import annotations

import threading
import time

from fake_sources import HANG
from pantheon.aggregation import AggregationStats, BoundedInvoker, OutcomeSlot
from pantheon.domain.sources import Empty, ErrorKind, Failed, SourceDescriptor, Success

GREEK = SourceDescriptor(name="greek", endpoint="greek")


class TestOutcomeSlot:
    def test_first_claim_wins(self) -> None:
        slot = OutcomeSlot()
        assert slot.claim(Success(items=("Zeus",)))
        assert not slot.claim(Failed(reason=ErrorKind.TIMEOUT))
        assert slot.outcome == Success(items=("Zeus",))

    def test_wait_reports_settlement(self) -> None:
        slot = OutcomeSlot()
        assert not slot.wait(0.01)
        slot.claim(Empty())
        assert slot.wait(0.01)
        assert slot.settled

    def test_concurrent_claims_store_exactly_one(self) -> None:
        slot = OutcomeSlot()
        barrier = threading.Barrier(8)
        wins: list[bool] = []
        lock = threading.Lock()

        def _claim(index: int) -> None:
            barrier.wait()
            won = slot.claim(Success(items=(str(index),)))
            with lock:
                wins.append(won)

        threads = [threading.Thread(target=_claim, args=(i,)) for i in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert wins.count(True) == 1
        assert slot.outcome is not None


class TestBoundedInvoker:
    def test_success_within_deadline(self, fake_client_factory) -> None:
        client = fake_client_factory({"greek": ["Zeus", "Hera"]})
        outcome = BoundedInvoker(client).invoke(GREEK, 1.0)
        assert outcome == Success(items=("Zeus", "Hera"))

    def test_client_failure_value_passes_through(self, fake_client_factory) -> None:
        failure = Failed(reason=ErrorKind.HTTP_STATUS, status_code=500)
        client = fake_client_factory({"greek": failure})
        assert BoundedInvoker(client).invoke(GREEK, 1.0) == failure

    def test_deadline_elapsing_yields_timeout(self, fake_client_factory) -> None:
        client = fake_client_factory({"greek": HANG})
        started = time.monotonic()
        outcome = BoundedInvoker(client).invoke(GREEK, 0.2)
        elapsed = time.monotonic() - started

        assert isinstance(outcome, Failed)
        assert outcome.reason is ErrorKind.TIMEOUT
        assert elapsed < 1.0

    def test_late_result_is_discarded(self, fake_client_factory) -> None:
        client = fake_client_factory({"greek": HANG})
        invoker = BoundedInvoker(client)
        slot = invoker.start(GREEK)
        outcome = invoker.settle(GREEK, slot, 0.1)

        client.release()
        deadline = time.monotonic() + 2.0
        while "greek" not in client.finished and time.monotonic() < deadline:
            time.sleep(0.01)

        assert "greek" in client.finished
        assert isinstance(outcome, Failed)
        assert slot.outcome == outcome

    def test_raising_client_becomes_unexpected_failure(self, fake_client_factory) -> None:
        client = fake_client_factory({"greek": RuntimeError("boom")})
        outcome = BoundedInvoker(client).invoke(GREEK, 1.0)
        assert isinstance(outcome, Failed)
        assert outcome.reason is ErrorKind.UNEXPECTED
        assert "boom" in outcome.detail

    def test_non_outcome_return_becomes_unexpected_failure(self) -> None:
        class _BrokenClient:
            def fetch(self, endpoint: str) -> object:
                return {"not": "an outcome"}

        outcome = BoundedInvoker(_BrokenClient()).invoke(GREEK, 1.0)
        assert isinstance(outcome, Failed)
        assert outcome.reason is ErrorKind.UNEXPECTED

    def test_zero_deadline_never_blocks(self, fake_client_factory) -> None:
        client = fake_client_factory({"greek": HANG})
        outcome = BoundedInvoker(client).invoke(GREEK, 0.0)
        assert isinstance(outcome, Failed)
        assert outcome.reason is ErrorKind.TIMEOUT

    def test_stats_count_outcomes(self, fake_client_factory) -> None:
        stats = AggregationStats()
        client = fake_client_factory(
            {
                "greek": ["Zeus"],
                "roman": Failed(reason=ErrorKind.DECODE),
            }
        )
        invoker = BoundedInvoker(client, stats=stats)
        invoker.invoke(GREEK, 1.0)
        invoker.invoke(SourceDescriptor(name="roman", endpoint="roman"), 1.0)

        snapshot = stats.snapshot()
        assert snapshot.invocations == 2
        assert snapshot.successes == 1
        assert snapshot.failures == {"decode": 1}
        assert snapshot.failure_total == 1

        stats.reset()
        assert stats.snapshot().invocations == 0
