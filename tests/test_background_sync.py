"""
tests/test_background_sync.py

Catalog upserts, sync runs, and scheduler wiring.
"""

from __future__ import annotations

import pytest

from fake_sources import HANG
from pantheon.aggregation import build_aggregation_service
from pantheon.config import SyncSettings
from pantheon.domain.sources import ErrorKind, Failed
from pantheon.sync import (
    SYNC_JOB_ID,
    BackgroundSyncService,
    GodCatalog,
    build_sync_scheduler,
    extract_name,
)

SYNC_URL = "http://sync.test/greek"


def _sync_service(client, *, enabled: bool = True, catalog: GodCatalog | None = None, timeout: float = 1.0):
    return BackgroundSyncService(
        aggregation_service=build_aggregation_service(client),
        catalog=catalog or GodCatalog(),
        settings=SyncSettings(enabled=enabled, source_url=SYNC_URL, timeout_seconds=timeout),
    )


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


class TestGodCatalog:
    def test_upsert_is_idempotent(self) -> None:
        catalog = GodCatalog()
        assert catalog.upsert("Zeus")
        assert not catalog.upsert("Zeus")
        assert not catalog.upsert("  Zeus ")
        assert catalog.count() == 1

    def test_first_seen_is_kept(self) -> None:
        catalog = GodCatalog()
        catalog.upsert("Zeus")
        first = catalog.first_seen("Zeus")
        catalog.upsert("Zeus")
        assert catalog.first_seen("Zeus") == first

    def test_blank_name_rejected(self) -> None:
        with pytest.raises(ValueError):
            GodCatalog().upsert("   ")

    def test_names_are_sorted(self) -> None:
        catalog = GodCatalog()
        for name in ("Zeus", "Athena", "Hermes"):
            catalog.upsert(name)
        assert catalog.names() == ["Athena", "Hermes", "Zeus"]
        assert catalog.exists("Hermes")
        assert not catalog.exists("Odin")


class TestExtractName:
    @pytest.mark.parametrize(
        ("record", "expected"),
        [
            ("Zeus", "Zeus"),
            ({"name": "Zeus"}, "Zeus"),
            ({"godName": " Hera "}, "Hera"),
            ({"name": "", "fullName": "Apollo"}, "Apollo"),
            ({"deity": "Ares", "title": "Athena"}, "Athena"),
            ({"id": 1}, None),
            ("   ", None),
            (42, None),
        ],
    )
    def test_extract_name(self, record, expected) -> None:
        assert extract_name(record) == expected


# ---------------------------------------------------------------------------
# Sync runs
# ---------------------------------------------------------------------------


class TestBackgroundSyncService:
    def test_inserts_new_and_skips_duplicates(self, fake_client_factory) -> None:
        catalog = GodCatalog()
        catalog.upsert("Zeus")
        client = fake_client_factory(
            {SYNC_URL: [{"name": "Zeus"}, {"godName": "Hera"}, "Apollo", {"id": 7}]}
        )
        result = _sync_service(client, catalog=catalog).synchronize()

        assert result.inserted == 2
        assert result.duplicates_skipped == 1
        assert result.invalid_skipped == 1
        assert result.errors == 0
        assert not result.source_failed
        assert catalog.names() == ["Apollo", "Hera", "Zeus"]

    def test_store_failures_count_as_errors(self, fake_client_factory) -> None:
        class RejectingCatalog(GodCatalog):
            def upsert(self, name: str) -> bool:
                if name == "Hera":
                    raise ValueError("rejected")
                return super().upsert(name)

        catalog = RejectingCatalog()
        client = fake_client_factory({SYNC_URL: ["Zeus", "Hera", {"id": 3}]})
        result = _sync_service(client, catalog=catalog).synchronize()

        assert (result.inserted, result.invalid_skipped, result.errors) == (1, 1, 1)
        assert catalog.names() == ["Zeus"]

    def test_repeated_runs_are_idempotent(self, fake_client_factory) -> None:
        client = fake_client_factory({SYNC_URL: ["Zeus", "Hera"]})
        service = _sync_service(client)
        first = service.synchronize()
        second = service.synchronize()

        assert (first.inserted, first.duplicates_skipped) == (2, 0)
        assert (second.inserted, second.duplicates_skipped) == (0, 2)
        assert service.catalog.count() == 2
        assert first.sync_id != "" and second.sync_id != ""

    def test_source_failure_is_reported_not_raised(self, fake_client_factory) -> None:
        client = fake_client_factory({SYNC_URL: Failed(reason=ErrorKind.HTTP_STATUS, status_code=503)})
        result = _sync_service(client).synchronize()
        assert result.source_failed
        assert result.inserted == 0

    def test_slow_source_times_out(self, fake_client_factory) -> None:
        client = fake_client_factory({SYNC_URL: HANG})
        result = _sync_service(client, timeout=0.1).synchronize()
        assert result.source_failed

    def test_disabled_sync_does_not_call_source(self, fake_client_factory) -> None:
        client = fake_client_factory({SYNC_URL: ["Zeus"]})
        result = _sync_service(client, enabled=False).synchronize()
        assert result.skipped
        assert client.started_at == {}


class TestSyncScheduler:
    def test_registers_interval_job(self, fake_client_factory) -> None:
        settings = SyncSettings(interval_seconds=120.0, initial_delay_seconds=5.0)
        service = _sync_service(fake_client_factory({SYNC_URL: []}))
        scheduler = build_sync_scheduler(service, settings)

        job = scheduler.get_job(SYNC_JOB_ID)
        assert job is not None
        assert job.func == service.synchronize
        assert job.trigger.interval.total_seconds() == 120.0
        assert not scheduler.running
