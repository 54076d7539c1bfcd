"""
pantheon/sync/service.py

Periodic synchronization of the god catalog from an external records source.
"""

from __future__ import annotations

import logging
import secrets
import time
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from pantheon.aggregation import AggregationService, build_aggregation_service
from pantheon.config import SyncSettings, get_source_http_settings, get_sync_settings
from pantheon.connectors import JsonRecordsSourceClient
from pantheon.domain.sources import Failed, SourceDescriptor
from pantheon.sync.catalog import GodCatalog

logger = logging.getLogger(__name__)

NAME_FIELDS: tuple[str, ...] = ("name", "godName", "fullName", "title", "deity")


@dataclass(frozen=True)
class SyncResult:
    sync_id: str
    inserted: int = 0
    duplicates_skipped: int = 0
    invalid_skipped: int = 0
    errors: int = 0
    source_failed: bool = False
    skipped: bool = False


def extract_name(record: Any) -> str | None:
    """
    Return the god name carried by a record, or None.

    Strings are names themselves. For objects the first non-blank field of
    ``NAME_FIELDS`` wins.
    """

    if isinstance(record, str):
        return record.strip() or None
    if not isinstance(record, dict):
        return None
    for field_name in NAME_FIELDS:
        value = record.get(field_name)
        if value is not None and str(value).strip():
            return str(value).strip()
    return None


class BackgroundSyncService:
    """
    Fetches god records once per run and upserts their names into the catalog.
    """

    def __init__(
        self,
        *,
        aggregation_service: AggregationService,
        catalog: GodCatalog,
        settings: SyncSettings,
    ) -> None:
        self._aggregation_service = aggregation_service
        self._catalog = catalog
        self._settings = settings

    @property
    def catalog(self) -> GodCatalog:
        return self._catalog

    def synchronize(self) -> SyncResult:
        sync_id = _generate_sync_id()
        if not self._settings.enabled:
            logger.debug("[SYNC-%s] Background synchronization disabled", sync_id)
            return SyncResult(sync_id=sync_id, skipped=True)

        started = time.monotonic()
        logger.info("[SYNC-%s] Starting background synchronization", sync_id)

        (outcome,) = self._aggregation_service.collect(
            [SourceDescriptor(name="god-sync", endpoint=self._settings.source_url)],
            self._settings.timeout_seconds,
        )
        if isinstance(outcome, Failed):
            logger.error(
                "[SYNC-%s] Failed due to source error after %.0fms: %s %s",
                sync_id,
                (time.monotonic() - started) * 1000.0,
                outcome.reason.value,
                outcome.detail,
            )
            return SyncResult(sync_id=sync_id, source_failed=True)

        records = list(outcome.items)
        logger.info("[SYNC-%s] Fetched %s records", sync_id, len(records))

        inserted = duplicates = invalid = errors = 0
        for record in records:
            name = extract_name(record)
            if name is None:
                logger.debug("[SYNC-%s] Skipping record without name: %r", sync_id, record)
                invalid += 1
                continue
            try:
                created = self._catalog.upsert(name)
            except ValueError as exc:
                logger.warning("[SYNC-%s] Could not store %r: %s", sync_id, name, exc)
                errors += 1
                continue
            if created:
                inserted += 1
            else:
                duplicates += 1

        result = SyncResult(
            sync_id=sync_id,
            inserted=inserted,
            duplicates_skipped=duplicates,
            invalid_skipped=invalid,
            errors=errors,
        )
        logger.info(
            "[SYNC-%s] Completed in %.0fms. New: %s, Duplicates: %s, Invalid: %s, Errors: %s",
            sync_id,
            (time.monotonic() - started) * 1000.0,
            result.inserted,
            result.duplicates_skipped,
            result.invalid_skipped,
            result.errors,
        )
        return result


def _generate_sync_id() -> str:
    return f"{int(time.time())}-{secrets.randbelow(10000):04d}"


@lru_cache(maxsize=1)
def get_background_sync_service() -> BackgroundSyncService:
    """
    Build and cache the sync service with a process-wide catalog.
    """

    client = JsonRecordsSourceClient(http_settings=get_source_http_settings())
    return BackgroundSyncService(
        aggregation_service=build_aggregation_service(client),
        catalog=GodCatalog(),
        settings=get_sync_settings(),
    )
