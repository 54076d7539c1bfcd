"""
pantheon/sync/scheduler.py

APScheduler wiring for the background god catalog sync.

Call ``build_sync_scheduler()`` once to get a configured, not yet started
``BackgroundScheduler``. Start it on process boot and shut it down with
``shutdown(wait=True)``.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

from apscheduler.schedulers.background import BackgroundScheduler

from pantheon.config import SyncSettings, get_sync_settings
from pantheon.sync.service import BackgroundSyncService, get_background_sync_service

logger = logging.getLogger(__name__)

SYNC_JOB_ID = "god_catalog_sync"


def build_sync_scheduler(
    service: BackgroundSyncService | None = None,
    settings: SyncSettings | None = None,
) -> BackgroundScheduler:
    service = service or get_background_sync_service()
    settings = settings or get_sync_settings()

    scheduler = BackgroundScheduler(timezone="UTC")
    first_run = datetime.now(timezone.utc) + timedelta(seconds=settings.initial_delay_seconds)
    scheduler.add_job(
        service.synchronize,
        trigger="interval",
        seconds=settings.interval_seconds,
        next_run_time=first_run,
        id=SYNC_JOB_ID,
        name="God catalog synchronization",
        replace_existing=True,
        max_instances=1,
        coalesce=True,
    )
    logger.info(
        "Scheduled god catalog sync every %.0fs starting %s",
        settings.interval_seconds,
        first_run.isoformat(),
    )
    return scheduler
