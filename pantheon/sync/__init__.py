"""
pantheon/sync package marker.
"""

from pantheon.sync.catalog import GodCatalog
from pantheon.sync.scheduler import SYNC_JOB_ID, build_sync_scheduler
from pantheon.sync.service import BackgroundSyncService, SyncResult, extract_name

__all__ = [
    "BackgroundSyncService",
    "GodCatalog",
    "SYNC_JOB_ID",
    "SyncResult",
    "build_sync_scheduler",
    "extract_name",
]
