from __future__ import annotations

from functools import lru_cache

from hivelytics.core.config import get_settings
from hivelytics.services.snapshot_service import SnapshotService


@lru_cache(maxsize=1)
def get_snapshot_service() -> SnapshotService:
    return SnapshotService(settings=get_settings())
