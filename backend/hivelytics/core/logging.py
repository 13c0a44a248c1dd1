from __future__ import annotations

import logging

from hivelytics.core.config import get_settings

LOG_FORMAT = '%(asctime)s %(levelname)s [%(name)s] %(message)s'


def configure_logging(level: str | None = None) -> None:
    resolved = (level or get_settings().log_level or 'INFO').upper()
    root = logging.getLogger()
    if not any(getattr(handler, '_hivelytics', False) for handler in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._hivelytics = True  # type: ignore[attr-defined]
        root.addHandler(handler)
    numeric = logging.getLevelName(resolved)
    root.setLevel(numeric if isinstance(numeric, int) else logging.INFO)
    logging.getLogger('httpx').setLevel(logging.WARNING)
