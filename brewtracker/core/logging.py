"""
BrewTracker IDs — Logging.

Every module logs through ``logging.getLogger(__name__)`` under the
``brewtracker`` namespace and leaves routing to the host application.  Hosts
without a logging setup of their own call ``brewtracker.configure_logging()``
once at startup to see the ID diagnostics.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from typing import Any, Dict, Optional

PACKAGE_LOGGER = "brewtracker"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(
    level: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> logging.Logger:
    """Route ``brewtracker`` records to ``handler`` (stderr by default).

    ``level`` falls back to the ``LOG_LEVEL`` environment variable, then
    ``INFO``; unknown names also resolve to ``INFO``.  Only the package
    logger is touched, never the root logger.  Repeated calls update the
    level without stacking handlers.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)

    name = (level or os.environ.get("LOG_LEVEL") or "INFO").upper()
    resolved = logging.getLevelName(name)
    package_logger.setLevel(resolved if isinstance(resolved, int) else logging.INFO)

    if handler is None:
        if package_logger.handlers:
            return package_logger
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))

    if handler not in package_logger.handlers:
        package_logger.addHandler(handler)
    return package_logger


def structured(event: str, payload: Dict[str, Any]) -> str:
    """Render ``event {json}`` for single-line, grep-able diagnostic records.

    Never raises: unserialisable values fall back to ``str``.
    """
    try:
        body = json.dumps(payload, default=str, sort_keys=True)
    except (TypeError, ValueError):
        body = str(payload)
    return f"{event} {body}"
