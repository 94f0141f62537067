"""
Feature event logging for the document table.

Wraps the host's SQLite feature logger so that a broken log database never
breaks a table action; persistence errors are reported on the standard
logging channel instead.
"""
from __future__ import annotations

import logging
import sqlite3
from typing import Any, Optional

from core.qm_logging.logic.logger import logger

FEATURE = "DocumentTable"

_log = logging.getLogger(__name__)


def safe_log(event: str, *, level: str = "INFO", reference_id: Any = None,
             message: Optional[str] = None) -> None:
    try:
        logger.log(
            FEATURE,
            event,
            level=level,
            reference_id=None if reference_id is None else str(reference_id),
            message=message,
        )
    except (sqlite3.Error, OSError) as exc:
        _log.warning("Feature log write failed (%s/%s): %s", FEATURE, event, exc)
