"""Feature events reach the core logger; a broken log database is tolerated."""
from __future__ import annotations

import logging
from pathlib import Path

import pytest

from core.qm_logging.logic.logger import logger
from documenttable.logic.feature_log import FEATURE, safe_log


@pytest.fixture
def restore_logger():
    path, persist = logger.db_path, logger.persist
    yield logger
    logger.entries.clear()
    logger.configure(db_path=path, persist=persist)


def test_event_is_recorded(restore_logger) -> None:
    logger.configure(persist=False)
    safe_log("Delete", reference_id=5, message="Document 5 deleted.")
    entry = logger.query_logs(feature=FEATURE, event="Delete")[0]
    assert entry.reference_id == "5"
    assert entry.message == "Document 5 deleted."


def test_unwritable_database_is_reported_not_raised(restore_logger, tmp_path: Path, caplog) -> None:
    # a directory cannot be opened as a database file
    logger.configure(db_path=tmp_path, persist=True)
    with caplog.at_level(logging.WARNING, logger="documenttable.logic.feature_log"):
        safe_log("Refresh", message="rows=0")
    assert "Feature log write failed" in caplog.text
