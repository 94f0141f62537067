"""Layered configuration: embedded defaults, env overlays, user ini."""
from __future__ import annotations

import os
from pathlib import Path

import pytest

from core.config.config_service import ConfigService, TableConfig


@pytest.fixture
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    for key in list(os.environ):
        if key.startswith("DOCTABLE_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    monkeypatch.setenv("APPDATA", str(tmp_path))
    return tmp_path


def test_embedded_defaults(isolated_env: Path) -> None:
    cfg = ConfigService()
    assert cfg.table == TableConfig()
    assert cfg.table.page_sizes == (10, 20, 30, 40, 50)
    assert cfg.general.log_to_db is False
    assert cfg.database.logging.name == "logs.db"
    assert cfg.meta_source("Table", "order_by")["layer"] == "code"


def test_env_overlay_is_typed(isolated_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DOCTABLE_TABLE__DEFAULT_PAGE_SIZE", "20")
    monkeypatch.setenv("DOCTABLE_TABLE__PAGE_SIZES", "20, 40")
    monkeypatch.setenv("DOCTABLE_GENERAL__LOG_TO_DB", "yes")
    cfg = ConfigService()
    assert cfg.table.default_page_size == 20
    assert cfg.table.page_sizes == (20, 40)
    assert cfg.general.log_to_db is True
    assert cfg.meta_source("Table", "page_sizes")["layer"] == "env"


def test_user_ini_wins_over_env(isolated_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DOCTABLE_TABLE__ORDER_BY", "DOCUMENT_NO")
    user_dir = isolated_env / "doctable"
    user_dir.mkdir()
    (user_dir / "config.ini").write_text("[Table]\norder_by = REF_SEQ_NO ASC\n", encoding="utf-8")
    (isolated_env / "DocTable").mkdir()
    (isolated_env / "DocTable" / "config.ini").write_text(
        "[Table]\norder_by = REF_SEQ_NO ASC\n", encoding="utf-8"
    )
    cfg = ConfigService()
    assert cfg.table.order_by == "REF_SEQ_NO ASC"
    assert cfg.get("Table", "order_by") == "REF_SEQ_NO ASC"
    assert cfg.meta_source("Table", "order_by")["layer"] == "user"


def test_get_with_cast(isolated_env: Path) -> None:
    cfg = ConfigService()
    assert cfg.get("Table", "default_page_size", cast=int) == 10
    assert cfg.get("Table", "include_emp_image", cast=bool) is False
    assert cfg.get("Table", "missing") is None
