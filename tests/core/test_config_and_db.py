from __future__ import annotations

import logging

import pytest

from recommendations_api.app.core.config import Settings, settings
from recommendations_api.app.core.db import (
    MIGRATIONS,
    get_connection,
    init_db,
    read_transaction,
    write_transaction,
)
from recommendations_api.app.core.logging_config import setup_logging


def test_settings_defaults():
    s = Settings()
    assert s.api_prefix == ""
    assert s.random_high_band_weight > 1


@pytest.mark.parametrize("weight", [1.0, 0.5, 0.0, -2.0, float("inf"), float("nan")])
def test_settings_reject_weight_that_cannot_favour_high_band(weight):
    with pytest.raises(ValueError):
        Settings(random_high_band_weight=weight)


def test_settings_reject_in_memory_database():
    with pytest.raises(ValueError):
        Settings(database_url=":memory:")


def test_init_db_is_idempotent(sqlite_db):
    init_db()
    conn = get_connection()
    try:
        versions = [row[0] for row in conn.execute("SELECT version FROM migrations ORDER BY version")]
        columns = {row["name"] for row in conn.execute("PRAGMA table_info(recommendations)")}
    finally:
        conn.close()
    assert versions == [version for version, _ in MIGRATIONS]
    assert {"id", "name", "link", "score", "created_at"} <= columns


def test_write_transaction_rolls_back_on_error(sqlite_db):
    with pytest.raises(RuntimeError):
        with write_transaction() as conn:
            conn.execute("INSERT INTO recommendations (name, link) VALUES ('x', 'http://x')")
            raise RuntimeError("boom")

    with read_transaction() as conn:
        assert conn.execute("SELECT COUNT(*) FROM recommendations").fetchone()[0] == 0


def test_write_transaction_commits(sqlite_db):
    with write_transaction() as conn:
        conn.execute("INSERT INTO recommendations (name, link) VALUES ('x', 'http://x')")

    with read_transaction() as conn:
        row = conn.execute("SELECT name, score FROM recommendations").fetchone()
    assert (row["name"], row["score"]) == ("x", 0)


def test_setup_logging_only_configures_once(monkeypatch):
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", root.level)
    setup_logging("debug", logfile="")
    setup_logging("info")
    assert len(root.handlers) == 1
    assert root.level == logging.DEBUG


def test_setup_logging_reads_level_and_file_from_settings(monkeypatch, tmp_path):
    root = logging.getLogger()
    access = logging.getLogger("uvicorn.access")
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", root.level)
    monkeypatch.setattr(access, "handlers", [logging.NullHandler()])
    monkeypatch.setattr(access, "propagate", False)
    log_file = tmp_path / "logs" / "service.log"
    monkeypatch.setattr(settings, "log_level", "warning")
    monkeypatch.setattr(settings, "log_file", str(log_file))

    setup_logging()
    try:
        logging.getLogger("recommendations").warning("floor reached")
        for handler in root.handlers:
            handler.flush()

        assert root.level == logging.WARNING
        assert len(root.handlers) == 2
        assert access.handlers == [] and access.propagate is True
        assert "[WARNING] recommendations: floor reached" in log_file.read_text(encoding="utf-8")
    finally:
        for handler in root.handlers:
            handler.close()
