"""
SQLite database utilities for the store module.
"""

from __future__ import annotations

import sqlite3
import time
from pathlib import Path


SCHEMA_SQL = """
CREATE TABLE comment (
  content TEXT, offset INT, createAt INT);

CREATE TABLE player (
  id TEXT, name TEXT, score INT, rank INT,
  correctCount INT, incorrectCount INT, correctRate REAL, createAt INT);

CREATE TABLE vote (
  playerId TEXT, questionId INT, optionId INT, time INT, isAnswer INT);

CREATE TABLE question (id INT, content TEXT);

CREATE TABLE option (
  id INT, questionId INT, content TEXT, isAnswer INT);
"""

_IDEMPOTENT_SCHEMA_SQL = SCHEMA_SQL.replace("CREATE TABLE", "CREATE TABLE IF NOT EXISTS")

TABLES = ("comment", "player", "vote", "question", "option")


def new_run_db_path(db_dir: str | Path, started_at_ms: int | None = None) -> Path:
    """Return the per-run database path ``<db_dir>/db-<unix-ms>.sqlite``."""
    if started_at_ms is None:
        started_at_ms = int(time.time() * 1000)
    return Path(db_dir) / f"db-{started_at_ms}.sqlite"


def connect(db_path: str) -> sqlite3.Connection:
    """Open a SQLite connection in autocommit mode.

    Transactions are managed explicitly with BEGIN/COMMIT/ROLLBACK by the
    caller, so the sqlite3 module never opens one implicitly.
    """
    return sqlite3.connect(db_path, isolation_level=None)


def initialize_database(connection: sqlite3.Connection) -> None:
    """Create all tables if needed, in a single transaction."""
    try:
        _ = connection.executescript("BEGIN;\n" + _IDEMPOTENT_SCHEMA_SQL + "COMMIT;\n")
    except sqlite3.Error:
        if connection.in_transaction:
            _ = connection.execute("ROLLBACK")
        raise
