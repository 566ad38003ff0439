"""Database initialisation.

``init_db(conn)`` is idempotent, safe to call on an existing database.
"""

from __future__ import annotations

import sqlite3

from wordcrawl.config import settings


def _read_schema() -> str:
    """Load the bundled schema.sql."""
    return settings.schema_path.read_text(encoding="utf-8")


def init_db(conn: sqlite3.Connection) -> None:
    """Create the ``scraped_data`` and ``word_counts`` tables.

    This function is **idempotent**: every DDL statement uses ``IF NOT EXISTS``
    so calling it multiple times on the same database is safe.

    Args:
        conn: An open SQLite connection.
    """
    # executescript() issues an implicit COMMIT before running, which is fine
    # for a DDL-only script.
    conn.executescript(_read_schema())


def table_names(conn: sqlite3.Connection) -> set[str]:
    """Return the names of all user tables in the database."""
    rows = conn.execute(
        "SELECT name FROM sqlite_master WHERE type = 'table'"
    ).fetchall()
    return {r[0] for r in rows}
