"""Append-only storage for scraped items and word-count observations.

A single :class:`Store` is opened at startup and handed to every crawl
worker.  Each write is its own committed statement; there are no
transactions spanning targets.  Insert failures are logged and swallowed so a
bad row never takes down a worker.
"""

from __future__ import annotations

import logging
import sqlite3
import threading
from pathlib import Path
from typing import Any, Optional, Sequence, Union

from wordcrawl.db.connection import get_connection
from wordcrawl.db.migrations import init_db
from wordcrawl.db.models import ScrapedItem, WordCount
from wordcrawl.errors import StorageSchemaError, StorageWriteError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _row_to_scraped_item(row: sqlite3.Row) -> ScrapedItem:
    return ScrapedItem(
        id=row["id"],
        site=row["site"],
        data=row["data"],
        timestamp=row["timestamp"],
    )


def _row_to_word_count(row: sqlite3.Row) -> WordCount:
    return WordCount(
        id=row["id"],
        site=row["site"],
        word=row["word"],
        count=row["count"],
        timestamp=row["timestamp"],
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

class Store:
    """Thread-shared handle over one SQLite connection.

    Args:
        conn: An open connection whose schema has already been initialised
            (see :func:`open_store`).
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def _write(self, sql: str, params: Sequence[Any] = ()) -> int:
        """Execute and commit one statement.  Returns ``lastrowid``."""
        try:
            with self._lock, self.conn:
                cursor = self.conn.execute(sql, params)
        except sqlite3.Error as exc:
            raise StorageWriteError(str(exc)) from exc
        return cursor.lastrowid

    def insert_scraped_item(self, site: str, data: str) -> Optional[int]:
        """Append one ``scraped_data`` row.

        Returns the new row id, or ``None`` if the write failed (the failure
        is logged, never raised and never retried).
        """
        try:
            return self._write(
                "INSERT INTO scraped_data (site, data) VALUES (?, ?)",
                (site, data),
            )
        except StorageWriteError as exc:
            logger.error("Error saving data for %s to database: %s", site, exc)
            return None

    def insert_word_count(self, site: str, word: str, count: int) -> Optional[int]:
        """Append one ``word_counts`` observation.  Same failure policy as
        :meth:`insert_scraped_item`."""
        try:
            return self._write(
                "INSERT INTO word_counts (site, word, count) VALUES (?, ?, ?)",
                (site, word, count),
            )
        except StorageWriteError as exc:
            logger.error("Error saving word count for site %s: %s", site, exc)
            return None

    def clear_word_counts(self) -> bool:
        """Delete every ``word_counts`` row.  Returns ``True`` on success."""
        try:
            self._write("DELETE FROM word_counts")
        except StorageWriteError as exc:
            logger.error("Error clearing word_counts table: %s", exc)
            return False
        logger.info("Cleared word_counts table.")
        return True

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def query_grouped_word_counts(self) -> dict[str, dict[str, int]]:
        """Fold all observations into ``{site: {word: count}}``.

        Rows are read ordered by site (ties broken by insertion order), so the
        outer mapping iterates in site order.  When the same ``(site, word)``
        pair was observed more than once, the most recently inserted count
        wins.
        """
        with self._lock:
            rows = self.conn.execute(
                "SELECT site, word, count FROM word_counts ORDER BY site, id"
            ).fetchall()

        grouped: dict[str, dict[str, int]] = {}
        for row in rows:
            grouped.setdefault(row["site"], {})[row["word"]] = row["count"]
        return grouped

    def list_word_counts(self) -> list[WordCount]:
        """Return every observation in insertion order."""
        with self._lock:
            rows = self.conn.execute(
                "SELECT * FROM word_counts ORDER BY id"
            ).fetchall()
        return [_row_to_word_count(r) for r in rows]

    def list_scraped_items(self, site: Optional[str] = None) -> list[ScrapedItem]:
        """Return scraped items in insertion order, optionally for one site."""
        with self._lock:
            if site:
                rows = self.conn.execute(
                    "SELECT * FROM scraped_data WHERE site = ? ORDER BY id",
                    (site,),
                ).fetchall()
            else:
                rows = self.conn.execute(
                    "SELECT * FROM scraped_data ORDER BY id"
                ).fetchall()
        return [_row_to_scraped_item(r) for r in rows]

    def close(self) -> None:
        self.conn.close()


def open_store(db_path: Optional[Union[Path, str]] = None) -> Store:
    """Open the database at *db_path* and initialise its schema.

    Raises:
        StorageSchemaError: If the file cannot be opened or the schema cannot
            be created.  Callers treat this as fatal.
    """
    try:
        conn = get_connection(db_path)
    except (sqlite3.Error, OSError) as exc:
        raise StorageSchemaError(f"Error opening database: {exc}") from exc

    try:
        init_db(conn)
    except (sqlite3.Error, OSError) as exc:
        conn.close()
        raise StorageSchemaError(f"Error creating database schema: {exc}") from exc

    return Store(conn)
