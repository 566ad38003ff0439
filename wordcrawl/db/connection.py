"""SQLite connection factory.

Usage::

    from wordcrawl.db.connection import get_connection

    conn = get_connection()
    cursor = conn.execute("SELECT 1")
"""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Optional, Union

from wordcrawl.config import settings


def get_connection(db_path: Optional[Union[Path, str]] = None) -> sqlite3.Connection:
    """Open and configure a SQLite connection.

    The connection is shared by every crawl worker, so it is opened with
    ``check_same_thread=False``; the :class:`~wordcrawl.db.store.Store`
    wrapping it serialises writes.

    Args:
        db_path: Override the DB path.  Defaults to ``settings.db_path``.

    Returns:
        A configured :class:`sqlite3.Connection` with ``row_factory`` set to
        :class:`sqlite3.Row` so columns can be accessed by name.
    """
    path = db_path or settings.db_path

    # Create parent directory if needed (no-op for `:memory:`)
    if str(path) != ":memory:":
        Path(path).parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(path), check_same_thread=False)
    conn.row_factory = sqlite3.Row

    conn.execute("PRAGMA journal_mode = WAL")

    return conn
