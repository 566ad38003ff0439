"""Database layer package.

Public re-exports so callers can write::

    from wordcrawl.db import open_store, Store
"""

from wordcrawl.db.connection import get_connection
from wordcrawl.db.migrations import init_db
from wordcrawl.db.store import Store, open_store

__all__ = ["get_connection", "init_db", "Store", "open_store"]
