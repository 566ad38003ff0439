"""Tests for the database layer.

Most tests use an in-memory SQLite database so they are fast and isolated;
the durability tests write a real file under ``tmp_path``.
"""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Generator

import pytest

from wordcrawl.db.connection import get_connection
from wordcrawl.db.migrations import init_db, table_names
from wordcrawl.db.models import ScrapedItem, WordCount
from wordcrawl.db.store import Store, open_store
from wordcrawl.errors import StorageSchemaError


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def store() -> Generator[Store, None, None]:
    s = open_store(":memory:")
    yield s
    s.close()


# ---------------------------------------------------------------------------
# connection / init
# ---------------------------------------------------------------------------

class TestInitDb:
    def test_tables_exist(self, store: Store) -> None:
        tables = table_names(store.conn)
        assert {"scraped_data", "word_counts"} <= tables

    def test_idempotent(self) -> None:
        conn = get_connection(":memory:")
        init_db(conn)
        init_db(conn)  # must not raise
        assert "word_counts" in table_names(conn)
        conn.close()

    def test_columns(self, store: Store) -> None:
        cols = [r["name"] for r in store.conn.execute("PRAGMA table_info(word_counts)")]
        assert cols == ["id", "site", "word", "count", "timestamp"]
        cols = [r["name"] for r in store.conn.execute("PRAGMA table_info(scraped_data)")]
        assert cols == ["id", "site", "data", "timestamp"]

    def test_creates_parent_directory(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "dir" / "scraper_data.db"
        s = open_store(path)
        s.close()
        assert path.exists()


class TestOpenStoreFailures:
    def test_unopenable_path_raises_schema_error(self, tmp_path: Path) -> None:
        # A directory cannot be opened as a database file.
        with pytest.raises(StorageSchemaError):
            open_store(tmp_path)

    def test_broken_schema_raises_schema_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("wordcrawl.db.migrations._read_schema", lambda: "CREATE TABLE (")
        with pytest.raises(StorageSchemaError):
            open_store(":memory:")


# ---------------------------------------------------------------------------
# inserts
# ---------------------------------------------------------------------------

class TestInserts:
    def test_insert_scraped_item(self, store: Store) -> None:
        row_id = store.insert_scraped_item("https://example.com", "https://iana.org")
        assert row_id is not None

        items = store.list_scraped_items()
        assert len(items) == 1
        item = items[0]
        assert isinstance(item, ScrapedItem)
        assert (item.site, item.data) == ("https://example.com", "https://iana.org")
        assert item.timestamp  # defaulted by the database

    def test_insert_word_count(self, store: Store) -> None:
        store.insert_word_count("https://example.com", "example", 3)
        rows = store.list_word_counts()
        assert len(rows) == 1
        assert isinstance(rows[0], WordCount)
        assert (rows[0].site, rows[0].word, rows[0].count) == ("https://example.com", "example", 3)

    def test_repeated_observations_are_appended(self, store: Store) -> None:
        store.insert_word_count("https://example.com", "example", 1)
        store.insert_word_count("https://example.com", "example", 2)
        assert [r.count for r in store.list_word_counts()] == [1, 2]

    def test_list_scraped_items_filters_by_site(self, store: Store) -> None:
        store.insert_scraped_item("https://a.example.com", "one")
        store.insert_scraped_item("https://b.example.com", "two")
        assert [i.data for i in store.list_scraped_items("https://b.example.com")] == ["two"]

    def test_write_failure_is_logged_not_raised(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        s = open_store(":memory:")
        s.conn.execute("DROP TABLE word_counts")
        with caplog.at_level(logging.ERROR, logger="wordcrawl.db.store"):
            result = s.insert_word_count("https://example.com", "example", 1)
        s.close()

        assert result is None
        assert "Error saving word count for site https://example.com" in caplog.text

    def test_writes_survive_reopen(self, tmp_path: Path) -> None:
        path = tmp_path / "scraper_data.db"
        s = open_store(path)
        s.insert_word_count("https://example.com", "example", 4)
        s.close()

        s = open_store(path)
        assert s.query_grouped_word_counts() == {"https://example.com": {"example": 4}}
        s.close()


# ---------------------------------------------------------------------------
# clear / grouped query
# ---------------------------------------------------------------------------

class TestClearWordCounts:
    def test_clear_then_query_is_empty(self, store: Store) -> None:
        store.insert_word_count("https://example.com", "example", 1)
        store.insert_word_count("https://other.example.com", "artificial", 2)

        assert store.clear_word_counts() is True
        assert store.query_grouped_word_counts() == {}

    def test_clear_leaves_scraped_data(self, store: Store) -> None:
        store.insert_scraped_item("https://example.com", "link")
        store.clear_word_counts()
        assert len(store.list_scraped_items()) == 1

    def test_clear_failure_returns_false(self) -> None:
        s = open_store(":memory:")
        s.conn.execute("DROP TABLE word_counts")
        assert s.clear_word_counts() is False
        s.close()


class TestQueryGroupedWordCounts:
    def test_groups_by_site_then_word(self, store: Store) -> None:
        store.insert_word_count("https://b.example.com", "foo", 1)
        store.insert_word_count("https://a.example.com", "foo", 3)
        store.insert_word_count("https://a.example.com", "bar", 0)

        grouped = store.query_grouped_word_counts()

        assert grouped == {
            "https://a.example.com": {"foo": 3, "bar": 0},
            "https://b.example.com": {"foo": 1},
        }
        assert list(grouped) == ["https://a.example.com", "https://b.example.com"]

    def test_duplicate_pair_keeps_latest_insert(self, store: Store) -> None:
        store.insert_word_count("https://example.com", "example", 5)
        store.insert_word_count("https://example.com", "example", 2)

        assert store.query_grouped_word_counts() == {"https://example.com": {"example": 2}}
        # storage itself still holds both observations
        assert len(store.list_word_counts()) == 2

    def test_empty_store(self, store: Store) -> None:
        assert store.query_grouped_word_counts() == {}


def test_connection_row_factory() -> None:
    conn = get_connection(":memory:")
    row = conn.execute("SELECT 1 AS one").fetchone()
    assert isinstance(row, sqlite3.Row)
    assert row["one"] == 1
    conn.close()
