"""CSV export of persisted word-count observations.

Two layouts are supported:

* grouped: ``Site, Words and Counts``, one row per site with every word
  flattened into ``"word: count | word: count"``;
* flat: ``Website, Word, Count``, one row per observation.

Failing to create the output file is fatal for the export; a row that cannot
be written is logged and skipped.
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Iterable, Mapping, Sequence, TextIO, Union

from wordcrawl.db.store import Store

logger = logging.getLogger(__name__)

GROUPED_HEADER = ["Site", "Words and Counts"]
FLAT_HEADER = ["Website", "Word", "Count"]


def format_word_counts(counts: Mapping[str, int]) -> str:
    """Flatten ``{word: count}`` into ``"word: count | word: count"``."""
    return " | ".join(f"{word}: {count}" for word, count in counts.items())


def _write_rows(sink: TextIO, header: Sequence[str], rows: Iterable[Sequence[str]]) -> int:
    writer = csv.writer(sink)
    writer.writerow(header)
    written = 0
    for row in rows:
        try:
            writer.writerow(row)
        except (csv.Error, OSError) as exc:
            logger.error("Error writing CSV row %r: %s", row, exc)
            continue
        written += 1
    return written


def write_grouped(store: Store, sink: TextIO) -> int:
    """Write the grouped layout to an open text stream.  Returns the row count."""
    grouped = store.query_grouped_word_counts()
    rows = ([site, format_word_counts(words)] for site, words in grouped.items())
    return _write_rows(sink, GROUPED_HEADER, rows)


def write_flat(store: Store, sink: TextIO) -> int:
    """Write the flat layout to an open text stream.  Returns the row count."""
    rows = ([wc.site, wc.word, str(wc.count)] for wc in store.list_word_counts())
    return _write_rows(sink, FLAT_HEADER, rows)


def export_word_counts(store: Store, path: Union[Path, str], flat: bool = False) -> Path:
    """Export observations to the CSV file at *path*.

    Raises:
        OSError: If the file cannot be created.
    """
    path = Path(path)
    with path.open("w", newline="", encoding="utf-8") as sink:
        if flat:
            rows = write_flat(store, sink)
        else:
            rows = write_grouped(store, sink)

    logger.info("Word counts exported to %s (%d rows)", path, rows)
    return path
