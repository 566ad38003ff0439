"""High-level wiring for a crawl run.

``Crawler`` binds one store, fetcher and strategy registry to an
:class:`~wordcrawl.crawl.orchestrator.Orchestrator`; ``run_word_search`` is
the end-to-end entry point used by the CLI: open the store, optionally clear
old observations, crawl, wait for every worker, then export.
"""

from __future__ import annotations

import logging
from functools import partial
from pathlib import Path
from typing import Iterable, Optional, Sequence, Union

from wordcrawl.config import settings
from wordcrawl.crawl.orchestrator import Orchestrator, RunReport
from wordcrawl.crawl.pipeline import process_site, search_words
from wordcrawl.db.store import Store, open_store
from wordcrawl.export import export_word_counts
from wordcrawl.scraper.api import process_api
from wordcrawl.scraper.fetcher import Fetcher
from wordcrawl.scraper.strategies import StrategyRegistry

logger = logging.getLogger(__name__)


def check_words(words: Iterable[str]) -> list[str]:
    """Return *words* as a list, rejecting empty entries."""
    words = list(words)
    empty = [i for i, word in enumerate(words) if not word]
    if empty:
        raise ValueError(f"words must not be empty (positions {empty})")
    return words


class Crawler:
    """Runs pipeline units over a target list against one store."""

    def __init__(
        self,
        store: Store,
        fetcher: Optional[Fetcher] = None,
        registry: Optional[StrategyRegistry] = None,
        concurrency: Optional[int] = None,
    ) -> None:
        self.store = store
        self.fetcher = fetcher or Fetcher.from_settings()
        self.registry = registry or StrategyRegistry()
        self.orchestrator = Orchestrator(concurrency)

    def crawl(self, targets: Iterable[str]) -> RunReport:
        """Fetch each target and apply its extraction strategy."""
        unit = partial(
            process_site, fetcher=self.fetcher, registry=self.registry, store=self.store
        )
        return self.orchestrator.run(targets, unit)

    def search(self, targets: Iterable[str], words: Sequence[str]) -> RunReport:
        """Record one word-count observation per ``(target, word)`` pair.

        Raises:
            ValueError: If any word is empty.  Checked before anything is
                dispatched.
        """
        words = check_words(words)
        unit = partial(search_words, words=words, fetcher=self.fetcher, store=self.store)
        return self.orchestrator.run(targets, unit)

    def ingest_api(self, targets: Iterable[str]) -> RunReport:
        """Store every object returned by each JSON API target."""
        unit = partial(process_api, fetcher=self.fetcher, store=self.store)
        return self.orchestrator.run(targets, unit)


def run_word_search(
    targets: Optional[Sequence[str]] = None,
    words: Optional[Sequence[str]] = None,
    *,
    clear: bool = False,
    harvest_links: bool = False,
    db_path: Optional[Union[Path, str]] = None,
    export_path: Optional[Union[Path, str]] = None,
    flat: bool = False,
    concurrency: Optional[int] = None,
    fetcher: Optional[Fetcher] = None,
    registry: Optional[StrategyRegistry] = None,
) -> Path:
    """Search *words* across *targets* and export the results to CSV.

    Opens its own store for the duration of the run and closes it on exit
    (success or error).

    Returns:
        Path of the written CSV file.

    Raises:
        StorageSchemaError: If the store cannot be opened or initialised.
            Nothing is fetched in that case.
        ValueError: If any word is empty.  Raised before the store is opened.
    """
    targets = list(targets if targets is not None else settings.targets)
    words = check_words(words if words is not None else settings.words)

    store = open_store(db_path or settings.db_path)
    try:
        if clear:
            store.clear_word_counts()

        crawler = Crawler(store, fetcher=fetcher, registry=registry, concurrency=concurrency)
        if harvest_links:
            crawler.crawl(targets)

        report = crawler.search(targets, words)
        logger.info(
            "Searched %d site(s) for %d word(s); %d failed",
            len(targets),
            len(words),
            len(report.failed),
        )

        return export_word_counts(store, export_path or settings.export_path, flat=flat)
    finally:
        store.close()
