"""Per-target work units: fetch, parse, then extract or count."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Optional

from wordcrawl.db.store import Store
from wordcrawl.scraper.counter import search_word_in_site
from wordcrawl.scraper.document import parse
from wordcrawl.scraper.fetcher import Fetcher
from wordcrawl.scraper.strategies import StrategyRegistry

logger = logging.getLogger(__name__)


def process_site(
    url: str,
    *,
    fetcher: Fetcher,
    registry: StrategyRegistry,
    store: Store,
) -> Any:
    """Fetch, parse and extract one target.

    The registry decides both the fetch path and the strategy: a registered
    target is rendered and handed to its custom function, anything else is
    fetched plainly and link-harvested.

    Returns:
        The strategy's outcome (the ``(site, link)`` pairs for the default
        strategy, ``None`` for custom ones).

    Raises:
        CrawlError: Any fetch, render, parse or strategy failure.  The
            orchestrator logs it and moves on.
    """
    logger.info("Processing site: %s", url)

    strategy = registry.resolve(url)
    if registry.requires_render(url):
        raw = fetcher.render(url)
    else:
        raw = fetcher.fetch(url)

    document = parse(raw.html, url=url)
    return strategy.apply(url, document, store)


def search_words(
    url: str,
    words: Iterable[str],
    *,
    fetcher: Fetcher,
    store: Store,
) -> Dict[str, Optional[int]]:
    """Run :func:`search_word_in_site` for every word against *url*.

    Failures are per ``(url, word)`` pair; a ``None`` count means nothing was
    recorded for that word.
    """
    return {
        word: search_word_in_site(url, word, fetcher=fetcher, store=store)
        for word in words
    }
