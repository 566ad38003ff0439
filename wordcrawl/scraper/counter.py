"""Case-insensitive word counting over fetched pages."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from wordcrawl.errors import CrawlError
from wordcrawl.scraper.document import parse

if TYPE_CHECKING:
    from wordcrawl.db.store import Store
    from wordcrawl.scraper.fetcher import Fetcher

logger = logging.getLogger(__name__)


def count_occurrences(text: str, word: str) -> int:
    """Count non-overlapping, case-insensitive occurrences of *word* in *text*.

    Matching is a plain left-to-right substring scan, so ``"example"`` also
    matches inside ``"counterexample"``.

    Raises:
        ValueError: If *word* is empty.
    """
    if not word:
        raise ValueError("word must not be empty")
    return text.lower().count(word.lower())


def search_word_in_site(
    url: str,
    word: str,
    *,
    fetcher: "Fetcher",
    store: "Store",
) -> Optional[int]:
    """Count *word* in the body text of *url* and record the observation.

    Always uses the plain fetch path.  One ``word_counts`` row is appended
    whenever the page was fetched and parsed, including when the count is
    zero.  A fetch or parse failure is logged and returns ``None`` without
    writing anything.
    """
    if not word:
        raise ValueError("word must not be empty")

    logger.info("Searching for the word '%s' in site: %s", word, url)
    try:
        raw = fetcher.fetch(url)
        document = parse(raw.html, url=url)
    except CrawlError as exc:
        logger.error("Error searching %s for '%s' (%s): %s", url, word, exc.phase, exc)
        return None

    found = sum(count_occurrences(body.text(), word) for body in document.select("body"))
    logger.info("Found '%s' %d times in %s", word, found, url)

    store.insert_word_count(url, word, found)
    return found
