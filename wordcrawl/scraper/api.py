"""Ingestion of JSON API endpoints as scraped items."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from wordcrawl.errors import ParseError

if TYPE_CHECKING:
    from wordcrawl.db.store import Store
    from wordcrawl.scraper.fetcher import Fetcher

logger = logging.getLogger(__name__)


def process_api(url: str, *, fetcher: "Fetcher", store: "Store") -> int:
    """Fetch a JSON array of objects from *url* and store each one.

    Every object becomes one ``scraped_data`` row holding its compact JSON
    serialisation.

    Returns:
        The number of items stored.

    Raises:
        NetworkError, HTTPError: Propagated from the fetcher.
        ParseError: If the body is not a JSON array of objects.
    """
    raw = fetcher.fetch(url)
    try:
        payload = json.loads(raw.html)
    except json.JSONDecodeError as exc:
        raise ParseError(f"Error decoding JSON from API {url}: {exc}", target=url) from exc

    if not isinstance(payload, list) or not all(isinstance(i, dict) for i in payload):
        raise ParseError(f"API {url} did not return a list of objects", target=url)

    stored = 0
    for item in payload:
        logger.info("Data from API %s: %s", url, item)
        if store.insert_scraped_item(url, json.dumps(item, sort_keys=True)) is not None:
            stored += 1
    return stored
