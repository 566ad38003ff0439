"""Error kinds raised by the crawl pipeline.

Every per-target failure derives from :class:`CrawlError` and carries the
``target`` being processed and the ``phase`` it failed in, so the
orchestrator can log it with context without inspecting the concrete type.
"""

from __future__ import annotations

from typing import Optional


class CrawlError(Exception):
    """Base class for all wordcrawl errors."""

    phase = "crawl"

    def __init__(self, message: str, target: Optional[str] = None) -> None:
        super().__init__(message)
        self.target = target


class NetworkError(CrawlError):
    """Transport-level failure (DNS, connection reset, timeout)."""

    phase = "fetch"


class HTTPError(CrawlError):
    """The server answered with a non-success status code."""

    phase = "fetch"

    def __init__(self, message: str, target: Optional[str] = None, status_code: int = 0) -> None:
        super().__init__(message, target)
        self.status_code = status_code


class RenderError(CrawlError):
    """The headless browser failed to navigate or serialise the page."""

    phase = "render"


class RenderTimeout(RenderError):
    """The headless browser exceeded the render timeout."""


class ParseError(CrawlError):
    """Fetched content could not be turned into a document tree."""

    phase = "parse"


class StrategyError(CrawlError):
    """A custom extraction strategy raised."""

    phase = "extract"


class StorageWriteError(CrawlError):
    """A single insert or delete against the store failed."""

    phase = "store"


class StorageSchemaError(CrawlError):
    """The store could not be opened or its schema initialised.  Fatal."""

    phase = "startup"
