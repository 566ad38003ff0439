"""Extraction strategies and the per-target registry that selects them.

A target registered with a custom function is treated as script-driven: it is
always fetched through the headless-browser path and handed to its custom
function.  Every other target is fetched over plain HTTP and gets the default
link harvest.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Dict, List, Tuple

from wordcrawl.errors import StrategyError
from wordcrawl.scraper.document import ParsedDocument

if TYPE_CHECKING:
    from wordcrawl.db.store import Store

logger = logging.getLogger(__name__)

# A custom behaviour reads the document and writes through the store itself.
CustomFn = Callable[[ParsedDocument, "Store"], None]


class DefaultStrategy:
    """Harvest every ``<a href>`` as a scraped item."""

    requires_render = False

    def apply(
        self, target: str, document: ParsedDocument, store: "Store"
    ) -> List[Tuple[str, str]]:
        found: List[Tuple[str, str]] = []
        for anchor in document.select("a"):
            link = anchor.attr("href")
            if link is None:
                continue
            logger.info("Found link: %s", link)
            store.insert_scraped_item(target, link)
            found.append((target, link))
        return found

    def __repr__(self) -> str:
        return "DefaultStrategy()"


class CustomStrategy:
    """Wraps an injected per-site function."""

    requires_render = True

    def __init__(self, fn: CustomFn) -> None:
        self.fn = fn

    def apply(self, target: str, document: ParsedDocument, store: "Store") -> None:
        try:
            self.fn(document, store)
        except Exception as exc:
            raise StrategyError(f"Error parsing site {target}: {exc}", target=target) from exc

    def __repr__(self) -> str:
        return f"CustomStrategy({getattr(self.fn, '__name__', self.fn)!r})"


class StrategyRegistry:
    """Maps exact target identifiers to custom strategies."""

    def __init__(self) -> None:
        self._custom: Dict[str, CustomStrategy] = {}
        self._default = DefaultStrategy()

    def register(self, target: str, fn: CustomFn) -> None:
        """Attach *fn* to *target*.  Call at configuration time, before a run."""
        self._custom[target] = CustomStrategy(fn)

    def resolve(self, target: str) -> DefaultStrategy | CustomStrategy:
        return self._custom.get(target, self._default)

    def requires_render(self, target: str) -> bool:
        return target in self._custom

    def __contains__(self, target: object) -> bool:
        return target in self._custom

    def __len__(self) -> int:
        return len(self._custom)
