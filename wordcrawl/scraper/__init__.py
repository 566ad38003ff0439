"""Scraper package: fetching, parsing, extraction and word counting."""

from wordcrawl.scraper.counter import count_occurrences, search_word_in_site
from wordcrawl.scraper.document import Element, ParsedDocument, parse
from wordcrawl.scraper.fetcher import Fetcher
from wordcrawl.scraper.models import FetchResult
from wordcrawl.scraper.strategies import CustomStrategy, DefaultStrategy, StrategyRegistry

__all__ = [
    "Fetcher",
    "FetchResult",
    "parse",
    "ParsedDocument",
    "Element",
    "StrategyRegistry",
    "DefaultStrategy",
    "CustomStrategy",
    "count_occurrences",
    "search_word_in_site",
]
