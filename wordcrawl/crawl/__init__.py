"""Crawl package: bounded-concurrency orchestration of the scrape pipeline."""

from wordcrawl.crawl.orchestrator import Orchestrator, RunReport, TargetState
from wordcrawl.crawl.runner import Crawler, run_word_search

__all__ = ["Orchestrator", "RunReport", "TargetState", "Crawler", "run_word_search"]
