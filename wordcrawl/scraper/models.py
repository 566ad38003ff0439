"""Data models for the scraper pipeline."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class FetchResult:
    """The raw markup obtained for a single target."""

    url: str
    html: str
    status_code: int
    rendered: bool = False
