"""Dataclass models representing DB rows.

These are plain Python objects, not ORM models.  The store serialises /
deserialises to and from these types.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScrapedItem:
    id: int
    site: str
    data: str
    timestamp: str


@dataclass
class WordCount:
    id: int
    site: str
    word: str
    count: int
    timestamp: str
