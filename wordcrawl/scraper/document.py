"""Queryable document model over fetched markup.

Thin wrapper around BeautifulSoup so strategies only see selector lookups,
attribute access and text extraction.
"""

from __future__ import annotations

from typing import List, Optional

from bs4 import BeautifulSoup, Tag
from bs4.builder import ParserRejectedMarkup

from wordcrawl.errors import ParseError


class Element:
    """Handle on a single element of a :class:`ParsedDocument`."""

    def __init__(self, tag: Tag) -> None:
        self._tag = tag

    @property
    def name(self) -> str:
        return self._tag.name

    def attr(self, name: str) -> Optional[str]:
        """Return attribute *name*, or ``None`` when the element lacks it.

        Multi-valued attributes (``class``, ``rel``) are joined with spaces.
        """
        value = self._tag.get(name)
        if isinstance(value, list):
            return " ".join(value)
        return value

    def text(self) -> str:
        """Concatenated text of this element and all its descendants."""
        return self._tag.get_text()

    def select(self, selector: str) -> List["Element"]:
        return [Element(t) for t in self._tag.select(selector)]

    def __repr__(self) -> str:
        return f"<Element {self.name}>"


class ParsedDocument:
    """An HTML document tree owned by a single worker."""

    def __init__(self, soup: BeautifulSoup, url: Optional[str] = None) -> None:
        self._soup = soup
        self.url = url

    def select(self, selector: str) -> List[Element]:
        """Return every element matching the CSS *selector* (possibly none)."""
        return [Element(t) for t in self._soup.select(selector)]

    def select_one(self, selector: str) -> Optional[Element]:
        tag = self._soup.select_one(selector)
        return Element(tag) if tag is not None else None

    def text(self) -> str:
        return self._soup.get_text()


def parse(raw: str | bytes, url: Optional[str] = None) -> ParsedDocument:
    """Build a :class:`ParsedDocument` from *raw* HTML.

    ``html.parser`` is lenient, so almost any markup produces a tree.

    Raises:
        ParseError: If *raw* is not text/bytes or the parser rejects it.
    """
    if not isinstance(raw, (str, bytes)):
        raise ParseError(
            f"cannot parse content of type {type(raw).__name__}", target=url
        )
    try:
        soup = BeautifulSoup(raw, "html.parser")
    except ParserRejectedMarkup as exc:
        raise ParseError(f"Error parsing HTML: {exc}", target=url) from exc
    return ParsedDocument(soup, url=url)
