"""Centralised settings for wordcrawl.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

# Load .env from the project root (two levels up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


_DEFAULT_USER_AGENTS = [
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36",
]

_DEFAULT_TARGETS = [
    "https://example.com",
    "https://www.technologyreview.com/2024/08/30/1103385/"
    "a-new-way-to-build-neural-networks-could-make-ai-more-understandable/",
]

_DEFAULT_WORDS = ["example", "artificial"]


def _split_env(name: str, default: List[str], sep: str = ",") -> List[str]:
    """Read a *sep*-separated list from the environment, dropping blanks."""
    raw = os.environ.get(name)
    if not raw:
        return list(default)
    return [item.strip() for item in raw.split(sep) if item.strip()]


def _optional_int(name: str) -> Optional[int]:
    raw = os.environ.get(name)
    return int(raw) if raw else None


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Storage / output
    # ------------------------------------------------------------------
    db_path: Path = field(
        default_factory=lambda: Path(
            os.environ.get("WORDCRAWL_DB_PATH", "./scraper_data.db")
        )
    )
    export_path: Path = field(
        default_factory=lambda: Path(
            os.environ.get("WORDCRAWL_EXPORT_PATH", "word_counts.csv")
        )
    )

    @property
    def schema_path(self) -> Path:
        """Absolute path to the schema SQL file bundled with the package."""
        return Path(__file__).resolve().parent / "db" / "schema.sql"

    # ------------------------------------------------------------------
    # Fetcher
    # ------------------------------------------------------------------
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "10.0"))
    )
    render_timeout: float = field(
        default_factory=lambda: float(os.environ.get("RENDER_TIMEOUT", "30.0"))
    )
    # UA strings contain commas and semicolons, hence the "||" separator.
    user_agents: List[str] = field(
        default_factory=lambda: _split_env("USER_AGENTS", _DEFAULT_USER_AGENTS, sep="||")
    )
    random_seed: Optional[int] = field(
        default_factory=lambda: _optional_int("WORDCRAWL_SEED")
    )

    # ------------------------------------------------------------------
    # Crawl
    # ------------------------------------------------------------------
    concurrency: int = field(
        default_factory=lambda: int(os.environ.get("WORDCRAWL_CONCURRENCY", "5"))
    )
    targets: List[str] = field(
        default_factory=lambda: _split_env("WORDCRAWL_TARGETS", _DEFAULT_TARGETS)
    )
    words: List[str] = field(
        default_factory=lambda: _split_env("WORDCRAWL_WORDS", _DEFAULT_WORDS)
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO").upper()
    )


# Module-level singleton, import this everywhere:
#   from wordcrawl.config import settings
settings = Settings()
