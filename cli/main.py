"""wordcrawl CLI: entry-point for a crawl run.

Usage:
    python cli/main.py --help
    python cli/main.py --clear

Counts the configured words on every configured site, records one
observation per (site, word) pair, and exports the results to CSV.
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from wordcrawl.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import logging
from typing import List, Optional

import typer

from wordcrawl.config import settings
from wordcrawl.crawl.runner import run_word_search
from wordcrawl.errors import StorageSchemaError

app = typer.Typer(
    name="wordcrawl",
    help="Concurrent word-count crawler.",
    add_completion=False,
)


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )


@app.command()
def main(
    clear: bool = typer.Option(
        False, "--clear", help="Clear the word_counts table before starting."
    ),
    target: Optional[List[str]] = typer.Option(
        None, "--target", "-t", help="Site to crawl (repeatable). Defaults to configured targets."
    ),
    word: Optional[List[str]] = typer.Option(
        None, "--word", "-w", help="Word to count (repeatable). Defaults to configured words."
    ),
    links: bool = typer.Option(
        False, "--links", help="Also harvest every link on each site into scraped_data."
    ),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="CSV file to write."),
    flat: bool = typer.Option(
        False, "--flat", help="Export one row per observation instead of one per site."
    ),
    concurrency: Optional[int] = typer.Option(
        None, "--concurrency", min=1, help="Maximum sites processed at once."
    ),
    db: Optional[Path] = typer.Option(None, "--db", help="SQLite database file."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
) -> None:
    """Count words across sites and export the results to CSV."""
    if word and any(not w for w in word):
        raise typer.BadParameter("words must not be empty", param_hint="'--word'")

    _configure_logging(verbose)

    try:
        path = run_word_search(
            targets=target or None,
            words=word or None,
            clear=clear,
            harvest_links=links,
            db_path=db,
            export_path=output,
            flat=flat,
            concurrency=concurrency,
        )
    except StorageSchemaError as exc:
        typer.echo(f"[wordcrawl] Fatal: {exc}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"[wordcrawl] Word counts exported to {path}")


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
