"""HTTP fetcher with a headless-browser path for script-driven pages."""

from __future__ import annotations

import logging
import random
from typing import Optional, Sequence

import httpx

from wordcrawl.config import settings
from wordcrawl.errors import HTTPError, NetworkError, RenderError, RenderTimeout
from wordcrawl.scraper.models import FetchResult

logger = logging.getLogger(__name__)


class Fetcher:
    """Retrieves page markup either over plain HTTP or through Playwright.

    The User-Agent pool and the random source are shared by every worker and
    never mutated after construction.  The random source is seeded once here;
    it only spreads requests across the pool and makes no cryptographic
    promise.

    Args:
        user_agents: Non-empty pool to pick the ``User-Agent`` header from.
        request_timeout: Seconds allowed for a plain GET.
        render_timeout: Seconds allowed for a headless render.  Must be longer
            than *request_timeout*.
        seed: Seed for the User-Agent picker (``None`` seeds from the OS).
    """

    def __init__(
        self,
        user_agents: Optional[Sequence[str]] = None,
        request_timeout: Optional[float] = None,
        render_timeout: Optional[float] = None,
        seed: Optional[int] = None,
    ) -> None:
        pool = list(user_agents if user_agents is not None else settings.user_agents)
        if not pool:
            raise ValueError("user_agents must not be empty")
        self.user_agents = tuple(pool)
        self.request_timeout = (
            request_timeout if request_timeout is not None else settings.request_timeout
        )
        self.render_timeout = (
            render_timeout if render_timeout is not None else settings.render_timeout
        )
        if self.render_timeout <= self.request_timeout:
            raise ValueError("render_timeout must be longer than request_timeout")
        self._random = random.Random(seed)

    @classmethod
    def from_settings(cls) -> "Fetcher":
        return cls(seed=settings.random_seed)

    def pick_user_agent(self) -> str:
        return self._random.choice(self.user_agents)

    # ------------------------------------------------------------------
    # Plain path
    # ------------------------------------------------------------------
    def fetch(self, url: str) -> FetchResult:
        """GET *url* and return its body.

        Raises:
            HTTPError: If the final response status is not 2xx.
            NetworkError: On any transport failure or timeout.
        """
        headers = {"User-Agent": self.pick_user_agent()}
        try:
            with httpx.Client(
                headers=headers,
                timeout=self.request_timeout,
                follow_redirects=True,
            ) as client:
                response = client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise NetworkError(f"Error fetching {url}: {exc}", target=url) from exc

        if not response.is_success:
            raise HTTPError(
                f"unexpected status code: {response.status_code}",
                target=url,
                status_code=response.status_code,
            )

        return FetchResult(url=url, html=response.text, status_code=response.status_code)

    # ------------------------------------------------------------------
    # Rendered path
    # ------------------------------------------------------------------
    def render(self, url: str) -> FetchResult:
        """Render *url* with a headless Chromium browser and return its HTML.

        A fresh browser is launched per call and closed on every exit path.
        Playwright is imported lazily so the plain path never needs a browser
        installed.

        Raises:
            RenderTimeout: If navigation or capture exceeds ``render_timeout``.
            RenderError: On any other browser failure.
        """
        from playwright.sync_api import Error as PlaywrightError  # noqa: PLC0415
        from playwright.sync_api import TimeoutError as PlaywrightTimeoutError  # noqa: PLC0415
        from playwright.sync_api import sync_playwright  # noqa: PLC0415

        timeout_ms = int(self.render_timeout * 1000)
        try:
            with sync_playwright() as pw:
                browser = pw.chromium.launch(headless=True)
                try:
                    page = browser.new_page(user_agent=self.pick_user_agent())
                    page.set_default_timeout(timeout_ms)
                    response = page.goto(url, timeout=timeout_ms)
                    html = page.content()
                finally:
                    browser.close()
        except PlaywrightTimeoutError as exc:
            raise RenderTimeout(f"Timed out rendering {url}: {exc}", target=url) from exc
        except PlaywrightError as exc:
            raise RenderError(f"Error rendering {url}: {exc}", target=url) from exc

        status_code = response.status if response is not None else 200
        logger.debug("Rendered %s (%d chars)", url, len(html))
        return FetchResult(url=url, html=html, status_code=status_code, rendered=True)
