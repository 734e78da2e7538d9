from __future__ import annotations

import logging
import time
from typing import Protocol

import requests
from bs4 import BeautifulSoup

from .errors import FetchError

logger = logging.getLogger(__name__)


class PageFetcher(Protocol):
    def fetch(self, url: str) -> str: ...


def page_text(html: str) -> str:
    """Visible text of an HTML page, whitespace collapsed to single spaces."""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(["script", "style", "noscript"]):
        tag.decompose()
    return " ".join(soup.get_text(" ").split())


class HttpPageFetcher:
    def __init__(
        self,
        *,
        timeout_seconds: int = 20,
        max_retries: int = 3,
        user_agent: str = "Mozilla/5.0",
        session: requests.Session | None = None,
    ) -> None:
        self.timeout_seconds = timeout_seconds
        self.max_retries = max(1, max_retries)
        self.user_agent = user_agent
        self.session = session or requests.Session()

    def fetch(self, url: str) -> str:
        return page_text(self._get_with_retries(url))

    def _get_with_retries(self, url: str) -> str:
        last_exc: requests.RequestException | None = None
        for attempt in range(1, self.max_retries + 1):
            try:
                resp = self.session.get(
                    url,
                    headers={"User-Agent": self.user_agent},
                    timeout=self.timeout_seconds,
                )
                resp.raise_for_status()
                return resp.text
            except requests.HTTPError as exc:
                status = exc.response.status_code if exc.response is not None else None
                # Client errors will not improve on retry.
                if status is not None and 400 <= status < 500 and status != 429:
                    raise FetchError(url, "HTTP error", http_status=status) from exc
                last_exc = exc
            except requests.RequestException as exc:
                last_exc = exc

            if attempt < self.max_retries:
                delay = min(2 ** (attempt - 1), 8)
                logger.info("Fetch %s failed (attempt %d/%d), retrying in %ss", url, attempt, self.max_retries, delay)
                time.sleep(delay)

        assert last_exc is not None
        status = None
        if isinstance(last_exc, requests.HTTPError) and last_exc.response is not None:
            status = last_exc.response.status_code
        raise FetchError(url, str(last_exc) or type(last_exc).__name__, http_status=status) from last_exc
