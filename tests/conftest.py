from __future__ import annotations

import threading

import pytest

from barber_prices.errors import FetchError

SENTENCE_PAGE = (
    "Muško šišanje u Nišu je u rangu cena od 600 RSD do 1200 RSD, "
    "sa prosečnom cenom od 760,71 RSD. Zakažite online."
)
TOPTREND_PAGE = "Muške usluge Muško šišanje 900 din Brijanje po dogovoru"


class FakeFetcher:
    """Serves canned page text per URL; Exception values are raised instead."""

    def __init__(self, pages: dict[str, object]):
        self.pages = pages
        self.calls: list[str] = []
        self._lock = threading.Lock()

    def fetch(self, url: str) -> str:
        with self._lock:
            self.calls.append(url)
        page = self.pages.get(url)
        if page is None:
            raise FetchError(url, "Connection refused")
        if isinstance(page, Exception):
            raise page
        return str(page)


@pytest.fixture
def make_fetcher():
    return FakeFetcher


@pytest.fixture
def two_source_config():
    return [
        {
            "name": "A",
            "type": "stat_sentence",
            "url": "https://a.example/",
            "service": "haircut",
        },
        {
            "name": "B",
            "type": "line_item",
            "url": "https://b.example/",
            "style": "comma_din",
            "items": [{"service": "haircut", "label": "Muško šišanje"}],
        },
    ]


@pytest.fixture
def two_source_pages():
    return {"https://a.example/": SENTENCE_PAGE, "https://b.example/": TOPTREND_PAGE}
