from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from .base import SERVICES, PriceObservation
from .numbers import parse_price

logger = logging.getLogger(__name__)

# "... u rangu cena od 600 RSD do 1.200 RSD, sa prosečnom cenom od 760,71 RSD ..."
DEFAULT_SENTENCE_PATTERN = (
    r"od\s*(\d[\d.\s]*)\s*RSD\s*do\s*(\d[\d.\s]*)\s*RSD.*?"
    r"prosečnom cenom od\s*(\d[\d.,\s]*)\s*RSD"
)


@dataclass(frozen=True)
class SentenceExtractor:
    """
    Reads an aggregator page that states a price range and average in one
    sentence. Emits three observations (min, max, avg) for one category.
    """

    source: str
    service: str
    pattern: str = DEFAULT_SENTENCE_PATTERN
    _regex: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.service not in SERVICES:
            raise ValueError(f"Unknown service category: {self.service!r}")
        regex = re.compile(self.pattern, re.DOTALL)
        if regex.groups != 3:
            raise ValueError(f"Sentence pattern must capture 3 groups (min, max, avg), got {regex.groups}")
        object.__setattr__(self, "_regex", regex)

    def __call__(self, text: str) -> list[PriceObservation]:
        m = self._regex.search(text)
        if m is None:
            logger.debug("No price sentence found for %s", self.source)
            return []

        low, high, avg = (parse_price(g) for g in m.groups())
        return [
            PriceObservation(self.source, self.service, low),
            PriceObservation(self.source, self.service, high),
            PriceObservation(self.source, self.service, avg),
        ]
