from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from functools import lru_cache

from .base import SERVICES, PriceObservation
from .numbers import parse_price

logger = logging.getLogger(__name__)

# Price grammars used by booking widgets and static salon pages. "{label}" is the
# escaped service name; group 1 is the price figure.
STYLES: dict[str, str] = {
    # "Šišanje . Trajanje: 30 min . Cena:900 RSD" (Setmore)
    "setmore": r"{label}\s*\.\s*Trajanje.{{0,80}}?Cena:\s*(\d[\d.]*)\s*RSD",
    # "Muško šišanje, 900 din"
    "comma_din": r"{label}\s*,?\s*(\d[\d.]*)(?:,\d*)?\s*din",
    # "Muško šišanje 30 min. 900 RSD" (Zakazite)
    "minutes_rsd": r"{label}\s*\d+\s*min\.?\s*(\d[\d.]*)(?:,\d*)?\s*RSD",
    # "Muško šišanje 30 min - 1 200 RSD" (SrediMe salon pages). Only punctuation may
    # separate the label from its price, so a price-less item never borrows the next one.
    "salon_rsd": r"{label}(?:\s*\d+\s*min\.?)?\W{{0,10}}?(\d{{1,3}}(?:[.\s]\d{{3}})+|\d+)(?:,\d*)?\s*RSD",
}

# Keeps "Brada" from matching inside "Šišanje i brada" and vice versa.
_NOT_COMBINED_BEFORE = r"(?<! i )"
_NOT_COMBINED_AFTER = r"(?!\s+i\s)"


@lru_cache(maxsize=None)
def compile_item_pattern(style: str, label: str) -> re.Pattern[str]:
    if style not in STYLES:
        raise ValueError(f"Unknown line item style: {style!r} (expected one of {sorted(STYLES)})")
    anchored = _NOT_COMBINED_BEFORE + re.escape(label) + _NOT_COMBINED_AFTER
    return re.compile(STYLES[style].format(label=anchored), re.DOTALL)


def inferred_source_name(source: str) -> str:
    """'Barbershop 1na1 (Setmore)' -> 'Barbershop 1na1 (Setmore, infer)'."""
    if source.endswith(")"):
        return source[:-1] + ", infer)"
    return f"{source} (infer)"


@dataclass(frozen=True)
class LineItem:
    service: str
    label: str


@dataclass(frozen=True)
class ComboRule:
    """A combined-service price, e.g. haircut + beard, used to fill one missing part."""

    label: str
    base: str
    infer: str


@dataclass(frozen=True)
class LineItemExtractor:
    source: str
    style: str
    items: tuple[LineItem, ...]
    combos: tuple[ComboRule, ...] = ()

    def __post_init__(self) -> None:
        for item in self.items:
            if item.service not in SERVICES:
                raise ValueError(f"Unknown service category: {item.service!r}")
            compile_item_pattern(self.style, item.label)
        for combo in self.combos:
            if combo.base == combo.infer:
                raise ValueError(f"Combo {combo.label!r} cannot infer its own base service")
            if combo.base not in SERVICES or combo.infer not in SERVICES:
                raise ValueError(f"Combo {combo.label!r} refers to an unknown service")

    def _find(self, label: str, text: str) -> int | None:
        m = compile_item_pattern(self.style, label).search(text)
        if m is None:
            return None
        return parse_price(m.group(1))

    def __call__(self, text: str) -> list[PriceObservation]:
        out: list[PriceObservation] = []
        observed: dict[str, int] = {}

        for item in self.items:
            price = self._find(item.label, text)
            if price is None:
                logger.debug("%s: no price for %r", self.source, item.label)
                continue
            out.append(PriceObservation(self.source, item.service, price))
            observed.setdefault(item.service, price)

        # Only directly observed prices feed inference.
        inferred: set[str] = set()
        for combo in self.combos:
            if combo.infer in observed or combo.infer in inferred:
                continue
            base = observed.get(combo.base)
            if base is None:
                continue
            combo_price = self._find(combo.label, text)
            if combo_price is None:
                continue
            value = combo_price - base
            if value > 0:
                out.append(PriceObservation(inferred_source_name(self.source), combo.infer, value))
                inferred.add(combo.infer)
        return out
