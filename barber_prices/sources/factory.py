from __future__ import annotations

import re
from typing import Any, Callable

from ..errors import SourceError
from .base import BEARD, HAIRCUT, WASH, Extractor, SourceSpec
from .line_item import STYLES, ComboRule, LineItem, LineItemExtractor
from .sentence import SentenceExtractor

_ZAKAZITE_ITEMS = [
    {"service": HAIRCUT, "label": "Muško šišanje"},
    {"service": BEARD, "label": "Brada"},
    {"service": WASH, "label": "Pranje kose"},
]
_ZAKAZITE_COMBOS = [{"label": "Muško šišanje i brada", "base": HAIRCUT, "infer": BEARD}]

# Public Niš price pages. Order is the output order.
DEFAULT_SOURCES: list[dict[str, Any]] = [
    # Aggregators (broad market ranges)
    {
        "name": "SrediMe (šišanje)",
        "type": "stat_sentence",
        "url": "https://www.sredime.rs/nis/muski-frizeri/musko-sisanje",
        "service": HAIRCUT,
    },
    {
        "name": "SrediMe (pranje)",
        "type": "stat_sentence",
        "url": "https://www.sredime.rs/nis/svi-saloni/pranje-kose",
        "service": WASH,
    },
    # Individual salons / booking pages
    {
        "name": "Barbershop 1na1 (Setmore)",
        "type": "line_item",
        "url": "https://barbershop1na1booking.setmore.com/",
        "style": "setmore",
        "items": [
            {"service": HAIRCUT, "label": "Šišanje"},
            {"service": BEARD, "label": "Brada"},
        ],
        "combos": [{"label": "Šišanje i Brada", "base": HAIRCUT, "infer": BEARD}],
    },
    {
        "name": "TopTrend",
        "type": "line_item",
        "url": "https://www.toptrend.rs/muske-usluge.php",
        "style": "comma_din",
        "items": [
            {"service": HAIRCUT, "label": "Muško šišanje"},
            {"service": WASH, "label": "Pranje kose"},
        ],
    },
    # Zakazite.rs salons
    {
        "name": "Misterija (Zakazite)",
        "type": "line_item",
        "url": "https://zakazite.rs/misterija",
        "style": "minutes_rsd",
        "items": [
            {"service": HAIRCUT, "label": "Muško šišanje"},
            {"service": WASH, "label": "Pranje kose"},
        ],
    },
    {
        "name": "Mister (Zakazite)",
        "type": "line_item",
        "url": "https://zakazite.rs/mister",
        "style": "minutes_rsd",
        "items": _ZAKAZITE_ITEMS,
        "combos": _ZAKAZITE_COMBOS,
    },
    {
        "name": "Figaro Sistem (Zakazite)",
        "type": "line_item",
        "url": "https://zakazite.rs/figaro-sistem",
        "style": "minutes_rsd",
        "items": _ZAKAZITE_ITEMS,
        "combos": _ZAKAZITE_COMBOS,
    },
    {
        "name": "Šurda i sin (Zakazite)",
        "type": "line_item",
        "url": "https://zakazite.rs/shurda-i-sin",
        "style": "minutes_rsd",
        "items": _ZAKAZITE_ITEMS,
        "combos": _ZAKAZITE_COMBOS,
    },
    # SrediMe salon page
    {
        "name": "By Mistique (SrediMe)",
        "type": "line_item",
        "url": "https://www.sredime.rs/nis/salon-by-mistique",
        "style": "salon_rsd",
        "items": [{"service": HAIRCUT, "label": "Muško šišanje"}],
    },
]


def _build_sentence(name: str, cfg: dict[str, Any]) -> Extractor:
    service = cfg.get("service")
    if not service:
        raise SourceError(name, "stat_sentence requires 'service'")
    kwargs: dict[str, Any] = {"source": name, "service": service}
    if cfg.get("pattern"):
        kwargs["pattern"] = cfg["pattern"]
    return SentenceExtractor(**kwargs)


def _build_line_item(name: str, cfg: dict[str, Any]) -> Extractor:
    style = cfg.get("style")
    if style not in STYLES:
        raise SourceError(name, f"line_item requires 'style' in {sorted(STYLES)}")
    items = cfg.get("items") or []
    if not isinstance(items, list) or not items:
        raise SourceError(name, "line_item requires a non-empty 'items' list")
    try:
        return LineItemExtractor(
            source=name,
            style=style,
            items=tuple(LineItem(service=i["service"], label=i["label"]) for i in items),
            combos=tuple(
                ComboRule(label=c["label"], base=c["base"], infer=c["infer"]) for c in cfg.get("combos") or []
            ),
        )
    except KeyError as exc:
        raise SourceError(name, f"line_item entry is missing {exc}") from exc


EXTRACTOR_TYPES: dict[str, Callable[[str, dict[str, Any]], Extractor]] = {
    "stat_sentence": _build_sentence,
    "line_item": _build_line_item,
}


def build_source(source_cfg: dict[str, Any]) -> SourceSpec:
    name = source_cfg.get("name")
    source_type = source_cfg.get("type")
    url = source_cfg.get("url")
    if not name or not source_type:
        raise SourceError(name or "unknown", "Each source requires both 'name' and 'type'")
    if not url:
        raise SourceError(name, "Each source requires 'url'")

    builder = EXTRACTOR_TYPES.get(source_type)
    if builder is None:
        raise SourceError(name, f"Unsupported type: {source_type}")
    try:
        extract = builder(name, source_cfg)
    except (ValueError, re.error) as exc:
        raise SourceError(name, str(exc)) from exc
    return SourceSpec(name=name, url=url, extract=extract)


def build_registry(source_cfgs: list[dict[str, Any]] | None = None) -> list[SourceSpec]:
    """Build the ordered source registry; defaults to the Niš price pages."""
    cfgs = DEFAULT_SOURCES if source_cfgs is None else source_cfgs
    registry: list[SourceSpec] = []
    seen: set[str] = set()
    for cfg in cfgs:
        spec = build_source(cfg)
        if spec.name in seen:
            raise SourceError(spec.name, "Duplicate source name")
        seen.add(spec.name)
        registry.append(spec)
    return registry
