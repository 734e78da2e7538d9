from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

import pandas as pd

from .sources.base import SERVICES, PriceObservation
from .sources.numbers import truncated_mean

NOT_AVAILABLE = "N/A"


@dataclass(frozen=True)
class CategoryStats:
    min: int | None
    avg: int | None
    max: int | None

    def as_dict(self) -> dict[str, int | None]:
        return {"min": self.min, "avg": self.avg, "max": self.max}


def format_rsd(value: int | None) -> str:
    return NOT_AVAILABLE if value is None else f"{value} RSD"


def compute_stats(values: Sequence[int]) -> CategoryStats:
    if not values:
        return CategoryStats(None, None, None)
    return CategoryStats(min=min(values), avg=truncated_mean(list(values)), max=max(values))


def stats(observations: Iterable[PriceObservation], category: str) -> CategoryStats:
    """Min, truncated average and max of one category's prices; all None when it has none."""
    return compute_stats([o.price_rsd for o in observations if o.service == category])


def summarize(
    observations: Iterable[PriceObservation],
    categories: Sequence[str] = SERVICES,
) -> dict[str, CategoryStats]:
    observations = list(observations)
    return {c: stats(observations, c) for c in categories}


def observations_frame(observations: Iterable[PriceObservation]) -> pd.DataFrame:
    rows = [{"source": o.source, "service": o.service, "price_rsd": o.price_rsd} for o in observations]
    return pd.DataFrame(rows, columns=["source", "service", "price_rsd"])


def stats_frame(
    observations: Iterable[PriceObservation],
    categories: Sequence[str] = SERVICES,
) -> pd.DataFrame:
    """One row per category with min/avg/max (nullable Int64, <NA> when unknown)."""
    summary = summarize(observations, categories)
    df = pd.DataFrame.from_dict({c: s.as_dict() for c, s in summary.items()}, orient="index")
    df = df.reindex(columns=["min", "avg", "max"]).astype("Int64")
    df.index.name = "service"
    return df


def samples_by_source(observations: Iterable[PriceObservation]) -> dict[str, str]:
    """'haircut 900 RSD, beard 800 RSD' per source, in first-seen order."""
    grouped: dict[str, list[str]] = {}
    for o in observations:
        grouped.setdefault(o.source, []).append(f"{o.service} {o.price_rsd} RSD")
    return {src: ", ".join(items) for src, items in grouped.items()}
