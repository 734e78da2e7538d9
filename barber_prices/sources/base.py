from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

HAIRCUT = "haircut"
BEARD = "beard"
WASH = "wash"

SERVICES: tuple[str, ...] = (HAIRCUT, BEARD, WASH)


@dataclass(frozen=True)
class PriceObservation:
    source: str
    service: str
    price_rsd: int

    def __post_init__(self) -> None:
        if not self.source:
            raise ValueError("PriceObservation.source must be non-empty")
        if self.service not in SERVICES:
            raise ValueError(f"Unknown service category: {self.service!r}")
        if isinstance(self.price_rsd, bool) or not isinstance(self.price_rsd, int):
            raise TypeError(f"price_rsd must be an int, got {type(self.price_rsd).__name__}")
        if self.price_rsd < 0:
            raise ValueError(f"price_rsd must be non-negative, got {self.price_rsd}")


@dataclass(frozen=True)
class SourceRun:
    source: str
    observations: tuple[PriceObservation, ...]
    error: str | None
    elapsed_ms: int = 0

    def __post_init__(self) -> None:
        if self.error is not None and self.observations:
            raise ValueError(f"[{self.source}] a failed run cannot carry observations")

    @property
    def ok(self) -> bool:
        return self.error is None


@runtime_checkable
class Extractor(Protocol):
    def __call__(self, text: str) -> list[PriceObservation]: ...


@dataclass(frozen=True)
class SourceSpec:
    """One registry entry: where to fetch and how to read the page."""

    name: str
    url: str
    extract: Extractor
