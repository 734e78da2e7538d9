from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SourceError(Exception):
    source_id: str
    message: str

    def __str__(self) -> str:  # pragma: no cover
        return f"[{self.source_id}] {self.message}"


@dataclass(eq=False)
class FetchError(Exception):
    """Network or transport failure while fetching a page."""

    url: str
    message: str
    http_status: int | None = None

    def __str__(self) -> str:
        if self.http_status is not None:
            return f"{self.message} (HTTP {self.http_status}, {self.url})"
        return f"{self.message} ({self.url})"


@dataclass(eq=False)
class ParseError(Exception):
    """A grammar matched but the captured figure is not a valid price."""

    text: str
    message: str

    def __str__(self) -> str:
        return f"{self.message}: {self.text!r}"


@dataclass(eq=False)
class AllSourcesFailedError(Exception):
    errors: dict[str, str] = field(default_factory=dict)

    def __str__(self) -> str:
        details = "; ".join(f"{k}: {v}" for k, v in self.errors.items())
        return f"All {len(self.errors)} sources failed ({details})"
