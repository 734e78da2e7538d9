from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Sequence

from .errors import AllSourcesFailedError
from .fetch import PageFetcher
from .isolation import run_isolated
from .sources.base import PriceObservation, SourceRun, SourceSpec
from .utils import Timer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineResult:
    runs: tuple[SourceRun, ...]
    elapsed_ms: int

    @property
    def observations(self) -> list[PriceObservation]:
        return [obs for run in self.runs for obs in run.observations]

    @property
    def errors(self) -> dict[str, str]:
        return {run.source: run.error for run in self.runs if run.error is not None}

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def all_failed(self) -> bool:
        return bool(self.runs) and all(not run.ok for run in self.runs)


def _run_source(spec: SourceSpec, fetcher: PageFetcher) -> SourceRun:
    return run_isolated(spec.name, lambda: spec.extract(fetcher.fetch(spec.url)))


def run_pipeline(
    registry: Sequence[SourceSpec],
    fetcher: PageFetcher,
    *,
    max_workers: int = 4,
) -> PipelineResult:
    """
    Run every registered source through the isolation boundary.

    Runs come back in registry order no matter which source finishes first.
    """
    t = Timer.start_new()
    if max_workers <= 1 or len(registry) <= 1:
        runs = [_run_source(spec, fetcher) for spec in registry]
    else:
        executor = ThreadPoolExecutor(max_workers=min(max_workers, len(registry)), thread_name_prefix="source")
        try:
            futures = [executor.submit(_run_source, spec, fetcher) for spec in registry]
            runs = [f.result() for f in futures]
        except BaseException:
            # Abandoned batch: drop queued sources, nothing was written anywhere.
            executor.shutdown(wait=False, cancel_futures=True)
            raise
        executor.shutdown(wait=True)

    result = PipelineResult(runs=tuple(runs), elapsed_ms=t.elapsed_ms())
    logger.info(
        "Collected %d observations from %d sources (%d failed) in %d ms",
        len(result.observations),
        len(result.runs),
        len(result.errors),
        result.elapsed_ms,
    )
    return result


def run_all(
    registry: Sequence[SourceSpec],
    fetcher: PageFetcher,
    *,
    max_workers: int = 4,
) -> list[PriceObservation]:
    """Observations of every source in registry order; raises only if no source succeeded."""
    result = run_pipeline(registry, fetcher, max_workers=max_workers)
    if result.all_failed:
        raise AllSourcesFailedError(result.errors)
    return result.observations
