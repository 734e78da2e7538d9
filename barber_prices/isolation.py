from __future__ import annotations

import logging
from typing import Callable, Iterable

from .sources.base import PriceObservation, SourceRun
from .utils import Timer, failure_message

logger = logging.getLogger(__name__)


def run_isolated(source: str, call: Callable[[], Iterable[PriceObservation]]) -> SourceRun:
    """
    Run one source and always return a SourceRun.

    Any Exception (fetch, parse or otherwise) becomes an empty run carrying the
    error message; the whole source is discarded, never partially kept.
    """
    t = Timer.start_new()
    try:
        observations = tuple(call())
    except Exception as exc:
        logger.warning("Source %s failed: %s: %s", source, type(exc).__name__, exc, exc_info=logger.isEnabledFor(logging.DEBUG))
        return SourceRun(source=source, observations=(), error=failure_message(exc), elapsed_ms=t.elapsed_ms())

    return SourceRun(source=source, observations=observations, error=None, elapsed_ms=t.elapsed_ms())
