from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

ENV_PREFIX = "BARBER_PRICES_"


@dataclass(frozen=True)
class Settings:
    timeout_seconds: int = 20
    max_retries: int = 3
    max_workers: int = 4
    user_agent: str = "Mozilla/5.0"
    debug: bool = False


def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(ENV_PREFIX + name, default)
    if value is None or value == "":
        return default
    return value


def _get_int(name: str, default: int) -> int:
    raw = _get_env(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from None
    if value < 1:
        raise ValueError(f"{ENV_PREFIX}{name} must be >= 1, got {value}")
    return value


def load_settings() -> Settings:
    """
    Build Settings from environment variables.

    Optional:
    - BARBER_PRICES_TIMEOUT_SECONDS
    - BARBER_PRICES_MAX_RETRIES
    - BARBER_PRICES_MAX_WORKERS
    - BARBER_PRICES_USER_AGENT
    - BARBER_PRICES_DEBUG (1/true/yes)
    """
    defaults = Settings()
    return Settings(
        timeout_seconds=_get_int("TIMEOUT_SECONDS", defaults.timeout_seconds),
        max_retries=_get_int("MAX_RETRIES", defaults.max_retries),
        max_workers=_get_int("MAX_WORKERS", defaults.max_workers),
        user_agent=_get_env("USER_AGENT", defaults.user_agent) or defaults.user_agent,
        debug=(_get_env("DEBUG", "") or "").lower() in {"1", "true", "yes"},
    )


def load_sources_config(path: Path) -> list[dict[str, Any]]:
    """Read a {"sources": [...]} JSON file; the list must be non-empty."""
    cfg = json.loads(path.read_text(encoding="utf-8"))
    sources = cfg.get("sources") if isinstance(cfg, dict) else None
    if not isinstance(sources, list) or len(sources) == 0:
        raise ValueError(f"{path}: 'sources' must be a non-empty list")
    return sources
