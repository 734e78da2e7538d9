from __future__ import annotations

import json
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

UNKNOWN_ERROR = "Unknown error"


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def json_dumps(obj: Any) -> str:
    return json.dumps(obj, ensure_ascii=False, indent=2, sort_keys=True)


@dataclass
class Timer:
    start: float

    @classmethod
    def start_new(cls) -> "Timer":
        return cls(start=time.monotonic())

    def elapsed_ms(self) -> int:
        return int((time.monotonic() - self.start) * 1000)


def failure_message(exc: BaseException) -> str:
    """Human readable description of a failure, falling back to a generic one."""
    message = str(exc).strip()
    return message or UNKNOWN_ERROR
