#!/usr/bin/env python3
from __future__ import annotations

"""Main entrypoint: launch the Streamlit price dashboard."""

import subprocess
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent


def main() -> int:
    cmd = [
        sys.executable,
        "-m",
        "streamlit",
        "run",
        str(REPO_ROOT / "streamlit_app.py"),
    ]
    try:
        return subprocess.call(cmd)
    except KeyboardInterrupt:
        print("\n[info] Interrupted by user (Ctrl+C). Exiting cleanly.")
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
