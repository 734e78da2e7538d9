from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from .config import Settings, load_settings, load_sources_config
from .errors import SourceError
from .fetch import HttpPageFetcher
from .pipeline import PipelineResult, run_pipeline
from .sources.factory import build_registry
from .stats import format_rsd, samples_by_source, summarize
from .utils import json_dumps, utc_now_iso

STAT_TITLES = {
    "haircut": "Muško šišanje (haircut)",
    "beard": "Brada / brijanje (beard)",
    "wash": "Pranje kose (wash)",
}


def _positive_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {raw!r}") from None
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {value}")
    return value


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="barber-prices", add_help=True)
    sub = p.add_subparsers(dest="cmd", required=True)

    run = sub.add_parser("run", help="Fetch all price pages and print per-service statistics.")
    run.add_argument("--config", help="JSON file with a 'sources' list (defaults to the built-in Niš pages).")
    run.add_argument("--timeout", type=_positive_int, help="Per-request timeout in seconds.")
    run.add_argument("--retries", type=_positive_int, help="Fetch attempts per page.")
    run.add_argument("--workers", type=_positive_int, help="Sources fetched concurrently (1 = sequential).")
    run.add_argument("--json", action="store_true", help="Print the result as JSON.")
    run.add_argument("--debug", action="store_true", help="Verbose logging, including tracebacks of failed sources.")
    run.add_argument(
        "--allow-partial",
        action="store_true",
        help="Exit 0 even if some sources failed (as long as one succeeded).",
    )

    src = sub.add_parser("sources", help="List the configured sources.")
    src.add_argument("--config", help="JSON file with a 'sources' list.")
    return p.parse_args(argv)


def _settings_from_args(args: argparse.Namespace) -> Settings:
    settings = load_settings()
    overrides = {
        "timeout_seconds": args.timeout,
        "max_retries": args.retries,
        "max_workers": args.workers,
    }
    settings = replace(settings, **{k: v for k, v in overrides.items() if v is not None})
    if args.debug:
        settings = replace(settings, debug=True)
    return settings


def _load_registry(config: str | None):
    cfgs = load_sources_config(Path(config).expanduser()) if config else None
    return build_registry(cfgs)


def _result_payload(result: PipelineResult) -> dict:
    return {
        "generated_at": utc_now_iso(),
        "elapsed_ms": result.elapsed_ms,
        "stats": {c: s.as_dict() for c, s in summarize(result.observations).items()},
        "sources": [
            {
                "name": run.source,
                "ok": run.ok,
                "error": run.error,
                "elapsed_ms": run.elapsed_ms,
                "observations": [
                    {"service": o.service, "price_rsd": o.price_rsd, "source": o.source} for o in run.observations
                ],
            }
            for run in result.runs
        ],
    }


def _print_report(result: PipelineResult) -> None:
    for category, s in summarize(result.observations).items():
        title = STAT_TITLES.get(category, category)
        print(f"{title}: Min {format_rsd(s.min)} | Prosek {format_rsd(s.avg)} | Max {format_rsd(s.max)}")

    print()
    print("Uzorkovani izvori (Niš):")
    for src, line in samples_by_source(result.observations).items():
        print(f"• {src}: {line}")

    for src, err in result.errors.items():
        print(f"[error] {src}: {err}", file=sys.stderr)


def _run(args: argparse.Namespace) -> int:
    try:
        settings = _settings_from_args(args)
    except ValueError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        registry = _load_registry(args.config)
    except (OSError, ValueError, SourceError) as exc:
        print(f"ERROR: invalid source config: {exc}", file=sys.stderr)
        return 2

    fetcher = HttpPageFetcher(
        timeout_seconds=settings.timeout_seconds,
        max_retries=settings.max_retries,
        user_agent=settings.user_agent,
    )
    result = run_pipeline(registry, fetcher, max_workers=settings.max_workers)

    if args.json:
        print(json_dumps(_result_payload(result)))
    else:
        _print_report(result)

    if result.all_failed:
        return 2
    return 0 if (result.ok or args.allow_partial) else 1


def _list_sources(args: argparse.Namespace) -> int:
    try:
        registry = _load_registry(args.config)
    except (OSError, ValueError, SourceError) as exc:
        print(f"ERROR: invalid source config: {exc}", file=sys.stderr)
        return 2
    for spec in registry:
        print(f"{spec.name}\t{spec.url}")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    if args.cmd == "run":
        return _run(args)
    if args.cmd == "sources":
        return _list_sources(args)

    raise RuntimeError(f"Unsupported command: {args.cmd}")


if __name__ == "__main__":
    raise SystemExit(main())
