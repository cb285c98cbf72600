from __future__ import annotations

import argparse
from collections.abc import Iterable, Sequence
from pathlib import Path

from windowed_sieve.adapters.pacing import NoPacing, SleepPacing
from windowed_sieve.adapters.record_store import BinaryRecordStore
from windowed_sieve.config.loader import ConfigError, load_config, parse_config
from windowed_sieve.config.models import AppConfig, PacingConfig
from windowed_sieve.observability.adapters.logging import FanoutLogSink, JsonlLogSink, StderrLogSink
from windowed_sieve.observability.domain.logging import LogMessage
from windowed_sieve.ports.log_sink import LogSink
from windowed_sieve.ports.pacing import PacingPolicy
from windowed_sieve.services.exporter import export_store
from windowed_sieve.services.sieve import WindowedSieve

EXIT_OK = 0
EXIT_IO_ERROR = 1
EXIT_CONFIG_ERROR = 2

# This module stays a thin wrapper: parse flags, build config, wire adapters, run.


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="windowed-sieve",
        description="Find primes below an upper limit with a disk-backed windowed sieve",
    )
    parser.add_argument("--config", help="Path to YAML config")
    parser.add_argument("-w", "--window-size", type=int, help="Numbers sieved per window (default 100000)")
    parser.add_argument("-u", "--upper-limit", type=int, help="Exclusive upper bound (default 1000000)")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=None,
        help="Log per-window progress to stderr",
    )
    parser.add_argument(
        "-f",
        "--fast",
        action="store_true",
        default=None,
        help="Disable pacing delays",
    )
    parser.add_argument("--store", help="Override binary store path")
    parser.add_argument("--export", help="Override text export path")
    parser.add_argument("--log-path", help="Also write diagnostics to this JSONL file")
    return parser


def parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    # Parse CLI arguments; caller passes argv for testability.
    return build_parser().parse_args(argv)


def apply_cli_overrides(config: AppConfig, args: argparse.Namespace) -> AppConfig:
    # CLI flags win over config values; the merged result is validated again.
    data = config.model_dump()
    if args.window_size is not None:
        data["sieve"]["window_size"] = args.window_size
    if args.upper_limit is not None:
        data["sieve"]["upper_limit"] = args.upper_limit
    if args.verbose:
        data["logging"]["verbose"] = True
    if args.log_path is not None:
        data["logging"]["path"] = args.log_path
    if args.fast:
        data["pacing"]["fast"] = True
    if args.store is not None:
        data["output"]["store_path"] = args.store
    if args.export is not None:
        data["output"]["export_path"] = args.export
    return parse_config(data)


def build_pacing(config: PacingConfig) -> PacingPolicy:
    if config.fast:
        return NoPacing()
    return SleepPacing(cadences=config.cadences())


def cleanup_outputs(paths: Iterable[Path]) -> list[Path]:
    # Every run starts from a clean slate; returns the files that were removed.
    removed: list[Path] = []
    for path in paths:
        if path.exists():
            path.unlink()
            removed.append(path)
    return removed


def run(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    errors: LogSink = StderrLogSink()
    try:
        config = load_config(Path(args.config)) if args.config else AppConfig()
        config = apply_cli_overrides(config, args)
    except ConfigError as exc:
        errors.emit(LogMessage(level="error", message="invalid configuration", fields={"error": str(exc)}))
        return EXIT_CONFIG_ERROR

    try:
        log_file = JsonlLogSink(Path(config.logging.path)) if config.logging.path else None
    except OSError as exc:
        errors.emit(LogMessage(level="error", message="cannot open log file", fields={"error": str(exc)}))
        return EXIT_IO_ERROR
    file_sinks: list[LogSink] = [log_file] if log_file is not None else []
    errors = FanoutLogSink([errors, *file_sinks])
    diagnostics = FanoutLogSink([StderrLogSink(), *file_sinks] if config.logging.verbose else file_sinks)
    try:
        return _run_sieve(config, diagnostics=diagnostics, errors=errors)
    finally:
        if log_file is not None:
            log_file.close()


def _run_sieve(config: AppConfig, *, diagnostics: LogSink, errors: LogSink) -> int:
    store_path = Path(config.output.store_path)
    export_path = Path(config.output.export_path)
    print(f"Writing primes to {store_path} and {export_path}")
    print(f"Window size: {config.sieve.window_size}")
    print(f"Upper limit: {config.sieve.upper_limit}")

    pacing = build_pacing(config.pacing)
    try:
        removed = cleanup_outputs([store_path, export_path])
        if removed:
            diagnostics.emit(
                LogMessage(level="info", message="removed previous outputs", fields={"paths": [str(p) for p in removed]})
            )
        with BinaryRecordStore.open(store_path) as store:
            report = WindowedSieve(
                store=store,
                window_size=config.sieve.window_size,
                upper_limit=config.sieve.upper_limit,
                pacing=pacing,
                progress=diagnostics,
            ).run()
        count = export_store(
            store_path,
            export_path,
            pacing=pacing,
            atomic_replace=config.output.atomic_replace,
        )
    except OSError as exc:
        # Store failures (RecordStoreError included) are fatal; on-disk state is not trusted afterwards.
        errors.emit(
            LogMessage(
                level="error",
                message="sieve run failed",
                fields={"error": str(exc), "kind": type(exc).__name__},
            )
        )
        return EXIT_IO_ERROR

    diagnostics.emit(
        LogMessage(
            level="info",
            message="sieve complete",
            fields={"windows": len(report.windows), "record_count": report.record_count, "exported": count},
        )
    )
    print(f"Found {count} primes")
    return EXIT_OK
