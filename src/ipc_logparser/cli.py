from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from ipc_logparser.config import DEFAULT_PROPERTIES, load_settings, log_level
from ipc_logparser.core.models import RunMode
from ipc_logparser.core.runner import run


def _configure_logging() -> None:
    level = getattr(logging, log_level(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _positive_int(s: str) -> int:
    try:
        value = int(s)
    except ValueError as e:
        raise argparse.ArgumentTypeError("workers must be an integer") from e
    if value < 1:
        raise argparse.ArgumentTypeError("workers must be >= 1")
    return value


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="ipc-logparser",
        description="Extract transaction blocks or time slices from IPC log trees.",
    )
    p.add_argument(
        "properties",
        nargs="?",
        default=DEFAULT_PROPERTIES,
        help=f"Path to the properties file (default: {DEFAULT_PROPERTIES})",
    )
    p.add_argument(
        "--mode",
        choices=[RunMode.DISCOVERY.value, RunMode.INTERVAL.value],
        default=None,
        help="Run mode when no utrnno is configured (default: from properties, else interval)",
    )
    p.add_argument("--utrnno", default=None, help="Extract blocks for this transaction only")
    p.add_argument("--zip", dest="zip", action="store_true", default=None, help="Archive the output tree")
    p.add_argument("--no-zip", dest="zip", action="store_false", help="Do not archive the output tree")
    p.add_argument("--workers", type=_positive_int, default=None, help="Parallel file tasks")
    return p


def main(argv: Sequence[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    _configure_logging()

    try:
        settings = load_settings(
            args.properties,
            mode=args.mode,
            utrnno=args.utrnno,
            zip=args.zip,
            workers=args.workers,
        )
        report = run(settings)
    except (ValueError, FileNotFoundError, NotADirectoryError) as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(2)

    for key, count in report.counts.items():
        label = "in interval" if report.mode is RunMode.INTERVAL else f"with [UTRNNO:{key}]"
        print(f"Found {count} files {label}")
    if report.archive is not None:
        print(f"Archive: {report.archive}")
    print(f"\nScanned {report.files} files.")


if __name__ == "__main__":
    main()
