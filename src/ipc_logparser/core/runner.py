"""Run orchestration: pick the mode once, scan every file, optionally archive."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from .archive import archive_tree
from .discovery import list_log_files
from .formats import default_patterns
from .models import RunMode, RunReport
from .scanner import FileScanner
from .writer import BlockWriter

if TYPE_CHECKING:
    from ..config import ExtractorSettings

logger = logging.getLogger(__name__)


def _log_settings(settings: ExtractorSettings) -> None:
    logger.info("log.path: %s", settings.log_path)
    logger.info("out.path: %s", settings.out_path)
    logger.info("utrnno: %s", settings.utrnno)
    logger.info("date.start: %s", settings.date_start)
    logger.info("date.end: %s", settings.date_end)
    logger.info("zip: %s", settings.zip)


async def run_extraction(settings: ExtractorSettings) -> RunReport:
    """Execute one run.

    Raises FileNotFoundError / NotADirectoryError when the input root cannot
    be listed; every per-file problem is logged and skipped instead.
    """
    _log_settings(settings)
    mode = settings.run_mode()
    window = settings.window()
    patterns = default_patterns()

    files = list_log_files(settings.log_path, exclude=settings.out_path)
    logger.info("Found %d files for search (mode=%s)", len(files), mode.value)

    writer = BlockWriter(settings.out_path, window, patterns=patterns)
    scanner = FileScanner(
        window,
        writer,
        patterns=patterns,
        limits=settings.limits(),
        max_workers=settings.workers,
    )

    if mode is RunMode.FIXED:
        counters = await scanner.scan_fixed(files, settings.utrnno or "")
    elif mode is RunMode.DISCOVERY:
        counters = await scanner.scan_discovery(files)
    else:
        counters = await scanner.copy_interval(files, settings.log_path)

    report = RunReport(mode=mode, files=len(files), counts=counters.snapshot())
    if mode is RunMode.INTERVAL:
        logger.info(
            "Found %d files in interval [%s - %s]",
            counters.total(),
            window.start.isoformat(),
            window.end.isoformat(),
        )
    else:
        for identifier, count in report.counts.items():
            logger.info("Found %d files with [UTRNNO:%s]", count, identifier)

    if settings.zip:
        report.archive = await asyncio.to_thread(archive_tree, settings.out_path)

    logger.info("Done")
    return report


def run(settings: ExtractorSettings) -> RunReport:
    """Synchronous wrapper around run_extraction."""
    return asyncio.run(run_extraction(settings))
