"""File scanning and aggregation.

One task per input file, bounded by a worker count. Each task reads the
whole file, runs the CPU-bound steps (classification, extraction, window
filtering) on a thread pool and hands results to the writer. Per-file
failures are logged and never abort the scan.
"""

from __future__ import annotations

import asyncio
import gzip
import logging
import os
import zlib
from collections.abc import Awaitable, Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from contextlib import asynccontextmanager
from functools import partial
from pathlib import Path

import aiofiles
from aiofiles.threadpool import wrap

from .classifier import GroupClassifier
from .counters import RunCounters
from .extractor import extract_blocks, split_lines
from .formats import ElapsedMarkerParser, ExtractionPatterns, TimestampParser, default_patterns
from .models import DateWindow, ExtractionLimits
from .writer import BlockWriter

logger = logging.getLogger(__name__)

MAX_WORKERS_ENV = "IPC_LOGPARSER_MAX_WORKERS"
INTERVAL_KEY = "interval"


@asynccontextmanager
async def _open_text(path: Path, *, encoding: str, decode_errors: str):
    """Open a log file for async text reading (plain or gzip)."""
    if path.suffix.lower() == ".gz":
        f = gzip.open(path, mode="rt", encoding=encoding, errors=decode_errors, newline="")
        af = wrap(f)
        try:
            yield af
        finally:
            await af.close()
    else:
        async with aiofiles.open(path, encoding=encoding, errors=decode_errors, newline="") as f:
            yield f


async def read_lines(path: Path, *, encoding: str = "utf-8", decode_errors: str = "surrogateescape") -> list[str]:
    """Read a whole file and split it into lines (``\\r`` is kept)."""
    async with _open_text(path, encoding=encoding, decode_errors=decode_errors) as f:
        content = await f.read()
    return split_lines(content)


def resolve_max_workers(max_workers: int | None) -> int:
    if max_workers is not None:
        if max_workers < 1:
            raise ValueError("max_workers must be >= 1")
        return max_workers

    env = os.getenv(MAX_WORKERS_ENV)
    if env:
        try:
            value = int(env)
        except ValueError as exc:
            raise ValueError(f"{MAX_WORKERS_ENV} must be an integer") from exc
        if value < 1:
            raise ValueError(f"{MAX_WORKERS_ENV} must be >= 1")
        return value

    cpu_count = os.cpu_count() or 1
    return min(32, cpu_count)


class FileScanner:
    """Run block extraction or interval copying over a set of files."""

    def __init__(
        self,
        window: DateWindow,
        writer: BlockWriter,
        *,
        parser: TimestampParser | None = None,
        patterns: ExtractionPatterns | None = None,
        limits: ExtractionLimits | None = None,
        classifier: GroupClassifier | None = None,
        max_workers: int | None = None,
        encoding: str = "utf-8",
        decode_errors: str = "surrogateescape",
    ) -> None:
        self.window = window
        self.writer = writer
        self.parser = parser or ElapsedMarkerParser()
        self.patterns = patterns or default_patterns()
        self.limits = limits or ExtractionLimits()
        self.classifier = classifier or GroupClassifier()
        self.max_workers = resolve_max_workers(max_workers)
        self.encoding = encoding
        self.decode_errors = decode_errors

    async def _for_each_file(
        self,
        files: Sequence[Path],
        task: Callable[[Path, ThreadPoolExecutor], Awaitable[None]],
    ) -> None:
        semaphore = asyncio.Semaphore(self.max_workers)
        executor = ThreadPoolExecutor(max_workers=self.max_workers)

        async def guarded(path: Path) -> None:
            async with semaphore:
                await task(path, executor)

        try:
            await asyncio.gather(*(guarded(p) for p in files))
        finally:
            await asyncio.to_thread(executor.shutdown, wait=True)

    async def _read(self, path: Path) -> list[str] | None:
        try:
            return await read_lines(path, encoding=self.encoding, decode_errors=self.decode_errors)
        except (OSError, UnicodeError, EOFError, zlib.error) as e:
            logger.error("Failed read file %s: %s", path, e)
            return None

    async def _extract(
        self, path: Path, executor: ThreadPoolExecutor, target: str | None
    ) -> tuple[int, dict[str, str]] | None:
        lines = await self._read(path)
        if lines is None:
            return None

        loop = asyncio.get_running_loop()
        tag = await loop.run_in_executor(executor, self.classifier.classify, lines)
        blocks = await loop.run_in_executor(
            executor,
            partial(
                extract_blocks,
                lines,
                self.window,
                target=target,
                parser=self.parser,
                patterns=self.patterns,
                limits=self.limits,
            ),
        )
        return tag, blocks

    async def scan_fixed(self, files: Sequence[Path], identifier: str) -> RunCounters:
        """Extract blocks for one identifier from every file."""
        identifier = identifier.strip()
        counters = RunCounters()

        async def task(path: Path, executor: ThreadPoolExecutor) -> None:
            found = await self._extract(path, executor, identifier)
            if found is None:
                return
            tag, blocks = found
            block = blocks.get(identifier)
            if not block:
                return
            if await self.writer.write_block(identifier, path.name, block, tag) is not None:
                counters.increment(identifier)

        await self._for_each_file(files, task)
        return counters

    async def scan_discovery(self, files: Sequence[Path]) -> RunCounters:
        """Extract blocks for every identifier found in every file."""
        counters = RunCounters()

        async def task(path: Path, executor: ThreadPoolExecutor) -> None:
            found = await self._extract(path, executor, None)
            if found is None:
                return
            tag, blocks = found
            for identifier, block in blocks.items():
                if not block:
                    continue
                if await self.writer.write_block(identifier, path.name, block, tag) is not None:
                    counters.increment(identifier)

        await self._for_each_file(files, task)
        return counters

    def _lines_in_window(self, lines: Sequence[str]) -> str:
        return "".join(line + "\n" for line in lines if self.window.contains(self.parser.parse(line)))

    async def copy_interval(self, files: Sequence[Path], input_root: str | Path) -> RunCounters:
        """Copy in-window lines of every file to its mirrored output path."""
        counters = RunCounters()

        async def task(path: Path, executor: ThreadPoolExecutor) -> None:
            lines = await self._read(path)
            if lines is None:
                return
            loop = asyncio.get_running_loop()
            text = await loop.run_in_executor(executor, self._lines_in_window, lines)
            dest = await self.writer.write_mirror(input_root, path, text)
            if dest is not None and dest.is_file():
                counters.increment(INTERVAL_KEY)

        await self._for_each_file(files, task)
        return counters
