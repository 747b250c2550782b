"""Output tree writer.

Blocks land in ``<out_root>/<identifier>/`` and interval excerpts in a tree
that mirrors the input root. Folder creation is serialized per destination
path so concurrent file tasks never race on check-then-create.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from pathlib import Path

import aiofiles

from .formats import ExtractionPatterns, default_patterns
from .models import DateWindow
from .time_window import format_for_name

logger = logging.getLogger(__name__)


class BlockWriter:
    """Write extracted text below an output root."""

    def __init__(
        self,
        out_root: str | Path,
        window: DateWindow,
        *,
        patterns: ExtractionPatterns | None = None,
        encoding: str = "utf-8",
        errors: str = "surrogateescape",
    ) -> None:
        self.out_root = Path(out_root)
        self.window = window
        self.patterns = patterns or default_patterns()
        self.encoding = encoding
        self.errors = errors
        self._registry_lock = threading.Lock()
        self._folder_locks: dict[Path, threading.Lock] = {}

    def _lock_for(self, folder: Path) -> threading.Lock:
        with self._registry_lock:
            lock = self._folder_locks.get(folder)
            if lock is None:
                lock = self._folder_locks[folder] = threading.Lock()
            return lock

    def result_folder(self, key: str | Path) -> Path:
        """Return ``out_root/key``, creating it when missing.

        Raises OSError when the folder cannot be created.
        """
        folder = (self.out_root / key).resolve()
        with self._lock_for(folder):
            if not folder.is_dir():
                folder.mkdir(parents=True, exist_ok=True)
        return folder

    def block_file_name(self, source_name: str, tag: int) -> str:
        fmt = self.patterns.name_date_format
        start = format_for_name(self.window.start, fmt)
        end = format_for_name(self.window.end, fmt)
        return f"{source_name}_{start}_{end}_{tag}"

    def mirror_path(self, input_root: str | Path, file: Path) -> Path:
        """Return the output path mirroring ``file``'s place under ``input_root``.

        Raises ValueError when ``file`` is not listed below ``input_root``.
        """
        # Only the folder is resolved; a symlinked file keeps its listed name.
        listed = file.parent.resolve() / file.name
        relative = listed.relative_to(Path(input_root).resolve())
        folder = self.result_folder(relative.parent)
        name = relative.name
        # Excerpts are written as plain text.
        if relative.suffix.lower() == ".gz":
            name = relative.stem
        return folder / name

    async def _write(self, path: Path, text: str) -> None:
        # Mode "w" truncates a file left by an earlier run.
        async with aiofiles.open(
            path, "w", encoding=self.encoding, errors=self.errors, newline=""
        ) as f:
            await f.write(text)

    async def write_block(self, identifier: str, source_name: str, block: str, tag: int) -> Path | None:
        """Persist one block; return its path, or None when the write failed."""
        try:
            folder = await asyncio.to_thread(self.result_folder, identifier)
            path = folder / self.block_file_name(source_name, tag)
            await self._write(path, block)
        except OSError as e:
            logger.error("Failed write file for [UTRNNO:%s] from %s: %s", identifier, source_name, e)
            return None
        return path

    async def write_mirror(self, input_root: str | Path, file: Path, text: str) -> Path | None:
        """Write an interval excerpt to the mirrored path of ``file``."""
        try:
            path = await asyncio.to_thread(self.mirror_path, input_root, file)
            await self._write(path, text)
        except (OSError, ValueError) as e:
            logger.error("Failed write excerpt of %s: %s", file, e)
            return None
        return path
