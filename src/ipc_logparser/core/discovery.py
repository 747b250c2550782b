"""Recursive listing of log files under an input root."""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def _walk(folder: Path, *, exclude: Path | None, out: list[Path]) -> None:
    for entry in sorted(folder.iterdir()):
        if exclude is not None and (entry == exclude or exclude in entry.parents):
            continue
        if entry.is_dir():
            try:
                _walk(entry, exclude=exclude, out=out)
            except OSError as e:
                logger.warning("Skipping folder %s: %s", entry, e)
        elif entry.is_file():
            out.append(entry)


def list_log_files(root: str | Path, *, exclude: str | Path | None = None) -> list[Path]:
    """Return every regular file under ``root``, sorted, skipping ``exclude``.

    Raises FileNotFoundError when the root is missing or holds no files and
    NotADirectoryError when it is not a folder.
    """
    path = Path(root)
    if not path.exists():
        raise FileNotFoundError(f"[{path}] - does not exist")
    if not path.is_dir():
        raise NotADirectoryError(f"[{path}] - isn't folder")

    skip = Path(exclude).resolve() if exclude is not None else None
    files: list[Path] = []
    _walk(path.resolve(), exclude=skip, out=files)
    if not files:
        raise FileNotFoundError(f"[{path}] - is empty")
    return files
