"""ZIP archival of a finished output tree.

Archival is destructive: once the archive is written, the archived files
are removed from the tree.
"""

from __future__ import annotations

import logging
import zipfile
from pathlib import Path

logger = logging.getLogger(__name__)


def _archived_files(root: Path) -> list[Path]:
    return sorted(p for p in root.rglob("*") if p.is_file())


def _clear_tree(root: Path, files: list[Path]) -> None:
    for f in files:
        f.unlink(missing_ok=True)
    # Deepest folders first so parents are empty by the time they are reached.
    for folder in sorted((p for p in root.rglob("*") if p.is_dir()), key=lambda p: len(p.parts), reverse=True):
        if not any(folder.iterdir()):
            folder.rmdir()


def archive_tree(out_root: str | Path) -> Path | None:
    """Zip ``out_root`` into ``<out_root>.zip`` and clear the archived files.

    Returns the archive path, or None when archival failed (the failure is
    logged; it never aborts the run).
    """
    root = Path(out_root).resolve()
    if not root.exists():
        logger.error("%s is missing", root)
        return None

    zip_path = root.with_name(root.name + ".zip")
    logger.info("Try create ZIP: %s", zip_path)
    try:
        zip_path.unlink(missing_ok=True)
        if root.is_dir():
            files = _archived_files(root)
            with zipfile.ZipFile(zip_path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
                for f in files:
                    zf.write(f, arcname=f.relative_to(root).as_posix())
            logger.info("%s created", zip_path)
            _clear_tree(root, files)
        else:
            with zipfile.ZipFile(zip_path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
                zf.write(root, arcname=root.name)
            logger.info("%s created", zip_path)
            root.unlink()
    except (OSError, zipfile.BadZipFile) as e:
        logger.error("ZIP fail: %s", e)
        return None

    logger.info("Clear result files")
    return zip_path
