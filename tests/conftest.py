from __future__ import annotations

from collections.abc import Callable
from datetime import timedelta
from pathlib import Path

import pytest

from ipc_logparser.core.models import EPOCH, DateWindow

TXN = "000000000123"
OTHER_TXN = "4444444444444"


@pytest.fixture
def window() -> DateWindow:
    """Window covering elapsed markers strictly between 10s and 20s."""
    return DateWindow(EPOCH + timedelta(seconds=10), EPOCH + timedelta(seconds=20))


@pytest.fixture
def ipc_lines() -> list[str]:
    return [
        "boot line 0",
        "boot line 1",
        ">>5.0: 000000000123 too early",
        "boot line 3",
        "boot line 4",
        f"X>>12.5: {TXN} fg",
        "body one",
        "body two",
        "****",
        "tail after delimiter",
        f">>15.25: {OTHER_TXN} request",
        "other body",
    ]


@pytest.fixture
def write_ipc_log(ipc_lines: list[str]) -> Callable[[Path], None]:
    def _write(path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("\n".join(ipc_lines) + "\n", encoding="utf-8")

    return _write
