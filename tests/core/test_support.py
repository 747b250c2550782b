from __future__ import annotations

import threading
import zipfile
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from ipc_logparser.core.archive import archive_tree
from ipc_logparser.core.classifier import GroupClassifier
from ipc_logparser.core.counters import RunCounters
from ipc_logparser.core.discovery import list_log_files
from ipc_logparser.core.models import DateWindow, ExtractionLimits
from ipc_logparser.core.time_window import format_for_name, parse_property_dt, resolve_tz, resolve_window


def test_parse_property_dt_defaults_to_utc() -> None:
    assert parse_property_dt("31.12.2025 23:59:01") == datetime(2025, 12, 31, 23, 59, 1, tzinfo=UTC)


def test_parse_property_dt_rejects_iso() -> None:
    with pytest.raises(ValueError, match="dd.MM.yyyy"):
        parse_property_dt("2025-12-31T23:59:01")


def test_resolve_tz_unknown_name() -> None:
    with pytest.raises(ValueError, match="Unknown timezone"):
        resolve_tz("Not/AZone")


def test_resolve_window_orders_bounds() -> None:
    window = resolve_window("01.01.2026 00:00:00", "02.01.2026 00:00:00")
    assert window.end - window.start == timedelta(days=1)

    with pytest.raises(ValueError, match="date.start must be < date.end"):
        resolve_window("02.01.2026 00:00:00", "02.01.2026 00:00:00")


def test_window_rejects_naive_bounds() -> None:
    with pytest.raises(ValueError):
        DateWindow(datetime(2026, 1, 1), datetime(2026, 1, 2))


def test_format_for_name() -> None:
    assert format_for_name(datetime(2025, 12, 31, 23, 59, 1, tzinfo=UTC), "%d%m%Y%H%M%S") == "31122025235901"


def test_limits_validation() -> None:
    with pytest.raises(ValueError):
        ExtractionLimits(block_span=0)
    with pytest.raises(ValueError):
        ExtractionLimits(repeat_lookahead=-1)


@pytest.mark.parametrize(
    ("lines", "expected"),
    [
        (["a df b", "fg"], 2),
        (["fg", "x df"], 1),
        (["gh hj"], 4),
        (["dfx fgh", "nothing"], 0),
        ([], 0),
    ],
)
def test_classifier_uses_last_marker_token(lines: list[str], expected: int) -> None:
    assert GroupClassifier().classify(lines) == expected


def test_classifier_custom_tokens() -> None:
    assert GroupClassifier(tokens={"ERR": 9}).classify(["x ERR y"]) == 9


def test_counters_are_atomic_per_key() -> None:
    counters = RunCounters()

    def bump() -> None:
        for _ in range(500):
            counters.increment("a")
            counters.increment("b")

    threads = [threading.Thread(target=bump) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert counters.snapshot() == {"a": 4000, "b": 4000}
    assert counters.total() == 8000


def test_list_log_files_recursive_and_sorted(tmp_path: Path) -> None:
    root = tmp_path / "logs"
    for rel in ("c.log", "a/b.log", "a/sub/d.log"):
        p = root / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text("x\n", encoding="utf-8")

    files = list_log_files(root)

    base = root.resolve()
    assert files == [base / "a" / "b.log", base / "a" / "sub" / "d.log", base / "c.log"]


def test_list_log_files_skips_excluded_output(tmp_path: Path) -> None:
    root = tmp_path / "logs"
    (root / "out" / "000000000123").mkdir(parents=True)
    (root / "out" / "000000000123" / "old").write_text("x", encoding="utf-8")
    (root / "app.log").write_text("x", encoding="utf-8")

    assert list_log_files(root, exclude=root / "out") == [(root / "app.log").resolve()]


def test_list_log_files_errors(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        list_log_files(tmp_path / "missing")

    a_file = tmp_path / "file.log"
    a_file.write_text("x", encoding="utf-8")
    with pytest.raises(NotADirectoryError):
        list_log_files(a_file)

    empty = tmp_path / "empty"
    (empty / "nested").mkdir(parents=True)
    with pytest.raises(FileNotFoundError, match="is empty"):
        list_log_files(empty)


def test_archive_tree_zips_and_clears(tmp_path: Path) -> None:
    out = tmp_path / "out"
    (out / "000000000123").mkdir(parents=True)
    (out / "000000000123" / "app.log_x_y_0").write_text("block", encoding="utf-8")
    (out / "top.log").write_text("line", encoding="utf-8")

    archive = archive_tree(out)

    assert archive == tmp_path / "out.zip"
    with zipfile.ZipFile(archive) as zf:
        assert sorted(zf.namelist()) == ["000000000123/app.log_x_y_0", "top.log"]
        assert zf.read("top.log") == b"line"
    assert out.is_dir()
    assert list(out.iterdir()) == []


def test_archive_tree_replaces_previous_archive(tmp_path: Path) -> None:
    out = tmp_path / "out"
    out.mkdir()
    (tmp_path / "out.zip").write_bytes(b"stale")
    (out / "new.log").write_text("fresh", encoding="utf-8")

    archive = archive_tree(out)

    assert archive is not None
    with zipfile.ZipFile(archive) as zf:
        assert zf.namelist() == ["new.log"]


def test_archive_tree_missing_root_is_not_fatal(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    assert archive_tree(tmp_path / "missing") is None
    assert "is missing" in caplog.text
