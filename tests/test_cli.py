from __future__ import annotations

from pathlib import Path

import pytest

from ipc_logparser.cli import main

TXN = "000000000123"


def _props(tmp_path: Path, logs: Path, out: Path, *extra: str) -> Path:
    path = tmp_path / "application.properties"
    path.write_text(
        "\n".join(
            [
                f"log.path={logs}",
                f"out.path={out}",
                "date.start=01.01.1970 00:00:10",
                "date.end=01.01.1970 00:00:20",
                *extra,
            ]
        )
        + "\n",
        encoding="utf-8",
    )
    return path


def test_cli_fixed_mode_reports_count(tmp_path: Path, write_ipc_log, capsys: pytest.CaptureFixture[str]) -> None:
    logs = tmp_path / "logs"
    write_ipc_log(logs / "app.log")
    out = tmp_path / "out"

    main([str(_props(tmp_path, logs, out, f"utrnno={TXN}"))])

    printed = capsys.readouterr().out
    assert f"Found 1 files with [UTRNNO:{TXN}]" in printed
    assert (out / TXN / "app.log_01011970000010_01011970000020_2").is_file()


def test_cli_mode_flag_and_zip(tmp_path: Path, write_ipc_log, capsys: pytest.CaptureFixture[str]) -> None:
    logs = tmp_path / "logs"
    write_ipc_log(logs / "app.log")
    out = tmp_path / "out"

    main([str(_props(tmp_path, logs, out)), "--mode", "interval", "--zip", "--workers", "2"])

    printed = capsys.readouterr().out
    assert "Found 1 files in interval" in printed
    assert (tmp_path / "out.zip").is_file()
    assert list(out.iterdir()) == []


def test_cli_missing_log_root_exits_2(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    props = _props(tmp_path, tmp_path / "missing", tmp_path / "out")

    with pytest.raises(SystemExit) as exc:
        main([str(props)])

    assert exc.value.code == 2
    assert "Error:" in capsys.readouterr().err


def test_cli_bad_date_exits_2(tmp_path: Path) -> None:
    props = tmp_path / "application.properties"
    props.write_text("log.path=/l\nout.path=/o\ndate.start=yesterday\ndate.end=today\n", encoding="utf-8")

    with pytest.raises(SystemExit) as exc:
        main([str(props)])

    assert exc.value.code == 2
