from __future__ import annotations

import logging
from pathlib import Path

import pytest

from analysis_core import LogEntry
from log_reader import LogfileReader


def write_log(tmp_path: Path, lines: list[str]) -> Path:
    path = tmp_path / "weblog.txt"
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def test_reader_yields_entries_in_file_order(tmp_path: Path) -> None:
    path = write_log(tmp_path, ["2024 01 02 03 04", "2024 01 02 05 06"])
    reader = LogfileReader(path)

    assert reader.has_next()
    assert reader.next() == LogEntry(2024, 1, 2, 3, 4)
    assert reader.next() == LogEntry(2024, 1, 2, 5, 6)
    assert not reader.has_next()
    with pytest.raises(StopIteration):
        reader.next()


def test_reader_is_single_use(tmp_path: Path) -> None:
    path = write_log(tmp_path, ["2024 01 02 03 04", "2024 01 02 05 06"])
    reader = LogfileReader(path)
    assert len(list(reader)) == 2
    assert list(reader) == []


def test_reader_skips_bad_lines(tmp_path: Path, caplog) -> None:
    path = write_log(tmp_path, ["2024 01 02 03 04", "garbage", "", "2024 13 01 00 00"])
    with caplog.at_level(logging.WARNING, logger="log_reader"):
        reader = LogfileReader(path)

    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "Skipped 2 unparseable line(s)" in warnings[0].getMessage()
    assert reader.skipped == 2
    assert list(reader) == [LogEntry(2024, 1, 2, 3, 4)]


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        LogfileReader(tmp_path / "missing.txt")


def test_print_data_echoes_raw_lines(tmp_path: Path, capsys) -> None:
    path = write_log(tmp_path, ["2024 01 02 03 04 200", "garbage"])
    LogfileReader(path).print_data()
    assert capsys.readouterr().out == "2024 01 02 03 04 200\ngarbage\n"


def test_reader_accepts_byte_order_mark(tmp_path: Path) -> None:
    path = tmp_path / "weblog.txt"
    path.write_text("\ufeff2024 01 02 03 04\n", encoding="utf-8")
    reader = LogfileReader(path)
    assert reader.skipped == 0
    assert list(reader) == [LogEntry(2024, 1, 2, 3, 4)]
