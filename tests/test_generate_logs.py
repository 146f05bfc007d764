from __future__ import annotations

from pathlib import Path

import generate_logs
from generate_logs import LogfileCreator
from log_reader import LogfileReader


def test_create_file_writes_sorted_parseable_entries(tmp_path: Path) -> None:
    path = tmp_path / "weblog.txt"
    assert LogfileCreator(2023, seed=7).create_file(path, 100)

    entries = list(LogfileReader(path))
    assert len(entries) == 100
    assert all(e.year == 2023 for e in entries)
    assert all(0 <= e.hour <= 23 for e in entries)
    keys = [(e.month, e.day, e.hour, e.minute) for e in entries]
    assert keys == sorted(keys)


def test_seed_makes_output_reproducible() -> None:
    first = LogfileCreator(2024, seed=42).create_entries(20)
    second = LogfileCreator(2024, seed=42).create_entries(20)
    assert first == second


def test_create_file_reports_unwritable_path(tmp_path: Path) -> None:
    path = tmp_path / "no-such-dir" / "weblog.txt"
    assert LogfileCreator(2024).create_file(path, 5) is False


def test_weighted_choice_falls_back_to_last_option() -> None:
    class AlwaysOne:
        def random(self):
            return 1.5

    assert generate_logs.weighted_choice([("a", 0.5), ("b", 0.5)], AlwaysOne()) == "b"


def test_main_writes_requested_entries(tmp_path: Path) -> None:
    out = tmp_path / "gen.txt"
    generate_logs.main(["--entries", "12", "--output", str(out), "--year", "2022", "--seed", "1"])
    lines = out.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 12
    assert all(line.startswith("2022 ") for line in lines)
