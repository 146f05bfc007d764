from __future__ import annotations

import json
from pathlib import Path

import pytest

from analysis_core import AnalysisPeriod, LogEntry, accumulate, new_stats, summarize_stats
from dashboard import create_app


@pytest.fixture
def summary_path(tmp_path: Path) -> Path:
    stats = new_stats()
    for hour in (9, 9, 14):
        accumulate(stats, LogEntry(2024, 7, 4, hour, 0))
    path = tmp_path / "summary.json"
    path.write_text(json.dumps(summarize_stats(stats, AnalysisPeriod(2024, 7))), encoding="utf-8")
    return path


def test_summary_endpoint(summary_path: Path) -> None:
    client = create_app(summary_path).test_client()
    data = client.get("/api/summary").get_json()
    assert data["total_accesses"] == 3
    assert data["busiest_hour"] == 9


def test_hours_and_months_endpoints(summary_path: Path) -> None:
    client = create_app(summary_path).test_client()

    hours = client.get("/api/hours").get_json()
    assert hours["hours"] == list(range(24))
    assert hours["counts"][9] == 2

    months = client.get("/api/months").get_json()
    assert months["year"] == 2024
    assert months["counts"][6] == 3

    days = client.get("/api/days").get_json()
    assert len(days["days"]) == 31
    assert days["counts"][3] == 3


def test_index_renders(summary_path: Path) -> None:
    client = create_app(summary_path).test_client()
    response = client.get("/")
    assert response.status_code == 200
    assert b"Weblog Hourly Analysis" in response.data


def test_missing_summary_is_404(tmp_path: Path) -> None:
    client = create_app(tmp_path / "missing.json").test_client()
    assert client.get("/api/summary").status_code == 404


def test_plot_route_only_when_configured(summary_path: Path, tmp_path: Path) -> None:
    client = create_app(summary_path).test_client()
    assert client.get("/plot").status_code == 404

    client = create_app(summary_path, tmp_path / "missing.png").test_client()
    assert client.get("/plot").status_code == 404
