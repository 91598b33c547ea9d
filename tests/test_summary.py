from __future__ import annotations

import json
from pathlib import Path

import pytest

from engagement_dashboard.aggregate.summary import build_dashboard
from engagement_dashboard.ingest.load import load_engagement_data


def test_build_dashboard_from_csv(sample_csv: Path) -> None:
    data = build_dashboard(load_engagement_data(sample_csv))
    assert data is not None

    assert data.current_fy == 2025
    assert data.previous_fy == 2024
    assert data.fiscal_years == [2024, 2025]
    assert sorted(data.goal_tracking) == [2024, 2025]
    assert sorted(data.yearly_totals) == [2023, 2024, 2025]

    assert data.previous_year_baseline == 1_200_000
    assert data.current_year_goal == 1_236_000
    assert data.months_complete == 2
    assert data.current_ytd.ytd_actual == 230_000
    assert data.current_ytd.ytd_goal == 206_000

    assert [h.year for h in data.goal_history] == [2024]
    assert data.goal_history[0].goal == pytest.approx(1_030_000)
    assert data.goal_history[0].pct == 117

    fy24 = data.goal_tracking[2024]
    assert fy24[11].goal == 1_030_000
    assert fy24[11].actual == 1_200_000


def test_build_dashboard_single_year(make_rows) -> None:
    data = build_dashboard(make_rows({"fiscal_year": 2025, "month_num": 1, "va_gov": 10}))
    assert data is not None
    assert data.fiscal_years == []
    assert data.goal_tracking == {}
    assert data.goal_history == []
    assert data.current_year_goal == 0
    assert data.months_complete == 1
    assert data.current_ytd.ytd_actual == 10


def test_build_dashboard_without_rows(make_rows) -> None:
    assert build_dashboard(make_rows()) is None


def test_dashboard_serializes_to_json(sample_csv: Path) -> None:
    data = build_dashboard(load_engagement_data(sample_csv))
    assert data is not None
    payload = json.loads(data.model_dump_json())
    assert payload["goal_tracking"]["2025"][2]["actual"] is None


def test_build_dashboard_current_year_after_gap(make_rows) -> None:
    data = build_dashboard(make_rows(
        {"fiscal_year": 2021, "month_num": 1, "va_gov": 400},
        {"fiscal_year": 2022, "month_num": 1, "va_gov": 500},
        {"fiscal_year": 2024, "month_num": 1, "va_gov": 90},
    ))
    assert data is not None
    assert data.fiscal_years == [2022]
    assert sorted(data.goal_tracking) == [2022]
    assert data.current_fy == 2024
    assert data.previous_year_baseline == 0
    assert data.current_ytd.ytd_actual == 90
