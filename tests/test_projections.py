from __future__ import annotations

import pytest

from engagement_dashboard.aggregate.goal_tracking import compute_goal_tracking
from engagement_dashboard.aggregate.projections import (
    compute_required_run_rate,
    compute_scenario_projection,
    compute_scenarios,
    compute_ytd_summary,
)


def test_scenario_projection_example() -> None:
    s = compute_scenario_projection(600_000, 6, 1_030_000, 1.1)
    assert s.avg_monthly == pytest.approx(100_000)
    assert s.projected_monthly == pytest.approx(110_000)
    assert s.year_end == pytest.approx(1_260_000)
    assert s.pct_of_goal == pytest.approx(1_260_000 / 1_030_000 * 100)


def test_scenario_projection_without_data_or_goal() -> None:
    s = compute_scenario_projection(0, 0, 0, 1.0)
    assert s.avg_monthly == 0.0
    assert s.year_end == 0.0
    assert s.pct_of_goal == 0.0


def test_scenarios_use_fixed_factors() -> None:
    scenarios = compute_scenarios(600_000, 6, 1_030_000)
    assert [s.factor for s in scenarios] == [0.9, 1.0, 1.1, 1.2]
    assert scenarios[1].name == "Current Pace"
    assert scenarios[1].year_end == pytest.approx(1_200_000)


def test_required_run_rate() -> None:
    r = compute_required_run_rate(1_030_000, 600_000, 6)
    assert r.remaining == 430_000
    assert r.months_remaining == 6
    assert r.required_monthly == pytest.approx(430_000 / 6)
    assert r.change_required_pct == pytest.approx((430_000 / 6 / 100_000 - 1) * 100)


def test_required_run_rate_is_negative_past_goal() -> None:
    r = compute_required_run_rate(500_000, 600_000, 6)
    assert r.required_monthly == pytest.approx(-100_000 / 6)


def test_required_run_rate_degenerate_inputs() -> None:
    r = compute_required_run_rate(0, 0, 0)
    assert r.required_monthly == 0.0
    assert r.change_required_pct == 0.0
    done = compute_required_run_rate(1_000, 900, 12)
    assert done.months_remaining == 0
    assert done.required_monthly == 0.0


def test_ytd_summary_partial_year(make_rows) -> None:
    rows = make_rows(
        {"fiscal_year": 2025, "month_num": 1, "va_gov": 110_000},
        {"fiscal_year": 2025, "month_num": 2, "va_gov": 120_000},
    )
    series = compute_goal_tracking(2025, rows, 1_200_000)
    ytd = compute_ytd_summary(2025, series, 1_200_000)
    assert ytd.annual_goal == 1_236_000
    assert ytd.months_complete == 2
    assert ytd.ytd_actual == 230_000
    assert ytd.ytd_goal == 206_000
    assert ytd.ahead_behind == 24_000
    assert ytd.avg_monthly == pytest.approx(115_000)
    assert ytd.projected_annual == pytest.approx(1_380_000)
    assert ytd.pace_vs_expected_pct == pytest.approx(230_000 / 206_000 * 100)
    assert ytd.daily_avg == pytest.approx(230_000 / 60)
    assert ytd.is_complete is False
    assert ytd.final_goal == ytd.ytd_goal


def test_ytd_summary_complete_year(make_rows) -> None:
    rows = make_rows(*({"fiscal_year": 2024, "month_num": m, "va_gov": 100} for m in range(1, 13)))
    series = compute_goal_tracking(2024, rows, 1_000)
    ytd = compute_ytd_summary(2024, series, 1_000)
    assert ytd.is_complete
    assert ytd.final_actual == 1_200
    assert ytd.final_goal == 1_030
    assert ytd.final_pct == pytest.approx(1_200 / 1_030 * 100)


def test_ytd_summary_without_data(make_rows) -> None:
    series = compute_goal_tracking(2024, make_rows(), 0)
    ytd = compute_ytd_summary(2024, series, 0)
    assert ytd.ytd_actual == 0
    assert ytd.pct_of_goal == 0.0
    assert ytd.run_rate_pct == 0.0
    assert ytd.pace_vs_expected_pct == 0.0
