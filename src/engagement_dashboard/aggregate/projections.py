"""Year-end projections, required run rate and YTD pacing.

Months complete is the count of months with a positive total (see
`goal_tracking.months_complete`); it is both the YTD cut-off and the
denominator for averages. Every zero denominator yields 0.
"""
from __future__ import annotations

from typing import Sequence

from engagement_dashboard.aggregate.common import pct, safe_div
from engagement_dashboard.aggregate.goal_tracking import (
    latest_reported_entry,
    months_complete,
)
from engagement_dashboard.aggregate.yearly import compute_annual_goal
from engagement_dashboard.constants import DAYS_PER_MONTH, MONTHS_PER_YEAR, SCENARIOS
from engagement_dashboard.models import (
    MonthlyGoalEntry,
    RunRate,
    ScenarioProjection,
    YtdSummary,
)


def compute_scenario_projection(
    ytd_actual: float,
    months_complete: int,
    annual_goal: float,
    factor: float,
    name: str = "Custom",
) -> ScenarioProjection:
    """Project the year end if the remaining months run at `factor` x pace.

    Args:
        ytd_actual: Cumulative actual through the last reported month.
        months_complete: Months with data so far.
        annual_goal: Full-year goal.
        factor: Multiplier applied to the current monthly average.
        name: Scenario label.

    Returns:
        `ScenarioProjection` with `year_end = ytd + avg * factor * months_left`
        and `pct_of_goal` (0 when the goal is 0).
    """
    avg_monthly = safe_div(ytd_actual, months_complete)
    projected_monthly = avg_monthly * factor
    year_end = ytd_actual + projected_monthly * (MONTHS_PER_YEAR - months_complete)
    return ScenarioProjection(
        name=name,
        factor=factor,
        avg_monthly=avg_monthly,
        projected_monthly=projected_monthly,
        year_end=year_end,
        pct_of_goal=pct(year_end, annual_goal),
    )


def compute_scenarios(
    ytd_actual: float,
    months_complete: int,
    annual_goal: float,
) -> list[ScenarioProjection]:
    """Pessimistic, current pace, optimistic and stretch projections."""
    return [
        compute_scenario_projection(ytd_actual, months_complete, annual_goal, factor, name)
        for name, factor in SCENARIOS
    ]


def compute_required_run_rate(
    annual_goal: float,
    ytd_actual: float,
    months_complete: int,
) -> RunRate:
    """Monthly average needed over the remaining months to hit the goal.

    Not clamped: a negative `required_monthly` means the goal is already met.
    With no months remaining the requirement is 0.
    """
    remaining = annual_goal - ytd_actual
    months_remaining = MONTHS_PER_YEAR - months_complete
    required = safe_div(remaining, months_remaining) if months_remaining > 0 else 0.0
    avg_monthly = safe_div(ytd_actual, months_complete)
    return RunRate(
        remaining=remaining,
        months_remaining=months_remaining,
        required_monthly=required,
        avg_monthly=avg_monthly,
        change_required_pct=(safe_div(required, avg_monthly) - 1) * 100.0 if avg_monthly else 0.0,
    )


def compute_ytd_summary(
    fiscal_year: int,
    series: Sequence[MonthlyGoalEntry],
    previous_year_total: int,
) -> YtdSummary:
    """Year-to-date KPIs read from a goal-tracking series.

    YTD actual and goal are the cumulative values at the last month with
    data. `pace_vs_expected_pct` compares the YTD actual with the annual goal
    prorated over the months complete. For a year with all twelve months
    reported, the `final_*` fields compare the full-year actual with the
    annual goal; otherwise they repeat the YTD figures.
    """
    annual_goal = compute_annual_goal(previous_year_total)
    latest = latest_reported_entry(series)
    done = months_complete(series)

    ytd_actual = latest.actual if latest and latest.actual is not None else 0
    ytd_goal = latest.goal if latest else 0
    avg_monthly = safe_div(ytd_actual, done)
    projected_annual = avg_monthly * MONTHS_PER_YEAR
    expected = annual_goal * done / MONTHS_PER_YEAR

    is_complete = done == MONTHS_PER_YEAR
    final_actual = ytd_actual
    final_goal = annual_goal if is_complete else ytd_goal

    return YtdSummary(
        fiscal_year=fiscal_year,
        baseline=previous_year_total,
        annual_goal=annual_goal,
        ytd_actual=ytd_actual,
        ytd_goal=ytd_goal,
        pct_of_goal=pct(ytd_actual, ytd_goal),
        ahead_behind=ytd_actual - ytd_goal,
        months_complete=done,
        avg_monthly=avg_monthly,
        projected_annual=projected_annual,
        run_rate_pct=pct(projected_annual, annual_goal),
        pace_vs_expected_pct=pct(ytd_actual, expected),
        daily_avg=safe_div(ytd_actual, done * DAYS_PER_MONTH),
        is_complete=is_complete,
        final_actual=final_actual,
        final_goal=final_goal,
        final_pct=pct(final_actual, final_goal),
    )
