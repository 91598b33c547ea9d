"""12-month goal-tracking series.

For each goal-bearing fiscal year the annual goal (prior-year total * 1.03)
is spread evenly over Oct..Sep and accumulated, next to the cumulative
actual. A month "has data" when its own total is above zero; months without
data report no cumulative actual rather than a frozen or zero value.
"""
from __future__ import annotations

import logging
from typing import Any, Sequence

import pandas as pd

from engagement_dashboard.aggregate.common import pct, round_half_up, safe_div
from engagement_dashboard.aggregate.yearly import (
    YearlyTotals,
    compute_yearly_totals,
    fiscal_years,
    goal_bearing_years,
    previous_year_total,
)
from engagement_dashboard.constants import (
    CHANNEL_KEYS,
    GROWTH_FACTOR,
    MONTH_LABELS,
    MONTHS_PER_YEAR,
)
from engagement_dashboard.models import MonthlyChannelBreakdown, MonthlyGoalEntry, MonthlyGoalView

log = logging.getLogger(__name__)


def month_lookup(rows: pd.DataFrame, fiscal_year: int) -> dict[int, dict[str, Any]]:
    """Map month index 1..12 to that month's record for one fiscal year.

    Months outside 1..12 are ignored. Should a month repeat, the first row
    wins (duplicates are rejected at ingestion).
    """
    fy = rows[(rows["fiscal_year"] == fiscal_year) & rows["month_num"].between(1, MONTHS_PER_YEAR)]
    fy = fy.drop_duplicates("month_num", keep="first")
    return {int(rec["month_num"]): rec for rec in fy.to_dict(orient="records")}


def compute_goal_tracking(
    fiscal_year: int,
    rows: pd.DataFrame,
    previous_year_total: float,
) -> list[MonthlyGoalEntry]:
    """Build the Oct..Sep goal-tracking series for one fiscal year.

    Args:
        fiscal_year: Year to track.
        rows: Clean frame (any years; filtered here).
        previous_year_total: Baseline for the goal.

    Returns:
        Twelve `MonthlyGoalEntry` in fiscal order. `goal` is
        `round(baseline * (1.03 / 12) * month)`; `actual` is the running sum
        of row totals, or None when the month itself has no data.
    """
    lookup = month_lookup(rows, fiscal_year)
    monthly_rate = GROWTH_FACTOR / MONTHS_PER_YEAR

    series: list[MonthlyGoalEntry] = []
    cumulative = 0
    for month_num, label in enumerate(MONTH_LABELS, start=1):
        rec = lookup.get(month_num)
        monthly_total = int(rec["total"]) if rec else 0
        cumulative += monthly_total
        has_data = monthly_total > 0

        channels = {key: int(rec[key]) if rec else 0 for key in CHANNEL_KEYS}
        series.append(
            MonthlyGoalEntry(
                month=label,
                month_num=month_num,
                goal=round_half_up(previous_year_total * monthly_rate * month_num),
                actual=cumulative if has_data else None,
                has_data=has_data,
                monthly_total=monthly_total,
                **channels,
            )
        )
    return series


def compute_all_goal_tracking(
    rows: pd.DataFrame,
    yearly_totals: YearlyTotals | None = None,
) -> dict[int, list[MonthlyGoalEntry]]:
    """Goal-tracking series for every year whose prior year is present."""
    if yearly_totals is None:
        yearly_totals = compute_yearly_totals(rows)

    out: dict[int, list[MonthlyGoalEntry]] = {}
    for fy in goal_bearing_years(fiscal_years(rows)):
        out[fy] = compute_goal_tracking(fy, rows, previous_year_total(yearly_totals, fy))

    log.debug("Goal tracking built for fiscal years %s", list(out))
    return out


# ---------------------------------------------------------
# YTD cut-off
# ---------------------------------------------------------

def months_complete(series: Sequence[MonthlyGoalEntry]) -> int:
    """Count of months whose own total is above zero.

    Gaps are not closed: a year with data for Oct and Dec but not Nov has two
    months complete.
    """
    return sum(1 for m in series if m.has_data)


def latest_reported_entry(series: Sequence[MonthlyGoalEntry]) -> MonthlyGoalEntry | None:
    """Last month with data, whose cumulative figures are the YTD values."""
    reported = [m for m in series if m.has_data]
    return reported[-1] if reported else None


# ---------------------------------------------------------
# Views
# ---------------------------------------------------------

def compute_monthly_goal_view(
    series: Sequence[MonthlyGoalEntry],
    annual_goal: float,
) -> list[MonthlyGoalView]:
    """Each month on its own against `annual_goal / 12`.

    `vs_goal_pct` is the percent above (or below) the monthly goal and is
    None for months without data or when the goal is 0.
    """
    per_month = annual_goal / MONTHS_PER_YEAR
    return [
        MonthlyGoalView(
            month=m.month,
            month_num=m.month_num,
            monthly_goal=round_half_up(per_month),
            monthly_actual=m.monthly_total if m.has_data else None,
            vs_goal_pct=(
                (safe_div(m.monthly_total, per_month) - 1) * 100.0
                if m.has_data and per_month
                else None
            ),
        )
        for m in series
    ]


def compute_monthly_channel_breakdown(
    series: Sequence[MonthlyGoalEntry],
    annual_goal: float,
) -> list[MonthlyChannelBreakdown]:
    """Per-month channel counts with the month's result vs `annual_goal / 12`."""
    views = compute_monthly_goal_view(series, annual_goal)
    return [
        MonthlyChannelBreakdown(
            month=m.month,
            month_num=m.month_num,
            has_data=m.has_data,
            **{key: getattr(m, key) for key in CHANNEL_KEYS},
            total=m.monthly_total,
            vs_goal_pct=view.vs_goal_pct,
        )
        for m, view in zip(series, views)
    ]


def compute_cumulative_variance(series: Sequence[MonthlyGoalEntry]) -> list[float | None]:
    """Percent the cumulative actual sits above or below the cumulative goal."""
    return [
        pct(m.actual, m.goal) - 100.0 if m.actual is not None and m.goal else None
        for m in series
    ]
