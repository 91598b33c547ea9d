"""Compose the engine outputs into the structure the dashboard renders."""
from __future__ import annotations

import logging

import pandas as pd

from engagement_dashboard.aggregate.goal_tracking import (
    compute_all_goal_tracking,
    compute_goal_tracking,
    months_complete,
)
from engagement_dashboard.aggregate.projections import compute_ytd_summary
from engagement_dashboard.aggregate.yearly import (
    compute_annual_goal,
    compute_goal_achievement_history,
    compute_yearly_totals,
    fiscal_years,
    goal_bearing_years,
    previous_year_total,
)
from engagement_dashboard.models import DashboardData

log = logging.getLogger(__name__)


def build_dashboard(rows: pd.DataFrame) -> DashboardData | None:
    """Run every aggregation over a clean frame.

    Args:
        rows: Output of `clean_engagement_frame` / `load_engagement_data`.

    Returns:
        `DashboardData`, or None when no row carries a fiscal year.
    """
    years = fiscal_years(rows)
    if not years:
        log.warning("No fiscal years present; nothing to aggregate")
        return None

    current_fy = years[-1]
    previous_fy = current_fy - 1

    yearly_totals = compute_yearly_totals(rows)
    tracking = compute_all_goal_tracking(rows, yearly_totals)
    baseline = previous_year_total(yearly_totals, current_fy)

    # the current year is not goal-bearing when its prior year is missing
    current_series = tracking.get(current_fy) or compute_goal_tracking(current_fy, rows, baseline)

    data = DashboardData(
        yearly_totals=yearly_totals,
        fiscal_years=goal_bearing_years(years),
        goal_tracking=tracking,
        goal_history=compute_goal_achievement_history(yearly_totals, years),
        current_fy=current_fy,
        previous_fy=previous_fy,
        months_complete=months_complete(current_series),
        previous_year_baseline=baseline,
        current_year_goal=compute_annual_goal(baseline),
        current_ytd=compute_ytd_summary(current_fy, current_series, baseline),
    )

    log.info(
        "Dashboard built: FY%d with %d months reported, %d goal-bearing years",
        current_fy,
        data.months_complete,
        len(data.fiscal_years),
    )
    return data
