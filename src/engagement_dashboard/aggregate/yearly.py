"""Yearly totals, growth goals and channel comparisons.

Every function takes the clean frame (see `clean.transform`) or the
`compute_yearly_totals` mapping built from it.

Expectations:
- Year totals are re-derived from the four channel sums; the row-level
  `total` column is not used here.
- A year whose predecessor is absent has a baseline of 0 and therefore a
  goal of 0; it is left out of the goal-bearing years.
"""
from __future__ import annotations

import logging
from typing import Mapping, Sequence

import pandas as pd

from engagement_dashboard.aggregate.common import growth_pct, pct, round_half_up
from engagement_dashboard.constants import CHANNEL_KEYS, CHANNELS, GROWTH_FACTOR
from engagement_dashboard.models import (
    BaselinePoint,
    ChannelGrowth,
    ChannelPerformance,
    ChannelShare,
    ChannelTotals,
    GoalAchievement,
)

log = logging.getLogger(__name__)

YearlyTotals = Mapping[int, ChannelTotals]


# =========================================================
# FISCAL YEARS
# =========================================================

def fiscal_years(rows: pd.DataFrame) -> list[int]:
    """Return the distinct fiscal years in `rows`, ascending."""
    return sorted(int(fy) for fy in rows["fiscal_year"].unique())


def goal_bearing_years(years: Sequence[int]) -> list[int]:
    """Keep the years whose immediately preceding year is also present.

    The earliest year never qualifies. A year after a gap (FY2022 when FY2021
    is missing) has no baseline and is dropped as well.
    """
    present = set(years)
    return sorted(fy for fy in present if fy - 1 in present)


# =========================================================
# TOTALS + GOALS
# =========================================================

def compute_yearly_totals(rows: pd.DataFrame) -> dict[int, ChannelTotals]:
    """Sum each channel per fiscal year.

    Args:
        rows: Clean frame with `fiscal_year` and the four channel columns.

    Returns:
        Mapping of fiscal year to `ChannelTotals`, whose `total` is the sum of
        the four channel sums.
    """
    if rows.empty:
        return {}

    sums = rows.groupby("fiscal_year")[list(CHANNEL_KEYS)].sum()
    out: dict[int, ChannelTotals] = {}
    for fy, rec in sums.iterrows():
        channels = {key: int(rec[key]) for key in CHANNEL_KEYS}
        out[int(fy)] = ChannelTotals(**channels, total=sum(channels.values()))

    log.debug("Yearly totals computed for %d fiscal years", len(out))
    return out


def previous_year_total(yearly_totals: YearlyTotals, fiscal_year: int) -> int:
    """Baseline for `fiscal_year`: the prior year's total, 0 when absent."""
    prior = yearly_totals.get(fiscal_year - 1)
    return prior.total if prior is not None else 0


def compute_annual_goal(previous_year_total: float) -> int:
    """Return `round(previous_year_total * 1.03)`; 0 for a 0 baseline."""
    return round_half_up(previous_year_total * GROWTH_FACTOR)


def compute_goal_achievement_history(
    yearly_totals: YearlyTotals,
    fiscal_years: Sequence[int],
) -> list[GoalAchievement]:
    """Goal vs actual for each complete year that had a baseline.

    Args:
        yearly_totals: Output of `compute_yearly_totals`.
        fiscal_years: Every fiscal year present (earliest included).

    Returns:
        One `GoalAchievement` per goal-bearing year before the current
        (latest) fiscal year, ascending. Years after a gap have no baseline
        and are left out.
    """
    if not fiscal_years:
        return []
    current = max(fiscal_years)

    history: list[GoalAchievement] = []
    for fy in goal_bearing_years(fiscal_years):
        if fy == current:
            continue
        goal = previous_year_total(yearly_totals, fy) * GROWTH_FACTOR
        actual = yearly_totals[fy].total if fy in yearly_totals else 0
        history.append(
            GoalAchievement(
                year=fy,
                goal=goal,
                actual=actual,
                pct=round_half_up(pct(actual, goal)),
            )
        )
    return history


# =========================================================
# BASELINE TREND
# =========================================================

def compute_baseline_trend(
    yearly_totals: YearlyTotals,
    goal_years: Sequence[int],
) -> list[BaselinePoint]:
    """Baseline (prior-year total) behind each goal-bearing year.

    Growth is measured against the preceding point and is None for the first
    point or when the preceding baseline is 0. The highest and lowest nonzero
    baselines are flagged.
    """
    points = sorted(
        (fy - 1, previous_year_total(yearly_totals, fy)) for fy in set(goal_years)
    )
    nonzero = [b for _, b in points if b > 0]
    hi = max(nonzero) if nonzero else None
    lo = min(nonzero) if nonzero else None

    trend: list[BaselinePoint] = []
    prev: int | None = None
    for year, baseline in points:
        trend.append(
            BaselinePoint(
                fiscal_year=year,
                baseline=baseline,
                growth_pct=growth_pct(baseline, prev) if prev else None,
                is_max=baseline == hi,
                is_min=baseline == lo,
            )
        )
        prev = baseline
    return trend


# =========================================================
# CHANNELS
# =========================================================

def compute_channel_mix(
    yearly_totals: YearlyTotals,
    current_fy: int,
) -> dict[int, ChannelTotals]:
    """Channel totals for every complete year (before `current_fy`)."""
    return {fy: t for fy, t in sorted(yearly_totals.items()) if fy < current_fy}


def compute_channel_performance(
    yearly_totals: YearlyTotals,
    fiscal_year: int,
) -> list[ChannelPerformance]:
    """Share of the year total and growth vs the prior year, per channel."""
    year = yearly_totals.get(fiscal_year, ChannelTotals())
    prior = yearly_totals.get(fiscal_year - 1, ChannelTotals())

    out: list[ChannelPerformance] = []
    for key, _, name, _ in CHANNELS:
        current = getattr(year, key)
        out.append(
            ChannelPerformance(
                channel=key,
                name=name,
                total=current,
                share_pct=pct(current, year.total),
                growth_pct=growth_pct(current, getattr(prior, key)),
            )
        )
    return out


def compute_channel_growth(
    yearly_totals: YearlyTotals,
    current_fy: int,
) -> list[ChannelGrowth]:
    """Growth per channel from the earliest to the latest complete year.

    Returns an empty list when there is no complete year.
    """
    complete = sorted(compute_channel_mix(yearly_totals, current_fy))
    if not complete:
        return []
    first, last = complete[0], complete[-1]

    return [
        ChannelGrowth(
            channel=key,
            name=name,
            first_year=first,
            last_year=last,
            growth_pct=growth_pct(
                getattr(yearly_totals[last], key),
                getattr(yearly_totals[first], key),
            ),
        )
        for key, _, name, _ in CHANNELS
    ]


def compute_channel_trend(yearly_totals: YearlyTotals) -> dict[int, ChannelTotals]:
    """Channel totals for every fiscal year, current year included, ascending."""
    return dict(sorted(yearly_totals.items()))


def compute_channel_share(
    yearly_totals: YearlyTotals,
    fiscal_year: int,
) -> list[ChannelShare]:
    """Each channel's share of `fiscal_year`'s total; all 0 for an unknown year."""
    year = yearly_totals.get(fiscal_year, ChannelTotals())
    return [
        ChannelShare(
            channel=key,
            name=name,
            total=getattr(year, key),
            share_pct=pct(getattr(year, key), year.total),
        )
        for key, _, name, _ in CHANNELS
    ]
