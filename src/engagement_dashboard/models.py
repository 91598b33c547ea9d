"""Pydantic models for the typed row table and aggregation outputs.

`EngagementRow` applies the defaulting rule for numeric fields once, at parse
time: anything missing or non-numeric becomes 0. Every other model describes
an output of the aggregation engine handed to the presentation layer.
"""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def coerce_count(value: Any) -> int:
    """Return `value` as an int, or 0 when it is missing or non-numeric.

    Strings may carry thousands separators; fractional values are truncated.
    Values outside the int64 range count as non-numeric.
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, str):
        value = value.replace(",", "").strip()
        if not value:
            return 0
        if value.lstrip("+-").isdigit():
            value = int(value)
    if not isinstance(value, int):
        try:
            number = float(value)
        except (TypeError, ValueError):
            return 0
        if math.isnan(number) or math.isinf(number):
            return 0
        value = int(number)
    return value if INT64_MIN <= value <= INT64_MAX else 0


class EngagementRow(BaseModel):
    """One month of engagement counts for a fiscal year.

    Attributes:
        fiscal_year: Fiscal year identifier (e.g. 2025).
        month: Optional month label as supplied ("Oct").
        month_num: 1 = October ... 12 = September.
        va_gov: VA.gov page visits.
        video: Video views.
        va_news: VA News page views.
        podcast: Podcast downloads.
        total: Row total as supplied; not checked against the channel sum.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)
    fiscal_year: int
    month: str | None = None
    month_num: int = 0
    va_gov: int = 0
    video: int = 0
    va_news: int = 0
    podcast: int = 0
    total: int = 0

    @field_validator("fiscal_year", mode="before")
    @classmethod
    def _require_fiscal_year(cls, value: Any) -> int:
        year = coerce_count(value)
        if year == 0:
            raise ValueError(f"unresolvable fiscal year: {value!r}")
        return year

    @field_validator("month", mode="before")
    @classmethod
    def _month_label(cls, value: Any) -> str | None:
        if value is None:
            return None
        return str(value).strip() or None

    @field_validator(
        "month_num", "va_gov", "video", "va_news", "podcast", "total", mode="before"
    )
    @classmethod
    def _default_to_zero(cls, value: Any) -> int:
        return coerce_count(value)


class ChannelTotals(BaseModel):
    """Per-channel sums for one fiscal year; `total` is the channel sum."""
    model_config = ConfigDict(extra="forbid", frozen=True)
    va_gov: int = 0
    video: int = 0
    va_news: int = 0
    podcast: int = 0
    total: int = 0


class MonthlyGoalEntry(BaseModel):
    """One month of a fiscal year's goal-tracking series.

    Attributes:
        month: Month label (Oct..Sep).
        month_num: Fiscal month index 1..12.
        goal: Cumulative goal through this month.
        actual: Cumulative actual through this month, None if no data yet.
        has_data: True when this month's own total is above zero.
        monthly_total: This month's own (non-cumulative) total.
        va_gov: VA.gov page visits for the month.
        video: Video views for the month.
        va_news: VA News page views for the month.
        podcast: Podcast downloads for the month.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)
    month: str
    month_num: int = Field(..., ge=1, le=12)
    goal: int
    actual: int | None
    has_data: bool
    monthly_total: int
    va_gov: int = 0
    video: int = 0
    va_news: int = 0
    podcast: int = 0


class MonthlyGoalView(BaseModel):
    """Non-cumulative view of a month against an evenly spread annual goal."""
    model_config = ConfigDict(extra="forbid", frozen=True)
    month: str
    month_num: int
    monthly_goal: int
    monthly_actual: int | None
    vs_goal_pct: float | None


class MonthlyChannelBreakdown(BaseModel):
    """One month's channel counts next to its result vs the monthly goal.

    Counts are reported as-is; `has_data` tells the presentation layer
    whether the month should be shown at all.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)
    month: str
    month_num: int = Field(..., ge=1, le=12)
    has_data: bool
    va_gov: int
    video: int
    va_news: int
    podcast: int
    total: int
    vs_goal_pct: float | None


class GoalAchievement(BaseModel):
    """Goal vs actual for a complete historical fiscal year."""
    model_config = ConfigDict(extra="forbid", frozen=True)
    year: int
    goal: float
    actual: int
    pct: int


class BaselinePoint(BaseModel):
    """A fiscal year total used as the next year's baseline."""
    model_config = ConfigDict(extra="forbid", frozen=True)
    fiscal_year: int
    baseline: int
    growth_pct: float | None = None
    is_max: bool = False
    is_min: bool = False


class ChannelPerformance(BaseModel):
    """One channel's total, share and year-over-year growth."""
    model_config = ConfigDict(extra="forbid", frozen=True)
    channel: str
    name: str
    total: int
    share_pct: float
    growth_pct: float


class ChannelGrowth(BaseModel):
    """Growth of a channel between two fiscal years."""
    model_config = ConfigDict(extra="forbid", frozen=True)
    channel: str
    name: str
    first_year: int
    last_year: int
    growth_pct: float


class ChannelShare(BaseModel):
    """A channel's slice of one fiscal year's total."""
    model_config = ConfigDict(extra="forbid", frozen=True)
    channel: str
    name: str
    total: int
    share_pct: float


class SeasonalStat(BaseModel):
    """Month-of-year statistics across every fiscal year with data."""
    model_config = ConfigDict(extra="forbid", frozen=True)
    month: str
    month_num: int
    average: float
    max: int
    min: int
    count: int = Field(..., ge=0)


class MonthRank(BaseModel):
    """A single reported month, used for best / worst month rankings."""
    model_config = ConfigDict(extra="forbid", frozen=True)
    fiscal_year: int
    month: str
    month_num: int
    total: int


class MonthComparison(BaseModel):
    """The same month of the year across every fiscal year (0 when absent)."""
    model_config = ConfigDict(extra="forbid", frozen=True)
    month: str
    month_num: int
    totals: dict[int, int]


class QuarterTotal(BaseModel):
    """Fiscal quarter total for one year."""
    model_config = ConfigDict(extra="forbid", frozen=True)
    quarter: str
    label: str
    months: tuple[int, int, int]
    total: int


class ScenarioProjection(BaseModel):
    """Year-end projection under a pace multiplier."""
    model_config = ConfigDict(extra="forbid", frozen=True)
    name: str
    factor: float
    avg_monthly: float
    projected_monthly: float
    year_end: float
    pct_of_goal: float


class RunRate(BaseModel):
    """Monthly average still required to reach the annual goal.

    `required_monthly` is negative once the goal has already been passed.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)
    remaining: float
    months_remaining: int
    required_monthly: float
    avg_monthly: float
    change_required_pct: float


class YtdSummary(BaseModel):
    """Year-to-date KPIs for one fiscal year."""
    model_config = ConfigDict(extra="forbid", frozen=True)
    fiscal_year: int
    baseline: int
    annual_goal: int
    ytd_actual: int
    ytd_goal: int
    pct_of_goal: float
    ahead_behind: int
    months_complete: int
    avg_monthly: float
    projected_annual: float
    run_rate_pct: float
    pace_vs_expected_pct: float
    daily_avg: float
    is_complete: bool
    final_actual: int
    final_goal: int
    final_pct: float


class DashboardData(BaseModel):
    """Everything the presentation layer renders, rebuilt per upload.

    Attributes:
        yearly_totals: Channel totals keyed by fiscal year (all years).
        fiscal_years: Goal-bearing fiscal years (prior year present), ascending.
        goal_tracking: 12-entry series keyed by goal-bearing fiscal year.
        goal_history: Achievement for complete years between earliest and current.
        current_fy: Latest fiscal year present.
        previous_fy: `current_fy - 1`.
        months_complete: Months with reported data in `current_fy`.
        previous_year_baseline: Total for `previous_fy` (0 if absent).
        current_year_goal: Annual goal for `current_fy`.
        current_ytd: YTD KPIs for `current_fy`.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)
    yearly_totals: dict[int, ChannelTotals]
    fiscal_years: list[int]
    goal_tracking: dict[int, list[MonthlyGoalEntry]]
    goal_history: list[GoalAchievement]
    current_fy: int
    previous_fy: int
    months_complete: int
    previous_year_baseline: int
    current_year_goal: int
    current_ytd: YtdSummary
