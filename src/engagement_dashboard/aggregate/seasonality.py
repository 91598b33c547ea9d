"""Month-of-year and quarter statistics."""
from __future__ import annotations

from typing import Sequence

import pandas as pd

from engagement_dashboard.aggregate.common import growth_pct
from engagement_dashboard.aggregate.goal_tracking import month_lookup
from engagement_dashboard.constants import MONTH_LABELS, MONTHS_PER_YEAR, QUARTERS
from engagement_dashboard.models import MonthComparison, MonthRank, QuarterTotal, SeasonalStat


def compute_seasonal_statistics(rows: pd.DataFrame) -> list[SeasonalStat]:
    """Average, max and min monthly total per month-of-year.

    Rows from every fiscal year are pooled by `month_num`; only rows with a
    positive total count as samples. A month with no samples reports zeros.

    Returns:
        Twelve `SeasonalStat` in fiscal order (Oct..Sep).
    """
    samples = rows[rows["total"] > 0]
    grouped = samples.groupby("month_num")["total"].agg(["mean", "max", "min", "count"])

    stats: list[SeasonalStat] = []
    for month_num, label in enumerate(MONTH_LABELS, start=1):
        if month_num in grouped.index:
            rec = grouped.loc[month_num]
            stats.append(
                SeasonalStat(
                    month=label,
                    month_num=month_num,
                    average=float(rec["mean"]),
                    max=int(rec["max"]),
                    min=int(rec["min"]),
                    count=int(rec["count"]),
                )
            )
        else:
            stats.append(
                SeasonalStat(month=label, month_num=month_num, average=0.0, max=0, min=0, count=0)
            )
    return stats


def seasonal_index(stats: Sequence[SeasonalStat]) -> list[float]:
    """Each month's average vs the mean of the twelve monthly averages, in %."""
    overall = sum(s.average for s in stats) / MONTHS_PER_YEAR
    return [growth_pct(s.average, overall) for s in stats]


def compute_quarter_totals(fiscal_year: int, rows: pd.DataFrame) -> list[QuarterTotal]:
    """Sum of monthly totals per fiscal quarter (Q1 = Oct-Dec)."""
    lookup = month_lookup(rows, fiscal_year)
    return [
        QuarterTotal(
            quarter=quarter,
            label=label,
            months=months,
            total=sum(int(lookup[m]["total"]) for m in months if m in lookup),
        )
        for quarter, label, months in QUARTERS
    ]


def compute_top_bottom_months(
    rows: pd.DataFrame,
    n: int = 5,
) -> tuple[list[MonthRank], list[MonthRank]]:
    """Highest and lowest reported months across every fiscal year.

    Rows with a zero total are not ranked. The top list is ordered highest
    first and the bottom list lowest first; with fewer than `2 * n` reported
    months the two lists overlap.
    """
    reported = rows[rows["total"] > 0].sort_values("total", ascending=False, kind="stable")
    ranked = [
        MonthRank(
            fiscal_year=int(rec["fiscal_year"]),
            month=rec["month"] or _month_label(int(rec["month_num"])),
            month_num=int(rec["month_num"]),
            total=int(rec["total"]),
        )
        for rec in reported.to_dict(orient="records")
    ]
    return ranked[:n], ranked[::-1][:n]


def compute_month_by_year(rows: pd.DataFrame) -> list[MonthComparison]:
    """Each month's total in every fiscal year, for year-over-year comparison.

    Returns:
        Twelve `MonthComparison` in fiscal order; a year without that month
        reports 0.
    """
    years = sorted(int(fy) for fy in rows["fiscal_year"].unique())
    lookups = {fy: month_lookup(rows, fy) for fy in years}
    return [
        MonthComparison(
            month=label,
            month_num=month_num,
            totals={
                fy: int(lookups[fy][month_num]["total"]) if month_num in lookups[fy] else 0
                for fy in years
            },
        )
        for month_num, label in enumerate(MONTH_LABELS, start=1)
    ]


def _month_label(month_num: int) -> str:
    if 1 <= month_num <= MONTHS_PER_YEAR:
        return MONTH_LABELS[month_num - 1]
    return str(month_num)
