from __future__ import annotations

import pytest

from engagement_dashboard.aggregate.seasonality import (
    compute_month_by_year,
    compute_quarter_totals,
    compute_seasonal_statistics,
    compute_top_bottom_months,
    seasonal_index,
)


def test_seasonal_statistics_pool_years(make_rows) -> None:
    rows = make_rows(
        {"fiscal_year": 2023, "month_num": 1, "va_gov": 100},
        {"fiscal_year": 2024, "month_num": 1, "va_gov": 300},
        {"fiscal_year": 2024, "month_num": 2, "va_gov": 0},
    )
    stats = compute_seasonal_statistics(rows)
    assert len(stats) == 12
    oct_, nov = stats[0], stats[1]
    assert oct_.month == "Oct"
    assert oct_.average == pytest.approx(200.0)
    assert (oct_.max, oct_.min, oct_.count) == (300, 100, 2)
    # zero-total rows are not samples
    assert (nov.average, nov.max, nov.min, nov.count) == (0.0, 0, 0, 0)


def test_seasonal_statistics_empty(make_rows) -> None:
    stats = compute_seasonal_statistics(make_rows())
    assert all(s.count == 0 and s.average == 0.0 for s in stats)
    assert seasonal_index(stats) == [0.0] * 12


def test_seasonal_index_vs_overall_average(make_rows) -> None:
    rows = make_rows(
        {"fiscal_year": 2023, "month_num": 1, "va_gov": 100},
        {"fiscal_year": 2024, "month_num": 1, "va_gov": 300},
    )
    index = seasonal_index(compute_seasonal_statistics(rows))
    assert index[0] == pytest.approx(1100.0)
    assert index[1] == pytest.approx(-100.0)


def test_quarter_totals(make_rows) -> None:
    rows = make_rows(
        {"fiscal_year": 2024, "month_num": 1, "va_gov": 100},
        {"fiscal_year": 2024, "month_num": 2, "va_gov": 200},
        {"fiscal_year": 2024, "month_num": 5, "va_gov": 50},
        {"fiscal_year": 2024, "month_num": 12, "va_gov": 10},
        {"fiscal_year": 2025, "month_num": 1, "va_gov": 999},
    )
    quarters = compute_quarter_totals(2024, rows)
    assert [q.quarter for q in quarters] == ["Q1", "Q2", "Q3", "Q4"]
    assert [q.total for q in quarters] == [300, 50, 0, 10]
    assert quarters[0].label == "Q1 (Oct-Dec)"
    assert quarters[3].months == (10, 11, 12)


def test_top_bottom_months_across_years(make_rows) -> None:
    rows = make_rows(
        {"fiscal_year": 2023, "month": "Oct", "month_num": 1, "va_gov": 500},
        {"fiscal_year": 2023, "month": "Nov", "month_num": 2, "va_gov": 100},
        {"fiscal_year": 2024, "month": "Oct", "month_num": 1, "va_gov": 900},
        {"fiscal_year": 2024, "month_num": 2, "va_gov": 300},
        {"fiscal_year": 2024, "month": "Dec", "month_num": 3, "va_gov": 0},
    )
    top, bottom = compute_top_bottom_months(rows, n=2)
    assert [(m.fiscal_year, m.month, m.total) for m in top] == [(2024, "Oct", 900), (2023, "Oct", 500)]
    # the missing label falls back to the fiscal month name
    assert [(m.fiscal_year, m.month, m.total) for m in bottom] == [(2023, "Nov", 100), (2024, "Nov", 300)]


def test_top_bottom_months_empty(make_rows) -> None:
    assert compute_top_bottom_months(make_rows()) == ([], [])


def test_month_by_year(make_rows) -> None:
    rows = make_rows(
        {"fiscal_year": 2023, "month_num": 1, "va_gov": 100},
        {"fiscal_year": 2024, "month_num": 1, "va_gov": 150},
        {"fiscal_year": 2024, "month_num": 12, "va_gov": 40},
    )
    comparison = compute_month_by_year(rows)
    assert [c.month for c in comparison][:2] == ["Oct", "Nov"]
    assert comparison[0].totals == {2023: 100, 2024: 150}
    assert comparison[1].totals == {2023: 0, 2024: 0}
    assert comparison[11].totals == {2023: 0, 2024: 40}
