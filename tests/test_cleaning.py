from __future__ import annotations

from pathlib import Path

import pandas as pd

from engagement_dashboard.aggregate.yearly import compute_yearly_totals
from engagement_dashboard.clean.transform import clean_engagement_frame, rows_to_frame
from engagement_dashboard.constants import FRAME_COLUMNS
from engagement_dashboard.ingest.load import load_engagement_data
from engagement_dashboard.models import EngagementRow


def test_cleaning_renames_headers_and_coerces_counts() -> None:
    pdf = pd.DataFrame([{
        "FiscalYear": "2024",
        "Month": "Oct",
        "MonthNum": "1",
        "VA_Gov_PageVisits": "1,234",
        "Video_Views": "n/a",
        "VA_News_PageViews": None,
        "Podcast_Downloads": "12.7",
        "Total": "1246",
    }])
    out = clean_engagement_frame(pdf)
    assert list(out.columns) == list(FRAME_COLUMNS)
    assert out.loc[0, "fiscal_year"] == 2024
    assert out.loc[0, "va_gov"] == 1234
    assert out.loc[0, "video"] == 0
    assert out.loc[0, "va_news"] == 0
    assert out.loc[0, "podcast"] == 12
    assert out.loc[0, "month"] == "Oct"


def test_cleaning_drops_rows_without_fiscal_year() -> None:
    pdf = pd.DataFrame([
        {"FiscalYear": "2024", "MonthNum": "1", "Total": "10"},
        {"FiscalYear": None, "MonthNum": "2", "Total": "20"},
        {"FiscalYear": "abc", "MonthNum": "3", "Total": "30"},
    ])
    out = clean_engagement_frame(pdf)
    assert len(out) == 1
    assert out.loc[0, "total"] == 10


def test_cleaning_fills_missing_columns_with_zero() -> None:
    pdf = pd.DataFrame([{"FiscalYear": "2024", "MonthNum": "4"}])
    out = clean_engagement_frame(pdf)
    assert out.loc[0, "month_num"] == 4
    assert out.loc[0, "video"] == 0
    assert out.loc[0, "total"] == 0
    assert out.loc[0, "month"] is None


def test_cleaning_without_fiscal_year_column_is_empty() -> None:
    out = clean_engagement_frame(pd.DataFrame([{"MonthNum": "1", "Total": "5"}]))
    assert out.empty
    assert list(out.columns) == list(FRAME_COLUMNS)


def test_rows_to_frame_keeps_integer_dtypes() -> None:
    out = rows_to_frame([EngagementRow(fiscal_year=2024, month_num=1, va_gov=5, total=5)])
    assert out["fiscal_year"].dtype == "int64"
    assert out["total"].dtype == "int64"
    assert rows_to_frame([]).empty


def test_cleaning_treats_out_of_range_counts_as_zero() -> None:
    pdf = pd.DataFrame([
        {"FiscalYear": "2024", "MonthNum": "1", "VA_Gov_PageVisits": "99999999999999999999", "Video_Views": "5"},
        {"FiscalYear": "2024", "MonthNum": "2", "VA_Gov_PageVisits": "-99999999999999999999", "Video_Views": "7"},
    ])
    out = clean_engagement_frame(pdf)
    assert out["va_gov"].tolist() == [0, 0]
    assert compute_yearly_totals(out)[2024].total == 12


def test_cleaning_ignores_unknown_columns() -> None:
    pdf = pd.DataFrame([{"FiscalYear": "2025", "MonthNum": "3", "Total": "9", "Notes": "late upload"}])
    out = clean_engagement_frame(pdf)
    assert list(out.columns) == list(FRAME_COLUMNS)
    assert out.loc[0, "total"] == 9


def test_load_path_uses_row_model(tmp_path: Path) -> None:
    path = tmp_path / "engagement.csv"
    path.write_text(
        "FiscalYear,Month,MonthNum,Total\n"
        "2024.0, Oct ,1,\"1,500\"\n"
        "0,Nov,2,10\n"
        "n/a,Dec,3,10\n",
        encoding="utf-8",
    )
    out = load_engagement_data(path)
    assert len(out) == 1
    assert out.loc[0, "fiscal_year"] == 2024
    assert out.loc[0, "month"] == "Oct"
    assert out.loc[0, "total"] == 1500
    assert out["total"].dtype == "int64"
