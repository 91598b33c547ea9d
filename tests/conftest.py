from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import pandas as pd
import pytest

from engagement_dashboard.clean.transform import rows_to_frame
from engagement_dashboard.models import EngagementRow

HEADER = "FiscalYear,Month,MonthNum,VA_Gov_PageVisits,Video_Views,VA_News_PageViews,Podcast_Downloads,Total"
MONTHS = ["Oct", "Nov", "Dec", "Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep"]


@pytest.fixture
def make_rows() -> Callable[..., pd.DataFrame]:
    """Build a clean frame from dicts; `total` defaults to the channel sum."""

    def _make(*records: dict[str, Any]) -> pd.DataFrame:
        rows = []
        for rec in records:
            rec = dict(rec)
            rec.setdefault(
                "total",
                sum(rec.get(k, 0) for k in ("va_gov", "video", "va_news", "podcast")),
            )
            rows.append(EngagementRow(**rec))
        return rows_to_frame(rows)

    return _make


@pytest.fixture
def sample_csv(tmp_path: Path) -> Path:
    """Three fiscal years: FY2023 (one month), FY2024 (full), FY2025 (two months)."""
    lines = [HEADER, "2023,Oct,1,600000,250000,100000,50000,1000000"]
    lines += [f"2024,{m},{i},100000,0,0,0,100000" for i, m in enumerate(MONTHS, start=1)]
    lines += [
        "2025,Oct,1,110000,0,0,0,110000",
        "2025,Nov,2,120000,0,0,0,120000",
        "2025,Dec,3,,,,,",
        ",Oct,1,5,5,5,5,20",
    ]
    path = tmp_path / "engagement.csv"
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path
