"""Fixed policy constants shared by the engine and the presentation layer."""

from __future__ import annotations

# Goal = previous fiscal year total * 1.03
GROWTH_FACTOR = 1.03
MONTHS_PER_YEAR = 12
DAYS_PER_MONTH = 30  # approximation used for the daily average KPI
MILLION = 1_000_000

# Federal fiscal year: month 1 = October ... month 12 = September
MONTH_LABELS: tuple[str, ...] = (
    "Oct", "Nov", "Dec", "Jan", "Feb", "Mar",
    "Apr", "May", "Jun", "Jul", "Aug", "Sep",
)

QUARTERS: tuple[tuple[str, str, tuple[int, int, int]], ...] = (
    ("Q1", "Q1 (Oct-Dec)", (1, 2, 3)),
    ("Q2", "Q2 (Jan-Mar)", (4, 5, 6)),
    ("Q3", "Q3 (Apr-Jun)", (7, 8, 9)),
    ("Q4", "Q4 (Jul-Sep)", (10, 11, 12)),
)

SCENARIOS: tuple[tuple[str, float], ...] = (
    ("Pessimistic (-10%)", 0.9),
    ("Current Pace", 1.0),
    ("Optimistic (+10%)", 1.1),
    ("Stretch (+20%)", 1.2),
)

# (frame column, source CSV column, display name, chart color)
CHANNELS: tuple[tuple[str, str, str, str], ...] = (
    ("va_gov", "VA_Gov_PageVisits", "VA.gov", "#1e40af"),
    ("video", "Video_Views", "Video", "#dc2626"),
    ("va_news", "VA_News_PageViews", "VA News", "#16a34a"),
    ("podcast", "Podcast_Downloads", "Podcast", "#9333ea"),
)

CHANNEL_KEYS: tuple[str, ...] = tuple(c[0] for c in CHANNELS)

# Source CSV header → clean frame column
SOURCE_COLUMNS: dict[str, str] = {
    "FiscalYear": "fiscal_year",
    "Month": "month",
    "MonthNum": "month_num",
    "VA_Gov_PageVisits": "va_gov",
    "Video_Views": "video",
    "VA_News_PageViews": "va_news",
    "Podcast_Downloads": "podcast",
    "Total": "total",
}

COUNT_COLUMNS: tuple[str, ...] = ("month_num", *CHANNEL_KEYS, "total")
FRAME_COLUMNS: tuple[str, ...] = ("fiscal_year", "month", *COUNT_COLUMNS)
