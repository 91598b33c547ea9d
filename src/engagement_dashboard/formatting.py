"""Display helpers for the presentation layer.

The engine emits raw integer magnitudes; scaling to millions and label
formatting happen only here.
"""

from __future__ import annotations

from engagement_dashboard.constants import MILLION


def to_millions(value: float | None) -> float:
    """Scale a raw count to millions (None → 0.0)."""
    return (value or 0) / MILLION


def format_millions(value: float | None, digits: int = 1) -> str:
    """`12_345_678` → `"12.3M"`."""
    return f"{to_millions(value):.{digits}f}M"


def format_with_commas(value: float | None) -> str:
    """`1234567` → `"1,234,567"`; None renders as a dash."""
    if value is None:
        return "-"
    return f"{round(value):,}"


def format_pct(value: float | None, digits: int = 1, signed: bool = False) -> str:
    """Percentage label; None renders as a dash."""
    if value is None:
        return "-"
    sign = "+" if signed else ""
    return f"{value:{sign}.{digits}f}%"


def fy_label(fiscal_year: int) -> str:
    """`2025` → `"FY25"`."""
    return f"FY{str(fiscal_year)[-2:]}"
