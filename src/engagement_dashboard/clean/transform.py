"""Cleaning and normalization utilities.

The output of `clean_engagement_frame` is a pandas DataFrame with a stable
schema (`FRAME_COLUMNS`) and integer dtypes, which is the only input shape the
aggregation engine accepts. Every cell is parsed by `EngagementRow`, so the
zero-defaulting rule lives in one place (`models.coerce_count`).
"""
from __future__ import annotations

import logging
from typing import Iterable

import pandas as pd

from engagement_dashboard.clean.validate import validate_rows
from engagement_dashboard.constants import COUNT_COLUMNS, FRAME_COLUMNS, SOURCE_COLUMNS
from engagement_dashboard.models import EngagementRow

log = logging.getLogger(__name__)

INT_COLUMNS = ("fiscal_year", *COUNT_COLUMNS)


def empty_frame() -> pd.DataFrame:
    """Return a zero-row frame with the clean schema."""
    pdf = pd.DataFrame({c: pd.Series(dtype="int64") for c in INT_COLUMNS})
    pdf["month"] = pd.Series(dtype=object)
    return pdf[list(FRAME_COLUMNS)]


def clean_engagement_frame(raw: pd.DataFrame) -> pd.DataFrame:
    """Clean a raw engagement table.

    Renames source headers (`FiscalYear`, `VA_Gov_PageVisits`, ...) to the
    clean schema and validates each record as an `EngagementRow`. Rows whose
    fiscal year cannot be resolved are dropped; missing or non-numeric counts
    become 0 and fractional counts are truncated. Columns outside the schema
    are ignored.

    Returns:
        DataFrame with columns `FRAME_COLUMNS`.
    """
    pdf = raw.copy()
    pdf.columns = [str(c).strip() for c in pdf.columns]
    pdf = pdf.rename(columns=SOURCE_COLUMNS)

    if "fiscal_year" not in pdf.columns:
        log.warning("No FiscalYear column found; every row is dropped")
        return empty_frame()

    for col in COUNT_COLUMNS:
        if col not in pdf.columns:
            log.warning("Column %s missing; treating as 0", col)

    # -----------------------------
    # Typed rows
    # -----------------------------
    known = [c for c in FRAME_COLUMNS if c in pdf.columns]
    rows, dropped = validate_rows(pdf[known])
    if dropped:
        log.info("Dropped %d rows without a fiscal year", dropped)

    return rows_to_frame(rows)


def rows_to_frame(rows: Iterable[EngagementRow]) -> pd.DataFrame:
    """Build a clean frame from already-typed rows."""
    records = [r.model_dump() for r in rows]
    if not records:
        return empty_frame()
    pdf = pd.DataFrame.from_records(records, columns=list(FRAME_COLUMNS))
    return pdf.astype({c: "int64" for c in INT_COLUMNS})
