"""Validation utilities for the clean engagement table.

Rows are validated against the Pydantic `EngagementRow` model, and
`(fiscal_year, month_num)` keys are checked for duplicates, which are rejected
rather than resolved silently.
"""
from __future__ import annotations

from typing import Any

import pandas as pd
from pydantic import ValidationError

from engagement_dashboard.constants import MONTHS_PER_YEAR
from engagement_dashboard.errors import DuplicateRowError
from engagement_dashboard.models import EngagementRow


def validate_rows(pdf: pd.DataFrame) -> tuple[list[EngagementRow], int]:
    """Validate every record of `pdf` with Pydantic.

    Args:
        pdf: Clean or raw-but-renamed pandas DataFrame.

    Returns:
        A tuple of (list_of_validated_rows, bad_count).
    """
    good: list[EngagementRow] = []
    bad = 0

    for rec in pdf.to_dict(orient="records"):
        values: dict[str, Any] = {k: (None if pd.isna(v) else v) for k, v in rec.items()}
        try:
            good.append(EngagementRow.model_validate(values))
        except ValidationError:
            bad += 1

    return good, bad


def find_duplicate_keys(pdf: pd.DataFrame) -> list[tuple[int, int]]:
    """Return `(fiscal_year, month_num)` pairs present more than once.

    Only months 1..12 are considered; rows outside that range never reach a
    goal-tracking slot.
    """
    in_range = pdf[pdf["month_num"].between(1, MONTHS_PER_YEAR)]
    dupes = in_range[in_range.duplicated(["fiscal_year", "month_num"], keep=False)]
    keys = {(int(fy), int(m)) for fy, m in zip(dupes["fiscal_year"], dupes["month_num"])}
    return sorted(keys)


def reject_duplicates(pdf: pd.DataFrame) -> None:
    """Raise `DuplicateRowError` if any fiscal year has a month twice."""
    keys = find_duplicate_keys(pdf)
    if keys:
        raise DuplicateRowError(keys)
