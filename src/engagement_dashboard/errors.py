"""Exceptions raised while ingesting an engagement file."""

from __future__ import annotations


class IngestError(ValueError):
    """The supplied file could not be read as an engagement CSV."""


class DuplicateRowError(IngestError):
    """More than one row was supplied for the same fiscal year and month.

    Attributes:
        keys: Sorted `(fiscal_year, month_num)` pairs that occur more than once.
    """

    def __init__(self, keys: list[tuple[int, int]]) -> None:
        self.keys = keys
        shown = ", ".join(f"FY{fy} month {m}" for fy, m in keys)
        super().__init__(f"duplicate rows for {shown}")
