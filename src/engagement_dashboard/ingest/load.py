"""Load an engagement file into the clean frame used by the engine."""

from __future__ import annotations

import logging

import pandas as pd

from engagement_dashboard.clean.transform import clean_engagement_frame
from engagement_dashboard.clean.validate import reject_duplicates
from engagement_dashboard.ingest.read_csv import CsvSource, read_engagement_csv

log = logging.getLogger(__name__)


def load_engagement_data(source: CsvSource) -> pd.DataFrame:
    """Read, clean and check an engagement CSV.

    Raises:
        IngestError: if the file cannot be read.
        DuplicateRowError: if a fiscal year repeats a month.
    """
    raw = read_engagement_csv(source)
    pdf = clean_engagement_frame(raw)
    reject_duplicates(pdf)

    log.info(
        "Loaded %d rows covering fiscal years %s",
        len(pdf),
        sorted(int(fy) for fy in pdf["fiscal_year"].unique()),
    )
    return pdf
