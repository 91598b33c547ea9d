"""Reading helpers for engagement CSV files.

`read_engagement_csv` accepts a filesystem path or a binary/text file-like
object (such as a Streamlit upload) and returns the table with every cell kept
as a string; typing happens in `clean.transform`.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, Union

import pandas as pd

from engagement_dashboard.errors import IngestError

log = logging.getLogger(__name__)

CsvSource = Union[str, Path, IO[bytes], IO[str]]


def source_name(source: CsvSource) -> str:
    """Return a display name for a path or file-like object."""
    if isinstance(source, (str, Path)):
        return str(source)
    return str(getattr(source, "name", "<upload>"))


def is_csv_name(name: str) -> bool:
    """True when `name` carries a `.csv` extension."""
    return Path(name).suffix.lower() == ".csv"


def read_engagement_csv(source: CsvSource) -> pd.DataFrame:
    """Read a comma-delimited engagement file with a header row.

    Args:
        source: Path to a `.csv` file or an open file-like object.

    Returns:
        pandas.DataFrame of strings (NaN for empty cells).

    Raises:
        IngestError: if the name lacks a `.csv` extension, the file is missing,
            empty, or cannot be parsed as CSV.
    """
    name = source_name(source)
    if isinstance(source, (str, Path)) or hasattr(source, "name"):
        if not is_csv_name(name):
            raise IngestError(f"{name}: expected a .csv file")

    try:
        pdf = pd.read_csv(source, dtype=str, skipinitialspace=True)
    except pd.errors.EmptyDataError as e:
        raise IngestError(f"{name}: file is empty") from e
    except (pd.errors.ParserError, UnicodeDecodeError) as e:
        raise IngestError(f"{name}: not a readable CSV ({e})") from e
    except OSError as e:
        raise IngestError(f"{name}: {e}") from e

    log.info("Read %d rows from %s", len(pdf), name)
    return pdf
