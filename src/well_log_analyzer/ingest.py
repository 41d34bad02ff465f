from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Any

import pandas as pd

from .models import LogRecord, RecordStore

logger = logging.getLogger(__name__)

# Positional layout of a well-log CSV. Header names are not trusted.
RECORD_FIELDS: tuple[str, ...] = ("depth", "gamma_ray", "neutron_density", "resistivity", "lithology")
_NUMERIC_FIELDS = RECORD_FIELDS[:4]


class IngestError(ValueError):
    """Raised when a well-log file cannot be turned into a RecordStore."""


def _to_finite_float(raw: Any, *, record_no: int, field: str) -> float:
    if pd.isna(raw):
        raise IngestError(f"Record {record_no}: {field} is missing")
    text = str(raw).strip()
    try:
        value = float(text)
    except ValueError:
        raise IngestError(f"Record {record_no}: {field} is not a number: {text!r}") from None
    if not math.isfinite(value):
        raise IngestError(f"Record {record_no}: {field} is not finite: {text!r}")
    return value


def _read_table(csv_path: Path) -> pd.DataFrame:
    """
    Read every field as text so numeric validation happens in one place.

    Fields are positional, so rows wider than the header (a trailing comma,
    extra notes) are cut back to the header width instead of shifting columns
    into the index.
    """
    try:
        width = pd.read_csv(csv_path, nrows=0, index_col=False).shape[1]
        return pd.read_csv(
            csv_path,
            dtype=str,
            keep_default_na=False,
            skipinitialspace=True,
            index_col=False,
            engine="python",
            on_bad_lines=lambda fields: fields[:width],
        )
    except pd.errors.EmptyDataError:
        raise IngestError(f"File is empty: {csv_path}") from None
    except pd.errors.ParserError as exc:
        raise IngestError(f"Malformed CSV in {csv_path}: {exc}") from exc


def dataframe_to_records(df: pd.DataFrame) -> RecordStore:
    """
    Convert a frame with at least five columns into a RecordStore.

    Columns are taken positionally: depth, gamma_ray, neutron_density,
    resistivity, lithology. Any unparseable or non-finite numeric field aborts
    the whole load.
    """
    if df.shape[1] < len(RECORD_FIELDS):
        raise IngestError(
            f"Expected {len(RECORD_FIELDS)} columns ({', '.join(RECORD_FIELDS)}), found {df.shape[1]}."
        )

    frame = df.iloc[:, : len(RECORD_FIELDS)].copy()
    frame.columns = list(RECORD_FIELDS)

    records: list[LogRecord] = []
    for record_no, row in enumerate(frame.itertuples(index=False), start=1):
        numbers = {
            field: _to_finite_float(getattr(row, field), record_no=record_no, field=field)
            for field in _NUMERIC_FIELDS
        }
        lithology = row.lithology
        records.append(LogRecord(lithology="" if pd.isna(lithology) else str(lithology).strip(), **numbers))

    return RecordStore(records)


def load_records_csv(csv_path: Path) -> RecordStore:
    """
    Load a well-log CSV (header line + one line per record) into a RecordStore.

    A header-only file yields an empty store; callers decide whether that is an error.
    """
    csv_path = Path(csv_path)
    if not csv_path.exists():
        raise IngestError(f"CSV not found: {csv_path}")

    df = _read_table(csv_path)
    store = dataframe_to_records(df)
    logger.debug("Loaded %d records from %s", len(store), csv_path)
    return store
