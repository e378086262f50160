"""Ingest employee rosters from CSV exports.

Expected layout, one employee per row::

    Id,firstName,lastName,salary,managerId
    123,Joe,Doe,60000,
    124,Martin,Chekov,45000,123

An empty manager id marks the CEO.
"""

import csv
import logging
from pathlib import Path

import numpy as np
import pandas as pd
import pandera as pa

from orgaudit.errors import MalformedRecordError
from orgaudit.hierarchy.models import ROSTER_COLUMNS, Record, roster_schema

logger = logging.getLogger(__name__)

type FilePath = str | Path

INTEGER_COLUMNS = ("id", "salary", "manager_id")
INTEGER_PATTERN = r"[+-]?[0-9]+"
ENCODING = "utf-8-sig"


def _file_line(index: int, has_header: bool) -> int:
    return index + (2 if has_header else 1)


def _check_field_counts(path: Path) -> None:
    """Reject any non-blank row that does not have exactly five fields."""
    with open(path, newline="", encoding=ENCODING) as f:
        reader = csv.reader(f)
        try:
            for row in reader:
                if row and len(row) != len(ROSTER_COLUMNS):
                    raise MalformedRecordError(
                        f"Expected {len(ROSTER_COLUMNS)} fields per row, found {len(row)}",
                        line=reader.line_num,
                    )
        except UnicodeDecodeError as exc:
            raise MalformedRecordError(f"Roster is not valid UTF-8: {exc.reason}") from exc


def _read_raw(path: Path, has_header: bool) -> pd.DataFrame:
    _check_field_counts(path)
    try:
        raw = pd.read_csv(
            path, header=None, dtype=str, keep_default_na=False, encoding=ENCODING
        )
    except pd.errors.EmptyDataError:
        return pd.DataFrame(columns=ROSTER_COLUMNS, dtype=str)
    except pd.errors.ParserError as exc:
        raise MalformedRecordError(f"Invalid CSV line format: {exc}") from exc

    raw.columns = ROSTER_COLUMNS
    if has_header:
        raw = raw.iloc[1:].reset_index(drop=True)
    return raw


def _coerce_integer_column(
    frame: pd.DataFrame,
    column: str,
    has_header: bool,
    nullable: bool = False,
) -> pd.Series:
    """Parse a text column into nullable integers, rejecting anything else."""
    text = frame[column]
    blank = text == ""
    bad = ~blank & ~text.str.fullmatch(INTEGER_PATTERN)
    if not nullable:
        bad |= blank

    # Python ints keep every digit; out-of-range values are rejected, not rounded
    numbers = text.mask(blank | bad).map(int, na_action="ignore")
    limits = np.iinfo(np.int64)
    bad |= numbers.map(lambda n: not limits.min <= n <= limits.max, na_action="ignore").eq(True)

    if bad.any():
        index = bad.idxmax()
        raise MalformedRecordError(
            f"Invalid number format in column '{column}': {frame.at[index, column]!r}",
            line=_file_line(index, has_header),
        )
    return numbers.astype("Int64")


def parse_roster_frame(raw: pd.DataFrame, has_header: bool = True) -> pd.DataFrame:
    """Turn a frame of raw text fields into a schema-validated roster frame."""
    missing = raw.isna().any(axis=1)
    if missing.any():
        index = missing.idxmax()
        raise MalformedRecordError(
            f"Expected {len(ROSTER_COLUMNS)} fields per row",
            line=_file_line(index, has_header),
        )

    frame = raw.apply(lambda col: col.str.strip())
    for column in INTEGER_COLUMNS:
        frame[column] = _coerce_integer_column(
            frame, column, has_header, nullable=column == "manager_id"
        )

    try:
        return roster_schema.validate(frame, lazy=True)
    except pa.errors.SchemaErrors as exc:
        errors = []
        for _, row in exc.failure_cases.iterrows():
            match row.to_dict():
                case {"column": col, "check": check, "failure_case": val, "index": idx} if pd.notna(idx):
                    line = _file_line(int(idx), has_header)
                    errors.append(f"line {line}: column '{col}' failed check '{check}': {val}")
                case {"column": col, "check": check, "failure_case": val}:
                    errors.append(f"Column '{col}' failed check '{check}': {val}")
                case failure:
                    errors.append(f"Validation failure: {failure}")
        raise MalformedRecordError("; ".join(errors)) from exc


def records_from_frame(frame: pd.DataFrame) -> list[Record]:
    return [
        Record(
            id=int(row.id),
            first_name=row.first_name,
            last_name=row.last_name,
            salary=int(row.salary),
            manager_id=None if pd.isna(row.manager_id) else int(row.manager_id),
        )
        for row in frame.itertuples(index=False)
    ]


def read_roster_frame(path: FilePath, has_header: bool = True) -> pd.DataFrame:
    """Read and validate a roster CSV into a typed DataFrame.

    Raises FileNotFoundError for a missing file and MalformedRecordError
    for rows with the wrong number of fields or invalid values.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Roster file not found: {path}")

    raw = _read_raw(path, has_header)
    if raw.empty:
        logger.warning("Roster %s contains no employee rows", path.name)
        return raw
    return parse_roster_frame(raw, has_header)


def load_roster(path: FilePath, has_header: bool = True) -> list[Record]:
    """Read a roster CSV into records, in file order."""
    records = records_from_frame(read_roster_frame(path, has_header))
    logger.info("Loaded %d employee records from %s", len(records), Path(path).name)
    return records
