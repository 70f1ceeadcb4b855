"""
Schema-driven loading of delimited transaction files.

Every column is read as text first and then converted to the kind declared
in its ColumnSpec, so malformed rows fail loudly instead of being coerced.
"""

from pathlib import Path
from typing import Iterator, Sequence

import numpy as np
import pandas as pd

from src.data.schemas import BOOL, FLOAT32, ColumnSpec, TransactionObservation, column_names
from src.errors import MissingInputError, SchemaMismatchError


_TRUE_VALUES = {"1", "1.0", "true"}
_FALSE_VALUES = {"0", "0.0", "false"}


def load_table(
    filepath: str | Path,
    columns: Sequence[ColumnSpec],
    has_header: bool = True,
    separator: str = ","
) -> pd.DataFrame:
    """
    Load a delimited text file into a typed DataFrame.

    Args:
        filepath: Path to the delimited file
        columns: Column layout (name, kind, source index)
        has_header: Whether the first line is a header row to skip
        separator: Field separator

    Returns:
        DataFrame with one column per ColumnSpec, in declared order

    Raises:
        MissingInputError: If the file does not exist
        SchemaMismatchError: If a row does not fit the layout
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise MissingInputError(f"Data file not found at {filepath}")

    first_data_line = 2 if has_header else 1

    try:
        raw = pd.read_csv(
            filepath,
            sep=separator,
            header=None,
            skiprows=1 if has_header else 0,
            dtype=str,
            keep_default_na=False,
        )
    except pd.errors.EmptyDataError:
        return _empty_frame(columns)
    except pd.errors.ParserError as e:
        raise SchemaMismatchError(f"{filepath}: {e}") from e

    width = raw.shape[1]
    needed = max(column.index for column in columns) + 1
    if width != needed:
        raise SchemaMismatchError(
            f"{filepath}: expected {needed} fields per row, found {width}"
        )

    data = {}
    for column in columns:
        values = raw[column.index]
        blank = values.isna() | (values.str.strip() == "")
        if blank.any():
            row = int(np.flatnonzero(blank.to_numpy())[0])
            raise SchemaMismatchError(
                f"{filepath} line {row + first_data_line}: "
                f"missing value for column '{column.name}'"
            )
        data[column.name] = _convert(values, column, filepath, first_data_line)

    return pd.DataFrame(data, columns=column_names(columns))


def _convert(
    values: pd.Series,
    column: ColumnSpec,
    filepath: Path,
    first_data_line: int
) -> pd.Series:
    """Convert a text column to the kind declared in its ColumnSpec."""
    if column.kind == FLOAT32:
        try:
            return pd.to_numeric(values.str.strip(), errors="raise").astype(np.float32)
        except ValueError as e:
            raise SchemaMismatchError(
                f"{filepath}: column '{column.name}' is not numeric ({e})"
            ) from e

    if column.kind == BOOL:
        normalized = values.str.strip().str.lower()
        known = normalized.isin(_TRUE_VALUES | _FALSE_VALUES)
        if not known.all():
            row = int(np.flatnonzero(~known.to_numpy())[0])
            raise SchemaMismatchError(
                f"{filepath} line {row + first_data_line}: "
                f"'{values.iloc[row]}' is not a boolean for column '{column.name}'"
            )
        return normalized.isin(_TRUE_VALUES)

    raise SchemaMismatchError(f"Unsupported column kind: {column.kind}")


def _empty_frame(columns: Sequence[ColumnSpec]) -> pd.DataFrame:
    return pd.DataFrame({
        column.name: pd.Series(dtype=bool if column.kind == BOOL else np.float32)
        for column in columns
    })


def iter_observations(df: pd.DataFrame) -> Iterator[TransactionObservation]:
    """
    Stream the rows of a loaded table as TransactionObservation records.

    Columns not part of the observation (e.g. StratificationColumn) are ignored.
    """
    fields = list(TransactionObservation.model_fields)
    missing = [name for name in fields if name not in df.columns]
    if missing:
        raise SchemaMismatchError(f"Table is missing observation columns: {missing}")

    for label, *values in df[fields].itertuples(index=False, name=None):
        record = {name: float(value) for name, value in zip(fields[1:], values)}
        yield TransactionObservation(Label=bool(label), **record)
