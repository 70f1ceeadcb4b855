"""
Persistent, reproducible train/test splitting.

The split is stratified by label: inside each label group, rows are ranked
by a seeded random StratificationColumn and the lowest-ranked fraction goes
to the test set. Both subsets are written to CSV once and reused by later
runs.
"""

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Tuple

import numpy as np
import pandas as pd

from src.data.loader import load_table
from src.data.schemas import RAW_COLUMNS, SPLIT_COLUMNS, column_names

logger = logging.getLogger(__name__)


LABEL_COLUMN = "Label"
STRATIFICATION_COLUMN = "StratificationColumn"


class SplitState(Enum):
    """Presence of the persisted split files."""

    COMPLETE = "complete"
    MISSING = "missing"
    PARTIAL = "partial"


def split_state(train_path: str | Path, test_path: str | Path) -> SplitState:
    """Report whether both, neither, or only one split file exists."""
    present = [Path(train_path).exists(), Path(test_path).exists()]
    if all(present):
        return SplitState.COMPLETE
    if not any(present):
        return SplitState.MISSING
    return SplitState.PARTIAL


def add_stratification_column(
    df: pd.DataFrame,
    seed: int = 1,
    column: str = STRATIFICATION_COLUMN
) -> pd.DataFrame:
    """Return a copy of df with a seeded uniform random float32 column appended."""
    rng = np.random.default_rng(seed)
    df = df.copy()
    df[column] = rng.random(len(df)).astype(np.float32)
    return df


def split_table(
    df: pd.DataFrame,
    test_fraction: float = 0.2,
    seed: int = 1,
    label_column: str = LABEL_COLUMN,
    stratification_column: str = STRATIFICATION_COLUMN
) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """
    Split a table into disjoint train and test subsets.

    Args:
        df: Table with a label column
        test_fraction: Fraction of each label group assigned to test
        seed: Seed for the stratification column (used only if it is absent)
        label_column: Column to stratify on
        stratification_column: Random column used to order rows in a group

    Returns:
        Tuple of (train_df, test_df); original index values are preserved
    """
    if not 0.0 < test_fraction < 1.0:
        raise ValueError(f"test_fraction must be in (0, 1), got {test_fraction}")

    if stratification_column not in df.columns:
        df = add_stratification_column(df, seed, stratification_column)

    groups = df.groupby(label_column)[stratification_column]
    rank = groups.rank(method="first")
    group_size = groups.transform("size")
    n_test = np.floor(group_size * test_fraction + 0.5)

    is_test = rank <= n_test
    train_df = df[~is_test]
    test_df = df[is_test]

    total = len(df)
    if total:
        print(f"  Train: {len(train_df):,} ({len(train_df)/total:.1%}) | "
              f"Test: {len(test_df):,} ({len(test_df)/total:.1%})")

    return train_df, test_df


def write_split_file(df: pd.DataFrame, filepath: str | Path, separator: str = ",") -> Path:
    """
    Write one split subset as CSV plus a JSON schema sidecar.

    Columns are written in the post-split order (Label first,
    StratificationColumn last); the label is written as 0/1.
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    out = df[column_names(SPLIT_COLUMNS)].copy()
    out[LABEL_COLUMN] = out[LABEL_COLUMN].astype(int)

    with open(filepath, "w", newline="") as f:
        out.to_csv(f, sep=separator, index=False)

    schema = {
        "separator": separator,
        "has_header": True,
        "columns": [
            {"name": c.name, "kind": c.kind, "index": c.index} for c in SPLIT_COLUMNS
        ],
        "rows": len(out),
    }
    with open(schema_path_for(filepath), "w") as f:
        json.dump(schema, f, indent=2)

    return filepath


def schema_path_for(filepath: str | Path) -> Path:
    """Location of the schema sidecar for a split CSV."""
    filepath = Path(filepath)
    return filepath.with_name(filepath.name + ".schema.json")


def ensure_train_test_split(
    input_csv: str | Path,
    train_path: str | Path,
    test_path: str | Path,
    test_fraction: float = 0.2,
    seed: int = 1,
    has_header: bool = True,
    separator: str = ","
) -> bool:
    """
    Split the raw dataset into train/test CSV files unless both already exist.

    If only one of the two files exists the pair is treated as corrupt and
    both are regenerated.

    Returns:
        True if the split was (re)written, False if existing files were kept
    """
    state = split_state(train_path, test_path)
    if state is SplitState.COMPLETE:
        return False
    if state is SplitState.PARTIAL:
        logger.warning(
            "Only one of %s and %s exists; re-splitting from %s",
            train_path, test_path, input_csv
        )

    print("Preparing train and test data")
    data = load_table(input_csv, RAW_COLUMNS, has_header=has_header, separator=separator)
    train_df, test_df = split_table(data, test_fraction=test_fraction, seed=seed)

    write_split_file(test_df, test_path, separator)
    write_split_file(train_df, train_path, separator)
    return True
