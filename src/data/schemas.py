"""
Schemas for transaction rows, predictions, and CSV column layouts.

Two column layouts exist:
- RAW_COLUMNS: the original creditcard.csv (Time, V1..V28, Amount, Class)
- SPLIT_COLUMNS: train/test files written by the splitter, with the label
  moved to column 0 and the stratification column appended at 30
"""

from dataclasses import dataclass
from typing import List, Tuple

from pydantic import BaseModel, ConfigDict, Field


BOOL = "bool"
FLOAT32 = "float32"


@dataclass(frozen=True)
class ColumnSpec:
    """One column of a delimited file: name, semantic kind, source index."""

    name: str
    kind: str
    index: int


def _predictor_columns() -> List[ColumnSpec]:
    columns = [ColumnSpec(f"V{i}", FLOAT32, i) for i in range(1, 29)]
    columns.append(ColumnSpec("Amount", FLOAT32, 29))
    return columns


# Pre-split layout; column 0 (Time) is not read
RAW_COLUMNS: Tuple[ColumnSpec, ...] = tuple(
    [ColumnSpec("Label", BOOL, 30)] + _predictor_columns()
)

# Post-split layout
SPLIT_COLUMNS: Tuple[ColumnSpec, ...] = tuple(
    [ColumnSpec("Label", BOOL, 0)]
    + _predictor_columns()
    + [ColumnSpec("StratificationColumn", FLOAT32, 30)]
)


def column_names(columns) -> List[str]:
    """Names of a column layout, in declared order."""
    return [column.name for column in columns]


class TransactionObservation(BaseModel):
    """
    A single labelled transaction.

    V1..V28 are anonymized PCA components of the original card data.
    """

    model_config = ConfigDict(frozen=True)

    Label: bool = Field(..., description="True if the transaction is fraudulent")
    V1: float
    V2: float
    V3: float
    V4: float
    V5: float
    V6: float
    V7: float
    V8: float
    V9: float
    V10: float
    V11: float
    V12: float
    V13: float
    V14: float
    V15: float
    V16: float
    V17: float
    V18: float
    V19: float
    V20: float
    V21: float
    V22: float
    V23: float
    V24: float
    V25: float
    V26: float
    V27: float
    V28: float
    Amount: float = Field(..., description="Transaction amount")


class TransactionFraudPrediction(BaseModel):
    """Output of the single-row prediction engine."""

    model_config = ConfigDict(frozen=True)

    Label: bool = Field(..., description="Ground-truth label of the input row")
    PredictedLabel: bool = Field(..., description="Whether the model flags the row")
    Score: float = Field(..., description="Raw boosted margin")
    Probability: float = Field(..., ge=0.0, le=1.0, description="Fraud probability")
