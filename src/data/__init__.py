from .schemas import (
    ColumnSpec,
    RAW_COLUMNS,
    SPLIT_COLUMNS,
    TransactionObservation,
    TransactionFraudPrediction,
)
from .loader import load_table, iter_observations
from .dataset import ensure_dataset_extracted
from .split import split_table, split_state, ensure_train_test_split, SplitState
from .synthetic import generate_synthetic_creditcard_data, write_dataset_archive

__all__ = [
    "ColumnSpec",
    "RAW_COLUMNS",
    "SPLIT_COLUMNS",
    "TransactionObservation",
    "TransactionFraudPrediction",
    "load_table",
    "iter_observations",
    "ensure_dataset_extracted",
    "split_table",
    "split_state",
    "ensure_train_test_split",
    "SplitState",
    "generate_synthetic_creditcard_data",
    "write_dataset_archive",
]
