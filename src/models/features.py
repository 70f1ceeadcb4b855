"""
Feature assembly: select the numeric predictor columns of a table and
concatenate them into a single float32 feature matrix.
"""

from typing import Iterable, List, Optional, Sequence

import numpy as np
import pandas as pd
from sklearn.base import BaseEstimator, TransformerMixin
from sklearn.utils.validation import check_is_fitted

from src.errors import SchemaMismatchError


# Columns that are never model inputs
NON_FEATURE_COLUMNS = ("Label", "StratificationColumn")


def feature_column_names(
    columns: Iterable[str],
    excluded: Sequence[str] = NON_FEATURE_COLUMNS
) -> List[str]:
    """
    Every column except exactly the excluded ones, in table order.

    Args:
        columns: Column names of a loaded table
        excluded: Names to drop (label and stratification column)

    Returns:
        Feature column names
    """
    excluded = set(excluded)
    return [name for name in columns if name not in excluded]


class FeatureAssembler(BaseEstimator, TransformerMixin):
    """
    Concatenate named numeric columns into one "Features" matrix.

    If feature_columns is None, the columns are derived at fit time from
    the training table by dropping the label and stratification columns.
    """

    def __init__(self, feature_columns: Optional[Sequence[str]] = None):
        self.feature_columns = feature_columns

    def fit(self, X: pd.DataFrame, y=None) -> "FeatureAssembler":
        if self.feature_columns is None:
            columns = feature_column_names(X.columns)
        else:
            columns = list(self.feature_columns)
        self._check_columns(X, columns)
        self.feature_columns_ = columns
        return self

    def transform(self, X: pd.DataFrame) -> np.ndarray:
        check_is_fitted(self, "feature_columns_")
        self._check_columns(X, self.feature_columns_)
        return X[self.feature_columns_].to_numpy(dtype=np.float32)

    def get_feature_names_out(self, input_features=None) -> np.ndarray:
        check_is_fitted(self, "feature_columns_")
        return np.asarray(self.feature_columns_, dtype=object)

    @staticmethod
    def _check_columns(X: pd.DataFrame, columns: Sequence[str]) -> None:
        missing = [name for name in columns if name not in X.columns]
        if missing:
            raise SchemaMismatchError(f"Feature columns missing from input: {missing}")
