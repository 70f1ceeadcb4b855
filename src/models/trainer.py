"""
Model training for credit-card fraud detection.

The fitted artifact is a three-step scikit-learn Pipeline:
1. FeatureAssembler - concatenate V1..V28 + Amount into "Features"
2. StandardScaler   - mean/variance normalization, fitted on train only
3. LGBMClassifier   - gradient-boosted decision trees

ModelTrainer is the backend seam: anything that can turn a training table
into a FittedPipeline can replace LightGBMTrainer.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Any

import numpy as np
import pandas as pd
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import StandardScaler
import lightgbm as lgb

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))
from config.settings import get_settings, Settings

from src.data.schemas import TransactionObservation, TransactionFraudPrediction
from src.errors import SchemaMismatchError
from .features import FeatureAssembler, feature_column_names


class ModelTrainer(ABC):
    """Fit a training table into a FittedPipeline."""

    @abstractmethod
    def fit(self, train_df: pd.DataFrame) -> "FittedPipeline":
        ...


class LightGBMTrainer(ModelTrainer):
    """
    Gradient-boosted tree trainer.

    Hyperparameters come from settings.model_config (100 trees, 20 leaves,
    10 rows per leaf, learning rate 0.2). Training is single-threaded and
    deterministic for a given seed.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    def build_pipeline(self, feature_columns: List[str]) -> Pipeline:
        """Build the unfitted assemble -> normalize -> classify chain."""
        config = self.settings.model_config

        classifier = lgb.LGBMClassifier(
            n_estimators=config.n_estimators,
            num_leaves=config.num_leaves,
            min_child_samples=config.min_child_samples,
            learning_rate=config.learning_rate,
            random_state=config.random_state,
            deterministic=True,
            verbose=-1,
            n_jobs=1
        )

        return Pipeline([
            ("features", FeatureAssembler(feature_columns)),
            ("normalize", StandardScaler()),
            ("classifier", classifier),
        ])

    def fit(self, train_df: pd.DataFrame) -> "FittedPipeline":
        """
        Fit the pipeline on a training table.

        Args:
            train_df: Table with the label, the predictors, and optionally
                the stratification column (ignored)

        Returns:
            FittedPipeline ready for evaluation and inference
        """
        label_column = self.settings.label_column
        feature_columns = feature_column_names(
            train_df.columns,
            excluded=(label_column, self.settings.stratification_column)
        )
        if feature_columns != list(self.settings.feature_columns):
            raise SchemaMismatchError(
                f"Training table features {feature_columns} do not match "
                f"configured features {self.settings.feature_columns}"
            )

        y_train = train_df[label_column].astype(int)
        n_pos = int(y_train.sum())
        n_neg = len(y_train) - n_pos
        if n_pos == 0 or n_neg == 0:
            raise ValueError("Training data must contain both fraud and legitimate rows")

        print(f"  Features: {len(feature_columns)} | Rows: {len(train_df):,} "
              f"(fraud: {n_pos:,})")

        pipeline = self.build_pipeline(feature_columns)
        pipeline.fit(train_df, y_train)

        fitted = FittedPipeline(
            pipeline,
            feature_columns=feature_columns,
            label_column=label_column,
            threshold=self.settings.model_config.decision_threshold
        )

        from .evaluation import compute_metrics
        train_metrics = compute_metrics(y_train, fitted.predict_proba(train_df), fitted.threshold)
        print(f"  Train accuracy: {train_metrics['accuracy']:.4f}")

        return fitted


class FittedPipeline:
    """
    A trained normalization + classifier chain.

    Wraps the sklearn Pipeline together with the column contract it was
    trained on, and produces prediction columns or single-row predictions.
    """

    def __init__(
        self,
        pipeline: Pipeline,
        feature_columns: List[str],
        label_column: str = "Label",
        threshold: float = 0.5
    ):
        self.pipeline = pipeline
        self.feature_columns = list(feature_columns)
        self.label_column = label_column
        self.threshold = threshold

    @property
    def classifier(self) -> lgb.LGBMClassifier:
        return self.pipeline.named_steps["classifier"]

    @property
    def hyperparameters(self) -> Dict[str, Any]:
        params = self.classifier.get_params()
        keys = ["n_estimators", "num_leaves", "min_child_samples", "learning_rate", "random_state"]
        return {key: params[key] for key in keys}

    def predict_proba(self, X: pd.DataFrame) -> np.ndarray:
        """Fraud probability per row."""
        return self.pipeline.predict_proba(X)[:, 1]

    def decision_scores(self, X: pd.DataFrame) -> np.ndarray:
        """Raw boosted margin per row (log-odds of fraud)."""
        normalized = self.pipeline[:-1].transform(X)
        return self.classifier.predict(normalized, raw_score=True)

    def predict(self, X: pd.DataFrame) -> np.ndarray:
        """Boolean fraud prediction per row."""
        return self.predict_proba(X) >= self.threshold

    def transform(self, X: pd.DataFrame) -> pd.DataFrame:
        """
        Score a table.

        Returns:
            Copy of X with PredictedLabel, Score, and Probability columns
        """
        proba = self.predict_proba(X)
        scored = X.copy()
        scored["PredictedLabel"] = proba >= self.threshold
        scored["Score"] = self.decision_scores(X)
        scored["Probability"] = proba
        return scored

    def create_prediction_engine(self) -> "PredictionEngine":
        """Build a single-row predictor over this pipeline."""
        return PredictionEngine(self)


class PredictionEngine:
    """Score one TransactionObservation at a time."""

    def __init__(self, fitted: FittedPipeline):
        self.fitted = fitted

    def predict(self, observation: TransactionObservation) -> TransactionFraudPrediction:
        row = pd.DataFrame([observation.model_dump()])
        probability = float(self.fitted.predict_proba(row)[0])
        score = float(self.fitted.decision_scores(row)[0])

        return TransactionFraudPrediction(
            Label=observation.Label,
            PredictedLabel=probability >= self.fitted.threshold,
            Score=score,
            Probability=min(max(probability, 0.0), 1.0)
        )
