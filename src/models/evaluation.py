"""
Model evaluation utilities.

Standard binary-classification metrics on a held-out table. Accuracy is the
headline number; precision, recall, AUC, and the confusion counts come from
the same pass.
"""

import numpy as np
import pandas as pd
from typing import Dict, Optional
from sklearn.metrics import (
    accuracy_score,
    average_precision_score,
    roc_auc_score,
    confusion_matrix,
    log_loss
)


def compute_metrics(
    y_true: pd.Series | np.ndarray,
    y_proba: np.ndarray,
    threshold: float = 0.5
) -> Dict[str, float]:
    """
    Compute metrics for binary classification.

    Args:
        y_true: True labels (bool or 0/1)
        y_proba: Predicted fraud probabilities
        threshold: Decision threshold

    Returns:
        Dictionary of metric name -> value. AUC-style metrics are NaN when
        y_true holds a single class.
    """
    metrics = {}

    y_true = np.asarray(y_true).astype(int)
    y_proba = np.asarray(y_proba, dtype=float)
    y_pred = (y_proba >= threshold).astype(int)

    metrics["accuracy"] = accuracy_score(y_true, y_pred) if len(y_true) else float("nan")

    # Probability-based metrics (threshold-independent)
    if len(np.unique(y_true)) == 2:
        metrics["roc_auc"] = roc_auc_score(y_true, y_proba)
        metrics["pr_auc"] = average_precision_score(y_true, y_proba)
    else:
        metrics["roc_auc"] = float("nan")
        metrics["pr_auc"] = float("nan")

    if len(y_true):
        metrics["log_loss"] = log_loss(y_true, y_proba, labels=[0, 1])
    else:
        metrics["log_loss"] = float("nan")

    tn, fp, fn, tp = confusion_matrix(y_true, y_pred, labels=[0, 1]).ravel()

    metrics["precision"] = tp / (tp + fp) if (tp + fp) > 0 else 0.0
    metrics["recall"] = tp / (tp + fn) if (tp + fn) > 0 else 0.0
    metrics["f1"] = 2 * metrics["precision"] * metrics["recall"] / (
        metrics["precision"] + metrics["recall"]
    ) if (metrics["precision"] + metrics["recall"]) > 0 else 0.0

    # Counts
    metrics["true_positives"] = int(tp)
    metrics["false_positives"] = int(fp)
    metrics["true_negatives"] = int(tn)
    metrics["false_negatives"] = int(fn)

    return metrics


def majority_class_accuracy(y_true: pd.Series | np.ndarray) -> float:
    """Accuracy of always predicting the most frequent label."""
    y_true = np.asarray(y_true).astype(int)
    if len(y_true) == 0:
        return float("nan")
    positive_rate = y_true.mean()
    return float(max(positive_rate, 1.0 - positive_rate))


def evaluate(fitted, test_df: pd.DataFrame, label_column: Optional[str] = None) -> Dict[str, float]:
    """
    Apply a fitted pipeline to a test table and compute its metrics.

    Args:
        fitted: FittedPipeline (anything with predict_proba and threshold)
        test_df: Held-out table including the label column
        label_column: Label column name (defaults to the pipeline's)

    Returns:
        Dictionary of metrics, see compute_metrics
    """
    label_column = label_column or fitted.label_column
    y_proba = fitted.predict_proba(test_df)
    return compute_metrics(test_df[label_column], y_proba, fitted.threshold)


def print_evaluation_report(metrics: Dict[str, float], split_name: str = "Test") -> None:
    """Print a formatted evaluation report."""
    print(f"\n{'=' * 60}")
    print(f"{split_name} Set Evaluation")
    print(f"{'=' * 60}")

    print(f"  Accuracy:  {metrics['accuracy']:.4f}")
    print(f"  Precision: {metrics['precision']:.4f}")
    print(f"  Recall:    {metrics['recall']:.4f}")
    print(f"  F1 Score:  {metrics['f1']:.4f}")
    print(f"  ROC-AUC:   {metrics['roc_auc']:.4f}")
    print(f"  PR-AUC:    {metrics['pr_auc']:.4f}")

    print(f"\nConfusion Matrix:")
    print(f"  TN: {metrics['true_negatives']:,}  FP: {metrics['false_positives']:,}")
    print(f"  FN: {metrics['false_negatives']:,}  TP: {metrics['true_positives']:,}")
