"""
Model serialization utilities.

A saved model is a single zip container with two entries:
- model.joblib: the fitted pipeline (assembler, scaler, tree ensemble)
- metadata.json: format version, feature contract, hyperparameters, metrics
"""

import io
import json
import pickle
import zipfile
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

import joblib

from src.errors import PersistenceError
from .trainer import FittedPipeline


FORMAT_VERSION = 1
MODEL_ENTRY = "model.joblib"
METADATA_ENTRY = "metadata.json"


def save_model(
    fitted: FittedPipeline,
    filepath: str | Path,
    metrics: Optional[Dict[str, float]] = None
) -> Path:
    """
    Save a fitted pipeline to a zip container.

    Args:
        fitted: Trained pipeline
        filepath: Destination file (parent directories are created)
        metrics: Optional evaluation metrics stored in the metadata

    Returns:
        Path to the saved file

    Raises:
        PersistenceError: If the container cannot be written
    """
    filepath = Path(filepath)

    metadata = {
        "format_version": FORMAT_VERSION,
        "model_type": type(fitted.classifier).__name__,
        "created_at": datetime.now().isoformat(),
        "feature_columns": fitted.feature_columns,
        "label_column": fitted.label_column,
        "threshold": fitted.threshold,
        "hyperparameters": fitted.hyperparameters,
        "metrics": {k: float(v) for k, v in (metrics or {}).items()},
    }

    buffer = io.BytesIO()
    partial_path = filepath.with_name(filepath.name + ".partial")
    try:
        joblib.dump(fitted, buffer)
        filepath.parent.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(partial_path, "w", compression=zipfile.ZIP_DEFLATED) as container:
            container.writestr(MODEL_ENTRY, buffer.getvalue())
            container.writestr(METADATA_ENTRY, json.dumps(metadata, indent=2))
        partial_path.replace(filepath)
    except (OSError, pickle.PicklingError, TypeError, AttributeError) as e:
        partial_path.unlink(missing_ok=True)
        raise PersistenceError(f"Could not save model to {filepath}: {e}") from e

    print(f"Saved model to {filepath}")
    return filepath


def load_model_metadata(filepath: str | Path) -> Dict[str, Any]:
    """Read the metadata entry of a saved model."""
    filepath = Path(filepath)
    try:
        with zipfile.ZipFile(filepath) as container:
            metadata = json.loads(container.read(METADATA_ENTRY))
    except FileNotFoundError as e:
        raise PersistenceError(f"Model file not found at {filepath}") from e
    except (OSError, KeyError, zipfile.BadZipFile, json.JSONDecodeError) as e:
        raise PersistenceError(f"Could not read model metadata from {filepath}: {e}") from e

    if not isinstance(metadata, dict):
        raise PersistenceError(f"{filepath}: model metadata is not a JSON object")
    if metadata.get("format_version") != FORMAT_VERSION:
        raise PersistenceError(
            f"Unsupported model format version {metadata.get('format_version')!r} "
            f"in {filepath} (expected {FORMAT_VERSION})"
        )
    return metadata


def load_model(filepath: str | Path) -> FittedPipeline:
    """
    Load a fitted pipeline saved with save_model.

    Raises:
        PersistenceError: If the file is missing, corrupt, of another format
            version, or inconsistent with its metadata
    """
    filepath = Path(filepath)
    metadata = load_model_metadata(filepath)

    try:
        with zipfile.ZipFile(filepath) as container:
            payload = container.read(MODEL_ENTRY)
        fitted = joblib.load(io.BytesIO(payload))
    except (OSError, KeyError, zipfile.BadZipFile, pickle.UnpicklingError, EOFError,
            ValueError, IndexError, AttributeError, ImportError) as e:
        raise PersistenceError(f"Could not load model from {filepath}: {e}") from e

    if not isinstance(fitted, FittedPipeline):
        raise PersistenceError(f"{filepath} does not contain a fitted pipeline")
    if fitted.feature_columns != metadata.get("feature_columns"):
        raise PersistenceError(f"{filepath}: feature columns do not match metadata")

    print(f"Loaded model from {filepath}")
    return fitted
