"""
End-to-end fraud detection workflow.

1. Extract the dataset from its archive (if needed)
2. Split it 80/20 into train/test CSVs (if needed)
3. Load train and test data
4. Train the gradient-boosted tree pipeline
5. Evaluate accuracy on the test set
6. Save the model
7. Reload the model and predict five known-fraud test rows
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))
from config.settings import get_settings, Settings

from src.data.dataset import ensure_dataset_extracted
from src.data.loader import load_table, iter_observations
from src.data.schemas import SPLIT_COLUMNS, TransactionFraudPrediction
from src.data.split import ensure_train_test_split
from src.inference.runner import run_sample_predictions
from src.models.evaluation import evaluate, print_evaluation_report
from src.models.serialization import save_model, load_model
from src.models.trainer import LightGBMTrainer, ModelTrainer


@dataclass
class WorkflowResult:
    """What a workflow run produced."""

    metrics: Dict[str, float]
    model_path: Path
    predictions: List[TransactionFraudPrediction] = field(default_factory=list)
    extracted: bool = False
    split_written: bool = False


def run_workflow(
    settings: Optional[Settings] = None,
    trainer: Optional[ModelTrainer] = None,
    wait_for_key: bool = False
) -> WorkflowResult:
    """
    Run the full pipeline.

    Args:
        settings: Configuration (global settings if None)
        trainer: Training backend (LightGBMTrainer if None)
        wait_for_key: Block on "Press Enter to quit" at the end

    Returns:
        WorkflowResult with metrics, model path, and sample predictions
    """
    settings = settings or get_settings()
    trainer = trainer or LightGBMTrainer(settings)
    dataset = settings.dataset

    # Dataset acquisition
    had_input = settings.input_file.exists()
    input_file = ensure_dataset_extracted(
        settings.zipped_dataset_file,
        settings.data_dir,
        dataset.input_csv_name
    )

    # Persistent train/test split
    split_written = ensure_train_test_split(
        input_file,
        settings.train_file,
        settings.test_file,
        test_fraction=settings.split_config.test_fraction,
        seed=settings.split_config.seed,
        has_header=dataset.has_header,
        separator=dataset.separator
    )

    print("Reading train and test data")
    train_df = load_table(settings.train_file, SPLIT_COLUMNS, dataset.has_header, dataset.separator)
    test_df = load_table(settings.test_file, SPLIT_COLUMNS, dataset.has_header, dataset.separator)

    print("Training model")
    model = trainer.fit(train_df)

    metrics = evaluate(model, test_df, settings.label_column)
    print(f"Accuracy: {metrics['accuracy']:.2f}")
    print_evaluation_report(metrics)

    print("Saving model to file")
    model_path = save_model(model, settings.model_file, metrics)

    print("Reading model and test data")
    reloaded = load_model(model_path)
    engine = reloaded.create_prediction_engine()
    test_df = load_table(settings.test_file, SPLIT_COLUMNS, dataset.has_header, dataset.separator)

    print("Making predictions")
    predictions = run_sample_predictions(
        engine,
        iter_observations(test_df),
        count=settings.inference_config.sample_count
    )

    if wait_for_key:
        input("Press Enter to quit")

    return WorkflowResult(
        metrics=metrics,
        model_path=model_path,
        predictions=predictions,
        extracted=not had_input,
        split_written=split_written
    )
