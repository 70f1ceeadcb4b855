"""
Central configuration for the credit-card fraud detection demo.

File names, split parameters, and model hyperparameters are defined here
so that the split, training, and inference stages agree on them.
"""

import os
from pathlib import Path
from dataclasses import dataclass, field
from typing import List


@dataclass
class DatasetConfig:
    """File names inside the data directory."""

    zipped_dataset_name: str = "creditcardfraud-dataset.zip"
    input_csv_name: str = "creditcard.csv"
    train_csv_name: str = "trainData.csv"
    test_csv_name: str = "testData.csv"
    model_file_name: str = "fastTree.zip"

    # CSV layout
    has_header: bool = True
    separator: str = ","


@dataclass
class SplitConfig:
    """Train/test split configuration."""

    test_fraction: float = 0.2
    seed: int = 1


@dataclass
class ModelConfig:
    """Gradient-boosted tree hyperparameters."""

    n_estimators: int = 100
    num_leaves: int = 20
    min_child_samples: int = 10
    learning_rate: float = 0.2

    # Random seed for reproducibility
    random_state: int = 1

    # Probability at or above which a transaction is labelled fraud
    decision_threshold: float = 0.5


@dataclass
class InferenceConfig:
    """Sample prediction configuration."""

    sample_count: int = 5


def _default_data_dir() -> Path:
    override = os.environ.get("FRAUD_DEMO_DATA_DIR")
    if override:
        return Path(override)
    return Path(__file__).parent.parent / "data"


@dataclass
class Settings:
    """Main settings container."""

    # Project paths
    project_root: Path = field(default_factory=lambda: Path(__file__).parent.parent)
    data_dir: Path = field(default_factory=_default_data_dir)

    # Sub-configurations
    dataset: DatasetConfig = field(default_factory=DatasetConfig)
    split_config: SplitConfig = field(default_factory=SplitConfig)
    model_config: ModelConfig = field(default_factory=ModelConfig)
    inference_config: InferenceConfig = field(default_factory=InferenceConfig)

    # Column names
    label_column: str = "Label"
    stratification_column: str = "StratificationColumn"

    # Numeric predictors, in file order (V1..V28 + Amount)
    feature_columns: List[str] = field(
        default_factory=lambda: [f"V{i}" for i in range(1, 29)] + ["Amount"]
    )

    def __post_init__(self):
        self.data_dir = Path(self.data_dir)

    @property
    def zipped_dataset_file(self) -> Path:
        return self.data_dir / self.dataset.zipped_dataset_name

    @property
    def input_file(self) -> Path:
        return self.data_dir / self.dataset.input_csv_name

    @property
    def train_file(self) -> Path:
        return self.data_dir / self.dataset.train_csv_name

    @property
    def test_file(self) -> Path:
        return self.data_dir / self.dataset.test_csv_name

    @property
    def model_file(self) -> Path:
        return self.data_dir / self.dataset.model_file_name


# Singleton instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
