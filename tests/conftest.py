"""
Shared fixtures: a small synthetic credit-card dataset in raw and split form.
"""

import pytest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from config.settings import Settings
from src.data.loader import load_table
from src.data.schemas import RAW_COLUMNS, SPLIT_COLUMNS
from src.data.split import split_table, write_split_file
from src.data.synthetic import generate_synthetic_creditcard_data


N_TRANSACTIONS = 2000
FRAUD_RATE = 0.05


@pytest.fixture(scope="session")
def raw_dataset():
    """Synthetic dataset in creditcard.csv layout (Time, V1..V28, Amount, Class)."""
    return generate_synthetic_creditcard_data(
        n_transactions=N_TRANSACTIONS,
        fraud_rate=FRAUD_RATE,
        random_seed=7
    )


@pytest.fixture(scope="session")
def raw_csv(tmp_path_factory, raw_dataset):
    path = tmp_path_factory.mktemp("raw") / "creditcard.csv"
    raw_dataset.to_csv(path, index=False)
    return path


@pytest.fixture(scope="session")
def loaded_raw(raw_csv):
    return load_table(raw_csv, RAW_COLUMNS)


@pytest.fixture(scope="session")
def split_tables(tmp_path_factory, loaded_raw):
    """Train and test tables as read back from split CSV files."""
    train_df, test_df = split_table(loaded_raw, test_fraction=0.2, seed=1)

    directory = tmp_path_factory.mktemp("split")
    train_path = write_split_file(train_df, directory / "trainData.csv")
    test_path = write_split_file(test_df, directory / "testData.csv")

    return load_table(train_path, SPLIT_COLUMNS), load_table(test_path, SPLIT_COLUMNS)


@pytest.fixture
def settings(tmp_path):
    return Settings(data_dir=tmp_path)
