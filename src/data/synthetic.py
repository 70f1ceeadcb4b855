"""
Synthetic credit-card dataset generator for testing and development.

Generates data shaped like the public creditcard.csv dataset:
- Time: seconds since the first transaction
- V1..V28: standard-normal stand-ins for the anonymized PCA components
- Amount: log-normal transaction amount
- Class: 1 for fraud, 0 otherwise

Fraud rows are shifted along a few V components (and spend more) so that a
tree ensemble can separate the classes.
"""

import zipfile
from pathlib import Path

import numpy as np
import pandas as pd


# Components along which fraud rows drift, with their mean shift
FRAUD_SHIFTS = {
    "V3": -4.0,
    "V4": 3.5,
    "V10": -4.5,
    "V12": -5.0,
    "V14": -6.0,
    "V17": -4.0,
}


def generate_synthetic_creditcard_data(
    n_transactions: int = 10000,
    fraud_rate: float = 0.02,
    random_seed: int = 42
) -> pd.DataFrame:
    """
    Generate a synthetic creditcard.csv-shaped DataFrame.

    Args:
        n_transactions: Number of rows
        fraud_rate: Fraction of rows labelled as fraud (at least one row is)
        random_seed: Random seed for reproducibility

    Returns:
        DataFrame with columns Time, V1..V28, Amount, Class
    """
    rng = np.random.default_rng(random_seed)

    n_fraud = max(1, int(round(n_transactions * fraud_rate)))
    is_fraud = np.zeros(n_transactions, dtype=bool)
    is_fraud[rng.choice(n_transactions, size=n_fraud, replace=False)] = True

    time = np.sort(rng.uniform(0, 172800, size=n_transactions)).round()

    data = {"Time": time}
    for i in range(1, 29):
        name = f"V{i}"
        values = rng.normal(0.0, 1.0, size=n_transactions)
        shift = FRAUD_SHIFTS.get(name)
        if shift is not None:
            values[is_fraud] += shift + rng.normal(0.0, 1.0, size=n_fraud)
        data[name] = values.round(6)

    amount = rng.lognormal(mean=3.0, sigma=1.2, size=n_transactions)
    amount[is_fraud] *= rng.uniform(1.5, 4.0, size=n_fraud)
    data["Amount"] = amount.round(2)
    data["Class"] = is_fraud.astype(int)

    df = pd.DataFrame(data)

    print(f"Generated {len(df):,} transactions")
    print(f"  Fraud rate: {df['Class'].mean():.2%}")

    return df


def write_dataset_archive(
    df: pd.DataFrame,
    archive_path: str | Path,
    csv_name: str = "creditcard.csv"
) -> Path:
    """
    Write df as a CSV member of a zip archive.

    Args:
        df: Dataset in creditcard.csv layout
        archive_path: Destination zip file
        csv_name: Member name inside the archive

    Returns:
        Path to the archive
    """
    archive_path = Path(archive_path)
    archive_path.parent.mkdir(parents=True, exist_ok=True)

    with zipfile.ZipFile(archive_path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        archive.writestr(csv_name, df.to_csv(index=False))

    return archive_path
