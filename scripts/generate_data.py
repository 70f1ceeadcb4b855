#!/usr/bin/env python
"""
Generate a synthetic credit-card dataset archive for development and testing.

Usage:
    python scripts/generate_data.py
    python scripts/generate_data.py --n-transactions 50000 --fraud-rate 0.01
"""

import argparse
from pathlib import Path
import sys

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src.data.synthetic import generate_synthetic_creditcard_data, write_dataset_archive
from config.settings import get_settings


def main():
    parser = argparse.ArgumentParser(description="Generate a synthetic credit-card dataset archive")
    parser.add_argument(
        "--n-transactions", type=int, default=20000,
        help="Total number of transactions (default: 20000)"
    )
    parser.add_argument(
        "--fraud-rate", type=float, default=0.02,
        help="Fraud rate (default: 0.02)"
    )
    parser.add_argument(
        "--output", type=str, default=None,
        help="Archive path (default: data/creditcardfraud-dataset.zip)"
    )
    parser.add_argument(
        "--seed", type=int, default=42,
        help="Random seed for reproducibility (default: 42)"
    )

    args = parser.parse_args()

    settings = get_settings()
    output_path = Path(args.output) if args.output else settings.zipped_dataset_file

    print("=" * 60)
    print("GENERATING SYNTHETIC CREDIT-CARD DATA")
    print("=" * 60)
    print(f"  Transactions: {args.n_transactions:,}")
    print(f"  Fraud Rate: {args.fraud_rate:.1%}")
    print(f"  Output: {output_path}")
    print("=" * 60)

    df = generate_synthetic_creditcard_data(
        n_transactions=args.n_transactions,
        fraud_rate=args.fraud_rate,
        random_seed=args.seed
    )

    write_dataset_archive(df, output_path, settings.dataset.input_csv_name)

    print(f"\nSaved {len(df):,} transactions to {output_path}")
    print(f"File size: {output_path.stat().st_size / 1024 / 1024:.1f} MB")


if __name__ == "__main__":
    main()
