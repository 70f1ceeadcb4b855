#!/usr/bin/env python
"""
End-to-end training and sample inference for the fraud detection model.

This script:
1. Extracts data/creditcard.csv from data/creditcardfraud-dataset.zip
2. Splits it into trainData.csv / testData.csv (80/20, seed 1)
3. Trains a LightGBM pipeline (normalization + 100 trees)
4. Reports test accuracy
5. Saves the model to fastTree.zip, reloads it, and predicts 5 fraud rows

Usage:
    python scripts/train.py
    python scripts/train.py --data-dir /tmp/fraud --no-wait
"""

import argparse
import logging
from pathlib import Path
import sys

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from config.settings import get_settings
from src.errors import FraudDemoError
from src.workflow import run_workflow


def main():
    parser = argparse.ArgumentParser(description="Train and demo the credit-card fraud model")
    parser.add_argument(
        "--data-dir", type=str, default=None,
        help="Directory holding the dataset archive and outputs (default: data/)"
    )
    parser.add_argument(
        "--no-wait", action="store_true",
        help="Exit without waiting for Enter"
    )

    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO,
                        format='%(asctime)s - %(levelname)s - %(message)s')

    settings = get_settings()
    if args.data_dir:
        settings.data_dir = Path(args.data_dir)

    try:
        run_workflow(settings, wait_for_key=not args.no_wait)
    except FraudDemoError as e:
        print(f"ERROR: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
