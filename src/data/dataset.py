"""
Dataset acquisition from the bundled zip archive.
"""

import zipfile
from pathlib import Path

from src.errors import MissingInputError


def ensure_dataset_extracted(
    archive_path: str | Path,
    target_dir: str | Path,
    csv_name: str = "creditcard.csv"
) -> Path:
    """
    Make sure the dataset CSV exists in target_dir, extracting it if needed.

    Extraction is skipped when the CSV is already present; its content is
    not checked.

    Args:
        archive_path: Path to the zipped dataset
        target_dir: Directory the CSV should live in
        csv_name: File name of the CSV inside the archive

    Returns:
        Path to the extracted CSV

    Raises:
        MissingInputError: If the archive is absent, corrupt, or lacks the CSV
    """
    archive_path = Path(archive_path)
    target_dir = Path(target_dir)
    csv_path = target_dir / csv_name

    if csv_path.exists():
        return csv_path

    if not archive_path.exists():
        raise MissingInputError(
            f"Dataset archive not found at {archive_path}\n"
            "Run 'python scripts/generate_data.py' to create a synthetic one."
        )

    print("Extracting dataset")
    target_dir.mkdir(parents=True, exist_ok=True)

    try:
        with zipfile.ZipFile(archive_path) as archive:
            archive.extractall(target_dir)
    except zipfile.BadZipFile as e:
        raise MissingInputError(f"Dataset archive {archive_path} is corrupt: {e}") from e

    if not csv_path.exists():
        raise MissingInputError(f"Dataset archive {archive_path} does not contain {csv_name}")

    return csv_path
