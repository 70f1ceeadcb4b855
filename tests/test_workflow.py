"""
Tests for sample inference and the end-to-end workflow.
"""

import importlib.util
from itertools import chain

import pytest
import pandas as pd

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.data.loader import iter_observations, load_table
from src.data.schemas import SPLIT_COLUMNS
from src.data.synthetic import write_dataset_archive
from src.errors import MissingInputError
from src.inference.runner import run_sample_predictions
from src.models.evaluation import majority_class_accuracy
from src.models.serialization import load_model
from src.models.trainer import LightGBMTrainer
from src.workflow import run_workflow

import config.settings as settings_module


def _load_train_script():
    path = Path(__file__).parent.parent / "scripts" / "train.py"
    spec = importlib.util.spec_from_file_location("train_script", path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture(scope="module")
def fitted(split_tables):
    train_df, _ = split_tables
    return LightGBMTrainer().fit(train_df)


class TestSamplePredictions:
    """Tests for run_sample_predictions."""

    def test_only_fraud_rows(self, fitted, split_tables):
        _, test_df = split_tables
        lines = []
        predictions = run_sample_predictions(fitted, iter_observations(test_df), emit=lines.append)

        assert len(predictions) == 5
        assert all(p.Label for p in predictions)
        assert len(lines) == 10
        assert lines[1::2] == ["------"] * 5

    def test_takes_first_positive_rows_in_order(self, fitted, split_tables):
        _, test_df = split_tables
        expected = test_df[test_df["Label"]].head(3)
        engine = fitted.create_prediction_engine()

        predictions = run_sample_predictions(engine, iter_observations(test_df), count=3, emit=lambda _: None)
        direct = [engine.predict(obs) for obs in iter_observations(expected)]

        assert predictions == direct

    def test_fewer_positives_than_requested(self, fitted, split_tables):
        _, test_df = split_tables
        few = pd.concat([test_df[~test_df["Label"]].head(20), test_df[test_df["Label"]].head(2)])

        predictions = run_sample_predictions(fitted, iter_observations(few), emit=lambda _: None)
        assert len(predictions) == 2

    def test_stream_consumed_lazily(self, fitted, split_tables):
        """Rows after the last needed positive are never read."""
        _, test_df = split_tables
        positives = test_df[test_df["Label"]].head(5)

        def exploding():
            raise AssertionError("read past the fifth positive row")
            yield

        stream = chain(iter_observations(positives), exploding())
        predictions = run_sample_predictions(fitted, stream, emit=lambda _: None)
        assert len(predictions) == 5


class TestRunWorkflow:
    """End-to-end tests on a synthetic archive."""

    @pytest.fixture
    def archived(self, settings, raw_dataset):
        write_dataset_archive(raw_dataset, settings.zipped_dataset_file, settings.dataset.input_csv_name)
        return settings

    def test_full_run(self, archived, capsys):
        result = run_workflow(archived)

        assert result.extracted is True
        assert result.split_written is True
        for path in (archived.input_file, archived.train_file, archived.test_file, archived.model_file):
            assert path.exists()

        assert 0.0 <= result.metrics["accuracy"] <= 1.0
        assert len(result.predictions) == 5
        assert all(p.Label for p in result.predictions)

        output = capsys.readouterr().out
        assert "Extracting dataset" in output
        assert "Accuracy: " in output
        assert "Making predictions" in output

    def test_beats_majority_baseline(self, archived):
        result = run_workflow(archived)
        reloaded = load_model(result.model_path)
        test_df = load_table(archived.test_file, SPLIT_COLUMNS)

        assert result.metrics["accuracy"] > majority_class_accuracy(test_df["Label"])
        assert reloaded.feature_columns == archived.feature_columns

    def test_second_run_is_idempotent(self, archived):
        first = run_workflow(archived)
        mtimes = {
            p: p.stat().st_mtime_ns
            for p in (archived.input_file, archived.train_file, archived.test_file)
        }
        archived.zipped_dataset_file.unlink()

        second = run_workflow(archived)

        assert second.extracted is False
        assert second.split_written is False
        assert {p: p.stat().st_mtime_ns for p in mtimes} == mtimes
        assert second.metrics == first.metrics
        assert second.predictions == first.predictions

    def test_waits_for_enter(self, archived, monkeypatch):
        prompts = []
        monkeypatch.setattr("builtins.input", lambda prompt="": prompts.append(prompt) or "")

        run_workflow(archived, wait_for_key=True)
        assert prompts == ["Press Enter to quit"]

    def test_missing_archive(self, settings):
        with pytest.raises(MissingInputError):
            run_workflow(settings)


class TestTrainScript:
    """Tests for the scripts/train.py command line."""

    @pytest.fixture
    def train_script(self, monkeypatch):
        monkeypatch.setattr(settings_module, "_settings", None)
        return _load_train_script()

    def test_missing_archive_exits_with_error(self, train_script, tmp_path, monkeypatch, capsys):
        monkeypatch.setattr(sys, "argv", ["train.py", "--data-dir", str(tmp_path), "--no-wait"])

        with pytest.raises(SystemExit) as excinfo:
            train_script.main()

        assert excinfo.value.code == 1
        assert "ERROR:" in capsys.readouterr().out

    def test_data_dir_and_no_wait(self, train_script, tmp_path, raw_dataset, monkeypatch):
        write_dataset_archive(raw_dataset, tmp_path / "creditcardfraud-dataset.zip")

        def unexpected_input(prompt=""):
            raise AssertionError("waited for Enter despite --no-wait")

        monkeypatch.setattr("builtins.input", unexpected_input)
        monkeypatch.setattr(sys, "argv", ["train.py", "--data-dir", str(tmp_path), "--no-wait"])

        train_script.main()

        for name in ("creditcard.csv", "trainData.csv", "testData.csv", "fastTree.zip"):
            assert (tmp_path / name).exists()
