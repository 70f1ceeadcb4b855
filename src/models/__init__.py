from .features import FeatureAssembler, feature_column_names
from .trainer import ModelTrainer, LightGBMTrainer, FittedPipeline, PredictionEngine
from .evaluation import evaluate, compute_metrics, majority_class_accuracy
from .serialization import save_model, load_model, load_model_metadata

__all__ = [
    "FeatureAssembler",
    "feature_column_names",
    "ModelTrainer",
    "LightGBMTrainer",
    "FittedPipeline",
    "PredictionEngine",
    "evaluate",
    "compute_metrics",
    "majority_class_accuracy",
    "save_model",
    "load_model",
    "load_model_metadata",
]
