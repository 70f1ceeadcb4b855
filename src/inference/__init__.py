from .runner import run_sample_predictions

__all__ = ["run_sample_predictions"]
