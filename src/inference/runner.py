"""
Sample inference over known-fraud transactions.
"""

from itertools import islice
from typing import Callable, Iterable, List

from src.data.schemas import TransactionObservation, TransactionFraudPrediction


def run_sample_predictions(
    predictor,
    observations: Iterable[TransactionObservation],
    count: int = 5,
    emit: Callable[[str], None] = print
) -> List[TransactionFraudPrediction]:
    """
    Predict the first `count` fraud-labelled observations and emit each result.

    Args:
        predictor: FittedPipeline or PredictionEngine
        observations: Row stream, consumed lazily
        count: Number of positive rows to score
        emit: Output sink for each formatted prediction

    Returns:
        The predictions, in input order
    """
    engine = predictor.create_prediction_engine() if hasattr(predictor, "create_prediction_engine") else predictor

    positives = (obs for obs in observations if obs.Label)
    predictions = []
    for observation in islice(positives, count):
        prediction = engine.predict(observation)
        emit(repr(prediction))
        emit("------")
        predictions.append(prediction)

    return predictions
