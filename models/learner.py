# models/learner.py
# Purpose: The learner contract shared by weak learners, the ensemble and AdaBoost.

from __future__ import annotations

from typing import Any, Callable, List, Protocol, Tuple, runtime_checkable

from data import DataSet, Example


@runtime_checkable
class Learner(Protocol):
    """Anything that can be trained on a DataSet and then label single examples.

    Learners that can fit a weighted distribution set the class attribute
    ``supports_sample_weight = True`` and accept ``sample_weight=`` in ``train``.
    """

    def train(self, dataset: DataSet) -> Any: ...

    def predict(self, example: Example) -> Any: ...


# Produces one fresh, untrained weak learner per call.
WeakLearnerFactory = Callable[[], Learner]


def predict_all(learner: Learner, dataset: DataSet) -> List[Any]:
    """Predict every example of ``dataset`` in order.

    Uses the learner's own vectorized ``predict_all`` when it has one.
    """
    batch = getattr(learner, "predict_all", None)
    if callable(batch):
        return list(batch(dataset))
    return [learner.predict(e) for e in dataset]


def tally(predictions, dataset: DataSet) -> Tuple[int, int]:
    """Return (correct, incorrect) counts of ``predictions`` against true labels."""
    correct = 0
    incorrect = 0
    for predicted, example in zip(predictions, dataset):
        if predicted == example.label:
            correct += 1
        else:
            incorrect += 1
    return correct, incorrect
