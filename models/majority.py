# models/majority.py
# Purpose: Trivial baseline learners (weighted majority label, fixed label).

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import numpy as np

from data import DataSet, Example
from models.errors import EmptyDatasetError


@dataclass
class MajorityLearner:
    """Predicts the most frequent (or most heavily weighted) training label.

    Ties go to the label that appears first in the training data.
    """

    # Adapter metadata
    name: str = field(default="majority", init=False)
    supports_sample_weight: bool = field(default=True, init=False)

    _label: Any = field(default=None, init=False, repr=False)
    _fitted: bool = field(default=False, init=False, repr=False)

    def train(self, dataset: DataSet, *, sample_weight: Optional[np.ndarray] = None) -> "MajorityLearner":
        if len(dataset) == 0:
            raise EmptyDatasetError("Cannot train a majority learner on an empty dataset.")
        w = np.ones(len(dataset)) if sample_weight is None else np.asarray(sample_weight, dtype=np.float64)
        totals: Dict[Any, float] = {}
        for example, weight in zip(dataset, w):
            totals[example.label] = totals.get(example.label, 0.0) + float(weight)
        self._label = max(totals, key=totals.__getitem__)
        self._fitted = True
        return self

    def predict(self, example: Example) -> Any:
        if not self._fitted:
            raise RuntimeError("Model is not fitted. Call train() first.")
        return self._label


@dataclass
class ConstantLearner:
    """Ignores its training data and always predicts ``label``."""

    label: Any = None

    # Adapter metadata
    name: str = field(default="constant", init=False)
    supports_sample_weight: bool = field(default=True, init=False)

    def train(self, dataset: DataSet, *, sample_weight: Optional[np.ndarray] = None) -> "ConstantLearner":
        return self

    def predict(self, example: Example) -> Any:
        return self.label
