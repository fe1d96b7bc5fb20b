# models/stump.py
# Purpose: Decision-stump weak learner wrapping scikit-learn's DecisionTreeClassifier (depth 1).

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import pandas as pd
from sklearn.tree import DecisionTreeClassifier

from data import DataSet, Example
from models.errors import EmptyDatasetError


@dataclass
class StumpLearner:
    """One-split decision tree over one-hot encoded example attributes."""

    criterion: str = "gini"
    random_state: Optional[int] = 0

    # Adapter metadata
    name: str = field(default="stump", init=False)
    supports_sample_weight: bool = field(default=True, init=False)

    # Internal sklearn estimator (initialized in train)
    _est: Optional[DecisionTreeClassifier] = field(default=None, init=False, repr=False)
    _attributes: Tuple[str, ...] = field(default=(), init=False, repr=False)
    _columns: List[str] = field(default_factory=list, init=False, repr=False)
    _classes: List[Any] = field(default_factory=list, init=False, repr=False)

    # ------------------------------------------------------------------
    # Utilities
    # ------------------------------------------------------------------
    @staticmethod
    def _encode(frame: pd.DataFrame) -> pd.DataFrame:
        """One-hot encode non-numeric columns; numeric columns pass through."""
        return pd.get_dummies(frame, dtype=float).astype(float)

    def _design_matrix(self, frame: pd.DataFrame) -> np.ndarray:
        X = self._encode(frame).reindex(columns=self._columns, fill_value=0.0)
        return X.to_numpy(dtype=np.float64)

    def _label_codes(self, labels: List[Any]) -> np.ndarray:
        """Map labels to integer codes in first-seen order; sklearn never sees the raw values."""
        index: Dict[Any, int] = {}
        codes = [index.setdefault(y, len(index)) for y in labels]
        self._classes = list(index)
        return np.asarray(codes, dtype=np.int64)

    def _decode(self, codes: np.ndarray) -> List[Any]:
        return [self._classes[int(c)] for c in codes]

    def get_params(self) -> Dict[str, Any]:
        """Return the effective sklearn parameters used by the underlying model."""
        return dict(max_depth=1, criterion=self.criterion, random_state=self.random_state)

    # ------------------------------------------------------------------
    # Core API
    # ------------------------------------------------------------------
    def train(self, dataset: DataSet, *, sample_weight: Optional[np.ndarray] = None) -> "StumpLearner":
        """Fit the stump on ``dataset``, optionally weighting each example."""
        if len(dataset) == 0:
            raise EmptyDatasetError("Cannot train a stump on an empty dataset.")
        X = self._encode(dataset.to_frame())
        if X.shape[1] == 0:
            raise ValueError("Dataset has no attributes to split on.")

        est = DecisionTreeClassifier(**self.get_params())
        est.fit(X.to_numpy(dtype=np.float64), self._label_codes(dataset.labels()), sample_weight=sample_weight)
        self._est = est
        self._attributes = tuple(dataset.attributes)
        self._columns = list(X.columns)
        return self

    def predict_all(self, dataset: DataSet) -> List[Any]:
        """Predict every example of ``dataset`` in one sklearn call."""
        if self._est is None:
            raise RuntimeError("Model is not fitted. Call train() first.")
        if len(dataset) == 0:
            return []
        return self._decode(self._est.predict(self._design_matrix(dataset.to_frame())))

    def predict(self, example: Example) -> Any:
        if self._est is None:
            raise RuntimeError("Model is not fitted. Call train() first.")
        frame = pd.DataFrame([dict(example.features)], columns=list(self._attributes))
        return self._decode(self._est.predict(self._design_matrix(frame)))[0]

    # Convenience accessors -------------------------------------------------
    @property
    def split_feature_(self) -> Optional[str]:
        """Encoded column the stump splits on (None when it is a single leaf)."""
        if self._est is None:
            raise RuntimeError("Model is not fitted. Call train() first.")
        feature = int(self._est.tree_.feature[0])
        return self._columns[feature] if feature >= 0 else None
