# models/weighted_majority.py
# Purpose: Trained weighted-majority vote over a fixed sequence of hypotheses.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, Hashable, Sequence, Tuple, TypeVar

from data import DataSet, Example
from models.errors import NotTrainedError
from models.learner import Learner, tally

L = TypeVar("L", bound=Hashable)


@dataclass(frozen=True)
class WeightedMajorityLearner(Generic[L]):
    """Immutable ensemble: ``hypotheses[k]`` votes with weight ``weights[k]``.

    Built once at the end of a boosting run. Prediction only reads the stored
    tuples, so one instance can serve any number of concurrent callers.
    """

    hypotheses: Tuple[Learner, ...] = field(default_factory=tuple)
    weights: Tuple[float, ...] = field(default_factory=tuple)

    # Adapter metadata
    name: str = field(default="weighted_majority", init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "hypotheses", tuple(self.hypotheses))
        object.__setattr__(self, "weights", tuple(float(z) for z in self.weights))
        if len(self.hypotheses) != len(self.weights):
            raise ValueError(
                f"Got {len(self.hypotheses)} hypotheses but {len(self.weights)} weights."
            )

    def __len__(self) -> int:
        return len(self.hypotheses)

    @classmethod
    def from_pairs(cls, pairs: Sequence[Tuple[Learner, float]]) -> "WeightedMajorityLearner":
        return cls(hypotheses=tuple(h for h, _ in pairs), weights=tuple(z for _, z in pairs))

    # ------------------------------------------------------------------
    # Core API
    # ------------------------------------------------------------------
    def votes(self, example: Example) -> Dict[Any, float]:
        """Summed hypothesis weight per predicted label, in first-seen order."""
        if not self.hypotheses:
            raise NotTrainedError("Ensemble is empty. Train it before predicting.")
        totals: Dict[Any, float] = {}
        for h, z in zip(self.hypotheses, self.weights):
            label = h.predict(example)
            totals[label] = totals.get(label, 0.0) + z
        return totals

    def predict(self, example: Example) -> L:
        """Return the label with the largest summed weight.

        Ties go to the label predicted first in hypothesis order.
        """
        best_label = None
        best_score = None
        for label, score in self.votes(example).items():
            if best_score is None or score > best_score:
                best_label, best_score = label, score
        return best_label

    def test(self, dataset: DataSet) -> Tuple[int, int]:
        """Return (correct, incorrect) over ``dataset``."""
        return tally((self.predict(e) for e in dataset), dataset)
