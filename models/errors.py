# models/errors.py
# Purpose: Exception hierarchy shared by the boosting trainer, the ensemble and the CLI.

from __future__ import annotations


class BoostingError(Exception):
    """Base class for every error raised by the boosting models."""


class NotTrainedError(BoostingError, RuntimeError):
    """Raised when predict()/test() is called before a successful train()."""


class EmptyDatasetError(BoostingError, ValueError):
    """Raised when training is attempted on a dataset with no examples."""


class WeakLearnerConstructionError(BoostingError):
    """Raised when the weak-learner factory fails to produce a usable instance."""


class BoostingCancelled(BoostingError):
    """Raised when a boosting run is cancelled between rounds."""


class DegenerateErrorRateError(BoostingError, ArithmeticError):
    """Raised when a round's weighted error is 0 or 1.

    At those extremes ``ln((1 - error) / error)`` is infinite or undefined and
    the rescale factor ``error / (1 - error)`` collapses, so the round cannot
    contribute a finite vote.
    """

    def __init__(self, error: float, round_index: int | None = None):
        self.error = float(error)
        self.round_index = round_index
        where = f" in round {round_index}" if round_index is not None else ""
        if self.error <= 0.5:
            kind = "weak learner classified every example correctly"
        else:
            kind = "weak learner misclassified every example"
        super().__init__(f"Degenerate weighted error {self.error!r}{where}: {kind}.")
