# models/adaboost.py
# --------------------------------------------------------------------------------------
# Purpose
#   AdaBoost (AIMA 3e, p. 751): train K weak learners on a re-weighted dataset and
#   combine them into a weighted-majority hypothesis.
#
#   for k = 1 to K do
#       h[k] <- L(examples, w)
#       error <- sum of w[j] over examples h[k] gets wrong
#       w[j] <- w[j] * error / (1 - error) for examples h[k] gets right
#       w <- NORMALIZE(w)
#       z[k] <- log((1 - error) / error)
#   return WEIGHTED-MAJORITY(h, z)
#
# Public API
#   - boost(dataset, factory, k, ...) -> BoostResult
#   - AdaBoostLearner: train / predict / test
# --------------------------------------------------------------------------------------

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import numpy as np
from loguru import logger

from data import DataSet, Example
from models import weights as wv
from models.errors import (
    BoostingCancelled,
    DegenerateErrorRateError,
    EmptyDatasetError,
    NotTrainedError,
    WeakLearnerConstructionError,
)
from models.learner import Learner, WeakLearnerFactory, predict_all
from models.weighted_majority import WeightedMajorityLearner

WEIGHTING_STRATEGIES = ("sample_weight", "resample", "none")
DEGENERATE_POLICIES = ("raise", "stop", "skip")

# --------------------------------------------------------------------------------------
# Data classes
# --------------------------------------------------------------------------------------


@dataclass(frozen=True)
class BoostRound:
    """Outcome of one boosting round.

    Attributes
    ----------
    index : int
        Round number (0-based).
    error : float
        Weighted error of the round's hypothesis.
    z : float
        Hypothesis weight ln((1 - error) / error).
    distribution : np.ndarray
        Read-only copy of the normalized example weights after the round.
    """

    index: int
    error: float
    z: float
    distribution: np.ndarray = field(repr=False)


@dataclass(frozen=True)
class BoostResult:
    """Trained ensemble plus the per-round history that produced it."""

    ensemble: WeightedMajorityLearner
    rounds: Tuple[BoostRound, ...]


# --------------------------------------------------------------------------------------
# Boosting loop
# --------------------------------------------------------------------------------------


def _new_learner(factory: WeakLearnerFactory, k: int) -> Learner:
    try:
        learner = factory()
    except Exception as exc:
        raise WeakLearnerConstructionError(f"Weak-learner factory failed in round {k}: {exc}") from exc
    if not isinstance(learner, Learner):
        raise WeakLearnerConstructionError(
            f"Factory returned {type(learner).__name__!r} in round {k}, which has no train()/predict()."
        )
    return learner


def _fit_round(
    learner: Learner,
    dataset: DataSet,
    w: np.ndarray,
    weighting: str,
    rng: np.random.Generator,
) -> None:
    """Train ``learner`` on the current distribution ``w``."""
    if weighting == "none":
        learner.train(dataset)
    elif weighting == "sample_weight" and getattr(learner, "supports_sample_weight", False):
        learner.train(dataset, sample_weight=wv.normalize(w))
    else:
        # Weighted bootstrap: N draws with replacement, proportional to w.
        n = len(dataset)
        idx = rng.choice(n, size=n, replace=True, p=wv.normalize(w))
        learner.train(dataset.subset(idx))


def boost(
    dataset: DataSet,
    factory: WeakLearnerFactory,
    k: int,
    *,
    weighting: str = "sample_weight",
    init_scheme: str = "uniform",
    on_degenerate: str = "raise",
    random_state: Optional[int] = None,
    eps: float = wv.DEFAULT_EPS,
    cancel: Optional[threading.Event] = None,
) -> BoostResult:
    """Run K rounds of AdaBoost and return the weighted-majority ensemble.

    Parameters
    ----------
    dataset : DataSet
        Training examples (N > 0).
    factory : WeakLearnerFactory
        Zero-argument callable returning a fresh, untrained weak learner.
    k : int
        Number of rounds (ensemble size).
    weighting : str
        How each weak learner sees the weight distribution:
        ``"sample_weight"`` passes the weights to learners that declare
        ``supports_sample_weight`` and falls back to resampling for the rest;
        ``"resample"`` always trains on a weighted bootstrap of the dataset;
        ``"none"`` trains on the unweighted dataset every round.
    init_scheme : str
        ``"uniform"`` (1/N) or ``"ones"``; see ``models.weights.initialize``.
    on_degenerate : str
        What to do when a round's error is 0 or 1: ``"raise"`` a
        DegenerateErrorRateError, ``"stop"`` and keep the rounds completed so
        far, or ``"skip"`` the round and continue.
    random_state : Optional[int]
        Seed for bootstrap resampling.
    eps : float
        Tolerance for treating an error as exactly 0 or 1.
    cancel : Optional[threading.Event]
        Checked before every round; when set the run aborts with BoostingCancelled.

    Returns
    -------
    BoostResult
        The ensemble (K hypotheses in round order unless rounds were skipped
        or boosting stopped early) and the per-round history.
    """
    if weighting not in WEIGHTING_STRATEGIES:
        raise ValueError(f"Unknown weighting '{weighting}'. Available: {list(WEIGHTING_STRATEGIES)}")
    if on_degenerate not in DEGENERATE_POLICIES:
        raise ValueError(f"Unknown on_degenerate '{on_degenerate}'. Available: {list(DEGENERATE_POLICIES)}")
    if isinstance(k, bool) or not isinstance(k, (int, np.integer)) or k < 1:
        raise ValueError(f"Ensemble size must be a positive integer, got {k!r}")
    n = len(dataset)
    if n == 0:
        raise EmptyDatasetError("Cannot boost on an empty dataset.")

    truth = dataset.labels()
    w = wv.initialize(n, init_scheme)
    rng = np.random.default_rng(random_state)

    hypotheses: List[Learner] = []
    z: List[float] = []
    rounds: List[BoostRound] = []
    last_error = None

    for r in range(int(k)):
        if cancel is not None and cancel.is_set():
            raise BoostingCancelled(f"Boosting cancelled before round {r} of {k}.")

        learner = _new_learner(factory, r)
        _fit_round(learner, dataset, w, weighting, rng)

        predicted = predict_all(learner, dataset)
        if len(predicted) != n:
            raise ValueError(f"Weak learner returned {len(predicted)} predictions for {n} examples.")
        wrong = np.fromiter((p != y for p, y in zip(predicted, truth)), dtype=bool, count=n)
        error = wv.weighted_error(w, wrong)
        last_error = error

        if wv.is_degenerate(error, eps):
            if on_degenerate == "raise" or (on_degenerate == "stop" and not hypotheses):
                raise DegenerateErrorRateError(error, round_index=r)
            if on_degenerate == "stop":
                logger.warning("Round {}: degenerate error {:.6g}, stopping after {} rounds", r, error, len(hypotheses))
                break
            logger.warning("Round {}: degenerate error {:.6g}, skipping hypothesis", r, error)
            continue

        w = wv.normalize(wv.rescale(w, ~wrong, error, eps=eps))
        z_r = wv.hypothesis_weight(error, eps=eps)

        hypotheses.append(learner)
        z.append(z_r)
        snapshot = w.copy()
        snapshot.setflags(write=False)
        rounds.append(BoostRound(index=r, error=error, z=z_r, distribution=snapshot))
        logger.debug("Round {}/{}: error={:.6f} z={:+.6f}", r + 1, k, error, z_r)

    if not hypotheses:
        # Only reachable with on_degenerate="skip" when every round was skipped.
        raise DegenerateErrorRateError(last_error, round_index=int(k) - 1)

    ensemble = WeightedMajorityLearner(hypotheses=tuple(hypotheses), weights=tuple(z))
    return BoostResult(ensemble=ensemble, rounds=tuple(rounds))


# --------------------------------------------------------------------------------------
# Model
# --------------------------------------------------------------------------------------


@dataclass
class AdaBoostLearner:
    """AdaBoost over a pluggable weak learner (decision stumps, K=5 by default)."""

    n_estimators: int = 5
    learner: Union[str, Callable[[], Learner]] = "stump"
    learner_params: Dict[str, Any] = field(default_factory=dict)
    weighting: str = "sample_weight"
    init_scheme: str = "uniform"
    on_degenerate: str = "raise"
    random_state: Optional[int] = None
    eps: float = wv.DEFAULT_EPS

    # Adapter metadata
    name: str = field(default="adaboost", init=False)
    supports_sample_weight: bool = field(default=False, init=False)

    # Trained state, replaced as a whole by train()
    _result: Optional[BoostResult] = field(default=None, init=False, repr=False)
    _cancel: threading.Event = field(default_factory=threading.Event, init=False, repr=False)

    # ------------------------------------------------------------------
    # Utilities
    # ------------------------------------------------------------------
    def _factory(self) -> WeakLearnerFactory:
        if callable(self.learner):
            build = self.learner
            if self.learner_params:
                params = dict(self.learner_params)
                return lambda: build(**params)
            return build
        from models import learner_factory

        try:
            return learner_factory(self.learner, **self.learner_params)
        except KeyError as exc:
            raise WeakLearnerConstructionError(str(exc)) from exc

    def get_params(self) -> Dict[str, Any]:
        """Return the effective boosting parameters."""
        return dict(
            n_estimators=self.n_estimators,
            learner=self.learner if isinstance(self.learner, str) else getattr(self.learner, "__name__", repr(self.learner)),
            learner_params=dict(self.learner_params),
            weighting=self.weighting,
            init_scheme=self.init_scheme,
            on_degenerate=self.on_degenerate,
            random_state=self.random_state,
        )

    def cancel(self) -> None:
        """Ask a running train() to stop at the next round boundary."""
        self._cancel.set()

    # ------------------------------------------------------------------
    # Core API
    # ------------------------------------------------------------------
    def train(self, dataset: DataSet) -> "AdaBoostLearner":
        """Boost on ``dataset`` and replace any previously trained ensemble.

        The new ensemble is swapped in only after every round succeeded; on
        failure the previous one (if any) stays in place.
        """
        factory = self._factory()
        logger.info("Training AdaBoost: {} rounds on {} examples", self.n_estimators, len(dataset))
        try:
            result = boost(
                dataset,
                factory,
                self.n_estimators,
                weighting=self.weighting,
                init_scheme=self.init_scheme,
                on_degenerate=self.on_degenerate,
                random_state=self.random_state,
                eps=self.eps,
                cancel=self._cancel,
            )
        finally:
            self._cancel.clear()
        self._result = result
        logger.info("AdaBoost trained: {} hypotheses", len(result.ensemble))
        return self

    def _trained(self) -> BoostResult:
        result = self._result
        if result is None:
            raise NotTrainedError("AdaBoostLearner has not yet been trained.")
        return result

    def predict(self, example: Example) -> Any:
        return self._trained().ensemble.predict(example)

    def test(self, dataset: DataSet) -> Tuple[int, int]:
        """Return (correct, incorrect) counts over ``dataset``."""
        return self._trained().ensemble.test(dataset)

    # Convenience accessors -------------------------------------------------
    @property
    def ensemble(self) -> WeightedMajorityLearner:
        return self._trained().ensemble

    @property
    def rounds(self) -> Tuple[BoostRound, ...]:
        return self._trained().rounds

    @property
    def is_trained(self) -> bool:
        return self._result is not None
