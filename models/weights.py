# models/weights.py
# --------------------------------------------------------------------------------------
# Purpose
#   Per-example weight vector used by the boosting loop.
#   - Initialize a length-N distribution (uniform 1/N, or all ones)
#   - Weighted error of a hypothesis given its misclassification mask
#   - Rescale correctly classified examples by error / (1 - error)
#   - Normalize to a probability distribution
#   - Hypothesis (vote) weight ln((1 - error) / error)
#
# All functions are pure: they return new arrays and never mutate their inputs.
# --------------------------------------------------------------------------------------

from __future__ import annotations

import math

import numpy as np

from models.errors import DegenerateErrorRateError, EmptyDatasetError

INIT_SCHEMES = ("uniform", "ones")

# Errors closer than this to 0 or 1 are treated as exactly 0 or 1.
DEFAULT_EPS = 1e-12


def initialize(n: int, scheme: str = "uniform") -> np.ndarray:
    """Return a fresh weight vector of length ``n``.

    Parameters
    ----------
    n : int
        Number of examples.
    scheme : str
        ``"uniform"`` gives every example 1/n (the textbook start). ``"ones"``
        gives every example weight 1; weighted errors are taken relative to
        the total weight, so the first round behaves the same either way.
    """
    if n <= 0:
        raise EmptyDatasetError("Cannot initialize weights for an empty dataset.")
    if scheme == "uniform":
        return np.full(n, 1.0 / n, dtype=np.float64)
    if scheme == "ones":
        return np.ones(n, dtype=np.float64)
    raise ValueError(f"Unknown init scheme '{scheme}'. Available: {list(INIT_SCHEMES)}")


def normalize(weights: np.ndarray) -> np.ndarray:
    """Return ``weights`` divided by its sum."""
    w = np.asarray(weights, dtype=np.float64)
    if np.any(w < 0):
        raise ValueError("Weights must be non-negative.")
    total = float(w.sum())
    if total <= 0.0 or not math.isfinite(total):
        raise ValueError(f"Cannot normalize weights with sum {total!r}.")
    return w / total


def weighted_error(weights: np.ndarray, wrong: np.ndarray) -> float:
    """Total weight of misclassified examples, as a fraction of all weight."""
    w = np.asarray(weights, dtype=np.float64)
    mask = np.asarray(wrong, dtype=bool)
    if w.shape != mask.shape:
        raise ValueError(f"Shape mismatch: weights {w.shape} vs mask {mask.shape}.")
    total = float(w.sum())
    if total <= 0.0:
        raise ValueError("Weights sum to zero.")
    return float(w[mask].sum()) / total


def is_degenerate(error: float, eps: float = DEFAULT_EPS) -> bool:
    return error <= eps or error >= 1.0 - eps


def rescale(weights: np.ndarray, correct: np.ndarray, error: float, *, eps: float = DEFAULT_EPS) -> np.ndarray:
    """Scale the weights of correctly classified examples by error / (1 - error).

    Misclassified examples keep their weight; after normalization they carry
    relatively more mass in the next round.
    """
    if is_degenerate(error, eps):
        raise DegenerateErrorRateError(error)
    w = np.array(weights, dtype=np.float64)
    mask = np.asarray(correct, dtype=bool)
    if w.shape != mask.shape:
        raise ValueError(f"Shape mismatch: weights {w.shape} vs mask {mask.shape}.")
    w[mask] *= error / (1.0 - error)
    return w


def hypothesis_weight(error: float, *, eps: float = DEFAULT_EPS) -> float:
    """Voting weight ln((1 - error) / error); positive iff error < 0.5."""
    if is_degenerate(error, eps):
        raise DegenerateErrorRateError(error)
    return math.log((1.0 - error) / error)
