# metrics.py
# --------------------------------------------------------------------------------------
# Purpose
#   Evaluation utilities for label-predicting learners (AdaBoost and its weak learners).
#   - Accuracy plus the raw (correct, incorrect) tally learners report via test()
#   - Lightweight pretty printer and a confusion-matrix helper
#   - Per-round summary of a boosting run
#   - Returns serializable dicts for saving experiment reports
#
# Usage
#   from metrics import evaluate, pretty_print, confusion
#   m = evaluate(model, test_ds)
#   pretty_print(m)
#   labels, cm = confusion(model, test_ds)
# --------------------------------------------------------------------------------------

from __future__ import annotations

from typing import Any, Dict, List, Sequence, Tuple

import numpy as np
from sklearn.metrics import accuracy_score, confusion_matrix

from data import DataSet
from models.learner import Learner, predict_all

# --------------------------------------------------------------------------------------
# Core evaluation
# --------------------------------------------------------------------------------------


def _codes(y_true, y_pred) -> Tuple[List[Any], np.ndarray, np.ndarray]:
    """Integer-code both label lists (first-seen order) so sklearn never reshapes raw labels."""
    index: Dict[Any, int] = {}
    t = np.asarray([index.setdefault(y, len(index)) for y in y_true], dtype=np.int64)
    p = np.asarray([index.setdefault(y, len(index)) for y in y_pred], dtype=np.int64)
    return list(index), t, p


def evaluate(learner: Learner, dataset: DataSet) -> Dict[str, float]:
    """Score a trained learner on ``dataset``.

    Returns
    -------
    Dict[str, float]
        Keys: 'acc', 'correct', 'incorrect', 'n'.
    """
    if len(dataset) == 0:
        raise ValueError("Cannot evaluate on an empty dataset.")
    y_true = dataset.labels()
    y_pred = predict_all(learner, dataset)
    _, true_codes, pred_codes = _codes(y_true, y_pred)
    acc = float(accuracy_score(true_codes, pred_codes))
    correct = sum(1 for p, y in zip(y_pred, y_true) if p == y)
    return {
        "acc": acc,
        "correct": int(correct),
        "incorrect": int(len(y_true) - correct),
        "n": int(len(y_true)),
    }


# --------------------------------------------------------------------------------------
# Convenience helpers
# --------------------------------------------------------------------------------------

def pretty_print(metrics: Dict[str, float]) -> None:
    """Print a compact, aligned summary of metric values."""
    print("\n=== Metrics ===")
    print(f"Accuracy    : {metrics['acc']:.6f}")
    print(f"Correct     : {metrics['correct']:,} / {metrics['n']:,}")
    print(f"Incorrect   : {metrics['incorrect']:,}")


def confusion(learner: Learner, dataset: DataSet) -> Tuple[List[Any], np.ndarray]:
    """Return (labels, matrix); rows are true labels, columns predicted labels."""
    y_true = dataset.labels()
    y_pred = predict_all(learner, dataset)
    labels, t, p = _codes(y_true, y_pred)
    cm = confusion_matrix(t, p, labels=np.arange(len(labels)))
    return labels, cm


def round_summary(rounds: Sequence[Any]) -> List[Dict[str, float]]:
    """Serializable per-round (index, error, z) rows from a boosting history."""
    return [{"round": int(r.index), "error": float(r.error), "z": float(r.z)} for r in rounds]
