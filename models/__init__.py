# models/__init__.py
# Purpose: Central learner registry and convenience imports for the learners.

from functools import partial
from typing import Dict, Type

from models.errors import (
    BoostingCancelled,
    BoostingError,
    DegenerateErrorRateError,
    EmptyDatasetError,
    NotTrainedError,
    WeakLearnerConstructionError,
)
from models.learner import Learner, WeakLearnerFactory
from models.majority import ConstantLearner, MajorityLearner
from models.stump import StumpLearner
from models.weighted_majority import WeightedMajorityLearner
from models.adaboost import AdaBoostLearner, BoostResult, BoostRound, boost

# --------------------------------------------------------------------------------------
# Registry
# --------------------------------------------------------------------------------------

MODEL_REGISTRY: Dict[str, Type] = {
    "stump": StumpLearner,
    "majority": MajorityLearner,
    "constant": ConstantLearner,
    "adaboost": AdaBoostLearner,
}

# --------------------------------------------------------------------------------------
# Factory functions
# --------------------------------------------------------------------------------------

def get_model(name: str, **kwargs):
    """Instantiate a learner by name. Extra kwargs are forwarded to the learner."""
    return learner_factory(name, **kwargs)()


def learner_factory(name: str, **kwargs) -> WeakLearnerFactory:
    """Return a zero-argument callable that builds a fresh learner on every call."""
    key = name.lower()
    if key not in MODEL_REGISTRY:
        raise KeyError(f"Unknown model '{name}'. Available: {list(MODEL_REGISTRY)}")
    return partial(MODEL_REGISTRY[key], **kwargs)


__all__ = [
    "get_model",
    "learner_factory",
    "MODEL_REGISTRY",
    "boost",
    "AdaBoostLearner",
    "BoostResult",
    "BoostRound",
    "WeightedMajorityLearner",
    "StumpLearner",
    "MajorityLearner",
    "ConstantLearner",
    "Learner",
    "WeakLearnerFactory",
    "BoostingError",
    "BoostingCancelled",
    "DegenerateErrorRateError",
    "EmptyDatasetError",
    "NotTrainedError",
    "WeakLearnerConstructionError",
]
