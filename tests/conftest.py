# tests/conftest.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

import pytest
from loguru import logger

from data import DataSet, Example, restaurant_dataset


@pytest.fixture(autouse=True)
def disable_logger():
    logger.remove()
    logger.add(lambda msg: None)
    yield


def make_dataset(labels, **extra_columns) -> DataSet:
    """One example per label; feature 'id' is the example's position."""
    examples = []
    for i, y in enumerate(labels):
        features: Dict[str, Any] = {"id": i}
        for name, values in extra_columns.items():
            features[name] = values[i]
        examples.append(Example(features=features, label=y))
    return DataSet(examples=tuple(examples))


class LookupLearner:
    """Predicts from a fixed id → label table (falls back to ``default``)."""

    supports_sample_weight = True

    def __init__(self, table: Dict[int, Any], default: Any = None):
        self.table = dict(table)
        self.default = default

    def train(self, dataset, sample_weight=None):
        return self

    def predict(self, example):
        return self.table.get(example.features["id"], self.default)


class RecordingLearner:
    """Always predicts ``label`` and records every train() call into ``log``."""

    supports_sample_weight = True

    def __init__(self, label: Any, log: List, weighted: bool = True):
        self.label = label
        self.log = log
        self.supports_sample_weight = weighted

    def train(self, dataset, **kwargs):
        self.log.append((dataset, kwargs))
        return self

    def predict(self, example):
        return self.label


def sequence_factory(learners):
    """Factory handing out the given learners one per call."""
    it = iter(learners)
    return lambda: next(it)


@pytest.fixture
def abab() -> DataSet:
    return make_dataset(["A", "A", "B", "B"])


@pytest.fixture
def restaurant() -> DataSet:
    return restaurant_dataset()
