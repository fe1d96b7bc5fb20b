# data.py
# Purpose: Labeled example container, CSV/DataFrame loading and simple splits.

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Generic, Hashable, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple, TypeVar

import numpy as np
import pandas as pd

L = TypeVar("L", bound=Hashable)

# --------------------------------------------------------------------------------------
# Constants
# --------------------------------------------------------------------------------------

# Restaurant waiting problem (AIMA 3e, Fig. 18.3). Target column is "WillWait".
RESTAURANT_TARGET = "WillWait"
RESTAURANT_COLUMNS = [
    "Alternate", "Bar", "FriSat", "Hungry", "Patrons", "Price",
    "Raining", "Reservation", "Type", "WaitEstimate", RESTAURANT_TARGET,
]
RESTAURANT_ROWS = [
    ("Yes", "No", "No", "Yes", "Some", "$$$", "No", "Yes", "French", "0-10", "Yes"),
    ("Yes", "No", "No", "Yes", "Full", "$", "No", "No", "Thai", "30-60", "No"),
    ("No", "Yes", "No", "No", "Some", "$", "No", "No", "Burger", "0-10", "Yes"),
    ("Yes", "No", "Yes", "Yes", "Full", "$", "Yes", "No", "Thai", "10-30", "Yes"),
    ("Yes", "No", "Yes", "No", "Full", "$$$", "No", "Yes", "French", ">60", "No"),
    ("No", "Yes", "No", "Yes", "Some", "$$", "Yes", "Yes", "Italian", "0-10", "Yes"),
    ("No", "Yes", "No", "No", "None", "$", "Yes", "No", "Burger", "0-10", "No"),
    ("No", "No", "No", "Yes", "Some", "$$", "Yes", "Yes", "Thai", "0-10", "Yes"),
    ("No", "Yes", "Yes", "No", "Full", "$", "Yes", "No", "Burger", ">60", "No"),
    ("Yes", "Yes", "Yes", "Yes", "Full", "$$$", "No", "Yes", "Italian", "10-30", "No"),
    ("No", "No", "No", "No", "None", "$", "No", "No", "Thai", "0-10", "No"),
    ("Yes", "Yes", "Yes", "Yes", "Full", "$", "No", "No", "Burger", "30-60", "Yes"),
]

# --------------------------------------------------------------------------------------
# Data structures
# --------------------------------------------------------------------------------------


@dataclass(frozen=True)
class Example(Generic[L]):
    """A single labeled example.

    Attributes
    ----------
    features : Mapping[str, Any]
        Attribute name → value. Stored as a read-only mapping.
    label : L
        True output. Only compared with ``==``.
    """

    features: Mapping[str, Any]
    label: L

    def __post_init__(self) -> None:
        object.__setattr__(self, "features", MappingProxyType(dict(self.features)))

    def get(self, attribute: str, default: Any = None) -> Any:
        return self.features.get(attribute, default)


@dataclass(frozen=True)
class DataSet(Generic[L]):
    """Ordered, immutable collection of examples sharing one attribute layout."""

    examples: Tuple[Example[L], ...] = field(default_factory=tuple)
    attributes: Tuple[str, ...] = field(default_factory=tuple)
    target: str = "label"

    def __post_init__(self) -> None:
        object.__setattr__(self, "examples", tuple(self.examples))
        if not self.attributes and self.examples:
            object.__setattr__(self, "attributes", tuple(self.examples[0].features))
        else:
            object.__setattr__(self, "attributes", tuple(self.attributes))

    def __len__(self) -> int:
        return len(self.examples)

    def __iter__(self) -> Iterator[Example[L]]:
        return iter(self.examples)

    def __getitem__(self, index: int) -> Example[L]:
        return self.examples[index]

    def size(self) -> int:
        return len(self.examples)

    def get_example(self, index: int) -> Example[L]:
        return self.examples[index]

    def labels(self) -> List[L]:
        """Return the true label of every example, in order."""
        return [e.label for e in self.examples]

    def subset(self, indices: Iterable[int]) -> "DataSet[L]":
        """Return a new dataset with the examples at ``indices`` (repeats allowed)."""
        picked = tuple(self.examples[int(i)] for i in indices)
        return DataSet(examples=picked, attributes=self.attributes, target=self.target)

    def to_frame(self, *, include_target: bool = False) -> pd.DataFrame:
        """Return the feature table as a DataFrame (one row per example)."""
        df = pd.DataFrame([dict(e.features) for e in self.examples], columns=list(self.attributes))
        if include_target:
            df[self.target] = self.labels()
        return df


# --------------------------------------------------------------------------------------
# Construction helpers
# --------------------------------------------------------------------------------------


def from_frame(df: pd.DataFrame, target: str, *, attributes: Optional[Sequence[str]] = None) -> DataSet:
    """Build a DataSet from a DataFrame, using column ``target`` as the label."""
    if target not in df.columns:
        raise KeyError(f"Target column '{target}' not found. Columns: {list(df.columns)}")
    cols = list(attributes) if attributes is not None else [c for c in df.columns if c != target]
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise KeyError(f"Attribute columns not found: {missing}")

    records = df[cols].to_dict(orient="records")
    labels = df[target].tolist()
    examples = tuple(Example(features=r, label=y) for r, y in zip(records, labels))
    return DataSet(examples=examples, attributes=tuple(cols), target=target)


def load_csv(path: str | Path, target: str, *, attributes: Optional[Sequence[str]] = None, **read_kwargs) -> DataSet:
    """Load a CSV file into a DataSet.

    Parameters
    ----------
    path : str | Path
        CSV location. Anything ``pandas.read_csv`` accepts.
    target : str
        Column holding the labels.
    attributes : Optional[Sequence[str]]
        Feature columns to keep (default: every column except ``target``).
    **read_kwargs
        Forwarded to ``pandas.read_csv``.
    """
    if isinstance(path, Path) and not path.is_file():
        raise FileNotFoundError(f"CSV not found: {path}")
    df = pd.read_csv(path, **read_kwargs)
    print(f"Loaded {len(df):,} rows × {df.shape[1]} cols from {path}")
    return from_frame(df, target, attributes=attributes)


def restaurant_dataset() -> DataSet:
    """Return the 12-example restaurant waiting dataset."""
    df = pd.DataFrame(RESTAURANT_ROWS, columns=RESTAURANT_COLUMNS)
    return from_frame(df, RESTAURANT_TARGET)


def train_test_split(
    ds: DataSet,
    *,
    train_frac: float = 0.8,
    shuffle: bool = False,
    random_state: Optional[int] = None,
) -> Tuple[DataSet, DataSet]:
    """Split by index into (train, test).

    Without shuffling the split keeps the original order, so the test set is
    the tail of the dataset.
    """
    if not 0.0 < train_frac <= 1.0:
        raise ValueError(f"train_frac must be in (0, 1], got {train_frac}")
    n = len(ds)
    order = np.arange(n)
    if shuffle:
        order = np.random.default_rng(random_state).permutation(n)
    i1 = int(train_frac * n)
    return ds.subset(order[:i1]), ds.subset(order[i1:])
