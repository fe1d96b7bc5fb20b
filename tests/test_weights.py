import math

import numpy as np
import pytest

from models import weights as wv
from models.errors import DegenerateErrorRateError, EmptyDatasetError


def test_initialize_uniform():
    w = wv.initialize(4)
    assert w.shape == (4,)
    assert np.allclose(w, 0.25)


def test_initialize_ones():
    assert np.array_equal(wv.initialize(3, "ones"), np.ones(3))


def test_initialize_rejects_empty_and_unknown_scheme():
    with pytest.raises(EmptyDatasetError):
        wv.initialize(0)
    with pytest.raises(ValueError):
        wv.initialize(3, "random")


def test_normalize_preserves_ratios():
    w = wv.normalize(np.array([1.0, 3.0]))
    assert w.sum() == pytest.approx(1.0)
    assert w.tolist() == pytest.approx([0.25, 0.75])


def test_normalize_does_not_mutate_input():
    src = np.array([2.0, 2.0])
    wv.normalize(src)
    assert src.tolist() == [2.0, 2.0]


@pytest.mark.parametrize("bad", [[0.0, 0.0], [1.0, -0.5]])
def test_normalize_rejects_zero_sum_or_negative(bad):
    with pytest.raises(ValueError):
        wv.normalize(np.array(bad))


def test_weighted_error_is_relative_to_total_weight():
    wrong = np.array([True, False, False, False])
    assert wv.weighted_error(np.ones(4), wrong) == pytest.approx(0.25)
    assert wv.weighted_error(np.full(4, 0.25), wrong) == pytest.approx(0.25)


def test_rescale_only_touches_correct_examples():
    w = np.full(4, 0.25)
    correct = np.array([True, True, True, False])
    out = wv.rescale(w, correct, 0.25)
    assert out.tolist() == pytest.approx([0.25 / 3, 0.25 / 3, 0.25 / 3, 0.25])
    assert w.tolist() == [0.25] * 4


@pytest.mark.parametrize("error", [0.0, 1.0])
def test_rescale_rejects_degenerate_error(error):
    with pytest.raises(DegenerateErrorRateError):
        wv.rescale(np.full(2, 0.5), np.array([True, False]), error)


def test_hypothesis_weight_sign_follows_error():
    assert wv.hypothesis_weight(0.5) == 0.0
    assert wv.hypothesis_weight(0.25) == pytest.approx(math.log(3))
    assert wv.hypothesis_weight(0.1) > 0
    assert wv.hypothesis_weight(0.75) < 0


@pytest.mark.parametrize("error", [0.0, 1.0, 1e-15, 1 - 1e-15])
def test_hypothesis_weight_rejects_degenerate_error(error):
    with pytest.raises(DegenerateErrorRateError) as info:
        wv.hypothesis_weight(error)
    assert info.value.error == error
