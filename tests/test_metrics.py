import json

import numpy as np
import pytest

from metrics import confusion, evaluate, pretty_print, round_summary
from models import AdaBoostLearner, WeightedMajorityLearner
from tests.conftest import LookupLearner, make_dataset
from train import main, parse_args, plot_rounds


def test_evaluate_counts(abab):
    model = WeightedMajorityLearner(hypotheses=(LookupLearner({0: "A", 1: "B", 2: "B", 3: "B"}),), weights=(1.0,))
    m = evaluate(model, abab)
    assert m == {"acc": pytest.approx(0.75), "correct": 3, "incorrect": 1, "n": 4}


def test_evaluate_matches_test_tally(restaurant):
    model = AdaBoostLearner(n_estimators=3).train(restaurant)
    m = evaluate(model, restaurant)
    assert (m["correct"], m["incorrect"]) == model.test(restaurant)


def test_evaluate_rejects_empty(abab):
    with pytest.raises(ValueError):
        evaluate(LookupLearner({}), abab.subset([]))


def test_confusion_matrix(abab):
    model = LookupLearner({0: "A", 1: "B", 2: "B", 3: "B"})
    labels, cm = confusion(model, abab)
    assert labels == ["A", "B"]
    assert cm.tolist() == [[1, 1], [0, 2]]


def test_metrics_accept_tuple_and_mixed_labels():
    ds = make_dataset([("A", 1), ("B", 2), 1, "1"])
    model = LookupLearner({0: ("A", 1), 1: ("A", 1), 2: 1, 3: 1})
    assert evaluate(model, ds)["correct"] == 2
    labels, cm = confusion(model, ds)
    assert labels == [("A", 1), ("B", 2), 1, "1"]
    assert cm.tolist() == [[1, 0, 0, 0], [1, 0, 0, 0], [0, 0, 1, 0], [0, 0, 1, 0]]


def test_pretty_print(capsys):
    pretty_print({"acc": 0.5, "correct": 2, "incorrect": 2, "n": 4})
    out = capsys.readouterr().out
    assert "Accuracy" in out and "2 / 4" in out


def test_round_summary(restaurant):
    model = AdaBoostLearner(n_estimators=2).train(restaurant)
    rows = round_summary(model.rounds)
    assert [r["round"] for r in rows] == [0, 1]
    assert rows[0]["error"] == pytest.approx(2 / 12)


# ------------------------------------------------------------------
# CLI
# ------------------------------------------------------------------

def test_cli_trains_restaurant_and_saves(tmp_path, capsys):
    out = tmp_path / "run" / "metrics.json"
    assert main(parse_args(["--rounds", "3", "--save", str(out)])) == 0
    payload = json.loads(out.read_text(encoding="utf-8"))
    assert payload["dataset"] == "restaurant"
    assert len(payload["rounds"]) == 3
    assert payload["metrics"]["train"]["n"] == 12
    assert "Round" in capsys.readouterr().out


def test_cli_reports_training_failure(tmp_path, capsys):
    path = tmp_path / "pure.csv"
    path.write_text("x,y\n1,A\n2,A\n3,B\n4,B\n", encoding="utf-8")
    code = main(parse_args(["--csv", str(path), "--target", "y", "--rounds", "2"]))
    assert code == 1
    assert "Degenerate" in capsys.readouterr().err


def test_cli_skip_policy_recovers(tmp_path):
    path = tmp_path / "pure.csv"
    path.write_text("x,y\n1,A\n2,A\n3,B\n4,B\n", encoding="utf-8")
    args = parse_args(["--csv", str(path), "--target", "y", "--rounds", "2", "--learner", "majority",
                       "--on-degenerate", "skip"])
    assert main(args) == 0


def test_cli_seed_reaches_resampling_without_global_state(tmp_path):
    np.random.seed(0)
    before = np.random.get_state()[1].copy()
    runs = []
    for name in ("a.json", "b.json"):
        out = tmp_path / name
        args = parse_args(["--rounds", "3", "--weighting", "resample", "--on-degenerate", "skip",
                           "--seed", "7", "--save", str(out)])
        assert main(args) == 0
        runs.append(json.loads(out.read_text(encoding="utf-8"))["rounds"])
    assert runs[0] == runs[1]
    assert np.array_equal(np.random.get_state()[1], before)


def test_plot_rounds(tmp_path, restaurant):
    model = AdaBoostLearner(n_estimators=3).train(restaurant)
    out = tmp_path / "rounds.png"
    plot_rounds(model.rounds, str(out))
    assert out.is_file()
