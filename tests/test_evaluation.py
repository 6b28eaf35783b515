import numpy as np
import pytest

from kdt import Point
from kdt.evaluation import (
    EvaluationConfig,
    evaluate_against_other,
    evaluate_against_self,
    main,
    run_evaluation,
)


def write_points(path, points, with_label=True):
    lines = []
    for p in points:
        row = " ".join(repr(float(x)) for x in p.features)
        lines.append(f"{row} {p.label}" if with_label else row)
    path.write_text("\n".join(lines) + "\n")
    return str(path)


def make_split(seed, n_per_cluster=10):
    rng = np.random.RandomState(seed)
    points = []
    for label, center in enumerate([(0.0, 0.0), (20.0, 0.0)]):
        for v in rng.normal(loc=center, scale=1.0, size=(n_per_cluster, 2)):
            points.append(Point(v, label))
    return points


@pytest.fixture
def data_files(tmp_path):
    return {
        "train": write_points(tmp_path / "train.txt", make_split(0)),
        "validate": write_points(tmp_path / "validate.txt", make_split(1, 5)),
        "test": write_points(tmp_path / "test.txt", make_split(2, 5)),
        "projection": write_points(
            tmp_path / "projection.txt", [Point([2.0, 0.0]), Point([0.0, 2.0])], with_label=False
        ),
    }


def test_evaluate_against_self(capsys):
    errors = evaluate_against_self(make_split(0), [1, 3, 9])
    assert errors == {1: 0.0, 3: 0.0, 9: 0.0}
    assert "Validation Error" in capsys.readouterr().out


def test_evaluate_against_other():
    wrong = [Point(p.features, 1 - p.label) for p in make_split(1, 5)]
    assert evaluate_against_other(make_split(0), wrong, 5) == {5: 1.0}


def test_run_evaluation(data_files):
    config = EvaluationConfig(
        train_path=data_files["train"],
        validate_path=data_files["validate"],
        test_path=data_files["test"],
        projection_path=data_files["projection"],
    )
    results = run_evaluation(config)
    assert set(results) == {"raw", "projected"}
    for variant in results.values():
        assert set(variant["self"]) == {1, 3, 5, 9, 15}
        assert set(variant["validate"]) == {1, 5, 9, 15}
        assert all(err == 0.0 for err in variant["self"].values())
        assert all(err == 0.0 for err in variant["validate"].values())
    assert results["raw"]["test"] == {1: 0.0}
    assert results["projected"]["test"] == {15: 0.0}


def test_run_evaluation_train_only(data_files):
    config = EvaluationConfig(train_path=data_files["train"], validate_path=None, test_path=None)
    results = run_evaluation(config)
    assert list(results) == ["raw"]
    assert list(results["raw"]) == ["self"]


def test_main(data_files, capsys):
    results = main([
        "--train", data_files["train"],
        "--test", data_files["test"],
        "--self-k", "1", "3",
        "--test-k", "3",
    ])
    assert results["raw"]["self"] == {1: 0.0, 3: 0.0}
    assert results["raw"]["test"] == {3: 0.0}
    out = capsys.readouterr().out
    assert "=== k-NN Validation ===" in out
    assert "Evaluation completed!" in out
