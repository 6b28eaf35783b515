#!/usr/bin/env python3
"""k-NN Validation Driver

Loads labelled training, validation and test point sets, classifies them with
a majority vote over the k nearest training points, and reports the
validation error for each k. When a projection matrix is given, the same
evaluation is repeated on the projected data.

Usage:
    python -m kdt.evaluation --train PA1train.txt --validate PA1validate.txt \
        --test PA1test.txt --projection projection.txt
"""

from __future__ import annotations
import argparse
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from .classify import KNNClassifier
from .dataset import read_points
from .point import Point
from .projection import project

logger = logging.getLogger(__name__)


@dataclass
class EvaluationConfig:
    """Configuration for the validation run."""
    # Data files
    train_path: str = "PA1train.txt"
    validate_path: Optional[str] = "PA1validate.txt"
    test_path: Optional[str] = "PA1test.txt"
    projection_path: Optional[str] = None

    # k values
    self_k_values: List[int] = field(default_factory=lambda: [1, 3, 5, 9, 15])
    validate_k_values: List[int] = field(default_factory=lambda: [1, 5, 9, 15])
    test_k: int = 1
    projected_test_k: int = 15

    verbose: bool = False


def evaluate_against_self(data: Sequence[Point], k_values: Sequence[int]) -> Dict[int, float]:
    """Classify every point of ``data`` against an index built from ``data``
    itself and return the validation error for each k."""
    classifier = KNNClassifier().fit(data)
    errors = {}
    for k in k_values:
        errors[k] = classifier.validation_error(data, k)
        print(f"K: {k}")
        print(f"Validation Error : {errors[k]:.6f}")
    return errors


def evaluate_against_other(data: Sequence[Point], other: Sequence[Point], k: int) -> Dict[int, float]:
    """Classify ``other`` against an index built from ``data`` and return the
    validation error for ``k``."""
    classifier = KNNClassifier(k=k).fit(data)
    error = classifier.validation_error(other)
    print(f"K: {k}")
    print(f"Validation Error : {error:.6f}")
    return {k: error}


def _evaluate_split(
    name: str,
    train: Sequence[Point],
    validate: Optional[Sequence[Point]],
    test: Optional[Sequence[Point]],
    config: EvaluationConfig,
    test_k: int,
) -> Dict[str, Dict[int, float]]:
    results: Dict[str, Dict[int, float]] = {}

    print(f"Testing {name} against itself...")
    results["self"] = evaluate_against_self(train, config.self_k_values)

    if validate is not None:
        print(f"Testing {name} against validation data...")
        results["validate"] = {}
        for k in config.validate_k_values:
            results["validate"].update(evaluate_against_other(train, validate, k))

    if test is not None:
        print(f"Testing {name} against test data...")
        results["test"] = evaluate_against_other(train, test, test_k)

    return results


def run_evaluation(config: EvaluationConfig) -> Dict[str, Dict[str, Dict[int, float]]]:
    """Run the full validation sequence described by ``config``.

    Returns:
        Errors keyed by data variant ("raw", and "projected" when a
        projection is configured), then by comparison ("self", "validate",
        "test"), then by k.
    """
    train = read_points(config.train_path, with_label=True)
    validate = read_points(config.validate_path, with_label=True) if config.validate_path else None
    test = read_points(config.test_path, with_label=True) if config.test_path else None
    logger.info(
        "Loaded %d training, %d validation, %d test points",
        len(train),
        len(validate) if validate is not None else 0,
        len(test) if test is not None else 0,
    )

    results = {"raw": _evaluate_split("training data", train, validate, test, config, config.test_k)}

    if config.projection_path:
        projection = read_points(config.projection_path, with_label=False)
        print("Projecting data...")
        train_p = project(train, projection)
        validate_p = project(validate, projection) if validate is not None else None
        test_p = project(test, projection) if test is not None else None
        results["projected"] = _evaluate_split(
            "projected training data", train_p, validate_p, test_p, config, config.projected_test_k
        )

    return results


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="k-NN validation error with a k-d tree")
    ap.add_argument('--train', required=True, help='labelled training points')
    ap.add_argument('--validate', default=None, help='labelled validation points')
    ap.add_argument('--test', default=None, help='labelled test points')
    ap.add_argument('--projection', default=None, help='projection matrix, one row per line')
    ap.add_argument('--self-k', type=int, nargs='+', default=[1, 3, 5, 9, 15], help='k values for the self test')
    ap.add_argument('--validate-k', type=int, nargs='+', default=[1, 5, 9, 15], help='k values for validation')
    ap.add_argument('--test-k', type=int, default=1)
    ap.add_argument('--projected-test-k', type=int, default=15)
    ap.add_argument('--verbose', action='store_true')
    return ap.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> Dict[str, Dict[str, Dict[int, float]]]:
    args = parse_args(argv)
    config = EvaluationConfig(
        train_path=args.train,
        validate_path=args.validate,
        test_path=args.test,
        projection_path=args.projection,
        self_k_values=args.self_k,
        validate_k_values=args.validate_k,
        test_k=args.test_k,
        projected_test_k=args.projected_test_k,
        verbose=args.verbose,
    )
    logging.basicConfig(
        level=logging.DEBUG if config.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    print("=== k-NN Validation ===")
    results = run_evaluation(config)
    print("\nEvaluation completed!")
    return results


if __name__ == "__main__":
    main()
