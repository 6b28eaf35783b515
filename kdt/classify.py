"""
k-nearest-neighbor classification on top of the k-d tree.
"""

import logging
from collections import Counter
from typing import Iterable, List, Optional, Sequence, Union

from sklearn.metrics import zero_one_loss

from .kdtree import KDT
from .point import ArrayLike, Point

logger = logging.getLogger(__name__)


def most_frequent_label(points: Iterable[Point]) -> int:
    """Return the most common label among ``points``.

    Ties go to the numerically smallest label.

    Raises:
        ValueError: If ``points`` is empty.
    """
    counts = Counter(p.label for p in points)
    if not counts:
        raise ValueError("Cannot vote over an empty set of points.")
    return min(counts, key=lambda label: (-counts[label], label))


class KNNClassifier:
    """
    Majority-vote k-nearest-neighbor classifier.

    Features:
    - Exact neighbor search through a static k-d tree
    - Ties in the vote resolved toward the smallest label
    - Validation error over a labelled point set
    """

    def __init__(self, k: int = 1):
        """
        Initialize the classifier.

        Args:
            k: Default number of neighbors that vote on a label
        """
        self.k = k
        self.index_: Optional[KDT] = None

    def fit(self, points: Sequence[Point]) -> 'KNNClassifier':
        """
        Index the labelled training points.

        Args:
            points: Training points

        Returns:
            self
        """
        self.index_ = KDT(points)
        logger.debug("Fitted classifier on %d points", len(self.index_))
        return self

    def _check_fitted(self) -> KDT:
        if self.index_ is None:
            raise ValueError("Model must be fitted before prediction")
        return self.index_

    def predict_one(self, point: Union[Point, ArrayLike], k: Optional[int] = None) -> int:
        """Predict the label of a single point."""
        index = self._check_fitted()
        neighbors = index.query(point, self.k if k is None else k)
        return most_frequent_label(neighbors)

    def predict(self, points: Iterable[Union[Point, ArrayLike]], k: Optional[int] = None) -> List[int]:
        """
        Predict labels for new points.

        Args:
            points: Points to classify
            k: Number of voting neighbors, defaults to ``self.k``

        Returns:
            Predicted labels, one per point
        """
        self._check_fitted()
        return [self.predict_one(p, k) for p in points]

    def validation_error(self, points: Sequence[Point], k: Optional[int] = None) -> float:
        """
        Fraction of ``points`` whose predicted label differs from their own.

        Args:
            points: Labelled points to validate against
            k: Number of voting neighbors, defaults to ``self.k``

        Returns:
            Error rate in [0, 1]. An empty point set has error 0.
        """
        self._check_fitted()
        if not points:
            return 0.0
        predicted = self.predict(points, k)
        return float(zero_one_loss([p.label for p in points], predicted))
