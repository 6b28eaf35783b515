from __future__ import annotations
from typing import Iterable, List, Optional, Sequence, Union

import numpy as np

# Absolute per-coordinate tolerance used by Point equality.
DELTA = 0.00005

ArrayLike = Union[Sequence[float], np.ndarray]


class Point(object):
    """A data point with a feature vector and an integer label.

    The feature vector is copied on construction and made read-only, so a
    point can be shared freely once built. ``square_dist_to_query`` is a
    scratch value: it is only meaningful right after the point has been
    compared against a particular query, and it takes no part in equality.

    Args:
        features: The coordinates of the point.
        label (int): The class label of the point (default: 0).

    Examples:

        .. code-block:: python

            from kdt import Point

            p = Point([1.0, 2.0], label=3)
            q = Point([1.00001, 2.0])
            assert p == q
            p.set_square_dist_to_query(Point([0.0, 0.0]))  # 5.0
    """

    def __init__(self, features: ArrayLike, label: int = 0) -> None:
        features = np.array(features, dtype=np.float64)
        if features.ndim != 1:
            raise ValueError(
                f"Point features must be one-dimensional, got shape {features.shape}"
            )
        features.setflags(write=False)
        self.features = features
        self.label = int(label)
        self.square_dist_to_query = 0.0

    @property
    def num_dim(self) -> int:
        """Number of coordinates of the point."""
        return len(self.features)

    def __len__(self) -> int:
        return len(self.features)

    def __getitem__(self, axis: int) -> float:
        return float(self.features[axis])

    def __eq__(self, __value: object) -> bool:
        """Two points are equal if they have the same dimensionality and every
        coordinate differs by no more than ``DELTA``. Labels and scratch
        distances are ignored."""
        if not isinstance(__value, Point):
            return NotImplemented
        if self.num_dim != __value.num_dim:
            return False
        return bool(np.all(np.abs(self.features - __value.features) <= DELTA))

    def __ne__(self, __value: object) -> bool:
        result = self.__eq__(__value)
        if result is NotImplemented:
            return result
        return not result

    # Tolerance-based equality is not transitive, so points cannot be hashed.
    __hash__ = None

    def __repr__(self) -> str:
        coords = ", ".join(f"{x:.6f}" for x in self.features)
        return f"({coords}) : {self.label}"

    def copy(self) -> Point:
        """Create a copy of this point, including its scratch distance."""
        new_point = Point(self.features, self.label)
        new_point.square_dist_to_query = self.square_dist_to_query
        return new_point

    def with_distance(self, dist: float) -> Point:
        """Return a copy of this point with ``square_dist_to_query`` set to
        ``dist``. The original point is left untouched."""
        new_point = Point(self.features, self.label)
        new_point.square_dist_to_query = float(dist)
        return new_point

    def set_square_dist_to_query(self, query_point: Point) -> float:
        """Store and return the squared distance to ``query_point``."""
        self.square_dist_to_query = squared_distance(self, query_point)
        return self.square_dist_to_query


def _coords(p: Union[Point, ArrayLike]) -> np.ndarray:
    if isinstance(p, Point):
        return p.features
    return np.asarray(p, dtype=np.float64)


def squared_distance(a: Union[Point, ArrayLike], b: Union[Point, ArrayLike]) -> float:
    """Sum over all axes of ``(a[i] - b[i]) ** 2``.

    No square root is taken: every comparison in the index is done on
    squared distances, which order the same way as Euclidean ones.
    """
    diff = _coords(a) - _coords(b)
    return float(np.dot(diff, diff))


def axis_delta(a: Union[Point, ArrayLike], b: Union[Point, ArrayLike], axis: int) -> float:
    """Signed difference ``a[axis] - b[axis]`` along a single axis."""
    return float(_coords(a)[axis] - _coords(b)[axis])


def as_points(
    vectors: Union[np.ndarray, Iterable[ArrayLike]],
    labels: Optional[Iterable[int]] = None,
) -> List[Point]:
    """Wrap the rows of a 2-D array (or any iterable of vectors) as points.

    Args:
        vectors: Rows to convert, one point per row.
        labels: Optional labels, one per row. Defaults to 0 for every point.

    Returns:
        List[Point]: The converted points, in row order.
    """
    vectors = list(vectors)
    if labels is None:
        return [Point(v) for v in vectors]
    labels = list(labels)
    if len(labels) != len(vectors):
        raise ValueError(
            f"Got {len(labels)} labels for {len(vectors)} vectors"
        )
    return [Point(v, label) for v, label in zip(vectors, labels)]
