from typing import List, Sequence

import numpy as np

from .kdtree import DimensionMismatchError
from .point import Point


def project(data: Sequence[Point], projection: Sequence[Point]) -> List[Point]:
    """Multiply a point set by a projection matrix.

    ``projection`` holds the rows of a ``D x P`` matrix, one point per row.
    Every point of ``data`` (dimension ``D``) maps to a point of dimension
    ``P`` that keeps its label.

    Raises:
        DimensionMismatchError: If the points of ``data`` do not have one
            coordinate per row of ``projection``.
    """
    if not data:
        return []
    if not projection:
        raise DimensionMismatchError("Projection matrix is empty.")
    matrix = np.vstack([row.features for row in projection])
    if any(p.num_dim != matrix.shape[0] for p in data):
        raise DimensionMismatchError(
            f"Matrix size not equal: points must have {matrix.shape[0]} dimensions."
        )
    projected = np.vstack([p.features for p in data]) @ matrix
    return [Point(row, p.label) for row, p in zip(projected, data)]
