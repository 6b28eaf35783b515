"""
kdtree-knn
==========

Exact k-nearest-neighbor search over a static k-d tree.

Main features:
- KDT: balanced k-d tree built by recursive median splitting
- Exact k-NN queries with hyperplane pruning
- Majority-vote k-NN classifier and validation driver
- Point-set reader and linear projection helpers

Example:
--------
    >>> from kdt import KDT, Point
    >>>
    >>> index = KDT([Point([0, 0], 1), Point([10, 10], 2), Point([1, 1], 3)])
    >>> [p.label for p in index.query([0, 0], k=2)]
    [1, 3]
"""

from .version import __version__
from .point import DELTA, Point, as_points, axis_delta, squared_distance
from .kdtree import KDT, DimensionMismatchError, InvalidKError
from .classify import KNNClassifier, most_frequent_label
from .dataset import read_points
from .projection import project

__all__ = [
    'KDT',
    'Point',
    'DimensionMismatchError',
    'InvalidKError',
    'KNNClassifier',
    'most_frequent_label',
    'read_points',
    'project',
    'as_points',
    'axis_delta',
    'squared_distance',
    'DELTA',
    '__version__',
]
