from __future__ import annotations
import heapq
import logging
from typing import Iterable, Iterator, List, Optional, Tuple, Union

import numpy as np

from .point import ArrayLike, Point, squared_distance

logger = logging.getLogger(__name__)


class DimensionMismatchError(ValueError):
    """A point does not have the dimensionality the index expects."""


class InvalidKError(ValueError):
    """The number of requested neighbors is not a positive integer."""


class _Node(object):
    """A node of the k-d tree.

    Each node owns exactly one point and splits its subtree along ``axis``:
    points in ``left`` have a value at ``axis`` no greater than the node's,
    points in ``right`` have a value no smaller.
    """

    def __init__(self, point: Point, axis: int) -> None:
        self.point = point
        self.axis = axis
        self.left: Optional[_Node] = None
        self.right: Optional[_Node] = None

    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def __repr__(self) -> str:
        return f"_Node(point={self.point!r}, axis={self.axis})"


class _CandidateSet(object):
    """The k best neighbors found so far during a single query.

    This is a bounded max-heap on squared distance. Entries are
    ``(-dist, -order, point)`` where ``order`` is the visit order, so the
    heap top is the worst candidate, and among equally distant candidates
    the one visited last. A new point is admitted while the set holds fewer
    than ``k`` entries; after that it replaces the worst entry only if it is
    strictly closer.

    Args:
        k (int): The capacity of the set.
    """

    def __init__(self, k: int) -> None:
        self._k = k
        self._heap: List[Tuple[float, int, Point]] = []
        self._visited = 0

    def __len__(self) -> int:
        return len(self._heap)

    def is_full(self) -> bool:
        return len(self._heap) >= self._k

    @property
    def threshold(self) -> float:
        """Largest squared distance in the set once it is full, infinity
        before that."""
        if not self.is_full():
            return float("inf")
        return -self._heap[0][0]

    def offer(self, dist: float, point: Point) -> bool:
        """Offer a point at squared distance ``dist``. Returns True if the
        point was admitted."""
        self._visited += 1
        entry = (-dist, -self._visited, point)
        if len(self._heap) < self._k:
            heapq.heappush(self._heap, entry)
            return True
        if dist < -self._heap[0][0]:
            heapq.heapreplace(self._heap, entry)
            return True
        return False

    def to_points(self) -> List[Point]:
        """Return copies of the candidates in ascending distance, ties in
        visit order, each carrying its distance in ``square_dist_to_query``."""
        ordered = sorted(self._heap, key=lambda e: (-e[0], -e[1]))
        return [point.with_distance(-mdist) for mdist, _, point in ordered]


class KDT(object):
    """A static k-d tree for exact k nearest neighbor search.

    The tree is built once from a fixed collection of points by recursive
    median splitting, rotating the splitting axis with depth. It is never
    modified afterwards; :meth:`query` only reads it, so several queries may
    run against the same index at the same time.

    Args:
        points (Optional[Iterable]): If given, the index is built from these
            points right away (see :meth:`build`).

    Examples:

        Build an index over 1000 random 3-D points and look up the 5 points
        closest to the origin.

        .. code-block:: python

            import numpy as np
            from kdt import KDT, as_points

            data = np.random.random_sample((1000, 3))
            index = KDT(as_points(data))
            neighbors = index.query([0.0, 0.0, 0.0], k=5)
            for p in neighbors:
                print(p, p.square_dist_to_query)

    """

    def __init__(self, points: Optional[Iterable[Union[Point, ArrayLike]]] = None) -> None:
        self._root: Optional[_Node] = None
        self._num_dim = 0
        self._size = 0
        self._height = 0
        if points is not None:
            self.build(points)

    def build(self, points: Iterable[Union[Point, ArrayLike]]) -> None:
        """Build the tree from the given points, replacing any previous tree.

        The index keeps its own copies of the points, so changing the
        caller's collection afterwards has no effect on it. Plain vectors are
        accepted as well and become points with label 0.

        Args:
            points: The points to index. All must have the same number of
                coordinates, taken from the first point. An empty collection
                gives an empty index.

        Raises:
            DimensionMismatchError: If the points do not all share the
                dimensionality of the first one. The index is left unchanged.
        """
        points = [p.copy() if isinstance(p, Point) else Point(p) for p in points]
        num_dim = points[0].num_dim if points else 0
        if points and num_dim < 1:
            raise DimensionMismatchError("Points must have at least one dimension.")
        for i, point in enumerate(points):
            if point.num_dim != num_dim:
                raise DimensionMismatchError(
                    f"Point {i} has {point.num_dim} dimensions, expected {num_dim}."
                )

        self._root = None
        self._num_dim = num_dim
        self._size = len(points)
        self._height = 0
        if not points:
            logger.debug("Built empty k-d tree.")
            return
        self._root = self._build_subtree(points, 0, len(points), 0, 0)
        logger.debug(
            "Built k-d tree with %d points, %d dimensions, height %d.",
            self._size,
            self._num_dim,
            self._height,
        )

    def _build_subtree(
        self, points: List[Point], start: int, end: int, axis: int, depth: int
    ) -> Optional[_Node]:
        """Build the subtree over ``points[start:end]`` splitting on ``axis``."""
        if start == end:
            return None
        if depth > self._height:
            self._height = depth
        median = (start + end) // 2
        # Stable sort, so equal axis values keep their relative order.
        points[start:end] = sorted(points[start:end], key=lambda p: p.features[axis])
        node = _Node(points[median], axis)
        next_axis = (axis + 1) % self._num_dim
        node.left = self._build_subtree(points, start, median, next_axis, depth + 1)
        node.right = self._build_subtree(points, median + 1, end, next_axis, depth + 1)
        return node

    def query(self, query_point: Union[Point, ArrayLike], k: int) -> List[Point]:
        """Find the k points closest to the query point.

        Stored points are never modified. The returned points are copies
        with ``square_dist_to_query`` set to their squared distance from the
        query.

        Args:
            query_point: The point to search around.
            k (int): The number of neighbors to return. May exceed the size
                of the index, in which case every point is returned.

        Returns:
            List[Point]: ``min(k, size)`` points in ascending order of
                squared distance. Among equally distant points, the one
                reached first during the search comes first.

        Raises:
            InvalidKError: If ``k`` is not a positive integer.
            DimensionMismatchError: If the query point does not have the
                dimensionality of the index.
        """
        k = self._check_k(k)
        if self._root is None:
            return []
        query = self._check_query(query_point)
        candidates = _CandidateSet(k)
        self._search(self._root, query, candidates)
        return candidates.to_points()

    def nearest(self, query_point: Union[Point, ArrayLike]) -> Point:
        """Return the single point closest to the query point.

        Raises:
            ValueError: If the index is empty.
        """
        if self._root is None:
            raise ValueError("Index is empty.")
        return self.query(query_point, 1)[0]

    def _search(self, node: _Node, query: np.ndarray, candidates: _CandidateSet) -> None:
        axis = node.axis
        delta = query[axis] - node.point.features[axis]
        if delta < 0:
            near, far = node.left, node.right
        else:
            near, far = node.right, node.left

        if near is not None:
            self._search(near, query, candidates)

        candidates.offer(squared_distance(query, node.point.features), node.point)

        # No point beyond the splitting plane is closer than the plane itself.
        if far is not None and (
            not candidates.is_full() or delta * delta < candidates.threshold
        ):
            self._search(far, query, candidates)

    def _check_k(self, k: int) -> int:
        if isinstance(k, bool) or not isinstance(k, (int, np.integer)):
            raise InvalidKError(f"k must be an integer, got {k!r}.")
        if k < 1:
            raise InvalidKError(f"k must be at least 1, got {k}.")
        return int(k)

    def _check_query(self, query_point: Union[Point, ArrayLike]) -> np.ndarray:
        if isinstance(query_point, Point):
            query = query_point.features
        else:
            query = np.asarray(query_point, dtype=np.float64)
        if query.ndim != 1 or len(query) != self._num_dim:
            raise DimensionMismatchError(
                f"Query point has shape {query.shape}, expected ({self._num_dim},)."
            )
        return query

    def size(self) -> int:
        """Return the number of points in the index."""
        return self._size

    def height(self) -> int:
        """Return the largest root-to-leaf edge count of the tree."""
        return self._height

    @property
    def dimension(self) -> int:
        """Number of coordinates of the indexed points (0 if empty)."""
        return self._num_dim

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[Point]:
        """Iterate over copies of the stored points in in-order traversal."""
        stack: List[_Node] = []
        node = self._root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            yield node.point.copy()
            node = node.right

    def __repr__(self) -> str:
        return f"KDT(size={self._size}, dimension={self._num_dim}, height={self._height})"
