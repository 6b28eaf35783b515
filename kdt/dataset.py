"""
Reading point sets from whitespace-delimited text files.

Each non-blank line holds one point: its coordinates, optionally followed by
an integer label. The number of columns is taken from the first non-blank
line and every other line must match it.
"""

import logging
from typing import List

import numpy as np

from .kdtree import DimensionMismatchError
from .point import Point

logger = logging.getLogger(__name__)


def read_points(filename: str, with_label: bool = True) -> List[Point]:
    """
    Read points from a whitespace-delimited text file.

    Args:
        filename: Path of the file to read
        with_label: Whether the last column of every row is an integer label

    Returns:
        The points in file order. Without labels every point gets label 0.

    Raises:
        DimensionMismatchError: If a row has a different number of columns
            than the first row
        ValueError: If a value cannot be parsed as a number
    """
    points = []
    num_cols = None
    with open(filename, 'r') as f:
        for line_no, line in enumerate(f, start=1):
            tokens = line.split()
            if not tokens:
                continue
            if num_cols is None:
                num_cols = len(tokens)
                if with_label and num_cols < 2:
                    raise DimensionMismatchError(
                        f"{filename}:{line_no}: a labelled row needs at least 2 columns"
                    )
            elif len(tokens) != num_cols:
                raise DimensionMismatchError(
                    f"{filename}:{line_no}: expected {num_cols} columns, got {len(tokens)}"
                )
            if with_label:
                features = np.array(tokens[:-1], dtype=np.float64)
                label = int(float(tokens[-1]))
            else:
                features = np.array(tokens, dtype=np.float64)
                label = 0
            points.append(Point(features, label))

    logger.debug("Read %d points from %s", len(points), filename)
    return points
