import numpy as np
import pytest

from kdt import DimensionMismatchError, Point, project


def test_project_keeps_labels():
    data = [Point([1.0, 2.0, 3.0], 4), Point([0.0, -1.0, 1.0], 7)]
    projection = [Point([1.0, 0.0]), Point([0.0, 1.0]), Point([1.0, 1.0])]
    result = project(data, projection)
    assert [p.label for p in result] == [4, 7]
    assert result[0] == Point([4.0, 5.0])
    assert result[1] == Point([1.0, 0.0])


def test_project_matches_matrix_product():
    rng = np.random.RandomState(0)
    data = rng.random_sample((20, 4))
    matrix = rng.random_sample((4, 2))
    result = project([Point(v, i) for i, v in enumerate(data)], [Point(row) for row in matrix])
    np.testing.assert_allclose(np.vstack([p.features for p in result]), data @ matrix)


def test_project_empty_data():
    assert project([], [Point([1.0])]) == []


def test_project_size_mismatch():
    with pytest.raises(DimensionMismatchError):
        project([Point([1.0, 2.0])], [Point([1.0, 0.0])])
    with pytest.raises(DimensionMismatchError):
        project([Point([1.0, 2.0])], [])
