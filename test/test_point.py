import unittest

import numpy as np

from kdt import DELTA, Point, as_points, axis_delta, squared_distance


class TestPoint(unittest.TestCase):
    def test_features_are_copied_and_read_only(self):
        raw = np.array([1.0, 2.0, 3.0])
        p = Point(raw, label=4)
        raw[0] = 100.0
        self.assertEqual(p[0], 1.0)
        self.assertEqual(p.num_dim, 3)
        self.assertEqual(len(p), 3)
        self.assertEqual(p.label, 4)
        with self.assertRaises(ValueError):
            p.features[0] = 5.0

    def test_rejects_non_vector_features(self):
        self.assertRaises(ValueError, Point, [[1.0, 2.0], [3.0, 4.0]])

    def test_equality_within_tolerance(self):
        p = Point([1.0, 2.0], label=1)
        self.assertEqual(p, Point([1.0 + DELTA / 2, 2.0 - DELTA / 2], label=7))
        self.assertNotEqual(p, Point([1.0 + 2 * DELTA, 2.0]))
        self.assertNotEqual(p, Point([1.0, 2.0, 0.0]))
        self.assertFalse(p == [1.0, 2.0])

    def test_equality_ignores_scratch_distance(self):
        p = Point([1.0, 1.0])
        q = Point([1.0, 1.0])
        p.set_square_dist_to_query(Point([0.0, 0.0]))
        self.assertEqual(p.square_dist_to_query, 2.0)
        self.assertEqual(p, q)

    def test_unhashable(self):
        self.assertRaises(TypeError, hash, Point([0.0]))

    def test_with_distance(self):
        p = Point([1.0, 2.0], label=3)
        q = p.with_distance(4.5)
        self.assertIsNot(p, q)
        self.assertEqual(q.square_dist_to_query, 4.5)
        self.assertEqual(q.label, 3)
        self.assertEqual(p.square_dist_to_query, 0.0)

    def test_copy(self):
        p = Point([1.0, 2.0], label=3)
        p.square_dist_to_query = 9.0
        q = p.copy()
        q.label = 8
        self.assertEqual(p.label, 3)
        self.assertEqual(q.square_dist_to_query, 9.0)
        self.assertEqual(p, q)

    def test_repr(self):
        self.assertEqual(repr(Point([1.0, 2.5], label=2)), "(1.000000, 2.500000) : 2")

    def test_squared_distance(self):
        self.assertEqual(squared_distance(Point([0.0, 0.0]), Point([3.0, 4.0])), 25.0)
        self.assertEqual(squared_distance([1.0, 1.0, 1.0], np.array([1.0, 1.0, 1.0])), 0.0)

    def test_axis_delta(self):
        a = Point([5.0, -1.0])
        b = Point([2.0, 3.0])
        self.assertEqual(axis_delta(a, b, 0), 3.0)
        self.assertEqual(axis_delta(a, b, 1), -4.0)

    def test_as_points(self):
        data = np.arange(6, dtype=float).reshape(3, 2)
        points = as_points(data, labels=[7, 8, 9])
        self.assertEqual([p.label for p in points], [7, 8, 9])
        self.assertEqual(points[2], Point([4.0, 5.0]))
        self.assertTrue(all(p.label == 0 for p in as_points(data)))
        self.assertRaises(ValueError, as_points, data, [1, 2])


if __name__ == "__main__":
    unittest.main()
