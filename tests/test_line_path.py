import unittest
from unittest import mock

import numpy as np

import line_path
from line import DegenerateLineError, Line, ZeroWidthError
from line_path import LinePath, PathReleasedError, ProjectionAllocationError, project

SONG_TICKS = [(0, 1600), (60, 1600), (62, 3000), (120, 3000), (122, 1300), (240, 1600)]


class TestProject(unittest.TestCase):
    def test_shape_and_baseline_corners(self):
        line = Line(SONG_TICKS)
        with project(line, 144, 60, 10) as path:
            pts = path.points
            self.assertEqual(len(pts), len(line) + 2)
            self.assertEqual(path.num_points, len(line) + 2)
            self.assertEqual(pts[0], (0, 60))
            self.assertEqual(pts[-1], (144, 60))

    def test_interior_points_follow_transform(self):
        line = Line([(0, 0), (50, 10), (100, 20)])
        path = project(line, 200, 50, 10)
        # scale_x = 2.0, scale_y = 40 / 20 = 2.0
        self.assertEqual(path.points, [(0, 50), (0, 50), (100, 30), (200, 10), (200, 50)])
        path.release()

    def test_y_is_flipped(self):
        line = Line([(0, 10), (10, 30)])
        pts = project(line, 100, 100, 20).points
        # higher y on the curve means smaller screen y
        self.assertLess(pts[2][1], pts[1][1])

    def test_truncates_fractional_coordinates(self):
        line = Line([(0, 0), (3, 3)])
        pts = project(line, 10, 10, 0).points
        # 3 * (10 / 3) lands a hair under 10 in floating point or exactly on it
        self.assertIn(pts[2][0], (9, 10))
        self.assertTrue(all(isinstance(v, int) for p in pts for v in p))

    def test_as_array_is_int_copy(self):
        path = project(Line([(0, 0), (10, 10)]), 10, 10, 0)
        arr = path.as_array()
        self.assertEqual(arr.shape, (4, 2))
        self.assertEqual(arr.dtype, np.int32)
        arr[0, 0] = 99
        self.assertEqual(path.points[0], (0, 10))

    def test_zero_y_span_raises(self):
        with self.assertRaises(ZeroWidthError):
            project(Line([(0, 5), (10, 5)]), 100, 50, 10)

    def test_degenerate_line_raises(self):
        with self.assertRaises(DegenerateLineError):
            project(Line([(0, 5)]), 100, 50, 10)
        with self.assertRaises(DegenerateLineError):
            project(Line(), 100, 50, 10)

    def test_allocation_failure_is_reported(self):
        line = Line(SONG_TICKS)
        with mock.patch.object(line_path.np, "empty", side_effect=MemoryError):
            with self.assertRaises(ProjectionAllocationError) as ctx:
                project(line, 144, 60, 10)
        self.assertIsInstance(ctx.exception, MemoryError)

    def test_source_copy_failure_is_reported(self):
        line = Line(SONG_TICKS)
        with mock.patch.object(line_path.np, "asarray", side_effect=MemoryError):
            with self.assertRaises(ProjectionAllocationError):
                project(line, 144, 60, 10)


class TestLinePathRelease(unittest.TestCase):
    def test_release_is_idempotent(self):
        path = project(Line(SONG_TICKS), 144, 60, 10)
        self.assertFalse(path.released)
        path.release()
        path.release()
        self.assertTrue(path.released)
        self.assertEqual(path.num_points, 0)

    def test_use_after_release_raises(self):
        path = project(Line(SONG_TICKS), 144, 60, 10)
        path.release()
        with self.assertRaises(PathReleasedError):
            _ = path.points
        with self.assertRaises(PathReleasedError):
            path.as_array()

    def test_context_manager_releases_on_error(self):
        path = project(Line(SONG_TICKS), 144, 60, 10)
        with self.assertRaises(RuntimeError):
            with path:
                raise RuntimeError("boom")
        self.assertTrue(path.released)

    def test_repr_after_release(self):
        path = LinePath(np.zeros((2, 2), dtype=np.int32))
        path.release()
        self.assertEqual(repr(path), "LinePath(released)")


if __name__ == "__main__":
    unittest.main()
